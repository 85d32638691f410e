"""Pterodactyl API client.

Async client for the Pterodactyl panel application API. Every resource
operation runs through a single request pipeline that authenticates the
call, decodes typed payloads, translates failures into a closed set of
exceptions and records the panel's rate-limit headers.
"""

from .application import Client, ClientBuilder
from .errors import (
    ApiValidationError,
    DecodingError,
    EncodingError,
    HttpError,
    NetworkError,
    PermissionDeniedError,
    PterodactylError,
    RateLimitError,
    ResourceNotFoundError,
)
from .ratelimit import RateLimits

__version__ = "0.2.1"

__all__ = [
    "ApiValidationError",
    "Client",
    "ClientBuilder",
    "DecodingError",
    "EncodingError",
    "HttpError",
    "NetworkError",
    "PermissionDeniedError",
    "PterodactylError",
    "RateLimitError",
    "RateLimits",
    "ResourceNotFoundError",
]
