"""Pterodactyl application API package.

Client for the endpoints under ``api/application``, authenticated with an
application API key.

Exports:
    Client: Request pipeline and resource operations.
    ClientBuilder: Builds a Client from a panel URL and API key.
    types: Module containing Pydantic models for resource payloads.
    DEFAULT_TIMEOUT: Timeout of the transport created when none is given.
"""

from . import types
from .client import DEFAULT_TIMEOUT, Client, ClientBuilder

__all__ = [
    "DEFAULT_TIMEOUT",
    "Client",
    "ClientBuilder",
    "types",
]
