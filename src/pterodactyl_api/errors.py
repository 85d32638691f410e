"""Exception hierarchy for the Pterodactyl API client.

Every failed call raises exactly one of these to the caller. Nothing is
retried: retry policy, if any, belongs to the code issuing the call.
"""

from typing import Any

from pydantic import BaseModel


class PterodactylError(Exception):
    """Base exception for all client errors."""


class HttpError(PterodactylError):
    """Raised for a non-success status with no more specific classification."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"HTTP error {status_code}")


class PermissionDeniedError(HttpError):
    """The API key is not allowed to perform this action (403)."""

    def __init__(self):
        super().__init__(403, "Permission denied")


class ResourceNotFoundError(HttpError):
    """The requested resource does not exist (404)."""

    def __init__(self):
        super().__init__(404, "Resource not found")


class RateLimitError(HttpError):
    """The API key exceeded its request quota (429)."""

    def __init__(self):
        super().__init__(429, "Rate limit exceeded")


class EncodingError(PterodactylError):
    """A payload could not be serialized into a request body."""


class DecodingError(PterodactylError):
    """A response body did not match the expected payload shape."""


class NetworkError(PterodactylError):
    """The request never produced an HTTP response (DNS, connect, TLS, timeout)."""


class ErrorDetail(BaseModel):
    """One entry of the panel's ``errors`` array."""

    code: str = ""
    status: str = ""
    detail: str = ""
    meta: dict[str, Any] | None = None

    @property
    def source_field(self) -> str | None:
        """Request field the error refers to, when the panel reports one."""
        if self.meta is None:
            return None
        return self.meta.get("source_field")


class ApiValidationError(HttpError):
    """The panel rejected the request body (422) with field-level details."""

    def __init__(self, errors: list[ErrorDetail]):
        self.errors = errors
        details = "; ".join(error.detail for error in errors if error.detail)
        super().__init__(422, f"Validation failed: {details}" if details else None)
