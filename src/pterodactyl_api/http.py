"""Payload encoding/decoding contracts and failed-response classifiers.

The request pipeline is generic over its payloads: anything implementing
:class:`RequestBody` can be sent, anything implementing
:class:`ResponseBody` can be received. Failed responses are first offered
to an :class:`ErrorHandler`, which may turn them into a more specific
error than the generic status translation.
"""

import dataclasses
import json
from typing import Any, Protocol, TypeVar

import httpx
import pydantic
import structlog

from .errors import ApiValidationError, DecodingError, EncodingError, ErrorDetail

logger = structlog.get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound="ResponseBody")


@dataclasses.dataclass(frozen=True)
class OutgoingRequest:
    """Request envelope assembled by the pipeline before it is sent.

    Immutable: body encoders return a new envelope instead of mutating
    the one they were given.
    """

    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, str] | None = None
    content: bytes | None = None

    def with_content(self, content: bytes) -> "OutgoingRequest":
        """Return a copy of this request carrying ``content`` as its body."""
        return dataclasses.replace(self, content=content)

    def with_json(self, value: Any) -> "OutgoingRequest":
        """Return a copy of this request with ``value`` serialized as JSON.

        Raises:
            EncodingError: If ``value`` is not representable as JSON.
        """
        try:
            content = json.dumps(value, allow_nan=False).encode()
        except (TypeError, ValueError) as exc:
            msg = f"Cannot encode request body: {exc}"
            raise EncodingError(msg) from exc
        return self.with_content(content)


class RequestBody(Protocol):
    """A value that can attach itself to an outgoing request."""

    def encode(self, request: OutgoingRequest) -> OutgoingRequest:
        """Attach this value as the body of ``request``."""
        ...


class ResponseBody(Protocol):
    """A type that can be built from a successful response."""

    @classmethod
    def decode(cls: type[ResponseT], response: httpx.Response) -> ResponseT:
        """Parse the body of ``response`` into an instance of this type."""
        ...


class EmptyBody:
    """Body-less payload.

    Sends no body and accepts any successful response, whatever it
    contains. Used for deletes and actions that answer ``204 No Content``.
    """

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EmptyBody)

    def __hash__(self) -> int:
        return hash(EmptyBody)

    def __repr__(self) -> str:
        return "EmptyBody()"

    def encode(self, request: OutgoingRequest) -> OutgoingRequest:
        """Leave ``request`` without a body."""
        return request

    @classmethod
    def decode(cls, response: httpx.Response) -> "EmptyBody":  # noqa: ARG003
        """Accept any successful response, ignoring its body."""
        return cls()


EMPTY_BODY = EmptyBody()


class JsonBody:
    """Untyped JSON payload for endpoints without a dedicated model."""

    def __init__(self, value: Any):
        self.value = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, JsonBody) and other.value == self.value

    def __hash__(self) -> int:
        return hash(json.dumps(self.value, sort_keys=True, default=str))

    def __repr__(self) -> str:
        return f"JsonBody({self.value!r})"

    def encode(self, request: OutgoingRequest) -> OutgoingRequest:
        """Serialize the wrapped value as the JSON body of ``request``."""
        return request.with_json(self.value)

    @classmethod
    def decode(cls, response: httpx.Response) -> "JsonBody":
        """Parse the response body as arbitrary JSON."""
        try:
            return cls(json.loads(response.content))
        except ValueError as exc:
            msg = f"Response body is not valid JSON: {exc}"
            raise DecodingError(msg) from exc


class ErrorHandler(Protocol):
    """Classifier for non-success responses.

    Returns a specific exception for the pipeline to raise, or ``None`` to
    fall back to the generic status translation.
    """

    def get_error(self, response: httpx.Response) -> Exception | None:
        """Return the exception for ``response``, or None to decline."""
        ...


class NullErrorHandler:
    """Classifier that never recognizes anything."""

    def get_error(self, response: httpx.Response) -> Exception | None:  # noqa: ARG002
        """Decline every response."""
        return None


NULL_ERROR_HANDLER = NullErrorHandler()


class _ErrorDocument(pydantic.BaseModel):
    errors: list[ErrorDetail]


class ValidationErrorHandler:
    """Recognizes the panel's 422 validation error document.

    The panel answers rejected create/update bodies with::

        {"errors": [{"code": "ValidationException", "status": "422",
                     "detail": "The name field is required.",
                     "meta": {"source_field": "name", "rule": "required"}}]}

    Any other status, or a body of a different shape, is declined.
    """

    def get_error(self, response: httpx.Response) -> Exception | None:
        """Return an ApiValidationError for a 422 error document."""
        if response.status_code != httpx.codes.UNPROCESSABLE_ENTITY:
            return None
        try:
            document = _ErrorDocument.model_validate_json(response.content)
        except pydantic.ValidationError:
            logger.debug("Unrecognized validation error body", status=response.status_code)
            return None
        if not document.errors:
            return None
        return ApiValidationError(document.errors)


VALIDATION_ERROR_HANDLER = ValidationErrorHandler()
