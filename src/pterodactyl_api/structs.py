"""Pydantic payload base and the panel's standard JSON envelopes.

The panel wraps every resource as ``{"object": "<type>", "attributes":
{...}}`` and every collection as ``{"object": "list", "data": [...]}``.
Both envelopes are generic over the resource model they carry.
"""

from typing import Any, Generic, TypeVar

import httpx
import pydantic
import structlog

from .errors import DecodingError, EncodingError
from .http import OutgoingRequest

logger = structlog.get_logger(__name__)

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound="PteroModel")


class PteroModel(pydantic.BaseModel):
    """Base for every payload model.

    Implements both codec directions: instances encode themselves as a
    JSON request body, and the class decodes itself from a response.
    Fields the caller never set, and fields set to None, are left out of
    the encoded body.
    """

    def encode(self, request: OutgoingRequest) -> OutgoingRequest:
        """Attach this model as the JSON body of ``request``."""
        try:
            content = self.model_dump_json(
                exclude_unset=True, exclude_none=True
            ).encode()
        except ValueError as exc:
            msg = f"Cannot encode {type(self).__name__}: {exc}"
            raise EncodingError(msg) from exc
        return request.with_content(content)

    @classmethod
    def decode(cls: type[ModelT], response: httpx.Response) -> ModelT:
        """Validate the response body against this model."""
        try:
            return cls.model_validate_json(response.content)
        except pydantic.ValidationError as exc:
            logger.debug(
                "Response did not match payload model",
                model=cls.__name__,
                error_count=exc.error_count(),
            )
            msg = f"Cannot decode {cls.__name__}: {exc}"
            raise DecodingError(msg) from exc


class PteroObject(PteroModel, Generic[T]):
    """Single-object envelope around one resource's attributes."""

    object: str = ""
    attributes: T


class PteroList(PteroModel, Generic[T]):
    """List envelope; ``data`` keeps the order the server returned."""

    object: str = "list"
    data: list[PteroObject[T]]
    meta: dict[str, Any] | None = None

    @property
    def items(self) -> list[T]:
        """Attributes of every entry, in document order."""
        return [entry.attributes for entry in self.data]
