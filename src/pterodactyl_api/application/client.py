"""Pterodactyl application API client.

Provides the request pipeline every resource operation runs through:
authentication, body encoding, failure classification, rate-limit
tracking and response decoding over a shared ``httpx.AsyncClient``.
"""

import time
from typing import TypeVar

import httpx
import structlog

from ..errors import (
    HttpError,
    NetworkError,
    PermissionDeniedError,
    RateLimitError,
    ResourceNotFoundError,
)
from ..http import (
    EMPTY_BODY,
    NULL_ERROR_HANDLER,
    ErrorHandler,
    OutgoingRequest,
    RequestBody,
    ResponseBody,
)
from ..ratelimit import RateLimits, RateLimitTracker
from .nests import NestsMixin
from .nodes import NodesMixin
from .servers import ServersMixin

logger = structlog.get_logger(__name__)

API_PATH = "api/application/"

DEFAULT_TIMEOUT = 30.0

ResponseT = TypeVar("ResponseT", bound=ResponseBody)


def normalize_url(url: str) -> str:
    """Return the application API root for a panel URL.

    Ensures a trailing slash and appends ``api/application/`` unless the
    URL already points at it.
    """
    if not url.endswith("/"):
        url += "/"
    if not url.endswith(f"/{API_PATH}"):
        url += API_PATH
    return url


def translate_status(status_code: int) -> HttpError:
    """Map a failed status to its generic error."""
    if status_code == httpx.codes.FORBIDDEN:
        return PermissionDeniedError()
    if status_code == httpx.codes.NOT_FOUND:
        return ResourceNotFoundError()
    if status_code == httpx.codes.TOO_MANY_REQUESTS:
        return RateLimitError()
    return HttpError(status_code)


class Client(ServersMixin, NodesMixin, NestsMixin):
    """Async client for the Pterodactyl application API.

    Built with :class:`ClientBuilder`. One instance is meant to be shared:
    any number of concurrent calls may run against it. The URL, the API
    key and the transport never change after construction; the only
    mutable state is the rate-limit snapshot, which is lock-protected.

    Can be used as an async context manager to release a transport the
    client created itself.
    """

    def __init__(
        self,
        url: str,
        http_client: httpx.AsyncClient,
        api_key: str,
        *,
        owns_http_client: bool = False,
    ):
        """Initialize the client.

        Prefer :class:`ClientBuilder`, which normalizes ``url``.

        Args:
            url: Application API root, ending in ``api/application/``.
            http_client: Transport shared by every call.
            api_key: Application API key sent as a bearer token.
            owns_http_client: Whether :meth:`aclose` should close
                ``http_client``.
        """
        self._url = url
        self._http = http_client
        self._api_key = api_key
        self._owns_http_client = owns_http_client
        self._rate_limits = RateLimitTracker()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self._url!r})"

    @property
    def url(self) -> str:
        """Application API root every endpoint is relative to."""
        return self._url

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def get_rate_limits(self) -> RateLimits | None:
        """Return the quota reported by the last successful response.

        Returns:
            The last snapshot, or None until a successful response has
            carried both rate-limit headers.
        """
        return self._rate_limits.read()

    async def request(
        self,
        response_type: type[ResponseT],
        method: str,
        endpoint: str,
        body: RequestBody = EMPTY_BODY,
        *,
        params: dict[str, str] | None = None,
        error_handler: ErrorHandler = NULL_ERROR_HANDLER,
    ) -> ResponseT:
        """Make a request and decode its response.

        Args:
            response_type: Payload type the response body is decoded into.
            method: HTTP method.
            endpoint: Path relative to the API root (e.g., "servers/1").
            body: Request payload; sends no body by default.
            params: Optional query parameters.
            error_handler: Classifier consulted before the generic status
                translation when the response is not successful.

        Returns:
            The decoded response payload.

        Raises:
            EncodingError: If ``body`` cannot be serialized.
            NetworkError: If no HTTP response was received.
            HttpError: For a non-success status, or whatever
                ``error_handler`` returned for it.
            DecodingError: If the body does not match ``response_type``.
        """
        response = await self.get_response(
            method,
            endpoint,
            body,
            params=params,
            error_handler=error_handler,
        )
        return response_type.decode(response)

    async def get_response(
        self,
        method: str,
        endpoint: str,
        body: RequestBody = EMPTY_BODY,
        *,
        params: dict[str, str] | None = None,
        error_handler: ErrorHandler = NULL_ERROR_HANDLER,
    ) -> httpx.Response:
        """Send an authenticated request and return the successful response.

        Records the rate-limit headers of successful responses. Failed
        responses are classified and raised; nothing is retried.

        Raises:
            EncodingError: If ``body`` cannot be serialized.
            NetworkError: If no HTTP response was received.
            HttpError: For a non-success status, or whatever
                ``error_handler`` returned for it.
        """
        outgoing = OutgoingRequest(
            method=method,
            url=f"{self._url}{endpoint}",
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
            params=params,
        )
        outgoing = body.encode(outgoing)

        request = self._http.build_request(
            outgoing.method,
            outgoing.url,
            headers=outgoing.headers,
            params=outgoing.params,
            content=outgoing.content,
        )

        start_time = time.monotonic()
        logger.debug("Making API request", method=method, endpoint=endpoint)
        try:
            response = await self._http.send(request)
        except httpx.RequestError as exc:
            logger.debug(
                "API request failed",
                method=method,
                endpoint=endpoint,
                error=type(exc).__name__,
            )
            msg = f"{method} {endpoint} failed: {exc}"
            raise NetworkError(msg) from exc

        duration = time.monotonic() - start_time
        logger.debug(
            "API request completed",
            method=method,
            endpoint=endpoint,
            status=response.status_code,
            duration_seconds=round(duration, 3),
        )

        if not response.is_success:
            error = error_handler.get_error(response)
            if error is None:
                error = translate_status(response.status_code)
            logger.debug(
                "API request rejected",
                method=method,
                endpoint=endpoint,
                status=response.status_code,
                error=type(error).__name__,
            )
            raise error

        self._rate_limits.record(response.headers)
        return response


class ClientBuilder:
    """Builder for :class:`Client`.

    Example:
        >>> client = ClientBuilder("https://panel.example", "ptla_...").build()
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Start a builder for the panel at ``url``.

        Args:
            url: Panel base URL; normalized to the application API root.
            api_key: Application API key.
            http_client: Transport to use instead of a default one.
            timeout: Timeout of the default transport, in seconds. Ignored
                when ``http_client`` is given.
        """
        self._url = normalize_url(url)
        self._api_key = api_key
        self._http_client = http_client
        self._timeout = timeout

    def with_client(self, http_client: httpx.AsyncClient) -> "ClientBuilder":
        """Use ``http_client`` for requests instead of creating a default one.

        The client will not close a transport it was given.
        """
        # normalize_url leaves an already-normalized URL untouched
        return ClientBuilder(
            self._url,
            self._api_key,
            http_client,
            timeout=self._timeout,
        )

    def build(self) -> Client:
        """Build the client."""
        if self._http_client is not None:
            return Client(self._url, self._http_client, self._api_key)
        return Client(
            self._url,
            httpx.AsyncClient(timeout=self._timeout),
            self._api_key,
            owns_http_client=True,
        )
