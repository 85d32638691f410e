"""Server endpoints of the application API."""

from ..http import VALIDATION_ERROR_HANDLER, EmptyBody
from ..structs import PteroList, PteroObject
from .types import CreateServerRequest, ServerStruct


class ServersMixin:
    """Operations on ``servers``. Mixed into :class:`Client`."""

    async def list_servers(self) -> list[ServerStruct]:
        """List all servers, in the order the panel returns them."""
        servers = await self.request(PteroList[ServerStruct], "GET", "servers")
        return servers.items

    async def get_server(self, server_id: int) -> ServerStruct:
        """Get a server by its internal ID."""
        server = await self.request(
            PteroObject[ServerStruct], "GET", f"servers/{server_id}"
        )
        return server.attributes

    async def create_server(self, request: CreateServerRequest) -> ServerStruct:
        """Create a server.

        Raises:
            ApiValidationError: If the panel rejects the request body.
        """
        server = await self.request(
            PteroObject[ServerStruct],
            "POST",
            "servers",
            request,
            error_handler=VALIDATION_ERROR_HANDLER,
        )
        return server.attributes

    async def delete_server(self, server_id: int) -> None:
        """Delete a server."""
        await self.request(EmptyBody, "DELETE", f"servers/{server_id}")

    async def force_delete_server(self, server_id: int) -> None:
        """Delete a server even if the daemon cannot clean it up."""
        await self.request(EmptyBody, "DELETE", f"servers/{server_id}/force")
