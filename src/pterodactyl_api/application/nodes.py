"""Node and allocation endpoints of the application API."""

from ..http import VALIDATION_ERROR_HANDLER, EmptyBody
from ..structs import PteroList, PteroObject
from .types import (
    AllocationStruct,
    CreateAllocationRequest,
    CreateNodeRequest,
    NodeStruct,
    UpdateNodeRequest,
)


class NodesMixin:
    """Operations on ``nodes`` and their allocations. Mixed into :class:`Client`."""

    async def list_nodes(self) -> list[NodeStruct]:
        """List all nodes."""
        nodes = await self.request(PteroList[NodeStruct], "GET", "nodes")
        return nodes.items

    async def get_node(self, node_id: int) -> NodeStruct:
        """Get a node by ID."""
        node = await self.request(PteroObject[NodeStruct], "GET", f"nodes/{node_id}")
        return node.attributes

    async def create_node(self, request: CreateNodeRequest) -> NodeStruct:
        """Create a node.

        Raises:
            ApiValidationError: If the panel rejects the request body.
        """
        node = await self.request(
            PteroObject[NodeStruct],
            "POST",
            "nodes",
            request,
            error_handler=VALIDATION_ERROR_HANDLER,
        )
        return node.attributes

    async def update_node(self, node_id: int, request: UpdateNodeRequest) -> NodeStruct:
        """Update the fields of a node that are set on ``request``.

        Raises:
            ApiValidationError: If the panel rejects the request body.
        """
        node = await self.request(
            PteroObject[NodeStruct],
            "PATCH",
            f"nodes/{node_id}",
            request,
            error_handler=VALIDATION_ERROR_HANDLER,
        )
        return node.attributes

    async def delete_node(self, node_id: int) -> None:
        """Delete a node. The panel refuses while servers are still on it."""
        await self.request(EmptyBody, "DELETE", f"nodes/{node_id}")

    async def list_node_allocations(self, node_id: int) -> list[AllocationStruct]:
        """List the allocations of a node."""
        allocations = await self.request(
            PteroList[AllocationStruct], "GET", f"nodes/{node_id}/allocations"
        )
        return allocations.items

    async def create_node_allocation(
        self,
        node_id: int,
        request: CreateAllocationRequest,
    ) -> None:
        """Create allocations on a node for each port or port range requested.

        Raises:
            ApiValidationError: If the panel rejects the request body.
        """
        await self.request(
            EmptyBody,
            "POST",
            f"nodes/{node_id}/allocations",
            request,
            error_handler=VALIDATION_ERROR_HANDLER,
        )

    async def delete_allocation(self, node_id: int, allocation_id: int) -> None:
        """Delete an allocation from a node."""
        await self.request(
            EmptyBody, "DELETE", f"nodes/{node_id}/allocations/{allocation_id}"
        )
