"""Nest and egg endpoints of the application API."""

from collections.abc import Sequence

from ..structs import PteroList, PteroObject
from .types import EggStruct, NestStruct


def _include_params(include: Sequence[str] | None) -> dict[str, str] | None:
    """Build the ``include`` query parameter for related resources."""
    if not include:
        return None
    return {"include": ",".join(include)}


class NestsMixin:
    """Operations on ``nests`` and their eggs. Mixed into :class:`Client`."""

    async def list_nests(self) -> list[NestStruct]:
        """List all nests."""
        nests = await self.request(PteroList[NestStruct], "GET", "nests")
        return nests.items

    async def get_nest(self, nest_id: int) -> NestStruct:
        """Get a nest by ID."""
        nest = await self.request(PteroObject[NestStruct], "GET", f"nests/{nest_id}")
        return nest.attributes

    async def list_eggs(
        self,
        nest_id: int,
        include: Sequence[str] | None = None,
    ) -> list[EggStruct]:
        """List the eggs of a nest.

        Args:
            nest_id: Nest to list.
            include: Related resources to embed (e.g., "variables", "config").
        """
        eggs = await self.request(
            PteroList[EggStruct],
            "GET",
            f"nests/{nest_id}/eggs",
            params=_include_params(include),
        )
        return eggs.items

    async def get_egg(
        self,
        nest_id: int,
        egg_id: int,
        include: Sequence[str] | None = None,
    ) -> EggStruct:
        """Get an egg of a nest.

        Args:
            nest_id: Nest the egg belongs to.
            egg_id: Egg to get.
            include: Related resources to embed (e.g., "variables", "config").
        """
        egg = await self.request(
            PteroObject[EggStruct],
            "GET",
            f"nests/{nest_id}/eggs/{egg_id}",
            params=_include_params(include),
        )
        return egg.attributes
