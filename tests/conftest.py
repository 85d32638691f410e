"""Shared fixtures for client tests.

HTTP traffic is served by ``httpx.MockTransport`` handlers; each test
installs its own handler through the ``make_client`` factory.
"""

from collections.abc import AsyncIterator, Callable

import httpx
import pytest

from pterodactyl_api.application import Client, ClientBuilder

Handler = Callable[[httpx.Request], httpx.Response]

PANEL_URL = "https://panel.example/"
API_KEY = "abc"


def json_response(
    body: object,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a JSON response for a mock transport handler."""
    return httpx.Response(status_code, json=body, headers=headers)


def server_attributes(server_id: int = 1, name: str = "survival") -> dict:
    """Attributes of a server as the panel returns them."""
    return {
        "id": server_id,
        "external_id": None,
        "uuid": f"00000000-0000-4000-8000-00000000000{server_id}",
        "identifier": f"0000000{server_id}",
        "name": name,
        "description": "",
        "suspended": False,
        "limits": {
            "memory": 2048,
            "swap": 0,
            "disk": 10240,
            "io": 500,
            "cpu": 200,
            "threads": None,
        },
        "feature_limits": {"databases": 1, "allocations": 2, "backups": 3},
        "user": 1,
        "node": 1,
        "allocation": 10,
        "nest": 1,
        "egg": 5,
        "container": {
            "startup_command": "java -jar server.jar",
            "image": "ghcr.io/pterodactyl/yolks:java_17",
            "installed": 1,
            "environment": {"SERVER_JARFILE": "server.jar", "BUILD_NUMBER": "latest"},
        },
        "updated_at": "2024-01-01T00:00:00+00:00",
        "created_at": "2024-01-01T00:00:00+00:00",
    }


def server_object(server_id: int = 1, name: str = "survival") -> dict:
    """Single-object envelope around a server."""
    return {"object": "server", "attributes": server_attributes(server_id, name)}


def server_list(*servers: dict) -> dict:
    """List envelope around server objects."""
    return {"object": "list", "data": list(servers)}


@pytest.fixture
async def make_client() -> AsyncIterator[Callable[[Handler], Client]]:
    """Factory building a client whose transport is served by ``handler``.

    Every transport the factory created is closed on teardown.
    """
    transports: list[httpx.AsyncClient] = []

    def factory(handler: Handler) -> Client:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transports.append(http_client)
        return ClientBuilder(PANEL_URL, API_KEY).with_client(http_client).build()

    yield factory

    for http_client in transports:
        await http_client.aclose()
