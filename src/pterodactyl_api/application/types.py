"""Resource payload types for the Pterodactyl application API.

Pydantic models for the attributes the panel returns and the bodies it
accepts. Optional fields default the way the panel omits them.
"""

from typing import Any

from pydantic import field_validator

from ..structs import PteroModel

EnvironmentValue = str | int | float | bool | None


# ---------------------------------------------------------------------------
# Servers
# ---------------------------------------------------------------------------


class ServerLimits(PteroModel):
    """Resource limits of a server. Sizes are in MB."""

    memory: int
    swap: int
    disk: int
    io: int
    cpu: int
    threads: str | int | None = None
    oom_disabled: bool | None = None


class ServerFeatureLimits(PteroModel):
    """Feature limits of a server."""

    databases: int
    allocations: int = 0
    backups: int


class ServerContainer(PteroModel):
    """Container settings of a server."""

    startup_command: str
    image: str
    installed: bool
    environment: dict[str, EnvironmentValue]

    @field_validator("installed", mode="before")
    @classmethod
    def _installed_from_int(cls, value: Any) -> Any:
        # Older panels report the install state as 0/1.
        if isinstance(value, int) and not isinstance(value, bool):
            if value < 0:
                msg = "installed must be a boolean or a non-negative integer"
                raise ValueError(msg)
            return value != 0
        return value


class ServerStruct(PteroModel):
    """A server as returned by the application API."""

    id: int
    external_id: str | None = None
    uuid: str
    identifier: str
    name: str
    description: str
    status: str | None = None
    suspended: bool
    limits: ServerLimits
    feature_limits: ServerFeatureLimits
    user: int
    node: int
    allocation: int
    nest: int
    egg: int
    container: ServerContainer
    updated_at: str
    created_at: str


class AllocationSettings(PteroModel):
    """Allocation settings for server creation."""

    default: int


class CreateServerRequest(PteroModel):
    """Body of a server creation request."""

    name: str
    user: int
    egg: int
    docker_image: str
    startup: str
    environment: dict[str, EnvironmentValue]
    limits: ServerLimits
    feature_limits: ServerFeatureLimits
    allocation: AllocationSettings


# ---------------------------------------------------------------------------
# Nodes and allocations
# ---------------------------------------------------------------------------


class NodeStruct(PteroModel):
    """A node as returned by the application API."""

    id: int
    public: bool
    name: str
    description: str | None = None
    location_id: int
    fqdn: str
    scheme: str
    behind_proxy: bool
    maintenance_mode: bool
    memory: int
    memory_overallocate: int
    disk: int
    disk_overallocate: int
    upload_size: int
    daemon_listen: int
    daemon_sftp: int
    daemon_base: str
    created_at: str
    updated_at: str


class CreateNodeRequest(PteroModel):
    """Body of a node creation request. Optionals left unset or None are not sent."""

    name: str
    description: str | None = None
    location_id: int
    public: bool | None = None
    fqdn: str
    scheme: str
    behind_proxy: bool | None = None
    memory: int
    memory_overallocate: int
    disk: int
    disk_overallocate: int
    daemon_base: str | None = None
    daemon_sftp: int
    daemon_listen: int
    maintenance_mode: bool | None = None
    upload_size: int | None = None


class UpdateNodeRequest(PteroModel):
    """Body of a node update request; only the fields that are set change."""

    name: str | None = None
    description: str | None = None
    location_id: int | None = None
    public: bool | None = None
    fqdn: str | None = None
    scheme: str | None = None
    behind_proxy: bool | None = None
    memory: int | None = None
    memory_overallocate: int | None = None
    disk: int | None = None
    disk_overallocate: int | None = None
    daemon_base: str | None = None
    daemon_sftp: int | None = None
    daemon_listen: int | None = None
    maintenance_mode: bool | None = None
    upload_size: int | None = None


class AllocationStruct(PteroModel):
    """An IP/port allocation on a node."""

    id: int
    node: int | None = None
    ip: str
    alias: str | None = None
    port: int
    assigned: bool
    notes: str | None = None


class CreateAllocationRequest(PteroModel):
    """Body of an allocation creation request.

    ``ports`` entries are single ports ("25565") or ranges ("25565-25570").
    """

    ip: str
    ports: list[str]
    alias: str | None = None


# ---------------------------------------------------------------------------
# Nests and eggs
# ---------------------------------------------------------------------------


class NestStruct(PteroModel):
    """A nest (group of eggs)."""

    id: int
    uuid: str
    author: str
    name: str
    description: str | None = None
    created_at: str
    updated_at: str


class EggConfig(PteroModel):
    """Daemon configuration of an egg."""

    files: Any
    startup: Any
    stop: str
    logs: Any
    file_denylist: list[str]
    extends: Any | None = None


class EggScript(PteroModel):
    """Installation script of an egg."""

    privileged: bool
    install: str
    entry: str
    container: str
    extends: Any | None = None


class NullResource(PteroModel):
    """Relationship the panel includes without attributes."""

    object: str = ""
    attributes: Any | None = None


class EggVariable(PteroModel):
    """A configurable environment variable of an egg."""

    id: int
    egg_id: int
    name: str
    description: str
    env_variable: str
    default_value: str
    user_viewable: bool
    user_editable: bool
    rules: str
    created_at: str
    updated_at: str


class EggVariableObject(PteroModel):
    """Envelope around one egg variable."""

    object: str = ""
    attributes: EggVariable


class EggVariablesList(PteroModel):
    """List of egg variables included as a relationship."""

    object: str = ""
    data: list[EggVariableObject]


class EggRelationships(PteroModel):
    """Relationships of an egg, present only when requested via ``include``."""

    config: NullResource | None = None
    variables: EggVariablesList | None = None


class EggStruct(PteroModel):
    """An egg (server type template) belonging to a nest."""

    id: int
    uuid: str
    name: str
    nest: int
    author: str
    description: str | None = None
    docker_image: str
    docker_images: dict[str, str] = {}
    config: EggConfig
    startup: str
    script: EggScript
    created_at: str
    updated_at: str
    relationships: EggRelationships | None = None
