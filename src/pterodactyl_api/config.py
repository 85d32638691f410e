"""File-based configuration and logging setup for the client."""

import logging
import os
import pathlib

import pydantic
import structlog

from .application import DEFAULT_TIMEOUT, Client, ClientBuilder

CONFIG_ENV_VAR = "PTERODACTYL_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "pterodactyl.json"

logger = structlog.get_logger(__name__)


def _level_number(log_level_name: str) -> int:
    level = logging.getLevelNamesMapping().get(log_level_name.upper())
    if level is None:
        msg = f"Unknown log level: {log_level_name}"
        raise ValueError(msg)
    return level


class ClientConfig(pydantic.BaseModel):
    """Configuration for a Pterodactyl application API client."""

    panel_url: str = pydantic.Field(description="Base URL of the panel")
    api_key: str | None = pydantic.Field(
        None,
        description="Application API key",
        repr=False,
    )
    api_key_file: str | None = pydantic.Field(
        None,
        description="Path to file containing the application API key",
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")

    @pydantic.field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        _level_number(value)
        return value.upper()

    @pydantic.model_validator(mode="after")
    def _one_key_source(self) -> "ClientConfig":
        if (self.api_key is None) == (self.api_key_file is None):
            msg = "exactly one of api_key and api_key_file must be set"
            raise ValueError(msg)
        return self

    def resolve_api_key(self) -> str:
        """Return the API key, reading it from ``api_key_file`` if needed.

        Raises:
            FileNotFoundError: If ``api_key_file`` does not exist.
        """
        if self.api_key is not None:
            return self.api_key
        key_path = pathlib.Path(self.api_key_file)
        if not key_path.exists():
            msg = f"API key file not found: {self.api_key_file}"
            raise FileNotFoundError(msg)
        return key_path.read_text().strip()


def configure_logging(log_level_name: str = "INFO") -> None:
    """Configure structlog for logfmt output.

    Request fields logged by the pipeline follow the message, so lines
    for the same endpoint line up.

    Raises:
        ValueError: If ``log_level_name`` is not a standard level name.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=(
                    "timestamp",
                    "level",
                    "msg",
                    "method",
                    "endpoint",
                    "status",
                ),
                drop_missing=True,
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _level_number(log_level_name)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str) -> ClientConfig:
    """Load and validate a client configuration file.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist. The message
            names the environment variable that selects another file.
        pydantic.ValidationError: If the file is not valid JSON or does
            not describe a valid configuration.
    """
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Client config file not found: {config_path} (set {CONFIG_ENV_VAR})"
        raise FileNotFoundError(msg)
    return ClientConfig.model_validate_json(path.read_text())


def build_client(config: ClientConfig) -> Client:
    """Construct a client from validated config."""
    client = ClientBuilder(
        config.panel_url,
        config.resolve_api_key(),
        timeout=config.timeout,
    ).build()
    logger.info("Created API client", url=client.url)
    return client


def create_client(config_path: str | None = None) -> Client:
    """Create a client using a config path or environment default."""
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)
    config = load_config(resolved_path)
    configure_logging(config.log_level)
    return build_client(config)
