"""Tests for file-based client configuration."""

import json

import pydantic
import pytest

from pterodactyl_api import config


def _write_config(tmp_path, **values):
    path = tmp_path / "pterodactyl.json"
    path.write_text(json.dumps(values))
    return path


# ---------------------------------------------------------------------------
# ClientConfig
# ---------------------------------------------------------------------------


def test_config_defaults():
    """Only the panel URL and a key source are required."""
    cfg = config.ClientConfig(panel_url="https://panel.example", api_key="abc")

    assert cfg.timeout == 30.0
    assert cfg.log_level == "INFO"
    assert cfg.resolve_api_key() == "abc"


@pytest.mark.parametrize(
    "key_fields",
    [{}, {"api_key": "abc", "api_key_file": "/run/secrets/key"}],
)
def test_config_requires_exactly_one_key_source(key_fields):
    """Neither or both of api_key/api_key_file is rejected."""
    with pytest.raises(pydantic.ValidationError, match="exactly one"):
        config.ClientConfig(panel_url="https://panel.example", **key_fields)


def test_config_rejects_non_positive_timeout():
    """The timeout must be positive."""
    with pytest.raises(pydantic.ValidationError):
        config.ClientConfig(panel_url="https://panel.example", api_key="a", timeout=0)


def test_config_normalizes_log_level():
    """Level names are case-insensitive and stored upper-cased."""
    cfg = config.ClientConfig(
        panel_url="https://panel.example", api_key="a", log_level="debug"
    )
    assert cfg.log_level == "DEBUG"


def test_config_rejects_unknown_log_level():
    """An unknown level name is a validation error."""
    with pytest.raises(pydantic.ValidationError, match="Unknown log level"):
        config.ClientConfig(
            panel_url="https://panel.example", api_key="a", log_level="chatty"
        )


def test_configure_logging_rejects_unknown_level():
    """configure_logging refuses level names logging does not define."""
    with pytest.raises(ValueError, match="Unknown log level: verbose"):
        config.configure_logging("verbose")


def test_config_repr_hides_api_key():
    """The API key is kept out of the config repr."""
    cfg = config.ClientConfig(panel_url="https://panel.example", api_key="ptla_x")
    assert "ptla_x" not in repr(cfg)


def test_resolve_api_key_reads_and_strips_file(tmp_path):
    """A key file is read with surrounding whitespace removed."""
    key_file = tmp_path / "key"
    key_file.write_text("ptla_from_file\n")
    cfg = config.ClientConfig(
        panel_url="https://panel.example", api_key_file=str(key_file)
    )

    assert cfg.resolve_api_key() == "ptla_from_file"


def test_resolve_api_key_missing_file(tmp_path):
    """A missing key file raises FileNotFoundError."""
    cfg = config.ClientConfig(
        panel_url="https://panel.example", api_key_file=str(tmp_path / "absent")
    )
    with pytest.raises(FileNotFoundError, match="API key file not found"):
        cfg.resolve_api_key()


# ---------------------------------------------------------------------------
# load_config / create_client
# ---------------------------------------------------------------------------


def test_load_config_reads_json(tmp_path):
    """Values from the JSON file populate the config."""
    path = _write_config(
        tmp_path, panel_url="https://panel.example", api_key="abc", timeout=5
    )

    cfg = config.load_config(str(path))

    assert cfg.panel_url == "https://panel.example"
    assert cfg.timeout == 5.0


def test_load_config_missing_file(tmp_path):
    """A missing config file raises FileNotFoundError."""
    with pytest.raises(
        FileNotFoundError, match="Client config file not found"
    ) as excinfo:
        config.load_config(str(tmp_path / "missing.json"))

    assert config.CONFIG_ENV_VAR in str(excinfo.value)


def test_load_config_rejects_malformed_json(tmp_path):
    """A file that is not JSON fails validation."""
    path = tmp_path / "pterodactyl.json"
    path.write_text("panel_url = https://panel.example")

    with pytest.raises(pydantic.ValidationError):
        config.load_config(str(path))


async def test_create_client_from_explicit_path(tmp_path):
    """create_client builds a client from the given file."""
    path = _write_config(
        tmp_path, panel_url="https://panel.example", api_key="abc", timeout=5
    )

    api = config.create_client(str(path))

    assert api.url == "https://panel.example/api/application/"
    assert api._http.timeout.read == 5.0
    await api.aclose()


async def test_create_client_from_environment(tmp_path, monkeypatch):
    """Without an explicit path the environment variable is used."""
    path = _write_config(tmp_path, panel_url="https://env.example", api_key="abc")
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))

    api = config.create_client()

    assert api.url == "https://env.example/api/application/"
    await api.aclose()
