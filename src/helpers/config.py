"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from src.data.relays.constants import DEFAULT_RELAYS
from src.helpers.logging import parse_log_level


# Load environment variables from .env file
load_dotenv()

DEFAULT_LISTEN_ADDR = "0.0.0.0:8080"
DEFAULT_LOG_LEVEL = "DEBUG"

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from src.helpers.config import get_required_env

        node_endpoint = get_required_env("NODE_ENDPOINT")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_bool_env(key: str, *, default: bool) -> bool:
    """Get a boolean environment variable.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        Parsed boolean

    Raises:
        ValueError: If the value is not a recognised boolean
    """
    value = os.getenv(key)
    if not value:
        return default

    normalized = value.strip().lower()
    if normalized in TRUTHY:
        return True
    if normalized in FALSY:
        return False

    msg = f"{key} must be a boolean, got {value!r}"
    raise ValueError(msg)


def parse_relay_endpoints(value: str) -> list[str]:
    """Split a space-separated relay list, dropping blanks and trailing slashes.

    Example:
        >>> parse_relay_endpoints("https://a.net  https://b.net/")
        ['https://a.net', 'https://b.net']
    """
    return [endpoint.rstrip("/") for endpoint in value.split() if endpoint]


def parse_listen_addr(value: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address.

    An empty host (``":8080"``) binds every interface.

    Raises:
        ValueError: If the port is missing or not a valid port number
    """
    host, sep, port_str = value.rpartition(":")
    if not sep or not port_str.isdigit():
        msg = f"LISTEN_ADDR must look like host:port, got {value!r}"
        raise ValueError(msg)

    port = int(port_str)
    if not 0 < port < 65536:
        msg = f"LISTEN_ADDR port out of range: {port}"
        raise ValueError(msg)

    return host or "0.0.0.0", port


class ApiConfig(BaseModel):
    """Validated service configuration."""

    node_endpoint: str = Field(..., min_length=1, description="Beacon REST base URL")
    rpc_endpoint: str = Field(..., min_length=1, description="Execution JSON-RPC URL")
    relay_endpoints: list[str] = Field(..., min_length=1, description="Relay base URLs")
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = DEFAULT_LOG_LEVEL
    preload_validators: bool = True

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        parse_log_level(value)
        normalized = value.upper()
        return "WARNING" if normalized == "WARN" else normalized

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Load configuration from environment variables.

        Raises:
            ValueError: If a required variable is missing or a value is invalid
        """
        node_endpoint = get_required_env("NODE_ENDPOINT").rstrip("/")
        raw_relays = get_optional_env("RELAYS_ENDPOINT")
        relay_endpoints = (
            parse_relay_endpoints(raw_relays) if raw_relays else list(DEFAULT_RELAYS)
        )
        if not relay_endpoints:
            msg = "RELAYS_ENDPOINT must list at least one relay"
            raise ValueError(msg)

        host, port = parse_listen_addr(
            get_optional_env("LISTEN_ADDR", DEFAULT_LISTEN_ADDR) or DEFAULT_LISTEN_ADDR
        )
        log_level = get_optional_env("LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL

        return cls(
            node_endpoint=node_endpoint,
            rpc_endpoint=get_optional_env("RPC_ENDPOINT") or node_endpoint,
            relay_endpoints=relay_endpoints,
            host=host,
            port=port,
            log_level=log_level,
            preload_validators=get_bool_env("PRELOAD_VALIDATORS", default=True),
        )


__all__ = [
    "ApiConfig",
    "get_bool_env",
    "get_optional_env",
    "get_required_env",
    "parse_listen_addr",
    "parse_relay_endpoints",
]
