"""Server and client configuration for marsrover."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import Any

from marsrover.exceptions import RoverConfigError

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise RoverConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RoverConfig:
    """Runtime configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP server binds to.
    port : int
        TCP port the HTTP server listens on.
    store_path : str or None
        JSON file used to persist rovers. ``None`` keeps rovers in memory
        only, so they are lost when the process exits.
    base_url : str
        Server root used by :class:`marsrover.client.RoverClient`.
    log_level : str
        Root logger level name (``"DEBUG"``, ``"INFO"``, ...).
    request_timeout : float
        Total client request timeout in seconds.
    """

    host: str = "127.0.0.1"
    port: int = 8080
    store_path: str | None = None
    base_url: str = "http://127.0.0.1:8080"
    log_level: str = "INFO"
    request_timeout: float = 10.0

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise RoverConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.request_timeout <= 0:
            raise RoverConfigError("request_timeout must be positive")
        level = self.log_level.strip().upper()
        if level not in _LOG_LEVELS:
            raise RoverConfigError(f"unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, **overrides: Any) -> RoverConfig:
        """Create configuration from ``MARSROVER_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "MARSROVER_HOST": "host",
            "MARSROVER_STORE_PATH": "store_path",
            "MARSROVER_BASE_URL": "base_url",
            "MARSROVER_LOG_LEVEL": "log_level",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        port_env = env.get("MARSROVER_PORT")
        if port_env is not None and "port" not in overrides:
            config_kwargs["port"] = _env_number("MARSROVER_PORT", port_env, int)

        timeout_env = env.get("MARSROVER_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_number("MARSROVER_REQUEST_TIMEOUT", timeout_env, float)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
