"""
Config - typed settings for the request bag integration.

Merge order (later overrides earlier):
1. Dataclass defaults
2. .env file (REQUESTBAG_* keys only)
3. Environment variables (REQUESTBAG_* prefix)
4. Manual overrides
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import os

from dotenv import dotenv_values


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


def _parse_value(value: str) -> Any:
    """Parse string value to appropriate type."""
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    return value.strip()


@dataclass
class BagConfig:
    """
    Settings for RequestBagMiddleware.

    Attributes:
        state_key: Key under scope["state"] where the bag is stored
        include_websockets: Also open a bag scope for websocket connections
        diagnostics: Route DI events to the requestbag.di.diagnostics logger
    """

    state_key: str = "request_bag"
    include_websockets: bool = False
    diagnostics: bool = False

    def __post_init__(self):
        if not isinstance(self.state_key, str) or not self.state_key:
            raise ConfigError("state_key must be a non-empty string")
        for name in ("include_websockets", "diagnostics"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(
                    f"{name} must be a boolean (true/false, yes/no, 1/0), got {value!r}"
                )

    @classmethod
    def load(
        cls,
        env_prefix: str = "REQUESTBAG_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "BagConfig":
        """
        Load configuration from .env, environment and overrides.

        Args:
            env_prefix: Prefix for environment variables
            env_file: Path to .env file (skipped when missing)
            overrides: Manual overrides (highest precedence)
        """
        data: Dict[str, Any] = {}

        if env_file and Path(env_file).exists():
            data.update(cls._from_env_mapping(dotenv_values(env_file), env_prefix))

        data.update(cls._from_env_mapping(os.environ, env_prefix))

        if overrides:
            data.update(overrides)

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @staticmethod
    def _from_env_mapping(
        source: Mapping[str, Optional[str]],
        env_prefix: str,
    ) -> Dict[str, Any]:
        """Convert REQUESTBAG_STATE_KEY=... into {"state_key": ...}."""
        result: Dict[str, Any] = {}
        for key, value in source.items():
            if not key.startswith(env_prefix) or value is None:
                continue
            name = key[len(env_prefix):].lower()
            if name == "state_key":
                # Keys are names, never booleans
                result[name] = value.strip()
            else:
                result[name] = _parse_value(value)
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
