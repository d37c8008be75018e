"""
Configuration management for Display LWT Discovery.

YAML file or built-in defaults, with dot-notation lookup and environment
overrides.
"""

import copy
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import dotenv_values
import yaml

ENV_PREFIX = "DISPLAY_DISCOVERY_"

DEFAULTS: dict = {
    "lwt": {"topic_prefix": "displays", "topic_suffix": "lwt"},
    "home_assistant": {
        "discovery_prefix": "homeassistant",
        "per_sensor_object_id": False,
    },
    "device": {
        "manufacturer": "VA7RCV",
        "model": "E-Paper Display ESP32",
        "hw_version": "v1.0.0",
    },
    "debug": {"enabled": True, "topic_template": "displays/debug/{device}/log"},
}

TRUE_STRINGS = ("true", "1", "yes", "on")

# Lazy one-time .env loading flag
_ENV_LOADED = False


def _env_files() -> list[Path]:
    """Workspace .env first, project .env second (later files win)."""
    project_root = Path(__file__).parent.parent.parent
    return [project_root.parent / ".env", project_root / ".env"]


def _load_env_once() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    file_values: dict[str, str] = {}
    for env_file in _env_files():
        if env_file.exists():
            file_values.update(
                {k: v for k, v in dotenv_values(env_file).items() if k and v is not None}
            )
    # The process environment always wins over .env files
    for k, v in file_values.items():
        os.environ.setdefault(k, v)
    _ENV_LOADED = True


def _coerce_env(raw: str, like: Any) -> Any:
    """Convert an override string to the type of the configured value."""
    if isinstance(like, bool):
        return raw.strip().lower() in TRUE_STRINGS
    if isinstance(like, int):
        try:
            return int(raw)
        except ValueError:
            return raw
    return raw


def _expand_placeholder(value: Any) -> Any:
    """Resolve a whole-value ``${VAR}`` placeholder; unset variables stay literal."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], value)
    return value


class Config:
    """Configuration manager with validation and defaults."""

    config_path: Optional[str] = None

    def __init__(self, config_data: dict):
        """Initialize configuration from dictionary."""
        _load_env_once()
        self._data = config_data or {}
        self.config_path = None

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from YAML file, layered over the defaults."""
        _load_env_once()
        path = Path(config_path)

        if not path.exists():
            # Try relative to project root
            project_root = Path(__file__).parent.parent.parent
            path = project_root / config_path

            if not path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping: {config_path}")

        instance = cls(_merge(copy.deepcopy(DEFAULTS), data))
        instance.config_path = str(path)
        return instance

    @classmethod
    def from_defaults(cls) -> "Config":
        """Create configuration with default values."""
        _load_env_once()
        instance = cls(copy.deepcopy(DEFAULTS))
        instance.config_path = "defaults"
        return instance

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        ``DISPLAY_DISCOVERY_<KEY>`` in the environment overrides any key that
        is present in the configuration, e.g. ``device.model`` is overridden by
        ``DISPLAY_DISCOVERY_DEVICE_MODEL``.
        """
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]

        override = os.getenv(ENV_PREFIX + key.replace(".", "_").upper())
        if override is not None:
            return _coerce_env(override, node)
        return _expand_placeholder(node)

    @property
    def lwt_topic_prefix(self) -> str:
        return self.get("lwt.topic_prefix", "displays")

    @property
    def lwt_topic_suffix(self) -> str:
        return self.get("lwt.topic_suffix", "lwt")

    @property
    def discovery_prefix(self) -> str:
        return self.get("home_assistant.discovery_prefix", "homeassistant")

    @property
    def per_sensor_object_id(self) -> bool:
        return bool(self.get("home_assistant.per_sensor_object_id", False))

    @property
    def debug_enabled(self) -> bool:
        """Whether the debug echo message is emitted."""
        return bool(self.get("debug.enabled", True))

    def debug_topic(self, device_name: str) -> str:
        """Topic for the debug echo of one display.

        Only ``{device}`` is substituted; any other braces are kept literally.
        """
        template = self.get("debug.topic_template", "displays/debug/{device}/log")
        return str(template).replace("{device}", device_name)

    def validate(self) -> list[str]:
        """Return a list of configuration errors; empty means OK."""
        errors: list[str] = []
        for key in (
            "lwt.topic_prefix",
            "lwt.topic_suffix",
            "home_assistant.discovery_prefix",
        ):
            value = self.get(key)
            if not isinstance(value, str) or not value:
                errors.append(f"{key}: must be a non-empty string")
            elif "/" in value:
                errors.append(f"{key}: must be a single topic segment")

        template = self.get("debug.topic_template", "")
        if not isinstance(template, str) or "{device}" not in template:
            errors.append("debug.topic_template: must contain '{device}'")

        for key in ("device.manufacturer", "device.model", "device.hw_version"):
            if not isinstance(self.get(key), str):
                errors.append(f"{key}: must be a string")
        return errors


def _merge(base: dict, override: dict) -> dict:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _merge(base[k], v)
        else:
            base[k] = v
    return base
