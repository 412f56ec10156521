"""Configuration file loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .exceptions import ConfigValidationError, ValidationError


CONFIG_ENV_VAR = "HOSTKIT_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/hostkit/config.yaml"
SUPPORTED_VERSIONS = {"1"}
LOG_LEVELS = {"debug", "info", "warn", "error"}

# Allowed keys per section, with their expected types
SCHEMA: Dict[str, Dict[str, type]] = {
    "resolver": {"search_tool": str},
    "trash": {"dir": str},
    "tags": {"attribute": str},
    "logging": {"level": str},
}


def default_trash_dir() -> str:
    """Per-user trash location, honouring XDG_DATA_HOME."""
    data_home = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
    return os.path.join(data_home, "Trash")


@dataclass
class HostConfig:
    """Effective hostkit settings."""
    search_tool: str = "/usr/bin/which"
    trash_dir: str = field(default_factory=default_trash_dir)
    tags_attribute: str = "user.xdg.tags"
    log_level: str = "info"
    source: Optional[str] = None  # File the settings came from, if any


class ConfigLoader:
    """Loads and validates hostkit YAML configuration."""

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, path: Optional[Union[str, Path]] = None) -> HostConfig:
        """
        Load configuration.

        Lookup order: explicit path, $HOSTKIT_CONFIG, the default per-user
        file if it exists, then built-in defaults.

        Raises:
            FileNotFoundError: If an explicitly named file does not exist
            ConfigValidationError: If the file is malformed
        """
        self.errors = []
        config_path = self._locate(path)
        if config_path is None:
            return HostConfig()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse config: {e}")
            self._raise_validation_errors()

        if data is None:
            return HostConfig(source=str(config_path))
        if not isinstance(data, dict):
            self._add_error("Config must be a YAML object/dictionary")
            self._raise_validation_errors()

        return self.from_dict(data, source=str(config_path))

    def from_dict(self, data: Dict[str, Any], source: Optional[str] = None) -> HostConfig:
        """Build a HostConfig from an already-parsed mapping."""
        self.errors = []
        config = HostConfig(source=source)

        version = data.get("version")
        if version is not None:
            if not isinstance(version, str):
                self._add_error(f"'version' must be a string, got {type(version).__name__}", "version")
            elif version not in SUPPORTED_VERSIONS:
                self._add_error(f"Unsupported version '{version}'. Supported: {sorted(SUPPORTED_VERSIONS)}", "version")

        for section, values in data.items():
            if section == "version":
                continue
            if section not in SCHEMA:
                self._add_error(f"Unknown config section '{section}'", section)
                continue
            if not isinstance(values, dict):
                self._add_error(f"Section '{section}' must be a mapping", section)
                continue
            for key, value in values.items():
                expected = SCHEMA[section].get(key)
                if expected is None:
                    self._add_error(f"Unknown key '{key}'", f"{section}.{key}")
                elif not isinstance(value, expected):
                    self._add_error(
                        f"Expected {expected.__name__}, got {type(value).__name__}",
                        f"{section}.{key}",
                    )

        self._raise_validation_errors()

        resolver = data.get("resolver") or {}
        trash = data.get("trash") or {}
        tags = data.get("tags") or {}
        logging_section = data.get("logging") or {}

        if "search_tool" in resolver:
            config.search_tool = os.path.expanduser(resolver["search_tool"])
        if "dir" in trash:
            config.trash_dir = os.path.expanduser(trash["dir"])
        if "attribute" in tags:
            config.tags_attribute = tags["attribute"]
        if "level" in logging_section:
            level = logging_section["level"].lower()
            if level not in LOG_LEVELS:
                self._add_error(f"Invalid log level '{level}'. Choose from {sorted(LOG_LEVELS)}", "logging.level")
                self._raise_validation_errors()
            config.log_level = level

        return config

    def _locate(self, path: Optional[Union[str, Path]]) -> Optional[Path]:
        if path is not None:
            explicit = Path(path).expanduser()
            if not explicit.exists():
                raise FileNotFoundError(f"Config file not found: {explicit}")
            return explicit

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            candidate = Path(env_path).expanduser()
            if not candidate.exists():
                raise FileNotFoundError(f"Config file from ${CONFIG_ENV_VAR} not found: {candidate}")
            return candidate

        default = Path(DEFAULT_CONFIG_PATH).expanduser()
        return default if default.exists() else None

    def _add_error(self, message: str, path: str = "") -> None:
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self) -> None:
        if self.errors:
            raise ConfigValidationError(self.errors)


def load_config(path: Optional[Union[str, Path]] = None) -> HostConfig:
    """Load configuration using the standard lookup order."""
    return ConfigLoader().load(path)
