"""
Shell configuration.

Settings live in ~/.noteshell/settings.yaml:

```yaml
noteshell:
  identifier: "com.noteshell.app"
  data_dir: null
  log_level: "INFO"
  structured_logs: false
  dialog_filter_name: "Text Files"
  dialog_extensions: ["txt"]
```

A missing file yields the defaults. Environment variables
NOTESHELL_DATA_DIR and NOTESHELL_LOG_LEVEL override the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".noteshell" / "settings.yaml"
DEFAULT_IDENTIFIER = "com.noteshell.app"

ENV_DATA_DIR = "NOTESHELL_DATA_DIR"
ENV_LOG_LEVEL = "NOTESHELL_LOG_LEVEL"


@dataclass
class ShellConfig:
    """Configuration for the note shell backend.

    Attributes:
        identifier: Application identifier, used as the app data subdirectory.
        data_dir: Explicit document directory. Overrides the platform location.
        log_level: Name of the logging level for the noteshell loggers.
        structured_logs: Emit JSON log lines on stdout.
        dialog_filter_name: Label of the save dialog file filter.
        dialog_extensions: Extensions offered by the save dialog filter.
    """

    identifier: str = DEFAULT_IDENTIFIER
    data_dir: Path | None = None
    log_level: str = "INFO"
    structured_logs: bool = False
    dialog_filter_name: str = "Text Files"
    dialog_extensions: list[str] = field(default_factory=lambda: ["txt"])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShellConfig:
        """Build a config from the `noteshell` section of the settings file."""
        data_dir = data.get("data_dir")
        return cls(
            identifier=str(data.get("identifier", DEFAULT_IDENTIFIER)),
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            log_level=str(data.get("log_level", "INFO")),
            structured_logs=bool(data.get("structured_logs", False)),
            dialog_filter_name=str(data.get("dialog_filter_name", "Text Files")),
            dialog_extensions=[str(ext) for ext in data.get("dialog_extensions", ["txt"])],
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "identifier": self.identifier,
            "data_dir": str(self.data_dir) if self.data_dir else None,
            "log_level": self.log_level,
            "structured_logs": self.structured_logs,
            "dialog_filter_name": self.dialog_filter_name,
            "dialog_extensions": list(self.dialog_extensions),
        }


# Expected type of each settings field, with the wording used in errors
_FIELD_TYPES: dict[str, tuple[type | tuple[type, ...], str]] = {
    "identifier": (str, "a string"),
    "data_dir": ((str, type(None)), "a string or null"),
    "log_level": (str, "a string"),
    "structured_logs": (bool, "true or false"),
    "dialog_filter_name": (str, "a string"),
    "dialog_extensions": (list, "a list of strings"),
}


def _validate_section(path: Path, section: dict[str, Any]) -> None:
    """Reject settings whose values have the wrong type.

    Raises:
        ConfigError: Naming the first offending field
    """
    for name, (expected, wording) in _FIELD_TYPES.items():
        if name not in section:
            continue
        value = section[name]
        if not isinstance(value, expected):
            raise ConfigError(str(path), f"{name} must be {wording}")
        if name == "dialog_extensions" and not all(isinstance(ext, str) for ext in value):
            raise ConfigError(str(path), f"{name} must be {wording}")


def load_config(config_path: Path | None = None) -> ShellConfig:
    """Load configuration from YAML, then apply environment overrides.

    Args:
        config_path: Path to settings.yaml. Defaults to ~/.noteshell/settings.yaml

    Returns:
        The resolved ShellConfig

    Raises:
        ConfigError: If the file exists but cannot be read, parsed or has
            a field of the wrong type
    """
    path = config_path or DEFAULT_CONFIG_PATH
    section: dict[str, Any] = {}

    if path.exists():
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(str(path), f"malformed YAML: {e}") from e
        except OSError as e:
            raise ConfigError(str(path), f"unreadable: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(str(path), "top level must be a mapping")
        section = raw.get("noteshell") or {}
        if not isinstance(section, dict):
            raise ConfigError(str(path), "'noteshell' section must be a mapping")

        _validate_section(path, section)

    config = ShellConfig.from_dict(section)

    if os.environ.get(ENV_DATA_DIR):
        config.data_dir = Path(os.environ[ENV_DATA_DIR]).expanduser()
    if os.environ.get(ENV_LOG_LEVEL):
        config.log_level = os.environ[ENV_LOG_LEVEL]

    return config


def save_config(config: ShellConfig, config_path: Path | None = None) -> Path:
    """Write the config back to the settings file, keeping other sections."""
    path = config_path or DEFAULT_CONFIG_PATH
    existing: dict[str, Any] = {}
    if path.exists():
        try:
            existing = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError(str(path), str(e)) from e
        if not isinstance(existing, dict):
            existing = {}

    existing["noteshell"] = config.to_dict()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(existing, default_flow_style=False), encoding="utf-8")
    return path
