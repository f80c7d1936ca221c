"""Configuration loading for cmdletdoc (.cmdletdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILE_NAME = ".cmdletdoc.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CmdletDocConfig:
    """Represents the settings defined in .cmdletdoc.yml."""

    root: Path
    strict: bool = False
    exclude_parameter_sets: List[str] = field(default_factory=list)
    output: Optional[Path] = None
    doc_comments: Optional[Path] = None


def load_config(config_path: Path) -> CmdletDocConfig:
    """Load configuration from disk.

    ``config_path`` may be the config file itself, its directory, or any file
    in that directory (typically the command module).
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CmdletDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    output = _as_str(data.get("output"))
    doc_comments = _as_str(data.get("doc_comments"))
    return CmdletDocConfig(
        root=root,
        strict=_as_bool(data.get("strict")) or False,
        exclude_parameter_sets=_as_str_list(data.get("exclude_parameter_sets")),
        output=root / output if output else None,
        doc_comments=root / doc_comments if doc_comments else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    if config_path.suffix in (".py", ".xml"):
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def as_mapping(config: CmdletDocConfig) -> Dict[str, Any]:
    """Plain-data view of a config, used for debug logging."""
    return {
        "root": str(config.root),
        "strict": config.strict,
        "exclude_parameter_sets": list(config.exclude_parameter_sets),
        "output": str(config.output) if config.output else None,
        "doc_comments": str(config.doc_comments) if config.doc_comments else None,
    }


__all__ = ["CONFIG_FILE_NAME", "CmdletDocConfig", "ConfigError", "as_mapping", "load_config"]
