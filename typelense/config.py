"""Configuration loading for typelense (.typelense.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".typelense.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DetectorConfig:
    """Which detectors run; an empty list means all of them."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class OutputConfig:
    """Where reports are written and whether the HTML viewer is produced."""

    base_dir: Optional[Path] = None
    web: bool = False
    templates_dir: Optional[Path] = None


@dataclass
class TypelenseConfig:
    """Settings read from .typelense.yml."""

    root: Path
    detectors: DetectorConfig = field(default_factory=DetectorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def report_base_dir(self) -> Path:
        return self.output.base_dir or self.root

    @property
    def enabled_detectors(self) -> Optional[List[str]]:
        return self.detectors.enabled or None


def load_config(config_path: Path) -> TypelenseConfig:
    """Load configuration from a project directory or an explicit file path."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return TypelenseConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    detectors = DetectorConfig()
    detector_data = _as_dict(data.get("detectors"))
    if detector_data:
        detectors.enabled = _as_str_list(detector_data.get("enabled"))

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        base_dir = _as_str(output_data.get("base_dir"))
        templates_dir = _as_str(output_data.get("templates_dir"))
        output.base_dir = (root / base_dir).resolve() if base_dir else None
        output.templates_dir = (root / templates_dir).resolve() if templates_dir else None
        output.web = _as_bool(output_data.get("web")) or False

    return TypelenseConfig(root=root, detectors=detectors, output=output)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


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
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, str)]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DetectorConfig",
    "OutputConfig",
    "TypelenseConfig",
    "load_config",
]
