"""Configuration loading for declcritic (.declcritic.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers.default_export import (
    DEFAULT_EXPORT_NAME_FRAGMENTS,
    DEFAULT_EXPORT_PACKAGES,
    DEFAULT_MARKERS,
    DefaultExportHeuristics,
)
from .errors import UnknownErrorKindError, parse_enabled_kinds
from .models import ErrorKind

CONFIG_FILENAME = ".declcritic.yml"
DEFAULT_SOURCES_DIR = "sources"
DEFAULT_REGISTRY_CACHE = "sources/.declcritic/registry.json"

# Registry names known to belong to someone other than the non-npm package
# that shares them.
DEFAULT_SQUATTERS = (
    "atom",
    "ember__string",
    "fancybox",
    "jsqrcode",
    "node",
    "geojson",
    "titanium",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CriticConfig:
    """Represents the settings defined in .declcritic.yml."""

    root: Path
    errors: Dict[ErrorKind, bool] = field(default_factory=dict)
    heuristics: DefaultExportHeuristics = field(default_factory=DefaultExportHeuristics)
    squatters: List[str] = field(default_factory=lambda: list(DEFAULT_SQUATTERS))
    sources_dir: Optional[Path] = None
    registry_cache: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.sources_dir is None:
            self.sources_dir = self.root / DEFAULT_SOURCES_DIR
        if self.registry_cache is None:
            self.registry_cache = self.root / DEFAULT_REGISTRY_CACHE

    def is_squatter(self, name: str) -> bool:
        return name in self.squatters

    def with_overrides(self, overrides: Dict[ErrorKind, bool]) -> Dict[ErrorKind, bool]:
        """Merge command-line enablement on top of the file's ``errors`` mapping."""
        merged = dict(self.errors)
        merged.update(overrides)
        return merged


def load_config(config_path: Path) -> CriticConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CriticConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    errors_data = _as_dict(data.get("errors"))
    try:
        errors = parse_enabled_kinds({name: _as_bool(value) for name, value in errors_data.items()})
    except UnknownErrorKindError as exc:
        raise ConfigError(f"Invalid 'errors' section in {config_file.name}: {exc}") from exc

    heuristics_data = _as_dict(data.get("heuristics"))
    heuristics = DefaultExportHeuristics(
        markers=_as_str_list(heuristics_data.get("default_markers"), DEFAULT_MARKERS),
        packages=_as_str_list(heuristics_data.get("default_export_packages"), DEFAULT_EXPORT_PACKAGES),
        name_fragments=_as_str_list(
            heuristics_data.get("default_export_name_fragments"), DEFAULT_EXPORT_NAME_FRAGMENTS
        ),
    )

    sources_dir_str = _as_str(data.get("sources_dir"))
    cache_str = _as_str(data.get("registry_cache"))

    return CriticConfig(
        root=root,
        errors=errors,
        heuristics=heuristics,
        squatters=_as_str_list(data.get("squatters"), DEFAULT_SQUATTERS),
        sources_dir=root / sources_dir_str if sources_dir_str else None,
        registry_cache=root / cache_str if cache_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
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
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    if isinstance(value, int):
        return bool(value)
    raise ConfigError(f"Expected a boolean but found {value!r}")


def _as_str_list(value: Any, default: Sequence[str] = ()) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return list(default)


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "CriticConfig",
    "DEFAULT_SQUATTERS",
    "load_config",
]
