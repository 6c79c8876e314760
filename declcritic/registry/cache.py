"""Persistent cache for registry lookups."""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path
from typing import Dict, Optional

from ..logging import get_logger
from .base import PackageInfo

_CACHE_VERSION = 1

logger = get_logger("registry.cache")


class RegistryCache:
    """Stores registry lookups keyed by registry package name.

    The snapshot is read once at construction and written only by
    :meth:`persist`; callers decide when a run's lookups are saved.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, object]] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    def get(self, name: str) -> Optional[PackageInfo]:
        entry = self._entries.get(name)
        if not entry:
            return None
        info = PackageInfo.from_dict(entry.get("info"))
        if info is not None:
            logger.debug("Registry cache hit for '%s'", name)
        return info

    def store(self, name: str, info: PackageInfo) -> None:
        self._entries[name] = {
            "info": info.to_dict(),
            "updated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        self._dirty = True

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {
            "version": _CACHE_VERSION,
            "entries": self._entries,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        self._dirty = False

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError) as exc:
            logger.debug("Ignoring unreadable registry cache %s: %s", path, exc)
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        self._entries = {
            key: raw
            for key, raw in entries.items()
            if isinstance(key, str) and isinstance(raw, dict) and "info" in raw
        }
        self._dirty = False


__all__ = ["RegistryCache"]
