"""Registry adapter contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Protocol


@dataclass(frozen=True)
class PackageInfo:
    """Result of a registry lookup; ``exists`` is False for an unknown name."""

    exists: bool
    versions: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def not_found(cls) -> "PackageInfo":
        return cls(exists=False)

    def to_dict(self) -> Dict[str, object]:
        return {"exists": self.exists, "versions": list(self.versions), "tags": dict(self.tags)}

    @classmethod
    def from_dict(cls, payload: object) -> "PackageInfo | None":
        if not isinstance(payload, dict):
            return None
        exists = payload.get("exists")
        versions = payload.get("versions", [])
        tags = payload.get("tags", {})
        if not isinstance(exists, bool) or not isinstance(versions, list) or not isinstance(tags, dict):
            return None
        return cls(
            exists=exists,
            versions=[str(version) for version in versions],
            tags={str(key): str(value) for key, value in tags.items() if value is not None},
        )


class Registry(Protocol):
    """Package registry consulted for existence, versions and sources."""

    def lookup_package(self, name: str) -> PackageInfo:
        ...

    def fetch_and_extract_package(self, name: str, version: str, out_dir: Path) -> Path:
        """Download ``name@version`` below ``out_dir`` and return the extracted package root."""


__all__ = ["PackageInfo", "Registry"]
