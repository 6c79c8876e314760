"""Resolve a requested ``major.minor`` against a registry's published versions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from semver import Version

from .logging import get_logger

_REQUEST_PATTERN = re.compile(r"^\s*(?P<major>\d+)\.(?P<minor>\d+)\s*$")
LATEST_TAG = "latest"

logger = get_logger("versions")


@dataclass(frozen=True)
class VersionResolution:
    """Outcome of a resolution; ``version`` is ``None`` when nothing matched."""

    requested: Optional[str]
    version: Optional[str]
    versions: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.version is not None

    @property
    def latest(self) -> Optional[str]:
        return self.versions[-1] if self.versions else None


def resolve_version(
    requested: Optional[str],
    versions: Sequence[str],
    tags: Optional[Mapping[str, Optional[str]]] = None,
) -> VersionResolution:
    """Pick the concrete version a declaration should be checked against.

    With a ``major.minor`` request the highest version in
    ``[major.minor.0, (major+1).0.0)`` wins, pre-releases included (but not
    pre-releases of the next major). Without a request the ``latest`` tag is
    used, falling back to the last listed version.
    """
    listed = list(versions)
    if requested:
        match = _REQUEST_PATTERN.match(requested)
        if match is None:
            raise ValueError(f"Requested version '{requested}' is not of the form 'major.minor'.")
        major = int(match.group("major"))
        minor = int(match.group("minor"))
        best = _max_satisfying(listed, major, minor)
        return VersionResolution(requested=requested, version=best, versions=listed)

    latest = (tags or {}).get(LATEST_TAG)
    if latest:
        return VersionResolution(requested=None, version=latest, versions=listed)
    return VersionResolution(requested=None, version=listed[-1] if listed else None, versions=listed)


def _max_satisfying(versions: Sequence[str], major: int, minor: int) -> Optional[str]:
    lower = Version(major, minor, 0)
    best: Optional[tuple[Version, str]] = None
    for raw in versions:
        try:
            parsed = Version.parse(raw.strip().lstrip("v"))
        except ValueError:
            logger.debug("Skipping unparsable version %r", raw)
            continue
        if parsed.major != major or parsed < lower:
            continue
        if best is None or parsed > best[0]:
            best = (parsed, raw)
    return best[1] if best else None


__all__ = ["LATEST_TAG", "VersionResolution", "resolve_version"]
