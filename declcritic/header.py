"""Parser for the conventional header at the top of a declaration file.

Only the parts the critic needs are extracted::

    // Type definitions for foo 1.2
    // Type definitions for non-npm package foo-browser 0.3
    // Project: https://github.com/example/foo, https://foo.example
    // TypeScript Version: 3.1
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

_TITLE_PATTERN = re.compile(
    r"^//\s*Type definitions for\s+(?P<non_npm>non-npm package\s+)?"
    r"(?P<name>[^\s]+)(?:\s+(?P<major>\d+)\.(?P<minor>\d+|x))?\s*$"
)
_PROJECT_PATTERN = re.compile(r"^//\s*Project:\s*(?P<projects>.+?)\s*$")
_TS_VERSION_PATTERN = re.compile(r"^//\s*(?:Minimum\s+)?TypeScript Version:\s*(?P<version>\d+\.\d+)\s*$")


class HeaderError(ValueError):
    """Raised by :func:`parse_header_or_fail` when no header is present."""


@dataclass(frozen=True)
class Header:
    """Parsed declaration header."""

    name: str
    library_major_version: int = 0
    library_minor_version: int = 0
    non_npm: bool = False
    projects: List[str] = field(default_factory=list)
    typescript_version: Optional[str] = None

    @property
    def requested_version(self) -> Optional[str]:
        """``major.minor`` the declaration claims to describe; ``0.0`` means unspecified."""
        if self.library_major_version == 0 and self.library_minor_version == 0:
            return None
        return f"{self.library_major_version}.{self.library_minor_version}"


def parse_header_or_fail(text: str) -> Header:
    lines = [line.strip() for line in text.lstrip("\ufeff").splitlines()]
    first = next((line for line in lines if line), "")
    match = _TITLE_PATTERN.match(first)
    if match is None:
        raise HeaderError("Declaration does not start with a 'Type definitions for' header line")

    major = int(match.group("major") or 0)
    minor_raw = match.group("minor")
    minor = int(minor_raw) if minor_raw and minor_raw.isdigit() else 0

    projects: List[str] = []
    ts_version: Optional[str] = None
    for line in lines[1:]:
        if not line.startswith("//"):
            break
        project_match = _PROJECT_PATTERN.match(line)
        if project_match:
            projects.extend(
                part.strip() for part in project_match.group("projects").split(",") if part.strip()
            )
            continue
        version_match = _TS_VERSION_PATTERN.match(line)
        if version_match:
            ts_version = version_match.group("version")

    return Header(
        name=match.group("name"),
        library_major_version=major,
        library_minor_version=minor,
        non_npm=bool(match.group("non_npm")),
        projects=projects,
        typescript_version=ts_version,
    )


def parse_header(text: str) -> Optional[Header]:
    """Return the parsed header, or ``None`` when the file has none."""
    try:
        return parse_header_or_fail(text)
    except HeaderError:
        return None


__all__ = ["Header", "HeaderError", "parse_header", "parse_header_or_fail"]
