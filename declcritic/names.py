"""Package name helpers for declaration repositories."""

from __future__ import annotations

from pathlib import Path

DEFAULT_PACKAGE_NAME = "declcritic"
DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")
_SCOPE_SEPARATOR = "__"


def find_dts_name(dts_path: str | Path) -> str:
    """Derive the package name a declaration file describes.

    ``types/jquery/index.d.ts`` describes ``jquery``; ``foo.d.ts`` describes
    ``foo``. A bare ``index.d.ts`` without a parent directory falls back to
    ``DEFAULT_PACKAGE_NAME``.
    """
    path = Path(dts_path)
    base = _strip_declaration_suffix(path.name)
    if base and base != "index":
        return base
    parent = path.parent
    if parent.name and parent.name not in {".", ".."}:
        return parent.name
    if str(parent) in {"", "."}:
        return DEFAULT_PACKAGE_NAME
    return parent.resolve().name or DEFAULT_PACKAGE_NAME


def dt_to_npm_name(name: str) -> str:
    """Map a mangled repository name to its registry name (``babel__core`` -> ``@babel/core``)."""
    if _SCOPE_SEPARATOR in name:
        scope, rest = name.split(_SCOPE_SEPARATOR, 1)
        return f"@{scope}/{rest}"
    return name


def npm_to_dt_name(name: str) -> str:
    """Inverse of :func:`dt_to_npm_name` for scoped names."""
    if name.startswith("@") and "/" in name:
        scope, rest = name[1:].split("/", 1)
        return f"{scope}{_SCOPE_SEPARATOR}{rest}"
    return name


def _strip_declaration_suffix(filename: str) -> str:
    for suffix in DECLARATION_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return Path(filename).stem


__all__ = [
    "DECLARATION_SUFFIXES",
    "DEFAULT_PACKAGE_NAME",
    "dt_to_npm_name",
    "find_dts_name",
    "npm_to_dt_name",
]
