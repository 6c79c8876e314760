"""Finding taxonomy: default enablement and caller overrides."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence

from .models import CriticFinding, ErrorKind

# Property and signature comparisons against inferred JavaScript are opt-in.
DEFAULT_ENABLED: Mapping[ErrorKind, bool] = {
    ErrorKind.NO_MATCHING_PACKAGE: True,
    ErrorKind.NON_DISTRIBUTED_HAS_MATCHING_PACKAGE: True,
    ErrorKind.NO_MATCHING_VERSION: True,
    ErrorKind.NEEDS_WHOLE_MODULE_EXPORT: True,
    ErrorKind.NO_DEFAULT_EXPORT: True,
    ErrorKind.SOURCE_PROPERTY_NOT_DECLARED: False,
    ErrorKind.DECLARED_PROPERTY_NOT_IN_SOURCE: False,
    ErrorKind.SOURCE_IS_CALLABLE: False,
    ErrorKind.DECLARATION_IS_CALLABLE: False,
}

_KINDS_BY_NAME = {kind.value.lower(): kind for kind in ErrorKind}


class UnknownErrorKindError(ValueError):
    """Raised when configuration names a finding kind that does not exist."""

    def __init__(self, names: Sequence[str]) -> None:
        joined = ", ".join(f"'{name}'" for name in names)
        super().__init__(f"Could not find error kind named {joined}.")
        self.names = list(names)


def to_error_kind(name: str) -> Optional[ErrorKind]:
    """Return the kind with the given case-insensitive name, or ``None``."""
    return _KINDS_BY_NAME.get(name.strip().lower())


def default_enabled(kind: ErrorKind) -> bool:
    return DEFAULT_ENABLED[kind]


def is_enabled(kind: ErrorKind, overrides: Optional[Mapping[ErrorKind, bool]] = None) -> bool:
    """An explicit override wins; otherwise the kind's default applies."""
    if overrides is not None and kind in overrides:
        return bool(overrides[kind])
    return default_enabled(kind)


def filter_findings(
    findings: Iterable[CriticFinding],
    enabled: Optional[Mapping[ErrorKind, bool]] = None,
) -> List[CriticFinding]:
    """Keep findings whose kind is enabled, preserving order."""
    return [finding for finding in findings if is_enabled(finding.kind, enabled)]


def parse_enabled_kinds(
    names: Mapping[str, object] | Iterable[str],
    *,
    value: bool = True,
) -> dict[ErrorKind, bool]:
    """Translate free-form kind names into an enablement mapping.

    Accepts either a mapping of ``name -> bool`` or an iterable of names that
    all receive ``value``. Unrecognized names raise ``UnknownErrorKindError``.
    """
    if isinstance(names, Mapping):
        pairs = [(str(name), bool(flag)) for name, flag in names.items()]
    else:
        pairs = [(str(name), value) for name in names]

    result: dict[ErrorKind, bool] = {}
    unknown: List[str] = []
    for name, flag in pairs:
        kind = to_error_kind(name)
        if kind is None:
            unknown.append(name)
            continue
        result[kind] = flag
    if unknown:
        raise UnknownErrorKindError(unknown)
    return result


__all__ = [
    "DEFAULT_ENABLED",
    "ErrorKind",
    "UnknownErrorKindError",
    "default_enabled",
    "filter_findings",
    "is_enabled",
    "parse_enabled_kinds",
    "to_error_kind",
]
