"""Tests for the finding taxonomy and enablement filter."""

from __future__ import annotations

import pytest

from declcritic.errors import (
    DEFAULT_ENABLED,
    UnknownErrorKindError,
    filter_findings,
    is_enabled,
    parse_enabled_kinds,
    to_error_kind,
)
from declcritic.models import CriticFinding, ErrorKind


def test_every_kind_has_a_default() -> None:
    assert set(DEFAULT_ENABLED) == set(ErrorKind)


def test_strict_checks_are_off_by_default() -> None:
    assert is_enabled(ErrorKind.NEEDS_WHOLE_MODULE_EXPORT)
    assert is_enabled(ErrorKind.NO_DEFAULT_EXPORT)
    assert not is_enabled(ErrorKind.SOURCE_PROPERTY_NOT_DECLARED)
    assert not is_enabled(ErrorKind.DECLARATION_IS_CALLABLE)


@pytest.mark.parametrize("kind", list(ErrorKind))
def test_kind_lookup_is_case_insensitive(kind: ErrorKind) -> None:
    assert to_error_kind(kind.value) is kind
    assert to_error_kind(kind.value.upper()) is kind
    assert to_error_kind(kind.value.lower()) is kind


def test_unknown_kind_lookup_returns_none() -> None:
    assert to_error_kind("NotAKind") is None


def test_filter_uses_explicit_entries_verbatim() -> None:
    findings = [
        CriticFinding(ErrorKind.SOURCE_PROPERTY_NOT_DECLARED, "a"),
        CriticFinding(ErrorKind.NO_DEFAULT_EXPORT, "b"),
        CriticFinding(ErrorKind.SOURCE_IS_CALLABLE, "c"),
    ]

    kept = filter_findings(
        findings,
        {ErrorKind.SOURCE_PROPERTY_NOT_DECLARED: True, ErrorKind.NO_DEFAULT_EXPORT: False},
    )

    assert [finding.message for finding in kept] == ["a"]


def test_filter_without_overrides_applies_defaults() -> None:
    findings = [CriticFinding(ErrorKind.NO_MATCHING_PACKAGE, "x"), CriticFinding(ErrorKind.SOURCE_IS_CALLABLE, "y")]
    assert [finding.kind for finding in filter_findings(findings)] == [ErrorKind.NO_MATCHING_PACKAGE]


def test_parse_enabled_kinds_from_names_and_mappings() -> None:
    assert parse_enabled_kinds(["sourceiscallable"]) == {ErrorKind.SOURCE_IS_CALLABLE: True}
    assert parse_enabled_kinds(["NoDefaultExport"], value=False) == {ErrorKind.NO_DEFAULT_EXPORT: False}
    assert parse_enabled_kinds({"DeclarationIsCallable": True}) == {ErrorKind.DECLARATION_IS_CALLABLE: True}


def test_parse_enabled_kinds_rejects_unknown_names() -> None:
    with pytest.raises(UnknownErrorKindError) as excinfo:
        parse_enabled_kinds(["NoDefaultExport", "Bogus"])
    assert excinfo.value.names == ["Bogus"]
    assert "Bogus" in str(excinfo.value)


def test_finding_serialises_position() -> None:
    from declcritic.models import Position

    payload = CriticFinding(ErrorKind.NO_DEFAULT_EXPORT, "msg", Position(3, 14)).to_dict()
    assert payload == {"kind": "NoDefaultExport", "message": "msg", "position": {"start": 3, "length": 14}}
