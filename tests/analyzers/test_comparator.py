"""Tests for the module shape comparator."""

from __future__ import annotations

import logging

import pytest

from declcritic.analyzers.comparator import ModuleShapeComparator, compare_modules, ignore_property
from declcritic.models import (
    DefaultExportAssertion,
    DefaultExportEvidence,
    ErrorKind,
    ExportEqualsJudgement,
    ExportEqualsVerdict,
    ExportStyle,
    InferenceFailure,
    Inferred,
    ModuleDescriptor,
    ModuleRole,
    Position,
    PropertySymbol,
)
from declcritic.oracle.types import StructuralType

REQUIRED = Inferred(
    ExportEqualsVerdict(ExportEqualsJudgement.REQUIRED, "'module.exports' can be called as a function or instantiated.")
)


def _source(export_type=None, *, style=ExportStyle.WHOLE_MODULE_ASSIGNMENT, export_equals=None, exposes_default=False):
    return ModuleDescriptor(
        role=ModuleRole.SOURCE,
        export_style=style,
        export_type=export_type or Inferred(StructuralType.object()),
        export_equals=export_equals,
        exposes_default=exposes_default,
    )


def _declaration(export_type=None, *, style=ExportStyle.NAMED_EXPORTS, default_export=None):
    return ModuleDescriptor(
        role=ModuleRole.DECLARATION,
        export_style=style,
        export_type=export_type or Inferred(StructuralType.object()),
        default_export=default_export,
    )


def _kinds(findings):
    return [finding.kind for finding in findings]


def test_matching_shapes_produce_no_findings() -> None:
    source = _source(Inferred(StructuralType.object([PropertySymbol("foo")])), style=ExportStyle.NAMED_EXPORTS)
    declaration = _declaration(Inferred(StructuralType.object([PropertySymbol("foo")])))
    assert compare_modules(source, declaration) == []


def test_needs_whole_module_export_embeds_reason() -> None:
    source = _source(Inferred(StructuralType.function()), export_equals=REQUIRED)
    declaration = _declaration(Inferred(StructuralType.object([PropertySymbol("foo")])))

    findings = compare_modules(source, declaration)

    assert findings[0].kind is ErrorKind.NEEDS_WHOLE_MODULE_EXPORT
    assert findings[0].message == (
        "Declaration should use 'export =' construct. Reason: "
        "'module.exports' can be called as a function or instantiated."
    )


@pytest.mark.parametrize("style", [ExportStyle.WHOLE_MODULE_ASSIGNMENT, ExportStyle.UNCLASSIFIED])
def test_needs_whole_module_export_only_for_named_declarations(style: ExportStyle) -> None:
    source = _source(Inferred(StructuralType.function()), export_equals=REQUIRED)
    declaration = _declaration(Inferred(StructuralType.function()), style=style)
    assert ErrorKind.NEEDS_WHOLE_MODULE_EXPORT not in _kinds(compare_modules(source, declaration))


def test_not_required_verdict_is_silent() -> None:
    verdict = Inferred(ExportEqualsVerdict(ExportEqualsJudgement.NOT_REQUIRED, "object"))
    findings = ModuleShapeComparator.check_export_equals(_source(export_equals=verdict), _declaration())
    assert findings == []


def test_callability_mismatches_in_both_directions() -> None:
    callable_source = _source(Inferred(StructuralType.function()))
    plain_declaration = _declaration(Inferred(StructuralType.object()))
    assert _kinds(compare_modules(callable_source, plain_declaration)) == [ErrorKind.SOURCE_IS_CALLABLE]

    plain_source = _source(Inferred(StructuralType.object()))
    class_declaration = _declaration(Inferred(StructuralType.class_()), style=ExportStyle.WHOLE_MODULE_ASSIGNMENT)
    assert _kinds(compare_modules(plain_source, class_declaration)) == [ErrorKind.DECLARATION_IS_CALLABLE]


def test_property_differences_are_reported_with_declaration_positions() -> None:
    source = _source(Inferred(StructuralType.object([PropertySymbol("foo"), PropertySymbol("bar")])))
    declaration = _declaration(
        Inferred(StructuralType.object([PropertySymbol("foo"), PropertySymbol("baz", Position(4, 3))]))
    )

    findings = compare_modules(source, declaration)

    assert _kinds(findings) == [ErrorKind.SOURCE_PROPERTY_NOT_DECLARED, ErrorKind.DECLARED_PROPERTY_NOT_IN_SOURCE]
    assert findings[0].message == (
        "Source module exports property named 'bar', which is missing from declaration's exports."
    )
    assert findings[0].position is None
    assert findings[1].message == (
        "Declaration module exports property named 'baz', which is missing from source's exports."
    )
    assert findings[1].position == Position(4, 3)


def test_ignored_properties_are_not_compared() -> None:
    source = _source(Inferred(StructuralType.object([PropertySymbol("__esModule"), PropertySymbol("_private")])))
    declaration = _declaration(Inferred(StructuralType.object([PropertySymbol("default"), PropertySymbol("prototype")])))
    assert compare_modules(source, declaration) == []
    assert ignore_property("_x") and ignore_property("default") and not ignore_property("x")


def test_inference_failures_skip_comparison(caplog: pytest.LogCaptureFixture) -> None:
    source = _source(InferenceFailure("nope"))
    declaration = _declaration(Inferred(StructuralType.object([PropertySymbol("foo")])))

    with caplog.at_level(logging.DEBUG, logger="declcritic"):
        findings = compare_modules(source, declaration)

    assert findings == []
    assert "Could not get type of exports of source module." in caplog.text


def test_bad_types_skip_comparison() -> None:
    comparator = ModuleShapeComparator()
    result = comparator.check_compatibility(Inferred(StructuralType.function()), Inferred(StructuralType.any()))
    assert isinstance(result, InferenceFailure)
    assert result.reason == "Could not infer meaningful type of exports of declaration module."


def test_missing_default_export_is_reported_last() -> None:
    assertion = DefaultExportAssertion(Position(30, 14), DefaultExportEvidence.TEXT)
    source = _source(Inferred(StructuralType.object([PropertySymbol("foo")])))
    declaration = _declaration(Inferred(StructuralType.object()), default_export=assertion)

    findings = compare_modules(source, declaration)

    assert findings[-1].kind is ErrorKind.NO_DEFAULT_EXPORT
    assert findings[-1].position == Position(30, 14)
    assert findings[-1].message.startswith("Declaration specifies 'export default' but the source")


def test_default_export_satisfied_by_source() -> None:
    assertion = DefaultExportAssertion(Position(0, 14), DefaultExportEvidence.TYPE)
    source = _source(exposes_default=True)
    declaration = _declaration(default_export=assertion)
    assert ModuleShapeComparator.check_default_export(source, declaration) == []
