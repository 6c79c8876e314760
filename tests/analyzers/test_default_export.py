"""Tests for default-export detection."""

from __future__ import annotations

from declcritic.analyzers.default_export import DefaultExportDetector, DefaultExportHeuristics
from declcritic.models import DefaultExportEvidence, InferenceFailure, Inferred, Position, PropertySymbol
from declcritic.oracle.types import StructuralType

FAILED = InferenceFailure("Could not find module symbol for source file node.")


def test_declared_default_from_type_uses_member_position() -> None:
    detector = DefaultExportDetector()
    declared = Inferred(StructuralType.object([PropertySymbol("default", Position(10, 20))]))

    assertion = detector.declared_default("export default foo;", declared)

    assert assertion is not None
    assert assertion.evidence is DefaultExportEvidence.TYPE
    assert assertion.position == Position(10, 20)


def test_resolved_type_without_default_is_authoritative() -> None:
    detector = DefaultExportDetector()
    declared = Inferred(StructuralType.object([PropertySymbol("foo")]))
    assert detector.declared_default("export default foo;", declared) is None


def test_textual_fallback_when_type_failed() -> None:
    detector = DefaultExportDetector()
    text = "declare const x: number;\nexport default x;\n"

    assertion = detector.declared_default(text, FAILED)

    assert assertion is not None
    assert assertion.evidence is DefaultExportEvidence.TEXT
    assert assertion.position == Position(start=text.index("export default"), length=14)


def test_textual_fallback_skips_export_equals_and_ambient_modules() -> None:
    detector = DefaultExportDetector()
    assert detector.declared_default("export default x;\nexport = y;", FAILED) is None
    assert detector.declared_default("declare module 'foo' {\n export default x;\n}", FAILED) is None
    assert detector.declared_default('declare module "foo" {\n export default x;\n}', FAILED) is None
    assert detector.declared_default("export const x: number;", FAILED) is None


def test_source_default_from_type() -> None:
    detector = DefaultExportDetector()
    exported = Inferred(StructuralType.object([PropertySymbol("default")]))
    assert detector.source_exposes_default("module.exports = {}", "pkg", exported)


def test_source_default_from_markers() -> None:
    detector = DefaultExportDetector()
    assert detector.source_exposes_default("Object.defineProperty(exports, '__esModule')", "pkg")
    assert detector.source_exposes_default("// @flow\nmodule.exports = {}", "pkg")
    assert not detector.source_exposes_default("module.exports = function () {}", "pkg")


def test_source_default_from_package_allow_lists() -> None:
    detector = DefaultExportDetector()
    assert detector.source_exposes_default("", "ember-feature-flags")
    assert detector.source_exposes_default("", "react-native-camera")
    assert not detector.source_exposes_default("", "left-pad")


def test_heuristics_are_configurable() -> None:
    detector = DefaultExportDetector(DefaultExportHeuristics(markers=["interopRequire"], packages=[], name_fragments=[]))
    assert detector.source_exposes_default("var x = interopRequire(y)", "pkg")
    assert not detector.source_exposes_default("exports.default = 1", "react-native-camera")
