"""Tests for the export-equals judgement."""

from __future__ import annotations

from declcritic.analyzers.export_equals import is_bad_type, judge_export_equals
from declcritic.models import ExportEqualsJudgement, InferenceFailure, Inferred, PropertySymbol, TypeFlag
from declcritic.oracle.types import StructuralType


def _verdict(handle: StructuralType):
    result = judge_export_equals(handle)
    assert isinstance(result, Inferred)
    return result.value


def test_plain_object_does_not_require_export_equals() -> None:
    verdict = _verdict(StructuralType.object([PropertySymbol("foo")]))
    assert verdict.judgement is ExportEqualsJudgement.NOT_REQUIRED
    assert verdict.reason == "'module.exports' is an object which is neither a function, class, or array."


def test_function_requires_export_equals() -> None:
    verdict = _verdict(StructuralType.function())
    assert verdict.judgement is ExportEqualsJudgement.REQUIRED
    assert verdict.reason == "'module.exports' can be called as a function or instantiated."


def test_class_requires_export_equals() -> None:
    assert _verdict(StructuralType.class_()).judgement is ExportEqualsJudgement.REQUIRED


def test_primitive_reason_names_the_type() -> None:
    verdict = _verdict(StructuralType.of_flag(TypeFlag.STRING))
    assert verdict.judgement is ExportEqualsJudgement.REQUIRED
    assert verdict.reason == "'module.exports' has primitive type string."


def test_array_reason_names_the_type() -> None:
    verdict = _verdict(StructuralType.array("string[]"))
    assert verdict.judgement is ExportEqualsJudgement.REQUIRED
    assert verdict.reason == "'module.exports' has array-like type string[]."


def test_any_is_not_good_enough() -> None:
    result = judge_export_equals(StructuralType.any())
    assert isinstance(result, InferenceFailure)
    assert result.reason == "Inferred type 'any' is not good enough to be analyzed."


def test_unrecognised_shape_fails() -> None:
    result = judge_export_equals(StructuralType(type_flags=frozenset(), description="symbol"))
    assert isinstance(result, InferenceFailure)
    assert result.reason == "Could not analyze type 'symbol'."


def test_bad_type_flags() -> None:
    for flag in (TypeFlag.ANY, TypeFlag.UNKNOWN, TypeFlag.NULL, TypeFlag.UNDEFINED):
        assert is_bad_type(StructuralType.of_flag(flag))
    assert not is_bad_type(StructuralType.object())
