"""Decide whether a declaration must use the whole-module ``export =`` form."""

from __future__ import annotations

from ..models import (
    DISQUALIFYING_FLAGS,
    PRIMITIVE_FLAGS,
    ExportEqualsJudgement,
    ExportEqualsVerdict,
    InferenceFailure,
    InferenceResult,
    Inferred,
    TypeFlag,
)
from ..oracle.base import TypeHandle, callable_or_constructable


def is_bad_type(handle: TypeHandle) -> bool:
    return bool(handle.flags() & DISQUALIFYING_FLAGS)


def judge_export_equals(handle: TypeHandle) -> InferenceResult[ExportEqualsVerdict]:
    """Judge a ``module.exports`` type; first matching rule wins.

    Only indivisible values (functions, classes, primitives, arrays) force a
    consumer to import the whole value; plain data objects can be destructured.
    """
    rendered = handle.render_as_string()
    if is_bad_type(handle):
        return InferenceFailure(f"Inferred type '{rendered}' is not good enough to be analyzed.")

    flags = handle.flags()
    invocable = callable_or_constructable(handle)
    if TypeFlag.OBJECT in flags and not invocable and not handle.is_array_like():
        return Inferred(
            ExportEqualsVerdict(
                judgement=ExportEqualsJudgement.NOT_REQUIRED,
                reason="'module.exports' is an object which is neither a function, class, or array.",
            )
        )

    if invocable:
        return Inferred(
            ExportEqualsVerdict(
                judgement=ExportEqualsJudgement.REQUIRED,
                reason="'module.exports' can be called as a function or instantiated.",
            )
        )

    if flags & PRIMITIVE_FLAGS:
        return Inferred(
            ExportEqualsVerdict(
                judgement=ExportEqualsJudgement.REQUIRED,
                reason=f"'module.exports' has primitive type {rendered}.",
            )
        )

    if handle.is_array_like():
        return Inferred(
            ExportEqualsVerdict(
                judgement=ExportEqualsJudgement.REQUIRED,
                reason=f"'module.exports' has array-like type {rendered}.",
            )
        )

    return InferenceFailure(f"Could not analyze type '{rendered}'.")


__all__ = ["is_bad_type", "judge_export_equals"]
