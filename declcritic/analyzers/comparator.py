"""Diff the inferred shape of a source module against its declaration.

Given the export types of both sides:

1. A callable/constructable source needs a callable/constructable declaration.
2. A callable/constructable declaration needs a callable/constructable source.
3. Every source property must be declared.
4. Every declared property must exist in the source.

Checks 2 and 4 mostly surface gaps in JavaScript inference rather than wrong
declarations, which is why their kinds are disabled by default.
"""

from __future__ import annotations

from typing import FrozenSet, List, Sequence

from ..logging import get_logger
from ..models import (
    CriticFinding,
    ErrorKind,
    ExportEqualsJudgement,
    ExportStyle,
    InferenceFailure,
    InferenceResult,
    Inferred,
    ModuleDescriptor,
    PropertySymbol,
)
from ..oracle.base import TypeHandle, callable_or_constructable
from .export_equals import is_bad_type

IGNORED_PROPERTIES: FrozenSet[str] = frozenset({"__esModule", "prototype", "default"})

logger = get_logger("comparator")


def ignore_property(name: str) -> bool:
    return name.startswith("_") or name in IGNORED_PROPERTIES


class ModuleShapeComparator:
    """Produces findings in a stable order: export-equals, callability, properties, default export."""

    def compare(self, source: ModuleDescriptor, declaration: ModuleDescriptor) -> List[CriticFinding]:
        findings: List[CriticFinding] = []
        findings.extend(self.check_export_equals(source, declaration))

        compatibility = self.check_compatibility(source.export_type, declaration.export_type)
        if isinstance(compatibility, InferenceFailure):
            logger.debug("Skipped shape comparison: %s", compatibility.reason)
        else:
            findings.extend(compatibility.value)

        findings.extend(self.check_default_export(source, declaration))
        return findings

    @staticmethod
    def check_export_equals(source: ModuleDescriptor, declaration: ModuleDescriptor) -> List[CriticFinding]:
        verdict = source.export_equals
        if not isinstance(verdict, Inferred):
            return []
        if verdict.value.judgement is not ExportEqualsJudgement.REQUIRED:
            return []
        if declaration.export_style is not ExportStyle.NAMED_EXPORTS:
            return []
        return [
            CriticFinding(
                kind=ErrorKind.NEEDS_WHOLE_MODULE_EXPORT,
                message=f"Declaration should use 'export =' construct. Reason: {verdict.value.reason}",
            )
        ]

    def check_compatibility(
        self,
        source_type: InferenceResult[TypeHandle],
        declaration_type: InferenceResult[TypeHandle],
    ) -> InferenceResult[List[CriticFinding]]:
        if isinstance(source_type, InferenceFailure):
            return InferenceFailure("Could not get type of exports of source module.")
        if isinstance(declaration_type, InferenceFailure):
            return InferenceFailure("Could not get type of exports of declaration module.")
        if is_bad_type(source_type.value):
            return InferenceFailure("Could not infer meaningful type of exports of source module.")
        if is_bad_type(declaration_type.value):
            return InferenceFailure("Could not infer meaningful type of exports of declaration module.")

        findings = self._callability(source_type.value, declaration_type.value)
        findings.extend(self._properties(source_type.value.properties(), declaration_type.value.properties()))
        return Inferred(findings)

    @staticmethod
    def _callability(source: TypeHandle, declaration: TypeHandle) -> List[CriticFinding]:
        findings: List[CriticFinding] = []
        source_invocable = callable_or_constructable(source)
        declaration_invocable = callable_or_constructable(declaration)
        if source_invocable and not declaration_invocable:
            findings.append(
                CriticFinding(
                    kind=ErrorKind.SOURCE_IS_CALLABLE,
                    message="Source module can be called as a function or instantiated, but declaration module cannot.",
                )
            )
        if declaration_invocable and not source_invocable:
            findings.append(
                CriticFinding(
                    kind=ErrorKind.DECLARATION_IS_CALLABLE,
                    message="Declaration module can be called as a function or instantiated, but source module cannot.",
                )
            )
        return findings

    @staticmethod
    def _properties(
        source: Sequence[PropertySymbol], declaration: Sequence[PropertySymbol]
    ) -> List[CriticFinding]:
        findings: List[CriticFinding] = []
        source_names = {symbol.name for symbol in source}
        declared_names = {symbol.name for symbol in declaration}

        for symbol in source:
            if ignore_property(symbol.name) or symbol.name in declared_names:
                continue
            findings.append(
                CriticFinding(
                    kind=ErrorKind.SOURCE_PROPERTY_NOT_DECLARED,
                    message=(
                        f"Source module exports property named '{symbol.name}', "
                        "which is missing from declaration's exports."
                    ),
                )
            )

        for symbol in declaration:
            if ignore_property(symbol.name) or symbol.name in source_names:
                continue
            findings.append(
                CriticFinding(
                    kind=ErrorKind.DECLARED_PROPERTY_NOT_IN_SOURCE,
                    message=(
                        f"Declaration module exports property named '{symbol.name}', "
                        "which is missing from source's exports."
                    ),
                    position=symbol.position,
                )
            )
        return findings

    @staticmethod
    def check_default_export(source: ModuleDescriptor, declaration: ModuleDescriptor) -> List[CriticFinding]:
        assertion = declaration.default_export
        if assertion is None or source.exposes_default:
            return []
        return [
            CriticFinding(
                kind=ErrorKind.NO_DEFAULT_EXPORT,
                position=assertion.position,
                message=(
                    "Declaration specifies 'export default' but the source does not mention "
                    "'default' anywhere.\n\n"
                    "The most common way to resolve this error is to use 'export =' instead of "
                    "'export default'."
                ),
            )
        ]


def compare_modules(source: ModuleDescriptor, declaration: ModuleDescriptor) -> List[CriticFinding]:
    return ModuleShapeComparator().compare(source, declaration)


__all__ = ["IGNORED_PROPERTIES", "ModuleShapeComparator", "compare_modules", "ignore_property"]
