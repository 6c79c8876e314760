"""Build the per-module descriptors consumed by the comparator."""

from __future__ import annotations

from typing import List, Optional

from ..logging import get_logger
from ..models import (
    ExportStyle,
    InferenceFailure,
    InferenceResult,
    Inferred,
    ModuleDescriptor,
    ModuleRole,
)
from ..oracle.base import TypeHandle, TypeOracle
from .classifier import classify_exports
from .default_export import DefaultExportDetector
from .export_equals import judge_export_equals

logger = get_logger("descriptors")


def inspect_source(
    oracle: TypeOracle,
    source_text: str,
    package_name: str,
    detector: Optional[DefaultExportDetector] = None,
) -> ModuleDescriptor:
    """Classify, type and judge a JavaScript source module."""
    detector = detector or DefaultExportDetector()
    tree = oracle.parse(source_text, allow_dynamic_syntax=True)
    style = classify_exports(tree)
    export_type = oracle.resolve_export_type(tree, style, package_name)

    export_equals = None
    if isinstance(export_type, Inferred) and style is ExportStyle.WHOLE_MODULE_ASSIGNMENT:
        export_equals = judge_export_equals(export_type.value)

    return ModuleDescriptor(
        role=ModuleRole.SOURCE,
        export_style=style,
        export_type=export_type,
        export_equals=export_equals,
        exposes_default=detector.source_exposes_default(source_text, package_name, export_type),
    )


def inspect_declaration(
    oracle: TypeOracle,
    declaration_text: str,
    package_name: str,
    detector: Optional[DefaultExportDetector] = None,
) -> ModuleDescriptor:
    """Classify and type a declaration module and find its default-export assertion."""
    detector = detector or DefaultExportDetector()
    tree = oracle.parse(declaration_text, allow_dynamic_syntax=False)
    style = classify_exports(tree)
    export_type = oracle.resolve_export_type(tree, style, package_name)
    return ModuleDescriptor(
        role=ModuleRole.DECLARATION,
        export_style=style,
        export_type=export_type,
        default_export=detector.declared_default(declaration_text, export_type),
    )


def format_type(handle: TypeHandle) -> str:
    lines: List[str] = []
    properties = handle.properties()
    if properties:
        lines.append("Type's properties:")
        lines.extend(symbol.name for symbol in properties)
    signatures = handle.construct_signature_count() + handle.call_signature_count()
    if signatures:
        lines.append("Type's signatures:")
        lines.extend(["new (...args: any[]): any"] * handle.construct_signature_count())
        lines.extend(["(...args: any[]): any"] * handle.call_signature_count())
    lines.append(f"Type string: {handle.render_as_string()}")
    return "\n".join(lines)


def _format_result(result: InferenceResult[TypeHandle], side: str) -> str:
    if isinstance(result, InferenceFailure):
        return f"Could not infer type of {side} exports. Reason: {result.reason}"
    return format_type(result.value)


def format_debug(source: ModuleDescriptor, declaration: ModuleDescriptor) -> str:
    """Human-readable dump of both descriptors for debug logging."""
    lines = [
        "\tInferred source module structure:",
        source.export_style.value,
        "\tInferred source export type:",
        _format_result(source.export_type, "JavaScript"),
        "\tInferred declaration module structure:",
        declaration.export_style.value,
        "\tInferred declaration export type:",
        _format_result(declaration.export_type, "declaration"),
    ]
    return "\n".join(lines)


__all__ = ["format_debug", "format_type", "inspect_declaration", "inspect_source"]
