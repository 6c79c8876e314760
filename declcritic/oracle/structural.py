"""Syntax-directed type oracle backed by tree-sitter."""

from __future__ import annotations

from typing import Optional

from ..models import ExportStyle, InferenceResult
from .base import JAVASCRIPT, TYPESCRIPT, SyntaxTree, TypeHandle, TypeOracle
from .declarations import DeclarationInference
from .javascript import SourceInference
from .syntax import SyntaxParser


class StructuralOracle(TypeOracle):
    """Answers export-type questions from the syntax of a single module.

    Sources are parsed as JavaScript and declarations as TypeScript. Nothing
    outside the module text is consulted, so imported or computed values
    resolve to ``any`` and are reported as inference failures downstream.
    """

    def __init__(self, parser: Optional[SyntaxParser] = None) -> None:
        self.parser = parser or SyntaxParser()

    def parse(self, source_text: str, *, allow_dynamic_syntax: bool) -> SyntaxTree:
        dialect = JAVASCRIPT if allow_dynamic_syntax else TYPESCRIPT
        return self.parser.parse(source_text, dialect)

    def resolve_export_type(
        self, tree: SyntaxTree, style: ExportStyle, module_name: str
    ) -> InferenceResult[TypeHandle]:
        if tree.dialect == JAVASCRIPT:
            return SourceInference(tree).infer(style)
        if tree.dialect == TYPESCRIPT:
            return DeclarationInference(tree, module_name).infer(style)
        raise ValueError(f"Unsupported dialect '{tree.dialect}'")


__all__ = ["StructuralOracle"]
