"""Helpers for building modules, syntax trees and canned oracles in tests."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from declcritic.models import ExportStyle, InferenceResult, Inferred
from declcritic.oracle.base import JAVASCRIPT, TYPESCRIPT, SyntaxNode, SyntaxTree, TypeHandle, TypeOracle
from declcritic.oracle.types import StructuralType
from declcritic.registry.base import PackageInfo


class ModuleBuilder:
    """Writes declaration/source pairs into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "types"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> Dict[str, Path]:
        """Write `path -> contents` entries and return the written paths."""
        written: Dict[str, Path] = {}
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
            written[relative] = path
        return written


def token(text: str) -> SyntaxNode:
    """Anonymous keyword/punctuation node."""
    return SyntaxNode(type=text, start=0, end=0, source="", named=False)


def node(kind: str, *children: SyntaxNode, text: str = "", field_name: Optional[str] = None) -> SyntaxNode:
    """Named node whose text is ``text``; children keep their own spans."""
    return SyntaxNode(
        type=kind,
        start=0,
        end=len(text),
        source=text,
        field_name=field_name,
        children=list(children),
    )


def tree(dialect: str, *statements: SyntaxNode) -> SyntaxTree:
    return SyntaxTree(root=node("program", *statements), text="", dialect=dialect)


def commonjs_tree() -> SyntaxTree:
    """``module.exports = ...`` source tree."""
    left = node("member_expression", text="module.exports", field_name="left")
    assignment = node("assignment_expression", left, token("="))
    return tree(JAVASCRIPT, node("expression_statement", assignment))


def es_tree(dialect: str = JAVASCRIPT) -> SyntaxTree:
    """``export function foo() {}`` tree."""
    return tree(dialect, node("export_statement", token("export")))


def export_equals_tree() -> SyntaxTree:
    """``export = foo;`` declaration tree."""
    return tree(TYPESCRIPT, node("export_statement", token("export"), token("="), node("identifier", text="foo")))


def empty_tree(dialect: str) -> SyntaxTree:
    return tree(dialect)


@dataclass
class StubOracle(TypeOracle):
    """Serves canned trees and export types per dialect."""

    source_tree: SyntaxTree = field(default_factory=commonjs_tree)
    declaration_tree: SyntaxTree = field(default_factory=lambda: es_tree(TYPESCRIPT))
    source_type: InferenceResult[TypeHandle] = field(default_factory=lambda: Inferred(StructuralType.object()))
    declaration_type: InferenceResult[TypeHandle] = field(default_factory=lambda: Inferred(StructuralType.object()))

    def __post_init__(self) -> None:
        self.resolved: list[tuple[str, ExportStyle, str]] = []

    def parse(self, source_text: str, *, allow_dynamic_syntax: bool) -> SyntaxTree:
        return self.source_tree if allow_dynamic_syntax else self.declaration_tree

    def resolve_export_type(
        self, tree: SyntaxTree, style: ExportStyle, module_name: str
    ) -> InferenceResult[TypeHandle]:
        self.resolved.append((tree.dialect, style, module_name))
        if tree.dialect == JAVASCRIPT:
            return self.source_type
        return self.declaration_type


class FakeRegistry:
    """In-memory registry; ``packages`` maps name -> PackageInfo."""

    def __init__(self, packages: Optional[Mapping[str, PackageInfo]] = None, package_root: Optional[Path] = None) -> None:
        self.packages = dict(packages or {})
        self.package_root = package_root
        self.lookups: list[str] = []
        self.fetched: list[tuple[str, str, Path]] = []

    def lookup_package(self, name: str) -> PackageInfo:
        self.lookups.append(name)
        return self.packages.get(name, PackageInfo.not_found())

    def fetch_and_extract_package(self, name: str, version: str, out_dir: Path) -> Path:
        self.fetched.append((name, version, out_dir))
        if self.package_root is None:
            raise AssertionError("No package root configured for fetch")
        return self.package_root


__all__ = [
    "FakeRegistry",
    "ModuleBuilder",
    "StubOracle",
    "commonjs_tree",
    "empty_tree",
    "es_tree",
    "export_equals_tree",
    "node",
    "token",
    "tree",
]
