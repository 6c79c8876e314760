"""Classify how a module exposes its public surface."""

from __future__ import annotations

from typing import Callable, Dict, Tuple

from ..models import ExportStyle
from ..oracle.base import JAVASCRIPT, TYPESCRIPT, SyntaxNode, SyntaxTree

NodePredicate = Callable[[SyntaxNode], bool]


def is_commonjs_export(node: SyntaxNode) -> bool:
    """``module.exports`` or a bare reference to ``exports``."""
    if node.type == "member_expression" and node.text == "module.exports":
        return True
    return node.type == "identifier" and node.text == "exports"


def is_export_equals(node: SyntaxNode) -> bool:
    """``export = value;`` in a declaration file."""
    return node.type == "export_statement" and node.has_token("=")


def is_es_export(node: SyntaxNode) -> bool:
    """Export declarations, ``export default`` and export-modified declarations.

    tree-sitter folds all of these into ``export_statement``; only the
    whole-module ``export =`` form is excluded.
    """
    return node.type == "export_statement" and not node.has_token("=")


def is_export_construct(node: SyntaxNode) -> bool:
    return node.type == "export_statement"


# dialect -> (whole-module predicate, named-export predicate)
_PREDICATES: Dict[str, Tuple[NodePredicate, NodePredicate]] = {
    JAVASCRIPT: (is_commonjs_export, is_es_export),
    TYPESCRIPT: (is_export_equals, is_export_construct),
}


def matches(tree: SyntaxTree, predicate: NodePredicate) -> bool:
    """Pre-order existence search; stops at the first matching node."""
    return any(predicate(node) for node in tree.root.walk())


def classify_exports(tree: SyntaxTree) -> ExportStyle:
    """Return the module's export style; whole-module assignment takes precedence."""
    try:
        whole_module, named = _PREDICATES[tree.dialect]
    except KeyError as exc:
        raise ValueError(f"No export predicates for dialect '{tree.dialect}'") from exc
    if matches(tree, whole_module):
        return ExportStyle.WHOLE_MODULE_ASSIGNMENT
    if matches(tree, named):
        return ExportStyle.NAMED_EXPORTS
    return ExportStyle.UNCLASSIFIED


__all__ = [
    "classify_exports",
    "is_commonjs_export",
    "is_es_export",
    "is_export_construct",
    "is_export_equals",
    "matches",
]
