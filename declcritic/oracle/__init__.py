"""Type oracles used by the analyzers."""

from .base import JAVASCRIPT, TYPESCRIPT, SyntaxNode, SyntaxTree, TypeHandle, TypeOracle
from .structural import StructuralOracle
from .types import StructuralType

__all__ = [
    "JAVASCRIPT",
    "StructuralOracle",
    "StructuralType",
    "SyntaxNode",
    "SyntaxTree",
    "TYPESCRIPT",
    "TypeHandle",
    "TypeOracle",
]
