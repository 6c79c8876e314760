"""Contract for the type oracle consulted by the analyzers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, List, Optional, Protocol, Sequence

from ..models import ExportStyle, InferenceResult, Position, PropertySymbol, TypeFlag

JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"


@dataclass(eq=False)
class SyntaxNode:
    """One node of a parsed module.

    Offsets are character offsets into the module text. ``field_name`` is the
    grammar field name under which the node hangs off its parent, and
    anonymous (punctuation/keyword) nodes have ``named`` set to False.
    """

    type: str
    start: int
    end: int
    source: str = field(repr=False)
    named: bool = True
    field_name: Optional[str] = None
    children: List["SyntaxNode"] = field(default_factory=list, repr=False)

    @property
    def text(self) -> str:
        return self.source[self.start : self.end]

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def position(self) -> Position:
        return Position(start=self.start, length=self.length)

    @property
    def named_children(self) -> List["SyntaxNode"]:
        return [child for child in self.children if child.named]

    def child_by_field(self, name: str) -> Optional["SyntaxNode"]:
        for child in self.children:
            if child.field_name == name:
                return child
        return None

    def has_token(self, token: str) -> bool:
        """True when an anonymous direct child spells ``token``."""
        return any(not child.named and child.type == token for child in self.children)

    def walk(self) -> Iterator["SyntaxNode"]:
        """Pre-order, depth-first traversal in source order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class SyntaxTree:
    """Parsed module text; ``dialect`` is ``javascript`` or ``typescript``."""

    root: SyntaxNode
    text: str
    dialect: str
    has_error: bool = False


class TypeHandle(Protocol):
    """Opaque reference to one inferred or declared type."""

    def properties(self) -> Sequence[PropertySymbol]:
        """Members of the type, unique by name."""

    def call_signature_count(self) -> int:
        ...

    def construct_signature_count(self) -> int:
        ...

    def is_array_like(self) -> bool:
        ...

    def flags(self) -> FrozenSet[TypeFlag]:
        ...

    def render_as_string(self) -> str:
        ...


class TypeOracle(ABC):
    """Parses modules and answers structural questions about their exports.

    A single oracle instance serves one analysis; implementations need not be
    thread safe.
    """

    @abstractmethod
    def parse(self, source_text: str, *, allow_dynamic_syntax: bool) -> SyntaxTree:
        """Parse module text.

        ``allow_dynamic_syntax`` selects the untyped JavaScript dialect used
        for source modules; declarations are parsed without it.
        """

    @abstractmethod
    def resolve_export_type(
        self, tree: SyntaxTree, style: ExportStyle, module_name: str
    ) -> InferenceResult[TypeHandle]:
        """Resolve the type of the module's top-level export value.

        For declarations ``module_name`` is the registry package name used to
        find an ambient module declaration.
        """


def callable_or_constructable(handle: TypeHandle) -> bool:
    return handle.call_signature_count() > 0 or handle.construct_signature_count() > 0


def find_property(handle: TypeHandle, name: str) -> Optional[PropertySymbol]:
    for symbol in handle.properties():
        if symbol.name == name:
            return symbol
    return None


__all__ = [
    "JAVASCRIPT",
    "SyntaxNode",
    "SyntaxTree",
    "TYPESCRIPT",
    "TypeHandle",
    "TypeOracle",
    "callable_or_constructable",
    "find_property",
]
