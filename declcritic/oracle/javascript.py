"""Shallow type inference for JavaScript source modules."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable, DefaultDict, Dict, List, Optional

from ..logging import get_logger
from ..models import ExportStyle, InferenceFailure, InferenceResult, Inferred, PropertySymbol, TypeFlag
from .base import SyntaxNode, SyntaxTree
from .members import export_statement_members, member_name, property_name, unquote
from .types import StructuralType

logger = get_logger("oracle.javascript")

MAX_RESOLUTION_DEPTH = 8

_FUNCTION_EXPRESSIONS = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "arrow_function",
        "generator_function",
        "generator_function_declaration",
    }
)
_CLASS_NODES = frozenset({"class", "class_declaration"})
_LITERAL_FLAGS: Dict[str, TypeFlag] = {
    "string": TypeFlag.STRING,
    "template_string": TypeFlag.STRING,
    "number": TypeFlag.NUMBER,
    "true": TypeFlag.BOOLEAN,
    "false": TypeFlag.BOOLEAN,
    "null": TypeFlag.NULL,
    "undefined": TypeFlag.UNDEFINED,
}


def _is_module_exports(node: Optional[SyntaxNode]) -> bool:
    return node is not None and node.type == "member_expression" and node.text == "module.exports"


def _is_exports_alias(node: Optional[SyntaxNode]) -> bool:
    return node is not None and (
        _is_module_exports(node) or (node.type == "identifier" and node.text == "exports")
    )


class SourceInference:
    """Infers the export type of one parsed JavaScript module.

    Identifier values are followed through top-level bindings, and
    ``name.prop = value`` assignments are folded into the named value's
    members, which is enough to see through the usual CommonJS patterns.
    """

    def __init__(self, tree: SyntaxTree) -> None:
        self.tree = tree
        self.bindings: Dict[str, SyntaxNode] = {}
        self.expando: DefaultDict[str, List[PropertySymbol]] = defaultdict(list)
        self.exports_assignments: List[SyntaxNode] = []
        self.export_members: List[PropertySymbol] = []
        self._scan()

    def infer(self, style: ExportStyle) -> InferenceResult[StructuralType]:
        handlers: Dict[ExportStyle, Callable[[], InferenceResult[StructuralType]]] = {
            ExportStyle.WHOLE_MODULE_ASSIGNMENT: self._whole_module,
            ExportStyle.NAMED_EXPORTS: self._named_exports,
        }
        handler = handlers.get(style)
        if handler is None:
            return InferenceFailure("Could not infer type of exports because exports kind is undefined.")
        return handler()

    # Scanning

    def _scan(self) -> None:
        top_level = self.tree.root.named_children
        for statement in top_level:
            self._bind(statement)
        for node in self.tree.root.walk():
            if node.type in {"function_declaration", "generator_function_declaration", "class_declaration", "variable_declarator"}:
                self._bind(node)
            elif node.type == "assignment_expression":
                self._record_assignment(node)
            elif node.type == "call_expression":
                self._record_define_property(node)

    def _bind(self, node: SyntaxNode) -> None:
        if node.type in {"lexical_declaration", "variable_declaration"}:
            for declarator in node.named_children:
                self._bind(declarator)
            return
        name_node = node.child_by_field("name")
        if name_node is None or name_node.type != "identifier":
            return
        if node.type == "variable_declarator":
            value = node.child_by_field("value")
            if value is not None:
                self.bindings.setdefault(name_node.text, value)
        elif node.type in {"function_declaration", "generator_function_declaration", "class_declaration"}:
            self.bindings.setdefault(name_node.text, node)

    def _record_assignment(self, node: SyntaxNode) -> None:
        left = node.child_by_field("left")
        if left is None:
            return
        if _is_module_exports(left):
            self.exports_assignments.append(node)
            return
        if left.type != "member_expression":
            return
        target = left.child_by_field("object")
        name = property_name(left.child_by_field("property"))
        if target is None or not name:
            return
        symbol = PropertySymbol(name=name, position=left.position)
        if _is_exports_alias(target):
            self.export_members.append(symbol)
        elif target.type == "identifier":
            self.expando[target.text].append(symbol)

    def _record_define_property(self, node: SyntaxNode) -> None:
        function = node.child_by_field("function")
        if function is None or function.text != "Object.defineProperty":
            return
        arguments = node.child_by_field("arguments")
        args = arguments.named_children if arguments is not None else []
        if len(args) >= 2 and _is_exports_alias(args[0]) and args[1].type == "string":
            self.export_members.append(PropertySymbol(name=unquote(args[1].text), position=node.position))

    # Styles

    def _whole_module(self) -> InferenceResult[StructuralType]:
        if self.exports_assignments:
            last = self.exports_assignments[-1]
            base = self.type_of(last.child_by_field("right"))
        else:
            base = StructuralType.object()
        if self.export_members and TypeFlag.OBJECT not in base.flags():
            logger.debug("Ignoring %d export members on non-object exports", len(self.export_members))
            return Inferred(base)
        return Inferred(base.with_members(self.export_members))

    def _named_exports(self) -> InferenceResult[StructuralType]:
        members: List[PropertySymbol] = []
        for statement in self.tree.root.named_children:
            if statement.type == "export_statement":
                members.extend(export_statement_members(statement))
        return Inferred(StructuralType.object(members))

    # Expressions

    def type_of(self, node: Optional[SyntaxNode], depth: int = 0) -> StructuralType:
        if node is None or depth > MAX_RESOLUTION_DEPTH:
            return StructuralType.any()
        kind = node.type
        if kind in _LITERAL_FLAGS:
            return StructuralType.of_flag(_LITERAL_FLAGS[kind])
        if kind in _FUNCTION_EXPRESSIONS:
            return StructuralType.function(description=self._describe_callable(node, "function"))
        if kind in _CLASS_NODES:
            return StructuralType.class_(
                self._static_members(node), description=self._describe_callable(node, "class")
            )
        if kind == "object":
            return StructuralType.object(self._object_members(node))
        if kind == "array":
            return StructuralType.array()
        if kind == "parenthesized_expression":
            inner = node.named_children
            return self.type_of(inner[-1] if inner else None, depth + 1)
        if kind == "assignment_expression":
            return self.type_of(node.child_by_field("right"), depth + 1)
        if kind == "identifier":
            return self._resolve_identifier(node.text, depth)
        return StructuralType.any()

    def _resolve_identifier(self, name: str, depth: int) -> StructuralType:
        if name == "undefined":
            return StructuralType.of_flag(TypeFlag.UNDEFINED)
        value = self.bindings.get(name)
        if value is None:
            return StructuralType.any()
        resolved = self.type_of(value, depth + 1)
        if TypeFlag.OBJECT in resolved.flags() and self.expando.get(name):
            resolved = resolved.with_members(self.expando[name])
        return resolved

    @staticmethod
    def _describe_callable(node: SyntaxNode, keyword: str) -> str:
        name = node.child_by_field("name")
        return f"typeof {name.text}" if name is not None else f"{keyword}"

    @staticmethod
    def _object_members(node: SyntaxNode) -> List[PropertySymbol]:
        members: List[PropertySymbol] = []
        for child in node.named_children:
            if child.type == "pair":
                name = property_name(child.child_by_field("key"))
            elif child.type == "shorthand_property_identifier":
                name = child.text
            elif child.type == "method_definition":
                name = member_name(child)
            else:
                continue
            if name:
                members.append(PropertySymbol(name=name, position=child.position))
        return members

    @staticmethod
    def _static_members(node: SyntaxNode) -> List[PropertySymbol]:
        body = node.child_by_field("body")
        if body is None:
            return []
        members: List[PropertySymbol] = []
        for member in body.named_children:
            if member.type not in {"method_definition", "field_definition"} or not member.has_token("static"):
                continue
            name = member_name(member)
            if name:
                members.append(PropertySymbol(name=name, position=member.position))
        return members


__all__ = ["MAX_RESOLUTION_DEPTH", "SourceInference"]
