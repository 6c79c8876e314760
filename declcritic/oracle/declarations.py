"""Resolve the declared export type of a TypeScript declaration file."""

from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional

from ..logging import get_logger
from ..models import ExportStyle, InferenceFailure, InferenceResult, Inferred, PropertySymbol, TypeFlag
from .base import SyntaxNode, SyntaxTree
from .members import (
    CLASS_DECLARATIONS,
    FUNCTION_DECLARATIONS,
    NAMESPACE_DECLARATIONS,
    TYPE_ONLY_DECLARATIONS,
    VARIABLE_DECLARATIONS,
    declared_names,
    export_statement_members,
    member_name,
    property_name,
    unquote,
    unwrap_ambient,
)
from .types import StructuralType

logger = get_logger("oracle.declarations")

MAX_TYPE_DEPTH = 8

_PREDEFINED: Dict[str, TypeFlag] = {
    "any": TypeFlag.ANY,
    "unknown": TypeFlag.UNKNOWN,
    "never": TypeFlag.UNKNOWN,
    "null": TypeFlag.NULL,
    "undefined": TypeFlag.UNDEFINED,
    "void": TypeFlag.UNDEFINED,
    "string": TypeFlag.STRING,
    "number": TypeFlag.NUMBER,
    "bigint": TypeFlag.NUMBER,
    "boolean": TypeFlag.BOOLEAN,
}
_LITERAL_FLAGS: Dict[str, TypeFlag] = {
    "string": TypeFlag.STRING,
    "template_string": TypeFlag.STRING,
    "number": TypeFlag.NUMBER,
    "true": TypeFlag.BOOLEAN,
    "false": TypeFlag.BOOLEAN,
    "null": TypeFlag.NULL,
    "undefined": TypeFlag.UNDEFINED,
}
_ARRAY_NAMES = frozenset({"Array", "ReadonlyArray"})
_SIGNATURE_MEMBERS = frozenset({"property_signature", "method_signature", "abstract_method_signature"})


Scope = SyntaxNode


def _statements(scope: Scope) -> Iterator[SyntaxNode]:
    """Direct declarations of a scope with ``export``/``declare`` wrappers removed."""
    for statement in scope.named_children:
        declaration = statement
        if statement.type == "export_statement":
            inner = statement.child_by_field("declaration")
            if inner is None:
                continue
            declaration = inner
        yield unwrap_ambient(declaration)


class DeclarationInference:
    """Answers export-type questions for one parsed declaration file."""

    def __init__(self, tree: SyntaxTree, module_name: str) -> None:
        self.tree = tree
        self.module_name = module_name

    def infer(self, style: ExportStyle) -> InferenceResult[StructuralType]:
        scope = self.module_scope()
        if scope is None:
            return InferenceFailure("Could not find module symbol for source file node.")
        handlers: Dict[ExportStyle, Callable[[Scope], InferenceResult[StructuralType]]] = {
            ExportStyle.WHOLE_MODULE_ASSIGNMENT: self._export_equals,
            ExportStyle.NAMED_EXPORTS: self._named_exports,
        }
        handler = handlers.get(style)
        if handler is None:
            return InferenceFailure("Could not infer export kind of declaration file.")
        return handler(scope)

    # Scope lookup

    def module_scope(self) -> Optional[Scope]:
        """The ambient ``declare module "name"`` body, else the file when it is a module."""
        for node in self.tree.root.walk():
            if node.type != "module":
                continue
            name = node.child_by_field("name")
            if name is not None and name.type == "string" and unquote(name.text) == self.module_name:
                body = node.child_by_field("body")
                if body is not None:
                    logger.debug("Using ambient module declaration for '%s'", self.module_name)
                    return body
        for statement in self.tree.root.named_children:
            if statement.type in {"import_statement", "export_statement", "import_alias"}:
                return self.tree.root
        return None

    # Export styles

    def _export_equals(self, scope: Scope) -> InferenceResult[StructuralType]:
        statement = self._find_export_equals(scope)
        if statement is None:
            return InferenceFailure("Could not find `export=` symbol.")
        targets = [child for child in statement.named_children if child.type != "comment"]
        target = targets[-1] if targets else None
        if target is None:
            return InferenceFailure("Could not find `export=` symbol.")
        if target.type != "identifier":
            return InferenceFailure(f"Could not resolve `export=` target '{target.text}'.")
        resolved = self.resolve_value(target.text, scope)
        if resolved is None:
            return InferenceFailure(f"Could not resolve `export=` target '{target.text}'.")
        return Inferred(resolved)

    @staticmethod
    def _find_export_equals(scope: Scope) -> Optional[SyntaxNode]:
        for statement in scope.named_children:
            if statement.type == "export_statement" and statement.has_token("="):
                return statement
        return None

    def _named_exports(self, scope: Scope) -> InferenceResult[StructuralType]:
        members: List[PropertySymbol] = []
        explicit = False
        for statement in scope.named_children:
            if statement.type == "export_statement":
                explicit = True
                members.extend(export_statement_members(statement))
        if scope is not self.tree.root and not explicit:
            # Ambient module bodies export every declaration implicitly.
            for statement in scope.named_children:
                members.extend(declared_names(statement, statement))
        return Inferred(StructuralType.object(members))

    # Value resolution

    def resolve_value(self, name: str, scope: Scope, depth: int = 0) -> Optional[StructuralType]:
        """Merge every value declaration of ``name`` visible from ``scope``."""
        if depth > MAX_TYPE_DEPTH:
            return StructuralType.any()
        scopes = [scope] if scope is self.tree.root else [scope, self.tree.root]
        for candidate in scopes:
            resolved = self._resolve_in(name, candidate, depth)
            if resolved is not None:
                return resolved
        return None

    def _resolve_in(self, name: str, scope: Scope, depth: int) -> Optional[StructuralType]:
        resolved: Optional[StructuralType] = None
        for declaration in _statements(scope):
            part = self._value_of(declaration, name, scope, depth)
            if part is None:
                continue
            resolved = part if resolved is None else resolved.merge(part)
        return resolved

    def _value_of(
        self, declaration: SyntaxNode, name: str, scope: Scope, depth: int
    ) -> Optional[StructuralType]:
        kind = declaration.type
        if kind in VARIABLE_DECLARATIONS:
            for declarator in declaration.named_children:
                name_node = declarator.child_by_field("name")
                if declarator.type == "variable_declarator" and name_node is not None and name_node.text == name:
                    return self.type_of_annotation(declarator.child_by_field("type"), scope, depth + 1)
            return None
        if property_name(declaration.child_by_field("name")) != name:
            return None
        if kind in FUNCTION_DECLARATIONS:
            return StructuralType.function(description=f"typeof {name}")
        if kind in CLASS_DECLARATIONS:
            return StructuralType.class_(self._static_members(declaration), description=f"typeof {name}")
        if kind in NAMESPACE_DECLARATIONS:
            return StructuralType.object(self._namespace_members(declaration), description=f"typeof {name}")
        if kind == "enum_declaration":
            return StructuralType.object(self._enum_members(declaration), description=f"typeof {name}")
        return None

    @staticmethod
    def _namespace_members(namespace: SyntaxNode) -> List[PropertySymbol]:
        body = namespace.child_by_field("body")
        if body is None:
            return []
        members: List[PropertySymbol] = []
        for statement in body.named_children:
            if statement.type == "export_statement":
                members.extend(export_statement_members(statement))
            else:
                members.extend(declared_names(statement, statement))
        return members

    @staticmethod
    def _enum_members(enum: SyntaxNode) -> List[PropertySymbol]:
        body = enum.child_by_field("body")
        if body is None:
            return []
        members: List[PropertySymbol] = []
        for member in body.named_children:
            name_node = member.child_by_field("name") if member.type == "enum_assignment" else member
            name = property_name(name_node)
            if name:
                members.append(PropertySymbol(name=name, position=member.position))
        return members

    @staticmethod
    def _static_members(node: SyntaxNode) -> List[PropertySymbol]:
        body = node.child_by_field("body")
        if body is None:
            return []
        members: List[PropertySymbol] = []
        for member in body.named_children:
            if not member.has_token("static"):
                continue
            name = member_name(member)
            if name:
                members.append(PropertySymbol(name=name, position=member.position))
        return members

    # Type annotations

    def type_of_annotation(
        self, node: Optional[SyntaxNode], scope: Scope, depth: int = 0
    ) -> StructuralType:
        if node is None or depth > MAX_TYPE_DEPTH:
            return StructuralType.any()
        if node.type == "type_annotation":
            inner = node.named_children
            return self.type_of_annotation(inner[0] if inner else None, scope, depth + 1)

        kind = node.type
        if kind == "predefined_type":
            flag = _PREDEFINED.get(node.text)
            if flag is not None:
                return StructuralType.of_flag(flag, node.text)
            return StructuralType.object(description=node.text)
        if kind == "literal_type":
            inner = node.named_children
            literal = inner[0].type if inner else ""
            flag = _LITERAL_FLAGS.get(literal, TypeFlag.ANY)
            return StructuralType.of_flag(flag, node.text)
        if kind in {"array_type", "tuple_type", "readonly_type"}:
            return StructuralType.array(description=node.text)
        if kind == "function_type":
            return StructuralType.function(description=node.text)
        if kind == "constructor_type":
            return StructuralType.class_(description=node.text)
        if kind == "object_type":
            return self._object_type(node)
        if kind == "parenthesized_type":
            inner = node.named_children
            return self.type_of_annotation(inner[0] if inner else None, scope, depth + 1)
        if kind in {"union_type", "intersection_type"}:
            return self._combine(node, scope, depth)
        if kind == "type_query":
            inner = node.named_children
            if inner and inner[0].type == "identifier":
                return self.resolve_value(inner[0].text, scope, depth + 1) or StructuralType.any()
            return StructuralType.any()
        if kind == "generic_type":
            name = node.child_by_field("name")
            if name is not None and name.text in _ARRAY_NAMES:
                return StructuralType.array(description=node.text)
            return self._named_type(name.text if name is not None else "", scope, depth)
        if kind == "type_identifier":
            return self._named_type(node.text, scope, depth)
        logger.debug("Unsupported type annotation '%s' (%s)", node.text, kind)
        return StructuralType.any()

    def _combine(self, node: SyntaxNode, scope: Scope, depth: int) -> StructuralType:
        combined: Optional[StructuralType] = None
        for part in node.named_children:
            part_type = self.type_of_annotation(part, scope, depth + 1)
            combined = part_type if combined is None else combined.merge(part_type)
        return (combined or StructuralType.any()).described(node.text)

    def _named_type(self, name: str, scope: Scope, depth: int) -> StructuralType:
        if name == "Function":
            return StructuralType.function(description=name)
        if name in _ARRAY_NAMES:
            return StructuralType.array(description=name)
        if name == "Object":
            return StructuralType.object(description=name)
        resolved: Optional[StructuralType] = None
        for declaration in self._type_declarations(name, scope):
            if declaration.type == "interface_declaration":
                part = self._object_type(declaration.child_by_field("body"))
            else:
                part = self.type_of_annotation(declaration.child_by_field("value"), scope, depth + 1)
            resolved = part if resolved is None else resolved.merge(part)
        if resolved is None:
            logger.debug("Could not resolve type '%s'", name)
            return StructuralType.any().described(name)
        return resolved.described(name)

    def _type_declarations(self, name: str, scope: Scope) -> List[SyntaxNode]:
        found: List[SyntaxNode] = []
        scopes = [scope] if scope is self.tree.root else [scope, self.tree.root]
        for candidate in scopes:
            for declaration in _statements(candidate):
                if declaration.type not in TYPE_ONLY_DECLARATIONS:
                    continue
                if property_name(declaration.child_by_field("name")) == name:
                    found.append(declaration)
            if found:
                break
        return found

    @staticmethod
    def _object_type(body: Optional[SyntaxNode]) -> StructuralType:
        if body is None:
            return StructuralType.object()
        members: List[PropertySymbol] = []
        calls = constructs = 0
        for member in body.named_children:
            if member.type == "call_signature":
                calls += 1
            elif member.type == "construct_signature":
                constructs += 1
            elif member.type in _SIGNATURE_MEMBERS:
                name = member_name(member)
                if name:
                    members.append(PropertySymbol(name=name, position=member.position))
        return StructuralType(
            members=StructuralType.object(members).members,
            call_signatures=calls,
            construct_signatures=constructs,
        )


__all__ = ["DeclarationInference", "MAX_TYPE_DEPTH"]
