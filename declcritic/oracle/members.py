"""Helpers that read exported member names off syntax nodes."""

from __future__ import annotations

from typing import Iterator, List, Optional

from ..models import PropertySymbol
from .base import SyntaxNode

FUNCTION_DECLARATIONS = frozenset(
    {"function_declaration", "generator_function_declaration", "function_signature"}
)
CLASS_DECLARATIONS = frozenset({"class_declaration", "abstract_class_declaration"})
VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})
NAMESPACE_DECLARATIONS = frozenset({"internal_module", "module"})
TYPE_ONLY_DECLARATIONS = frozenset({"interface_declaration", "type_alias_declaration"})
VALUE_DECLARATIONS = (
    FUNCTION_DECLARATIONS | CLASS_DECLARATIONS | VARIABLE_DECLARATIONS | {"enum_declaration"}
)


def unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {"'", '"', "`"}:
        return text[1:-1]
    return text


def property_name(node: Optional[SyntaxNode]) -> Optional[str]:
    """Static name of an object key, class member or export specifier."""
    if node is None:
        return None
    if node.type in {"property_identifier", "identifier", "type_identifier", "private_property_identifier", "number"}:
        return node.text
    if node.type == "string":
        return unquote(node.text)
    return None


def member_name(member: SyntaxNode) -> Optional[str]:
    return property_name(member.child_by_field("name") or member.child_by_field("property"))


def unwrap_ambient(node: SyntaxNode) -> SyntaxNode:
    """``declare function f()`` -> the function declaration."""
    if node.type != "ambient_declaration":
        return node
    for child in node.named_children:
        return child
    return node


def is_value_namespace(node: SyntaxNode) -> bool:
    """A namespace only exists at runtime when it declares some value."""
    body = node.child_by_field("body")
    if body is None:
        return False
    for statement in body.named_children:
        declaration = statement
        if statement.type == "export_statement":
            declaration = statement.child_by_field("declaration") or statement
        declaration = unwrap_ambient(declaration)
        if declaration.type in VALUE_DECLARATIONS:
            return True
        if declaration.type in NAMESPACE_DECLARATIONS and is_value_namespace(declaration):
            return True
    return False


def declared_names(declaration: SyntaxNode, wrapper: SyntaxNode) -> Iterator[PropertySymbol]:
    """Value names introduced by one declaration.

    Functions, classes, enums and namespaces are positioned at their outermost
    wrapper (``export``/``declare`` included); variables at their declarator.
    """
    declaration = unwrap_ambient(declaration)
    kind = declaration.type
    if kind in FUNCTION_DECLARATIONS | CLASS_DECLARATIONS | {"enum_declaration"}:
        name = property_name(declaration.child_by_field("name"))
        if name:
            yield PropertySymbol(name=name, position=wrapper.position)
    elif kind in VARIABLE_DECLARATIONS:
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field("name")
            if name_node is not None and name_node.type == "identifier":
                yield PropertySymbol(name=name_node.text, position=declarator.position)
    elif kind in NAMESPACE_DECLARATIONS:
        name_node = declaration.child_by_field("name")
        if name_node is not None and name_node.type == "identifier" and is_value_namespace(declaration):
            yield PropertySymbol(name=name_node.text, position=wrapper.position)


def export_statement_members(statement: SyntaxNode) -> List[PropertySymbol]:
    """Members contributed by one ``export`` statement (``export =`` contributes none)."""
    if statement.has_token("="):
        return []
    if statement.has_token("default"):
        return [PropertySymbol(name="default", position=statement.position)]

    declaration = statement.child_by_field("declaration")
    if declaration is not None:
        return list(declared_names(declaration, statement))

    members: List[PropertySymbol] = []
    for child in statement.named_children:
        if child.type == "export_clause":
            for specifier in child.named_children:
                if specifier.type != "export_specifier":
                    continue
                exported = specifier.child_by_field("alias") or specifier.child_by_field("name")
                name = property_name(exported)
                if name:
                    members.append(PropertySymbol(name=name, position=specifier.position))
        elif child.type == "namespace_export":
            for part in child.named_children:
                name = property_name(part)
                if name:
                    members.append(PropertySymbol(name=name, position=child.position))
    return members


__all__ = [
    "CLASS_DECLARATIONS",
    "FUNCTION_DECLARATIONS",
    "NAMESPACE_DECLARATIONS",
    "TYPE_ONLY_DECLARATIONS",
    "VALUE_DECLARATIONS",
    "VARIABLE_DECLARATIONS",
    "declared_names",
    "export_statement_members",
    "is_value_namespace",
    "member_name",
    "property_name",
    "unquote",
    "unwrap_ambient",
]
