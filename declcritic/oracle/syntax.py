"""Tree-sitter powered parsing of source modules and declarations."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..exceptions import ToolUnavailableError
from ..logging import get_logger
from .base import JAVASCRIPT, TYPESCRIPT, SyntaxNode, SyntaxTree

try:  # pragma: no cover - optional dependency
    import tree_sitter_javascript
    import tree_sitter_typescript
    from tree_sitter import Language, Parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    Language = None  # type: ignore[assignment]
    Parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False

logger = get_logger("syntax")


class SyntaxParser:
    """Parses module text into :class:`SyntaxTree` objects, caching one parser per dialect."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def parse(self, text: str, dialect: str) -> SyntaxTree:
        parser = self._get_parser(dialect)
        data = text.encode("utf-8")
        tree = parser.parse(data)
        root = _convert(tree, text, _char_offsets(text, data))
        has_error = bool(tree.root_node.has_error)
        if has_error:
            logger.debug("Parsed %s module with syntax errors; results may be partial", dialect)
        return SyntaxTree(root=root, text=text, dialect=dialect, has_error=has_error)

    def _get_parser(self, dialect: str) -> Parser:
        parser = self._parsers.get(dialect)
        if parser is not None:
            return parser
        if not TREE_SITTER_AVAILABLE:
            raise ToolUnavailableError(
                "tree-sitter grammars are not installed; install tree-sitter, "
                "tree-sitter-javascript and tree-sitter-typescript to analyze modules."
            )
        if dialect == JAVASCRIPT:
            language = Language(tree_sitter_javascript.language())
        elif dialect == TYPESCRIPT:
            language = Language(tree_sitter_typescript.language_typescript())
        else:
            raise ValueError(f"Unsupported dialect '{dialect}'")
        parser = Parser(language)
        self._parsers[dialect] = parser
        return parser


def _char_offsets(text: str, data: bytes) -> Optional[List[int]]:
    """Map byte offsets to character offsets; ``None`` when they coincide."""
    if len(text) == len(data):
        return None
    table: List[int] = []
    for index, char in enumerate(text):
        table.extend([index] * len(char.encode("utf-8")))
    table.append(len(text))
    return table


def _convert(tree, text: str, offsets: Optional[List[int]]) -> SyntaxNode:  # type: ignore[no-untyped-def]
    def make(node, field_name: Optional[str]) -> SyntaxNode:  # type: ignore[no-untyped-def]
        start, end = node.start_byte, node.end_byte
        if offsets is not None:
            start, end = offsets[start], offsets[end]
        return SyntaxNode(
            type=node.type,
            start=start,
            end=end,
            source=text,
            named=node.is_named,
            field_name=field_name,
        )

    cursor = tree.walk()
    root = make(cursor.node, None)
    parents = [root]
    if not cursor.goto_first_child():
        return root
    while True:
        node = make(cursor.node, cursor.field_name)
        parents[-1].children.append(node)
        if cursor.goto_first_child():
            parents.append(node)
            continue
        while not cursor.goto_next_sibling():
            cursor.goto_parent()
            parents.pop()
            if not parents:
                return root


__all__ = ["SyntaxParser", "TREE_SITTER_AVAILABLE"]
