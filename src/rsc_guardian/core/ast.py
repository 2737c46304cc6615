import itertools
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from rsc_guardian.models import NodeKind, Position, SyntaxNode

logger = logging.getLogger(__name__)

_JSX_ELEMENT_TYPES = frozenset({"jsx_opening_element", "jsx_closing_element", "jsx_self_closing_element"})

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
    }
)

_KIND_BY_TYPE = {
    "program": NodeKind.PROGRAM,
    "import_statement": NodeKind.IMPORT,
    "expression_statement": NodeKind.EXPRESSION_STATEMENT,
    "call_expression": NodeKind.CALL,
    "member_expression": NodeKind.MEMBER,
    "property_identifier": NodeKind.PROPERTY_NAME,
    "jsx_attribute": NodeKind.JSX_ATTRIBUTE,
    "string": NodeKind.STRING,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "comment": NodeKind.COMMENT,
    "hash_bang_line": NodeKind.COMMENT,
}

_TEXT_KINDS = frozenset({NodeKind.IDENTIFIER, NodeKind.PROPERTY_NAME, NodeKind.JSX_NAME})


class ParseError(ValueError):
    """Raised when the source does not parse cleanly."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


def _node_kind(node: Node, in_jsx_name: bool) -> NodeKind:
    node_type = node.type
    if in_jsx_name and (node_type in _IDENTIFIER_TYPES or node_type == "property_identifier"):
        return NodeKind.JSX_NAME
    if node_type in _IDENTIFIER_TYPES:
        return NodeKind.IDENTIFIER
    if node_type == "export_statement":
        is_default = any(child.type == "default" for child in node.children)
        return NodeKind.DEFAULT_EXPORT if is_default else NodeKind.EXPORT
    return _KIND_BY_TYPE.get(node_type, NodeKind.OTHER)


def _node_text(kind: NodeKind, node: Node, source_bytes: bytes) -> str | None:
    if kind in _TEXT_KINDS:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8")
    if kind is NodeKind.STRING and node.end_byte - node.start_byte >= 2:
        # Strip the surrounding quotes.
        return source_bytes[node.start_byte + 1 : node.end_byte - 1].decode("utf-8")
    return None


def _first_error(node: Node) -> Node | None:
    if node.is_error or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


def _to_syntax_tree(root: Node, source_bytes: bytes) -> SyntaxNode:
    counter = itertools.count()

    def node_to_model(node: Node, field: str | None, in_jsx_name: bool) -> SyntaxNode:
        node_id = next(counter)
        kind = _node_kind(node, in_jsx_name)
        children = []
        for index, child in enumerate(node.children):
            child_field = node.field_name_for_child(index)
            child_in_jsx_name = (
                in_jsx_name
                or node.type == "jsx_namespace_name"
                or (node.type in _JSX_ELEMENT_TYPES and child_field == "name")
            )
            children.append(node_to_model(child, child_field, child_in_jsx_name))

        return SyntaxNode(
            node_id=node_id,
            kind=kind,
            type=node.type,
            field=field,
            named=node.is_named,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
            start_point=Position(row=node.start_point[0], column=node.start_point[1]),
            end_point=Position(row=node.end_point[0], column=node.end_point[1]),
            text=_node_text(kind, node, source_bytes),
            children=tuple(children),
        )

    return node_to_model(root, None, False)


def parse_source(source_bytes: bytes, language: str) -> SyntaxNode:
    """Parse a module with JSX enabled and return its immutable syntax tree.

    Raises ``ParseError`` on the first syntax error; the parser's error
    recovery is never accepted as a valid tree.
    """
    parser = get_parser(cast(SupportedLanguage, language))
    tree = parser.parse(source_bytes)

    error = _first_error(tree.root_node)
    if error is not None:
        line, column = error.start_point[0] + 1, error.start_point[1] + 1
        raise ParseError(f"Syntax error at line {line}, column {column}", line, column)

    return _to_syntax_tree(tree.root_node, source_bytes)


def read_source(path: str | Path) -> tuple[Path, bytes]:
    """Resolve ``path`` to an absolute path and read it fully.

    Returns (absolute_path, source_bytes). The bytes must decode as UTF-8.
    """
    absolute_path = Path(path).resolve()
    if not absolute_path.exists():
        raise FileNotFoundError(f"File not found: {absolute_path}")

    source_bytes = absolute_path.read_bytes()
    source_bytes.decode("utf-8")
    logger.debug("Read %d bytes from %s", len(source_bytes), absolute_path)
    return absolute_path, source_bytes


def walk(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield ``root`` and all of its descendants in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def fold_any(
    root: SyntaxNode,
    predicate: Callable[[SyntaxNode], bool],
    on_match: Callable[[SyntaxNode], None] | None = None,
) -> bool:
    """Post-order boolean fold: a node holds if it matches or any descendant holds.

    ``predicate`` is called once per node in document (pre-order) order.
    ``on_match`` is called once per holding node, children before parents.
    """
    results: dict[int, bool] = {}
    stack: list[tuple[SyntaxNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            results[node.node_id] = predicate(node)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
            continue

        holds = results[node.node_id] or any(results[child.node_id] for child in node.iter_children())
        results[node.node_id] = holds
        if holds and on_match is not None:
            on_match(node)
    return results[root.node_id]


def top_level_statements(tree: SyntaxNode) -> list[SyntaxNode]:
    """Return the program's statements in source order, without comments."""
    return [child for child in tree.iter_children() if child.named and child.kind is not NodeKind.COMMENT]
