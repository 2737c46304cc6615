"""Unit tests for parsing into SyntaxNode trees and traversal utilities."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser

from rsc_guardian.core.ast import ParseError, fold_any, parse_source, read_source, top_level_statements, walk
from rsc_guardian.models import NodeKind, SyntaxNode

ParseTsx = Callable[[str], tuple[bytes, SyntaxNode]]

_MODULE = """// header comment
import React from 'react';

export const answer = 42;

export default function Card({ title }: { title: string }) {
  return <div className="card">{title}</div>;
}
"""


class TestParseSource:
    def test_root_is_program(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx(_MODULE)
        assert tree.kind is NodeKind.PROGRAM
        assert tree.type == "program"
        assert tree.node_id == 0

    def test_node_ids_are_unique_preorder_ordinals(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx(_MODULE)
        ids = [node.node_id for node in walk(tree)]
        assert ids == list(range(len(ids)))

    def test_top_level_kinds(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx(_MODULE)
        kinds = [statement.kind for statement in top_level_statements(tree)]
        assert kinds == [NodeKind.IMPORT, NodeKind.EXPORT, NodeKind.DEFAULT_EXPORT]

    def test_comments_are_not_statements(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx(_MODULE)
        assert any(child.kind is NodeKind.COMMENT for child in tree.children)
        assert all(s.kind is not NodeKind.COMMENT for s in top_level_statements(tree))

    def test_byte_ranges_slice_original_text(self, parse_tsx: ParseTsx) -> None:
        source_bytes, tree = parse_tsx(_MODULE)
        import_statement = top_level_statements(tree)[0]
        assert import_statement.slice(source_bytes) == "import React from 'react';"

    def test_byte_ranges_handle_multibyte_text(self, parse_tsx: ParseTsx) -> None:
        source_bytes, tree = parse_tsx("const café = 'é';\nimport React from 'react';\n")
        import_statement = top_level_statements(tree)[1]
        assert import_statement.slice(source_bytes) == "import React from 'react';"
        assert import_statement.start_point.row == 1

    def test_import_source_is_unquoted(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx(_MODULE)
        source = top_level_statements(tree)[0].child_by_field("source")
        assert source is not None
        assert source.kind is NodeKind.STRING
        assert source.text == "react"

    def test_jsx_tag_names_are_not_identifiers(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx("const el = <history.Item><location /></history.Item>;")
        identifiers = [node.text for node in walk(tree) if node.kind is NodeKind.IDENTIFIER]
        jsx_names = {node.text for node in walk(tree) if node.kind is NodeKind.JSX_NAME}
        assert identifiers == ["el"]
        assert {"history", "location"} <= jsx_names

    def test_member_property_is_property_name(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx("React.useState(0);")
        call = next(node for node in walk(tree) if node.kind is NodeKind.CALL)
        callee = call.child_by_field("function")
        assert callee is not None and callee.kind is NodeKind.MEMBER
        prop = callee.child_by_field("property")
        assert prop is not None
        assert prop.kind is NodeKind.PROPERTY_NAME
        assert prop.text == "useState"

    def test_javascript_grammar_parses_jsx(self) -> None:
        tree = parse_source(b"export default () => <button onClick={go}>Go</button>;\n", "javascript")
        assert any(node.kind is NodeKind.JSX_ATTRIBUTE for node in walk(tree))


class TestParseErrors:
    def test_raises_on_syntax_error(self, tsx_parser: Parser) -> None:
        source = b"import React from 'react';\nexport default function ( {\n"
        assert tsx_parser.parse(source).root_node.has_error

        with pytest.raises(ParseError) as exc_info:
            parse_source(source, "tsx")
        assert exc_info.value.line >= 2
        assert "Syntax error" in str(exc_info.value)

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_source(b"const = ;", "tsx")


class TestReadSource:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            read_source(tmp_path / "missing.tsx")

    def test_resolves_to_absolute_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "Counter.tsx").write_text("export default 1;\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        absolute_path, source_bytes = read_source("Counter.tsx")

        assert absolute_path.is_absolute()
        assert absolute_path == (tmp_path / "Counter.tsx").resolve()
        assert source_bytes == b"export default 1;\n"

    def test_rejects_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.tsx"
        path.write_bytes(b"const x = '\xff';\n")
        with pytest.raises(UnicodeDecodeError):
            read_source(path)


class TestFoldAny:
    def test_propagates_to_every_ancestor(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx("function f() { return g(target); }\nconst other = 1;\n")
        holding: list[SyntaxNode] = []

        result = fold_any(tree, lambda n: n.kind is NodeKind.IDENTIFIER and n.text == "target", holding.append)

        assert result is True
        holding_types = [node.type for node in holding]
        assert holding_types[0] == "identifier"
        assert holding_types[-1] == "program"
        assert "function_declaration" in holding_types
        assert "lexical_declaration" not in holding_types

    def test_predicate_called_in_document_order(self, parse_tsx: ParseTsx) -> None:
        _, tree = parse_tsx("a(b(c));")
        seen: list[str] = []

        def predicate(node: SyntaxNode) -> bool:
            if node.kind is NodeKind.IDENTIFIER and node.text:
                seen.append(node.text)
            return False

        assert fold_any(tree, predicate) is False
        assert seen == ["a", "b", "c"]
