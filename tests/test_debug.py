"""Tests for the --debug AST dump."""

from __future__ import annotations

import io

from jsxtpl.debug import dump_ast
from jsxtpl.scanner import scan


def _dump(source: str) -> list[str]:
    buf = io.StringIO()
    dump_ast(scan(source), file=buf)
    return buf.getvalue().splitlines()


class TestDumpAst:
    def test_header_counts_nodes(self) -> None:
        assert _dump("a<B/>")[0] == "Ast (2 nodes)"

    def test_one_line_per_node(self) -> None:
        lines = _dump("{#def x #}\n<Card title>hi</Card>")
        assert lines[1:] == [
            "  1:1 ParamsDirective args=['x']",
            "  1:11 Literal('\\n')",
            "  2:1 ComponentOpen <Card> args=['title']",
            "  2:13 Literal('hi')",
            "  2:15 ComponentClose </Card>",
        ]

    def test_self_closing_marked(self) -> None:
        assert _dump("<B />")[1] == "  1:1 ComponentOpen <B> args=[] self-closing"
