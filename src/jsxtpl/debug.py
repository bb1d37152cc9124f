"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from jsxtpl.ast import Ast, ComponentClose, ComponentOpen, Literal, Node, ParamsDirective


def dump_ast(ast: Ast, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable node listing to *file*."""
    file.write(f"Ast ({len(ast.nodes)} nodes)\n")
    for node in ast.nodes:
        file.write(f"  {_where(node)} {_describe(node)}\n")


def _where(node: Node) -> str:
    return f"{node.span.start.line}:{node.span.start.column}"


def _describe(node: Node) -> str:
    if isinstance(node, Literal):
        return f"Literal({node.text!r})"
    if isinstance(node, ComponentOpen):
        closing = " self-closing" if node.self_closing else ""
        return f"ComponentOpen <{node.name}> args={list(node.args)!r}{closing}"
    if isinstance(node, ComponentClose):
        return f"ComponentClose </{node.name}>"
    if isinstance(node, ParamsDirective):
        return f"ParamsDirective args={list(node.args)!r}"
    return repr(node)
