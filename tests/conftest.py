"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from jsxtpl.ast import Ast, ComponentClose, ComponentOpen, Literal, Node, ParamsDirective
from jsxtpl.rewriter import rewrite
from jsxtpl.scanner import scan


@pytest.fixture
def scan_source():
    """Return a helper that scans source and returns its nodes."""

    def _scan(source: str, filename: str = "test.html") -> tuple[Node, ...]:
        return scan(source, filename).nodes

    return _scan


@pytest.fixture
def translate():
    """Return a helper that scans and rewrites source into a macro."""

    def _translate(source: str, host_name: str = "index") -> str:
        return rewrite(scan(source).nodes, host_name)

    return _translate


def kinds(nodes: tuple[Node, ...]) -> list[str]:
    """Return the node class names, in order."""
    return [type(n).__name__ for n in nodes]


def assert_open(
    node: Node,
    name: str,
    args: tuple[str, ...] = (),
    self_closing: bool = False,
) -> None:
    """Assert basic properties of a ComponentOpen node."""
    assert isinstance(node, ComponentOpen), f"Expected ComponentOpen, got {type(node).__name__}"
    assert node.name == name, f"Expected name '{name}', got '{node.name}'"
    assert node.args == args, f"Expected args {args}, got {node.args}"
    assert node.self_closing == self_closing, (
        f"Expected self_closing={self_closing}, got {node.self_closing}"
    )


def assert_close(node: Node, name: str) -> None:
    assert isinstance(node, ComponentClose), f"Expected ComponentClose, got {type(node).__name__}"
    assert node.name == name


def assert_literal(node: Node, text: str) -> None:
    assert isinstance(node, Literal), f"Expected Literal, got {type(node).__name__}"
    assert node.text == text, f"Expected {text!r}, got {node.text!r}"


def assert_directive(node: Node, args: tuple[str, ...]) -> None:
    assert isinstance(node, ParamsDirective), (
        f"Expected ParamsDirective, got {type(node).__name__}"
    )
    assert node.args == args


def reassemble(ast: Ast) -> str:
    """Concatenate the source slices of every node."""
    return "".join(ast.source_text(n) for n in ast.nodes)
