"""AST node types for scanned component templates."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from jsxtpl.spans import Span


@dataclass(frozen=True, slots=True)
class Literal:
    """Run of source text containing no component or directive marker."""

    text: str
    span: Span


@dataclass(frozen=True, slots=True)
class ComponentOpen:
    """A component start tag: <Name arg ...> or <Name arg ... />."""

    name: str
    args: tuple[str, ...]
    self_closing: bool
    span: Span


@dataclass(frozen=True, slots=True)
class ComponentClose:
    """A component end tag: </Name>."""

    name: str
    span: Span


@dataclass(frozen=True, slots=True)
class ParamsDirective:
    """The {#def arg ... #} directive declaring the template's parameters."""

    args: tuple[str, ...]
    span: Span


Node = Literal | ComponentOpen | ComponentClose | ParamsDirective


@dataclass(frozen=True, slots=True)
class Ast:
    """Scanned template: nodes in document order plus the source they cover."""

    nodes: tuple[Node, ...]
    source: str

    def source_text(self, node: Node) -> str:
        """Return the exact source slice that produced *node*."""
        return self.source[node.span.start.offset : node.span.end.offset]

    @property
    def params(self) -> tuple[str, ...]:
        return directive_params(self.nodes)

    def components(self) -> Iterator[ComponentOpen]:
        return iter_components(self.nodes)


def directive_params(nodes: Iterable[Node]) -> tuple[str, ...]:
    """Parameters of the first {#def ... #} directive, or () if there is none."""
    for node in nodes:
        if isinstance(node, ParamsDirective):
            return node.args
    return ()


def iter_components(nodes: Iterable[Node]) -> Iterator[ComponentOpen]:
    for node in nodes:
        if isinstance(node, ComponentOpen):
            yield node
