"""Scanner — converts template source text into a flat node sequence."""

from __future__ import annotations

import re

from jsxtpl.ast import Ast, ComponentClose, ComponentOpen, Literal, Node, ParamsDirective
from jsxtpl.errors import ScanError
from jsxtpl.spans import Position, Span

DIRECTIVE_START = "{#def"
DIRECTIVE_END = "#}"
TAG_START = "<"
TAG_END = ">"
CLOSE_START = "</"

# Compiled once at import and only ever read.
_MARKER_START = re.compile(r"</?[A-Z]|\{#def")
_IDENTIFIER = re.compile(r"[A-Z][A-Za-z0-9_]*")
_ASCII_WS = re.compile(r"[ \t\n\r\f]+")
_DIRECTIVE = re.compile(r"\{#def[ \t]+([A-Za-z]+(?:[ \t]+[A-Za-z]+)*)[ \t]+#\}")


class Scanner:
    """Scan template source into Literal, component and directive nodes."""

    def __init__(self, source: str, filename: str = "<template>") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._nodes: list[Node] = []

    def scan(self) -> Ast:
        """Scan the full source and return the Ast."""
        while self._pos < len(self._source):
            if self._source.startswith(DIRECTIVE_START, self._pos):
                self._scan_directive()
            elif self._source.startswith(CLOSE_START, self._pos) and self._at_identifier(2):
                self._scan_close()
            elif self._source.startswith(TAG_START, self._pos) and self._at_identifier(1):
                self._scan_open()
            else:
                self._scan_literal()

        return Ast(tuple(self._nodes), self._source)

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _at_identifier(self, offset: int) -> bool:
        idx = self._pos + offset
        return idx < len(self._source) and "A" <= self._source[idx] <= "Z"

    def _advance_to(self, end: int) -> str:
        """Consume source up to *end* and return the consumed text."""
        text = self._source[self._pos : end]
        newlines = text.count("\n")
        if newlines:
            self._line += newlines
            self._col = len(text) - text.rfind("\n")
        else:
            self._col += len(text)
        self._pos = end
        return text

    def _span_from(self, start: Position) -> Span:
        return Span(start, self._current_pos())

    def _error(self, message: str, pos: Position | None = None) -> ScanError:
        if pos is None:
            pos = self._current_pos()
        return ScanError(message, pos, self._source, self._filename)

    def _next_marker(self, start: int) -> int:
        """Offset of the next marker start at or after *start*, or end of input."""
        match = _MARKER_START.search(self._source, start)
        return match.start() if match else len(self._source)

    # ------------------------------------------------------------------
    # Literal text
    # ------------------------------------------------------------------

    def _scan_literal(self) -> None:
        start = self._current_pos()
        # The current position is not a marker start, so the run is non-empty
        end = self._next_marker(self._pos + 1)
        text = self._advance_to(end)
        self._nodes.append(Literal(text, self._span_from(start)))

    # ------------------------------------------------------------------
    # Component tags
    # ------------------------------------------------------------------

    def _scan_open(self) -> None:
        start = self._current_pos()
        name_match = _IDENTIFIER.match(self._source, self._pos + len(TAG_START))
        assert name_match is not None
        name = name_match.group()

        body_start = name_match.end()
        tag_end = self._source.find(TAG_END, body_start)
        if tag_end == -1:
            raise self._error(f"unterminated component tag <{name}", start)
        if self._next_marker(body_start) < tag_end:
            raise self._error(f"unterminated component tag <{name} before next tag", start)

        tokens = [t for t in _ASCII_WS.split(self._source[body_start:tag_end].strip()) if t]
        self_closing = any(t.endswith("/") for t in tokens)
        args = tuple(t for t in tokens if not t.endswith("/"))

        self._advance_to(tag_end + len(TAG_END))
        self._nodes.append(ComponentOpen(name, args, self_closing, self._span_from(start)))

    def _scan_close(self) -> None:
        start = self._current_pos()
        name_match = _IDENTIFIER.match(self._source, self._pos + len(CLOSE_START))
        assert name_match is not None
        name = name_match.group()

        if not self._source.startswith(TAG_END, name_match.end()):
            raise self._error(f"expected '>' to close </{name}", start)

        self._advance_to(name_match.end() + len(TAG_END))
        self._nodes.append(ComponentClose(name, self._span_from(start)))

    # ------------------------------------------------------------------
    # {#def ... #} directive
    # ------------------------------------------------------------------

    def _scan_directive(self) -> None:
        start = self._current_pos()
        if self._source.find(DIRECTIVE_END, self._pos + len(DIRECTIVE_START)) == -1:
            raise self._error("unterminated {#def ... #} directive", start)

        match = _DIRECTIVE.match(self._source, self._pos)
        if match is None:
            raise self._error(
                "malformed {#def ... #} directive (expected space-separated parameter names)",
                start,
            )

        args = tuple(match.group(1).split())
        self._advance_to(match.end())
        self._nodes.append(ParamsDirective(args, self._span_from(start)))


def scan(source: str, filename: str = "<template>") -> Ast:
    """Convenience function: scan source text and return its Ast."""
    return Scanner(source, filename).scan()
