"""Error types with formatted source context."""

from __future__ import annotations

from jsxtpl.spans import Position, Span


def format_context(
    severity: str,
    message: str,
    span: Span,
    source: str,
    filename: str,
) -> str:
    """Render *message* with a gutter, the offending source line and carets."""
    lines = source.splitlines(keepends=True)
    line_idx = span.start.line - 1
    col = span.start.column

    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the full span when on one line, otherwise to end of line
    if span.end.line == span.start.line:
        underline_len = max(1, span.end.column - col)
    else:
        underline_len = max(1, len(source_line) - col + 1)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(span.start.line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"{severity}: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{span.start.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class ScanError(Exception):
    """Raised when a component tag or directive does not match its grammar.

    ``position`` points at the start of the offending marker. Scanning is
    all-or-nothing, so no partial AST accompanies the error.
    """

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        filename: str = "<template>",
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    @property
    def span(self) -> Span:
        # Two characters covers the marker start ("<N", "</", "{#")
        end = Position(self.position.line, self.position.column + 2, self.position.offset + 2)
        return Span(self.position, end)

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        return format_context("error", self.message, self.span, self.source, filename)
