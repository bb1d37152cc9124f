"""Tag balance diagnostics for scanned templates.

The scanner accepts close tags without matching them against open tags, and
the rewriter emits ``{% endcall %}`` for every close regardless of its name.
``check_tags`` reports the inputs where that leniency is likely hiding a
mistake. It never changes how a template is translated.
"""

from __future__ import annotations

from dataclasses import dataclass

from jsxtpl.ast import Ast, ComponentClose, ComponentOpen, ParamsDirective
from jsxtpl.errors import format_context
from jsxtpl.spans import Span


@dataclass(frozen=True, slots=True)
class TagIssue:
    """A suspect construct that still translates."""

    message: str
    span: Span

    def format(self, source: str, filename: str = "<template>") -> str:
        return format_context("warning", self.message, self.span, source, filename)


def check_tags(ast: Ast) -> list[TagIssue]:
    """Return tag balance and directive issues in *ast*, in source order."""
    issues: list[TagIssue] = []
    stack: list[ComponentOpen] = []
    seen_directive = False

    for node in ast.nodes:
        if isinstance(node, ComponentOpen):
            if not node.self_closing:
                stack.append(node)
        elif isinstance(node, ComponentClose):
            if not stack:
                issues.append(TagIssue(f"unexpected closing tag </{node.name}>", node.span))
                continue
            top = stack.pop()
            if top.name != node.name:
                issues.append(
                    TagIssue(
                        f"closing tag </{node.name}> does not match <{top.name}>",
                        node.span,
                    )
                )
        elif isinstance(node, ParamsDirective):
            if seen_directive:
                issues.append(
                    TagIssue("duplicate {#def ... #} directive is ignored", node.span)
                )
            seen_directive = True

    for node in stack:
        issues.append(TagIssue(f"component <{node.name}> is never closed", node.span))

    issues.sort(key=lambda issue: issue.span.start.offset)
    return issues
