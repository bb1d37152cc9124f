"""Rewriter — converts a scanned node sequence into host-engine macro source."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import PurePath

from jsxtpl.ast import (
    ComponentClose,
    ComponentOpen,
    Literal,
    Node,
    directive_params,
    iter_components,
)

TEMPLATE_EXT = ".html"


def normalize(name: str | os.PathLike[str]) -> str:
    """Return the macro identifier for a component name or template path.

    Takes the file stem, lowercases it and maps '-' and '.' to '_', so
    ``Hello`` becomes ``hello`` and ``pages/Blog-Post.v2.html`` becomes
    ``blog_post_v2``.
    """
    return PurePath(name).stem.lower().replace("-", "_").replace(".", "_")


# ---------------------------------------------------------------------------
# Target syntax productions
# ---------------------------------------------------------------------------


def _import(path: str, ident: str) -> str:
    return f'{{%- import "{path}" as {ident}_scope -%}}'


def _macro(name: str, args: Sequence[str]) -> str:
    return f"{{% macro {name}({', '.join(args)}) %}}"


def _endmacro(name: str) -> str:
    return f"{{% endmacro {name} %}}"


def _call(ident: str, args: Sequence[str]) -> str:
    return f"{{% call {ident}_scope::{ident}({', '.join(args)}) %}}"


_ENDCALL = "{% endcall %}"


class Rewriter:
    """Emit imports, a macro wrapping the template body, and scoped calls."""

    def __init__(self, nodes: Sequence[Node]) -> None:
        self._nodes = nodes

    def build(self, host_name: str) -> str:
        """Render the whole template as a macro named *host_name*."""
        parts: list[str] = []
        self._write_imports(parts)
        self._write_macro(parts, host_name)
        self._write_body(parts)
        parts.append(_endmacro(host_name))
        parts.append("\n")
        return "".join(parts)

    def _write_imports(self, parts: list[str]) -> None:
        # dict keeps first-occurrence order
        idents: dict[str, None] = {}
        for node in iter_components(self._nodes):
            idents.setdefault(normalize(node.name), None)

        for ident in idents:
            parts.append(_import(f"{ident}{TEMPLATE_EXT}", ident))
            parts.append("\n")

    def _write_macro(self, parts: list[str], host_name: str) -> None:
        parts.append(_macro(host_name, directive_params(self._nodes)))
        parts.append("\n")

    def _write_body(self, parts: list[str]) -> None:
        for node in self._nodes:
            if isinstance(node, Literal):
                parts.append(node.text)
            elif isinstance(node, ComponentOpen):
                parts.append(_call(normalize(node.name), node.args))
                if node.self_closing:
                    parts.append(_ENDCALL)
            elif isinstance(node, ComponentClose):
                parts.append(_ENDCALL)
            # ParamsDirective is consumed by the macro header


def rewrite(nodes: Sequence[Node], host_name: str) -> str:
    """Convenience function: rewrite *nodes* into a macro named *host_name*."""
    return Rewriter(nodes).build(host_name)


def rewrite_path(path: str | os.PathLike[str]) -> str:
    """Render a whole-file reference: import *path* and call it with no arguments."""
    ident = normalize(path)
    return (
        f"{_import(os.fspath(path), ident)}\n"
        f"{_call(ident, ())}{_ENDCALL}\n"
    )
