"""Component-tag to macro/call translator for Jinja-style templates."""

from __future__ import annotations

import os

from jsxtpl.rewriter import normalize, rewrite_path

__version__ = "0.1.0"

__all__ = ["__version__", "normalize", "rewrite_path", "rewrite_source"]


def rewrite_source(
    path: str | os.PathLike[str],
    source: str,
    *,
    strict: bool = False,
) -> str:
    """Translate component syntax in *source* into a macro named after *path*.

    If the source does not scan, it is returned unchanged so that plain
    host-engine templates pass through untouched. A malformed component tag
    therefore fails open; pass ``strict=True`` to get the ScanError instead.
    """
    from jsxtpl.errors import ScanError
    from jsxtpl.rewriter import Rewriter
    from jsxtpl.scanner import scan

    try:
        ast = scan(source, os.fspath(path))
    except ScanError:
        if strict:
            raise
        return source
    return Rewriter(ast.nodes).build(normalize(path))
