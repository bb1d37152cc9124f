"""Translate template files and mirror template directories."""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from jsxtpl.ast import Ast
from jsxtpl.errors import ScanError
from jsxtpl.rewriter import Rewriter, normalize
from jsxtpl.scanner import scan

DEFAULT_SUFFIXES = (".html",)


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome of translating one template file.

    ``translated`` is False when the file failed to scan and ``output`` is
    the original source; ``error`` then holds the ScanError. Files copied
    verbatim (non-template suffix) have ``output`` set to None.
    """

    path: Path
    output: str | None
    translated: bool
    error: ScanError | None = None
    ast: Ast | None = None


def translate_file(
    path: Path,
    *,
    host_name: str | None = None,
    strict: bool = False,
) -> FileResult:
    """Read *path* and rewrite it into a macro named after its stem."""
    source = path.read_text(encoding="utf-8")
    try:
        ast = scan(source, str(path))
    except ScanError as exc:
        if strict:
            raise
        return FileResult(path, source, translated=False, error=exc)

    name = host_name if host_name is not None else normalize(path)
    return FileResult(path, Rewriter(ast.nodes).build(name), translated=True, ast=ast)


def iter_sources(src_dir: Path, exclude: Path | None = None) -> list[Path]:
    """All files under *src_dir*, recursively, in sorted order.

    Files under *exclude* are skipped, so an output directory nested inside
    the source tree is never read back as input.
    """
    skip = exclude.resolve() if exclude is not None else None
    return sorted(
        p
        for p in src_dir.rglob("*")
        if p.is_file() and (skip is None or not p.resolve().is_relative_to(skip))
    )


def build_templates(
    src_dir: Path,
    out_dir: Path,
    *,
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
    strict: bool = False,
) -> list[FileResult]:
    """Translate every template under *src_dir* into the same layout under *out_dir*.

    Files whose suffix is not in *suffixes* are copied byte-for-byte.
    """
    suffixes = tuple(suffixes)
    results: list[FileResult] = []

    for path in iter_sources(src_dir, exclude=out_dir):
        target = out_dir / path.relative_to(src_dir)
        target.parent.mkdir(parents=True, exist_ok=True)

        if path.suffix not in suffixes:
            shutil.copyfile(path, target)
            results.append(FileResult(path, None, translated=False))
            continue

        result = translate_file(path, strict=strict)
        assert result.output is not None
        target.write_text(result.output, encoding="utf-8")
        results.append(result)

    return results
