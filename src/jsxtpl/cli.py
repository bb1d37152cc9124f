"""Command-line interface for jsxtpl."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsxtpl.build import DEFAULT_SUFFIXES, FileResult
from jsxtpl.errors import ScanError

CONFIG_NAME = "jsxtpl.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_path: Path
    output_path: Path | None
    host_name: str | None
    suffixes: tuple[str, ...]
    strict: bool
    entry: bool
    check: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="jsxtpl",
        description="Translate component tags into Jinja-style macro calls",
    )
    p.add_argument("input", help="Template file or directory of templates")
    p.add_argument(
        "-o",
        "--output",
        help="Output file (default: stdout), or output directory for directory input",
    )
    p.add_argument("--name", help="Macro name for a single file (default: normalized file stem)")
    p.add_argument(
        "--suffix",
        action="append",
        default=[],
        metavar="EXT",
        help="Template suffix translated in directory mode (repeatable, default: .html)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on malformed templates instead of passing them through",
    )
    p.add_argument(
        "--entry",
        action="store_true",
        help="Print a whole-file reference that imports and calls INPUT",
    )
    p.add_argument("--check", action="store_true", help="Report diagnostics, write nothing")
    p.add_argument("--watch", action="store_true", help="Watch for changes and rebuild")
    p.add_argument("--debug", action="store_true", help="Dump the AST to stderr")
    return p


def parse_suffix_arg(s: str) -> str:
    """Normalize a suffix argument to its dotted form ('html' -> '.html')."""
    s = s.strip()
    if not s or s == ".":
        raise argparse.ArgumentTypeError(f"invalid suffix: {s!r}")
    return s if s.startswith(".") else f".{s}"


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_path = Path(args.input)
    input_dir = input_path if input_path.is_dir() else input_path.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    cfg_build = config.get("build")
    if not isinstance(cfg_build, dict):
        cfg_build = {}

    # Suffixes: CLI replaces config, config replaces the default
    suffixes: list[str] = []
    cfg_suffixes = cfg_build.get("suffixes")
    if isinstance(cfg_suffixes, list):
        suffixes.extend(parse_suffix_arg(str(s)) for s in cfg_suffixes)
    if args.suffix:
        suffixes = [parse_suffix_arg(s) for s in args.suffix]
    if not suffixes:
        suffixes = list(DEFAULT_SUFFIXES)

    # Strict mode: config < CLI
    strict = False
    cfg_strict = cfg_build.get("strict")
    if isinstance(cfg_strict, bool):
        strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    output_path = Path(args.output) if args.output else None

    return CliOptions(
        input_path=input_path,
        output_path=output_path,
        host_name=args.name,
        suffixes=tuple(suffixes),
        strict=strict,
        entry=args.entry,
        check=args.check,
        watch=args.watch,
        debug=args.debug,
    )


def report_fallback(result: FileResult) -> None:
    """Tell the user that a malformed template was copied untranslated."""
    assert result.error is not None
    print(f"warning: {result.path}: passed through untranslated", file=sys.stderr)
    print(result.error.format(str(result.path)), file=sys.stderr)


def check_path(options: CliOptions) -> int:
    """Scan templates and print diagnostics.

    Returns 1 if any file fails to scan, 2 if any file cannot be read.
    """
    from jsxtpl.build import iter_sources
    from jsxtpl.checks import check_tags
    from jsxtpl.scanner import scan

    if options.input_path.is_dir():
        paths = [
            p
            for p in iter_sources(options.input_path, exclude=options.output_path)
            if p.suffix in options.suffixes
        ]
    else:
        paths = [options.input_path]

    status = 0
    for path in paths:
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: {path}: {exc}", file=sys.stderr)
            status = max(status, 2)
            continue
        try:
            ast = scan(source, str(path))
        except ScanError as exc:
            print(exc.format(str(path)), file=sys.stderr)
            status = max(status, 1)
            continue
        for issue in check_tags(ast):
            print(issue.format(source, str(path)), file=sys.stderr)
    return status


def compile_path(options: CliOptions) -> None:
    """Translate the input file or directory and write the results."""
    from jsxtpl.build import build_templates, translate_file
    from jsxtpl.debug import dump_ast

    if options.input_path.is_dir():
        if options.output_path is None:
            raise argparse.ArgumentTypeError("directory input requires -o/--output")
        results = build_templates(
            options.input_path,
            options.output_path,
            suffixes=options.suffixes,
            strict=options.strict,
        )
    else:
        results = [
            translate_file(options.input_path, host_name=options.host_name, strict=options.strict)
        ]

    for result in results:
        if result.error is not None:
            report_fallback(result)
        if options.debug and result.ast is not None:
            dump_ast(result.ast)

    if options.input_path.is_dir():
        print(f"Wrote {len(results)} files to {options.output_path}", file=sys.stderr)
        return

    output = results[0].output
    assert output is not None
    if options.output_path:
        options.output_path.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)


def _snapshot(path: Path, exclude: Path | None = None) -> dict[Path, float]:
    """Modification times of *path*, or of every file under it except *exclude*."""
    from jsxtpl.build import iter_sources

    paths = iter_sources(path, exclude=exclude) if path.is_dir() else [path]
    mtimes: dict[Path, float] = {}
    for p in paths:
        try:
            mtimes[p] = p.stat().st_mtime
        except OSError:
            continue
    return mtimes


def watch_loop(options: CliOptions) -> None:
    """Poll the input for changes, rebuild on each modification."""
    last: dict[Path, float] = {}
    print(f"Watching {options.input_path} for changes...", file=sys.stderr)
    try:
        while True:
            current = _snapshot(options.input_path, exclude=options.output_path)
            if current and current != last:
                last = current
                try:
                    compile_path(options)
                    print(f"Compiled {options.input_path}", file=sys.stderr)
                except ScanError as exc:
                    print(exc.format(), file=sys.stderr)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.entry:
        from jsxtpl.rewriter import rewrite_path

        sys.stdout.write(rewrite_path(args.input))
        return 0

    if not options.input_path.exists():
        print(f"error: no such file or directory: {options.input_path}", file=sys.stderr)
        return 2

    if options.check:
        return check_path(options)

    if options.input_path.is_dir() and options.output_path is None:
        print("error: directory input requires -o/--output", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        compile_path(options)
    except ScanError as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0
