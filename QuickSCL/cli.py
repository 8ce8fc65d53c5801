"""Command-line interface for compiling SCL charts to diagram JSON."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .diagram_exporter import DiagramExporter
from .diagram_exporter.constants import DANGLING_DROP, DANGLING_KEEP
from .errors import SCLError
from .layout_engine import LayoutConfig
from .layout_engine.constants import RANKDIRS, DEFAULT_RANKDIR
from .scl_compiler import EXAMPLE_CODE, SCLCompiler

logger = logging.getLogger(__name__)


class UsageError(Exception):
    pass


class FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = FriendlyArgumentParser(
        prog="quick-scl",
        description="Compile SCL Sequential Function Charts to diagram JSON.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    compile_parser = subparsers.add_parser("compile", help="Compile SCL to diagram JSON")
    compile_parser.add_argument("input", nargs="?", help="Input SCL file")
    compile_parser.add_argument("--text", help="Raw SCL source")
    compile_parser.add_argument("--stdout", action="store_true", help="Write JSON to stdout")
    compile_parser.add_argument("-o", "--output", help="Output .json path")
    compile_parser.add_argument("--rankdir", choices=RANKDIRS, default=DEFAULT_RANKDIR)
    compile_parser.add_argument("--strict", action="store_true",
                                help="Fail if any line was ignored or overwritten")
    compile_parser.add_argument("--summary", action="store_true",
                                help="Print a chart summary instead of JSON")
    compile_parser.add_argument("--drop-dangling", action="store_true",
                                help="Drop edges that reference undeclared nodes")

    subparsers.add_parser("example", help="Print an example SCL chart")
    return parser


def _read_input(path: Optional[str], text: Optional[str]):
    if path and text is not None:
        raise UsageError("--text cannot be combined with file input")
    if text is not None:
        return text, None
    if path:
        input_path = Path(path)
        if not input_path.exists():
            raise SCLError(f"input file not found: {input_path}")
        return input_path.read_text(encoding="utf-8-sig"), input_path
    return sys.stdin.read(), None


def _handle_compile(args: argparse.Namespace) -> int:
    if args.stdout and args.output:
        raise UsageError("--stdout and --output are mutually exclusive")

    source, source_path = _read_input(args.input, args.text)
    compiler = SCLCompiler(source).set_layout_config(LayoutConfig(rankdir=args.rankdir))
    graph = compiler.compile()

    diagnostics = compiler.diagnostics
    if diagnostics.has_warnings():
        for warning in diagnostics.sorted_warnings():
            logger.warning("%s", warning)
    if args.strict:
        diagnostics.raise_if_any()

    if args.summary:
        graph.print_summary()
        return 0

    exporter = (
        DiagramExporter(graph)
        .set_source_code(source)
        .set_dangling_policy(DANGLING_DROP if args.drop_dangling else DANGLING_KEEP)
    )

    if args.stdout or source_path is None and not args.output:
        sys.stdout.write(exporter.to_string() + "\n")
        return 0

    output_path = Path(args.output) if args.output else source_path.with_suffix(".json")
    exporter.export(str(output_path))
    print(f"Wrote {output_path}")
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    parser = _build_parser()

    try:
        args = parser.parse_args(raw_argv)
    except UsageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "compile":
            return _handle_compile(args)
        if args.command == "example":
            print(EXAMPLE_CODE)
            return 0
        sys.stderr.write("error: missing subcommand (use one of: compile, example)\n")
        return 2
    except UsageError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (SCLError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
