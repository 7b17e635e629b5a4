"""Command-line interface for inspecting parsed yin source."""

from __future__ import annotations

import argparse
import io
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from yinsexp.delimiters import DelimiterRegistry, DelimiterRegistryBuilder, default_builder
from yinsexp.errors import SexpError

FORMATS = ("sexp", "tree", "tokens")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    registry: DelimiterRegistry
    format: str
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="yinsexp",
        description="Parse a yin source file and print its S-expression tree",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover yinsexp.toml)",
    )
    p.add_argument(
        "--pair",
        action="append",
        default=[],
        metavar="OC",
        help="Register an open/close delimiter pair, e.g. '<>' (repeatable)",
    )
    p.add_argument(
        "--standalone",
        action="append",
        default=[],
        metavar="CHAR",
        help="Register a standalone delimiter (repeatable)",
    )
    p.add_argument(
        "--no-default-delimiters",
        action="store_true",
        help="Start from an empty registry instead of ( ) { } [ ] and '.'",
    )
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: sexp)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tree to stderr")
    return p


def parse_pair_arg(s: str) -> tuple[str, str]:
    """Parse a two-character OC string into (open, close)."""
    if len(s) != 2:
        raise argparse.ArgumentTypeError(
            f"invalid pair (expected two characters, open then close): {s!r}"
        )
    return s[0], s[1]


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "yinsexp.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def build_registry(
    use_defaults: bool, pairs: list[tuple[str, str]], standalone: list[str]
) -> DelimiterRegistry:
    """Assemble a registry; later pairs win over earlier ones for the same opener."""
    builder = default_builder() if use_defaults else DelimiterRegistryBuilder()
    for open_, close in pairs:
        builder.register_pair(open_, close)
    for delim in standalone:
        builder.register_standalone(delim)
    return builder.build()


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags. Raises ArgumentTypeError or
    ValueError on unusable settings.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_delims = config.get("delimiters")
    if not isinstance(cfg_delims, dict):
        cfg_delims = {}

    # Defaults: config < CLI
    use_defaults = True
    cfg_defaults = cfg_delims.get("defaults")
    if isinstance(cfg_defaults, bool):
        use_defaults = cfg_defaults
    if args.no_default_delimiters:
        use_defaults = False

    # Pairs: config first, CLI after so it wins on a shared opener
    pairs: list[tuple[str, str]] = []
    cfg_pairs = cfg_delims.get("pairs")
    if isinstance(cfg_pairs, list):
        pairs.extend(parse_pair_arg(str(p)) for p in cfg_pairs)
    pairs.extend(parse_pair_arg(raw) for raw in args.pair)

    # Standalone delimiters: config + CLI
    standalone: list[str] = []
    cfg_standalone = cfg_delims.get("standalone")
    if isinstance(cfg_standalone, list):
        standalone.extend(str(d) for d in cfg_standalone)
    standalone.extend(args.standalone)

    registry = build_registry(use_defaults, pairs, standalone)

    # Output format: config < CLI
    fmt = "sexp"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if isinstance(cfg_format, str):
            fmt = cfg_format
    if args.format is not None:
        fmt = args.format
    if fmt not in FORMATS:
        raise ValueError(f"unknown output format {fmt!r} (expected one of {', '.join(FORMATS)})")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        registry=registry,
        format=fmt,
        debug=args.debug,
    )


def inspect_file(options: CliOptions) -> str:
    """Read and parse a source file, returning the requested rendering."""
    from yinsexp.debug import dump_tokens, dump_tree
    from yinsexp.lexer import tokenize
    from yinsexp.parser import Parser, read_source
    from yinsexp.render import render

    source = read_source(options.input_file)
    filename = str(options.input_file)

    # Parse even for token output so malformed input is still reported.
    tree = Parser(source, filename, options.registry).parse()

    if options.debug:
        dump_tree(tree)

    buf = io.StringIO()
    if options.format == "tokens":
        dump_tokens(tokenize(source, filename, options.registry), file=buf)
    elif options.format == "tree":
        dump_tree(tree, file=buf)
    else:
        buf.write(render(tree) + "\n")
    return buf.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        text = inspect_file(options)
    except SexpError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if options.output_file:
        try:
            options.output_file.write_text(text, encoding="utf-8")
        except OSError as exc:
            print(f"error: cannot write {options.output_file}: {exc.strerror or exc}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(text)

    return 0


def run() -> None:
    """Console-script wrapper around main()."""
    sys.exit(main())
