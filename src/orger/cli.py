"""Command-line interface for orger.

Usage:
    orger parse notes.org --pretty
    orger parse notes.org -o notes.json
    orger render notes.org -f markdown --frontmatter
    orger render notes.org --full-document -o notes.html
    cat notes.org | orger render - -f org
    orger -vv parse notes.org

Exit Codes:
    0 - Success
    1 - The input could not be read, parsed or rendered
    2 - CLI usage error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from orger import __version__
from orger.config import ParseConfig, parse_config_context
from orger.errors import OrgerError
from orger.parser import Parser
from orger.plugins import resolve_plugins
from orger.renderers import RENDERERS
from orger.serialization import to_json
from orger.utils.logger import configure_logging

# JSON output indentation (spaces)
JSON_INDENT_SPACES = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="orger", description="Org markup parser and renderer")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Log to stderr (-vv for debug)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("file", help="Org file to read ('-' for stdin)")
        sub.add_argument("-o", "--output", help="Output file (defaults to stdout)")
        sub.add_argument("--strict", action="store_true", help="Fail on unterminated blocks")
        sub.add_argument(
            "--todo-keyword",
            action="append",
            default=[],
            metavar="WORD",
            help="Extra TODO keyword (repeatable)",
        )
        sub.add_argument(
            "--plugin",
            action="append",
            default=[],
            metavar="NAME",
            help="Built-in plugin to enable (repeatable, 'all' for every one)",
        )

    parse_cmd = commands.add_parser("parse", help="Parse a file and output the AST as JSON")
    add_common(parse_cmd)
    parse_cmd.add_argument("-p", "--pretty", action="store_true", help="Indent the JSON output")

    render_cmd = commands.add_parser("render", help="Render a file to HTML, Markdown or Org")
    add_common(render_cmd)
    render_cmd.add_argument("-f", "--format", choices=sorted(RENDERERS), default="html")
    render_cmd.add_argument(
        "--full-document", action="store_true", help="Wrap HTML output in a full page"
    )
    render_cmd.add_argument(
        "--highlight", action="store_true", help="Syntax-highlight HTML source blocks"
    )
    render_cmd.add_argument(
        "--no-gfm", action="store_true", help="Plain CommonMark instead of GFM (Markdown)"
    )
    render_cmd.add_argument(
        "--frontmatter", action="store_true", help="Emit YAML frontmatter (Markdown)"
    )
    return parser


def _read_source(path: str) -> tuple[str, str | None]:
    if path == "-":
        return sys.stdin.read(), None
    return Path(path).read_text(encoding="utf-8"), path


def _render_options(args: argparse.Namespace) -> dict[str, Any]:
    if args.format == "html":
        return {"full_document": args.full_document, "highlight": args.highlight}
    if args.format == "markdown":
        return {"gfm": not args.no_gfm, "frontmatter": args.frontmatter}
    return {}


def run(args: argparse.Namespace) -> str:
    """Execute a parsed command line and return the output text.

    Raises:
        OrgerError: Parsing or rendering failed
        OSError: The input could not be read
        KeyError: Unknown plugin name
    """
    source, source_file = _read_source(args.file)
    config = ParseConfig(strict=args.strict, plugins=resolve_plugins(args.plugin))
    if args.todo_keyword:
        config = config.with_todo_keywords(*args.todo_keyword)

    with parse_config_context(config):
        doc = Parser(source, source_file=source_file).parse()

    if args.command == "parse":
        return to_json(doc, indent=JSON_INDENT_SPACES if args.pretty else None) + "\n"
    return RENDERERS[args.format](**_render_options(args)).render(doc)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``orger`` console script."""
    args = _build_parser().parse_args(argv)
    if args.verbose:
        configure_logging(logging.DEBUG if args.verbose > 1 else logging.INFO)
    try:
        output = run(args)
    except (OrgerError, OSError, UnicodeDecodeError, KeyError) as e:
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        print(f"Error: {message}", file=sys.stderr)
        return 1

    if args.output:
        try:
            Path(args.output).write_text(output, encoding="utf-8")
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
