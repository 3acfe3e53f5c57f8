"""Command-line interface for md_parser.

Commands:
    md-parser parse <file> [--output <html_file>] [--escape-html]
    md-parser tree <file> [--indent N]
    md-parser help
    md-parser credits

Every command that converts text calls the library exactly once and maps
errors to a message on stderr and exit status 1.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from md_parser import __version__, parse, render
from md_parser.config import RenderConfig
from md_parser.errors import MarkdownError, ParseError
from md_parser.serialization import to_json
from md_parser.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

PROG = "md-parser"
COMMANDS = ("parse", "tree", "help", "credits")

HELP_TEXT = f"""
MD Parser - Markdown to HTML converter
---------------------------------------

COMMANDS:
    parse <file> [--output <html_file>]
        Parse a markdown file and convert it to HTML

    tree <file>
        Print the parse tree of a markdown file as JSON

    help
        Show this help message

    credits
        Show project credits and information

SUPPORTED MARKDOWN:
    Headers:         # H1, ## H2, ### H3, ... ###### H6
    Bold text:       **text**
    Italic text:     *text*
    Bold & Italic:   ***text***
    Unordered lists: - Point or * Point
    Ordered lists:   1. Point, 2. Point, etc.
    Paragraphs:      Text separated by blank lines

EXAMPLES:
    {PROG} parse document.md
    {PROG} parse document.md --output result.html
    {PROG} tree document.md
    {PROG} help
    {PROG} credits
"""

CREDITS_TEXT = f"""
MD Parser {__version__}
---------
A simple parser that converts basic Markdown syntax into HTML

Features:
  - parsing with a fixed PEG grammar
  - support for common Markdown elements
  - HTML output generation
  - position-tagged parse errors
  - command-line interface
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Convert a subset of Markdown to HTML",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    parse_cmd = commands.add_parser("parse", help="Convert a markdown file to HTML")
    parse_cmd.add_argument("file", help="Markdown file to parse")
    parse_cmd.add_argument("--output", metavar="HTML_FILE", help="Write HTML to this file")
    parse_cmd.add_argument(
        "--escape-html",
        action="store_true",
        help="Escape &, <, > in text (default: pass through verbatim)",
    )

    tree_cmd = commands.add_parser("tree", help="Print the parse tree as JSON")
    tree_cmd.add_argument("file", help="Markdown file to parse")
    tree_cmd.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")

    commands.add_parser("help", help="Show the command and syntax reference")
    commands.add_parser("credits", help="Show project credits")
    return parser


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def run_parse(file_path: str, output_file: str | None, *, escape_html: bool = False) -> None:
    """Convert file_path to HTML, reporting each stage on stdout."""
    print(f"Parsing markdown file: {file_path}")
    content = _read(file_path)

    print("Parsing markdown...")
    tree = parse(content, source_file=file_path)
    html = render(tree, config=RenderConfig(escape_html=escape_html))
    print("Parse successful!")

    if output_file:
        Path(output_file).write_text(html, encoding="utf-8")
        print(f"HTML saved to: {output_file}")
    else:
        print("\n--- Generated HTML ---")
        print(html)
        print("--- End of HTML ---")


def run_tree(file_path: str, indent: int) -> None:
    tree = parse(_read(file_path), source_file=file_path)
    print(to_json(tree, indent=indent, include_text=True))


def _command_name(argv: list[str]) -> str | None:
    """First positional argument; global options take no values."""
    for arg in argv:
        if not arg.startswith("-"):
            return arg
    return None


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()

    command = _command_name(argv)
    if command is not None and command not in COMMANDS:
        parser.print_usage(sys.stderr)
        print(f"Error: Unknown command '{command}'", file=sys.stderr)
        return 1

    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.command is None:
        parser.print_usage(sys.stderr)
        print(f"Use '{PROG} help' for available commands", file=sys.stderr)
        return 0

    try:
        if args.command == "parse":
            run_parse(args.file, args.output, escape_html=args.escape_html)
        elif args.command == "tree":
            run_tree(args.file, args.indent)
        elif args.command == "help":
            print(HELP_TEXT)
        elif args.command == "credits":
            print(CREDITS_TEXT)
    except ParseError as exc:
        logger.debug("Parse failed", exc_info=True)
        print(f"Error: Failed to parse markdown content: {exc}", file=sys.stderr)
        return 1
    except MarkdownError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
