"""
prodgraph.cli - Command-line interface.

Main entry point for the prodgraph CLI tool.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from prodgraph import __version__
from prodgraph.commands.session import EditingSession
from prodgraph.config import RenderMode
from prodgraph.core.symbols import full_name, is_placeholder
from prodgraph.exceptions import ProdGraphError
from prodgraph.grammar.index import RuleIndex
from prodgraph.grammar.reader import gutter_text, parse, rule_lines, to_text, valid_rules

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="prodgraph",
        description="Build derivation trees from context-free grammar rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  prodgraph rules grammar.txt              # Number the rules in a grammar
  prodgraph rules grammar.txt --gutter     # Show rule numbers beside the text
  prodgraph index grammar.txt              # Show which rules produce each value
  prodgraph run grammar.txt script.txt     # Apply session commands, print DOT
  prodgraph path grammar.txt "<S>" "'a'"   # Resolve one simple path from <S>

Grammar format:
  <name> ::= alt1 | alt2 | ...   (\\| is a literal pipe, blank line ends a rule)

The DOT output can be piped to the layout tool, e.g. | dot -Tpng > tree.png
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"prodgraph {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # rules command
    rules_parser = subparsers.add_parser(
        "rules",
        help="List the numbered rules of a grammar",
    )
    rules_parser.add_argument("grammar", type=Path, help="Grammar file")
    rules_format = rules_parser.add_mutually_exclusive_group()
    rules_format.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output rules as JSON",
    )
    rules_format.add_argument(
        "--normalized",
        action="store_true",
        help="Print the valid rules back as grammar text, one per line",
    )
    rules_format.add_argument(
        "--gutter",
        action="store_true",
        help="Print the grammar text with rule numbers in a left margin",
    )

    # index command
    index_parser = subparsers.add_parser(
        "index",
        help="Show the reverse index of normalized values",
    )
    index_parser.add_argument("grammar", type=Path, help="Grammar file")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Apply session commands and print the graph description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands (one per line, '#' starts a comment line):
  +N  new node from rule N     ~N  unlink node N      -N  delete node N
  =N  make N current           *   refresh current    n   next current
  N   choose alternative for N .   ... for current    P C link P -- C
  s N pattern / > pattern      find a simple path
  r / o / f                    print with ids / without ids / with all ids
While choosing: N, first, last, 0 or - (cancel) or a quick-select pattern.
""",
    )
    run_parser.add_argument("grammar", type=Path, help="Grammar file")
    run_parser.add_argument(
        "script",
        type=Path,
        nargs="?",
        help="Command file (default: standard input)",
    )
    _add_render_options(run_parser)

    # path command
    path_parser = subparsers.add_parser(
        "path",
        help="Resolve a simple path from a new root node",
    )
    path_parser.add_argument("grammar", type=Path, help="Grammar file")
    path_parser.add_argument("root", help="Root non-terminal, e.g. '<S>' or S")
    path_parser.add_argument("pattern", help="Pattern for the value to reach")
    _add_render_options(path_parser)

    return parser


def _add_render_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--plain",
        action="store_true",
        help="Do not show node ids",
    )
    group.add_argument(
        "--full",
        action="store_true",
        help="Show node ids on terminals too",
    )


def _render_mode(args: argparse.Namespace) -> RenderMode:
    if args.plain:
        return RenderMode.PLAIN
    if args.full:
        return RenderMode.FULL
    return RenderMode.IDS


def _read_grammar(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def cmd_rules(args: argparse.Namespace) -> int:
    text = _read_grammar(args.grammar)
    parsed = parse(text)
    if args.normalized:
        print(to_text(parsed))
        return 0
    if args.gutter:
        numbers = gutter_text(rule_lines(parsed)).split("\n")
        for index, line in enumerate(text.splitlines()):
            number = numbers[index] if index < len(numbers) else ""
            print(f"{number:>3} | {line}")
        return 0

    rules = valid_rules(parsed)
    if args.json:
        print(json.dumps([rule.model_dump() for rule in rules], indent=2))
        return 0
    for number, rule in enumerate(rules, start=1):
        print(f"{number:>3}  line {rule.line:<4} {rule}")
    return 0


def cmd_index(args: argparse.Namespace) -> int:
    index = RuleIndex.build(parse(_read_grammar(args.grammar)))
    for value in index.values():
        print(f"{value}  <-  {', '.join(sorted(index.reverse[value]))}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    session = EditingSession(_read_grammar(args.grammar))
    if args.script:
        script = args.script.read_text(encoding="utf-8")
    else:
        script = sys.stdin.read()

    failed = False
    for number, line in enumerate(script.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        try:
            output = session.run(line)
        except ProdGraphError as e:
            failed = True
            print(f"line {number}: {e}", file=sys.stderr)
            continue
        if output is not None and not args.quiet:
            print(output, end="")

    if not args.quiet:
        print(session.render(_render_mode(args)), end="")
    return 1 if failed else 0


def cmd_path(args: argparse.Namespace) -> int:
    session = EditingSession(_read_grammar(args.grammar))
    root = args.root if is_placeholder(args.root) else full_name(args.root)
    session.rule_for(root)
    root_id = session.graph.new_node(root)
    session.focus.push_back(root_id)
    result = session.simple_path(root_id, args.pattern)
    logger.info("Resolved %s", " <- ".join(result.resolved.chain))
    if not args.quiet:
        print(session.render(_render_mode(args)), end="")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "rules": cmd_rules,
        "index": cmd_index,
        "run": cmd_run,
        "path": cmd_path,
    }

    try:
        return commands[args.command](args)
    except ProdGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
