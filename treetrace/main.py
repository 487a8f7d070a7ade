"""
Command line entry point.

Examples:
    python -m treetrace.main --tree avl "10, 20, 30"
    python -m treetrace.main --tree btree --order 3 --frames "1, 2, 3, 4, d 1"
    python -m treetrace.main --tree bplus --exercise --seed 7
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from treetrace.config import Settings
from treetrace.core.exceptions import TreeTraceException
from treetrace.core.types import TreeType
from treetrace.engines import create_tree
from treetrace.render import print_steps, snapshot_tree
from treetrace.session import format_commands, generate_problem, parse_commands, replay

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treetrace",
        description="Trace every structural change of BST, AVL, B-tree and B+ tree operations.",
    )
    parser.add_argument("commands", nargs="?", default="",
                        help='command list such as "10, 20, d 10, i 5"')
    parser.add_argument("--tree", default="bst",
                        help="bst, avl, btree or bplus (default: bst)")
    parser.add_argument("--order", type=int, default=settings.order,
                        help=f"order of a B-tree / B+ tree (default: {settings.order})")
    parser.add_argument("--frames", action="store_true",
                        help="print every step as a frame with its tree")
    parser.add_argument("--no-steps", dest="steps", action="store_false",
                        help="only print the final tree")
    parser.add_argument("--exercise", action="store_true",
                        help="generate a practice problem instead of running commands")
    parser.add_argument("--operations", type=int, default=settings.operation_count,
                        help="number of commands in a generated problem")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed for --exercise")
    parser.add_argument("--show-answer", action="store_true",
                        help="print the expected answer of a generated problem")
    parser.add_argument("--log-level", default=settings.log_level,
                        help="logging level (default from TREETRACE_LOG_LEVEL)")
    return parser


def run_exercise(console: Console, args) -> int:
    rng = random.Random(args.seed)
    problem = generate_problem(args.tree, args.operations, args.order, rng)

    title = problem.tree_type.display_name()
    if problem.order is not None:
        title += f" (m={problem.order})"
    console.print(Panel(format_commands(problem.commands), title=title,
                        border_style="bright_blue"))
    if args.show_answer:
        console.print(f"[bold green]Answer:[/bold green] {problem.answer}")
    return 0


def run_commands(console: Console, args) -> int:
    commands = parse_commands(args.commands)
    if not commands:
        console.print("[bold yellow]⚠[/bold yellow] No commands given")
        return 2

    engine = create_tree(args.tree, args.order)
    for trace in replay(engine, commands):
        console.rule(f"[bold]{trace.command}[/bold]")
        if args.steps:
            print_steps(console, trace.steps, frames=args.frames)

    tree_type = TreeType.parse(args.tree)
    console.print(snapshot_tree(engine.snapshot(), title=tree_type.display_name()))
    console.print(f"[bold cyan]Values:[/bold cyan] {engine.to_array()}")
    return 0


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point of the application."""
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)
    console = console or Console()

    try:
        if args.exercise:
            return run_exercise(console, args)
        return run_commands(console, args)
    except TreeTraceException as e:
        logger.debug("Rejected input", exc_info=True)
        console.print(f"[bold red]✗[/bold red] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
