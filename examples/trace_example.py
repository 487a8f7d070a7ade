#!/usr/bin/env python3
"""
Step Trace Walkthrough for treetrace

This example walks through every tree family and shows the steps each
operation records:
- Comparisons while descending a binary search tree
- The four AVL rotation cases
- B-tree overflow, split and underflow repair
- B+ tree copy-up, routing key refresh and the leaf chain
- Error handling for bad orders and bad command text

Run with: python examples/trace_example.py
"""

import os
import sys

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from treetrace import (
    CommandParseError,
    InvalidOrderError,
    StepKind,
    TreeType,
    TreeValidator,
    create_tree,
)
from treetrace.render import print_steps, snapshot_tree
from treetrace.session import generate_problem, parse_commands, replay, format_commands


# Initialize Rich console
console = Console()


def print_header(title: str, subtitle: str = ""):
    """Print a header panel"""
    if subtitle:
        full_title = f"[bold blue]{title}[/bold blue]\n[dim]{subtitle}[/dim]"
    else:
        full_title = f"[bold blue]{title}[/bold blue]"

    console.print(Panel(
        full_title,
        style="bright_blue",
        box=box.DOUBLE,
        padding=(1, 2)
    ))


def print_step(step_num: int, title: str, description: str = ""):
    """Print a step header"""
    step_text = f"[bold yellow]Step {step_num}: {title}[/bold yellow]"
    if description:
        step_text += f"\n[dim italic]{description}[/dim italic]"
    console.print(step_text)
    console.print()


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str):
    console.print(f"[bold cyan]ℹ[/bold cyan] {message}")


def print_error(message: str):
    console.print(f"[bold red]✗[/bold red] {message}")


def ask_continue(step_name: str = "next step") -> bool:
    """Ask user if they want to continue to the next step"""
    console.print()
    console.print(Rule("[dim]Waiting for user input[/dim]"))
    console.print()

    while True:
        try:
            response = input(
                f"Continue to the {step_name}? (y/n/q to quit): ").lower().strip()

            if response in ['y', 'yes', '']:  # Default to yes
                console.print()
                return True
            elif response in ['n', 'no']:
                console.print("[bold yellow]⏸[/bold yellow] Skipping this step...")
                console.print()
                return False
            elif response in ['q', 'quit', 'exit']:
                console.print("[bold red]👋[/bold red] Exiting walkthrough.")
                sys.exit(0)
            else:
                console.print(
                    "[bold red]❌[/bold red] Please enter 'y' for yes, 'n' for no, or 'q' to quit.")
        except KeyboardInterrupt:
            console.print("\n[bold red]👋[/bold red] Walkthrough interrupted. Goodbye!")
            sys.exit(0)
        except EOFError:
            console.print("\n[bold red]👋[/bold red] Input stream ended. Goodbye!")
            sys.exit(0)


def trace(tree_type: TreeType, text: str, order: int = 3, frames: bool = False):
    """Replay command text and print every step log plus the final tree."""
    engine = create_tree(tree_type, order)
    for command_trace in replay(engine, parse_commands(text)):
        console.print(Rule(f"[bold]{command_trace.command}[/bold]"))
        print_steps(console, command_trace.steps, frames=frames)

    console.print(snapshot_tree(engine.snapshot(), title=tree_type.display_name()))
    console.print(f"toArray: {engine.to_array()}")
    return engine


def demonstrate_bst():
    print_step(1, "Binary Search Tree",
               "Each comparison on the way down is its own step")
    engine = trace(TreeType.BST, "50, 30, 70, 20, 40")

    print_info("Deleting 50: both children present, the deeper side supplies the replacement")
    print_steps(console, engine.delete(50))
    console.print(snapshot_tree(engine.snapshot(), title="after delete 50"))
    print_success(f"Root is now {engine.root.value}")


def demonstrate_avl():
    print_step(2, "AVL Tree",
               "Heights and balance factors are rechecked on the way back up")

    table = Table(title="Rotation Cases", box=box.ROUNDED)
    table.add_column("Inserts", style="cyan")
    table.add_column("Case", style="magenta")
    table.add_column("Rotation steps", justify="right", style="green")
    table.add_column("Root", justify="right")

    for text in ("30, 20, 10", "10, 20, 30", "30, 10, 20", "10, 30, 20"):
        engine = create_tree(TreeType.AVL)
        traces = replay(engine, parse_commands(text))
        rotations = [step for step in traces[-1].steps if step.kind == StepKind.ROTATE]
        table.add_row(text, rotations[0].description.split()[0], str(len(rotations)),
                      str(engine.root.value))

    console.print(table)
    console.print()
    trace(TreeType.AVL, "10, 20, 30", frames=True)


def demonstrate_btree():
    print_step(3, "B-Tree (order 3)",
               "Overflowing nodes split and push their middle key up")
    engine = trace(TreeType.BTREE, "1, 2, 3, 4, 5, 6, 7")

    print_info("Deleting the four smallest keys: underfull nodes borrow or merge")
    validator = TreeValidator()
    for value in (1, 2, 3, 4):
        steps = engine.delete(value)
        console.print(Rule(f"[bold]d {value}[/bold]"))
        print_steps(console, steps)
        for step in steps:
            validator.ensure_valid(step.tree_snapshot, TreeType.BTREE, 3, check_fill=False)

    console.print(snapshot_tree(engine.snapshot(), title="after deletes"))
    print_success(f"Every recorded snapshot kept its ordering, final keys {engine.to_array()}")


def demonstrate_bplus_tree():
    print_step(4, "B+ Tree (order 3)",
               "Leaves keep every value; internal nodes keep routing copies")
    engine = trace(TreeType.BPLUS_TREE, "10, 20, 30, 40, 15, d 20")

    leaf = engine.first_leaf()
    groups = []
    while leaf is not None:
        groups.append(leaf.keys)
        leaf = leaf.next
    print_success(f"Leaf chain: {' → '.join(str(keys) for keys in groups)}")


def demonstrate_error_handling():
    print_step(5, "Error Handling", "Invalid input is rejected at the boundary")

    try:
        create_tree(TreeType.BTREE, 2)
    except InvalidOrderError as e:
        print_error(f"{e}")

    try:
        parse_commands("10, 20, twenty")
    except CommandParseError as e:
        print_error(f"{e}")


def demonstrate_exercise():
    print_step(6, "Practice Problem", "A random command list and its expected answer")
    problem = generate_problem(TreeType.BPLUS_TREE, 8, 3)
    console.print(Panel(format_commands(problem.commands), title="Commands"))
    console.print(f"Expected leaves: {problem.answer}")


def main():
    print_header("treetrace walkthrough", "Step-traced BST, AVL, B-tree and B+ tree operations")

    demos = [
        ("binary search tree demo", demonstrate_bst),
        ("AVL demo", demonstrate_avl),
        ("B-tree demo", demonstrate_btree),
        ("B+ tree demo", demonstrate_bplus_tree),
        ("error handling demo", demonstrate_error_handling),
        ("practice problem", demonstrate_exercise),
    ]
    for name, demo in demos:
        if ask_continue(name):
            demo()

    console.print(Rule("[dim]Done[/dim]"))


if __name__ == "__main__":
    main()
