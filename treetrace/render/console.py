"""
Rich console rendering of snapshots and step logs.
"""

from typing import AbstractSet, Iterable, Optional, Union

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from treetrace.core.types import StepKind
from treetrace.primitives import (
    BinarySnapshot,
    MultiwaySnapshot,
    OperationStep,
    TreeSnapshot,
)

HIGHLIGHT_STYLE = "bold white on blue"
OVERFLOW_STYLE = "bold white on red"
LEAF_STYLE = "green"

KIND_STYLES = {
    StepKind.HIGHLIGHT: "cyan",
    StepKind.CREATE: "magenta",
    StepKind.INSERT: "green",
    StepKind.DELETE: "red",
    StepKind.ROTATE: "yellow",
    StepKind.SPLIT: "bright_red",
    StepKind.MERGE: "bright_blue",
    StepKind.COMPLETE: "bold green",
}


def _key_style(key: int, highlighted: AbstractSet[int],
               overflow: AbstractSet[int]) -> Optional[str]:
    if key in overflow:
        return OVERFLOW_STYLE
    if key in highlighted:
        return HIGHLIGHT_STYLE
    return None


def _binary_label(node: BinarySnapshot, highlighted: AbstractSet[int],
                  overflow: AbstractSet[int], prefix: str) -> Text:
    label = Text(prefix)
    label.append(str(node.value), style=_key_style(node.value, highlighted, overflow))
    if node.height is not None:
        label.append(f"  h={node.height} bf={node.balance_factor}", style="dim")
    return label


def _add_binary(parent: Tree, node: Optional[BinarySnapshot], prefix: str,
                highlighted: AbstractSet[int], overflow: AbstractSet[int]) -> None:
    if node is None:
        parent.add(Text(f"{prefix}∅", style="dim"))
        return

    branch = parent.add(_binary_label(node, highlighted, overflow, prefix))
    if not node.is_leaf():
        _add_binary(branch, node.left, "L: ", highlighted, overflow)
        _add_binary(branch, node.right, "R: ", highlighted, overflow)


def _multiway_label(node: MultiwaySnapshot, highlighted: AbstractSet[int],
                    overflow: AbstractSet[int]) -> Text:
    label = Text("[", style=LEAF_STYLE if node.is_leaf else "")
    for i, key in enumerate(node.keys):
        if i:
            label.append(" | ")
        label.append(str(key), style=_key_style(key, highlighted, overflow))
    label.append("]", style=LEAF_STYLE if node.is_leaf else None)
    if node.linked:
        label.append(" →", style=LEAF_STYLE)
    return label


def _add_multiway(parent: Tree, node: MultiwaySnapshot, highlighted: AbstractSet[int],
                  overflow: AbstractSet[int]) -> None:
    branch = parent.add(_multiway_label(node, highlighted, overflow))
    for child in node.children:
        _add_multiway(branch, child, highlighted, overflow)


def snapshot_tree(snapshot: TreeSnapshot, highlighted: Iterable[int] = (),
                  overflow: Iterable[int] = (), title: str = "tree") -> Tree:
    """Build a rich Tree for any snapshot."""
    highlighted = frozenset(highlighted)
    overflow = frozenset(overflow)
    tree = Tree(Text(title, style="bold"), guide_style="dim")

    if snapshot is None:
        tree.add(Text("(empty)", style="dim"))
    elif isinstance(snapshot, BinarySnapshot):
        _add_binary(tree, snapshot, "", highlighted, overflow)
    else:
        _add_multiway(tree, snapshot, highlighted, overflow)
    return tree


def step_table(steps: Iterable[OperationStep], title: str = "") -> Table:
    """Tabulate a step log, one row per step."""
    table = Table(title=title or None, box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind")
    table.add_column("Description")
    table.add_column("Highlighted", style="blue")
    table.add_column("Overflow", style="red")

    for number, step in enumerate(steps, start=1):
        table.add_row(
            str(number),
            Text(step.kind.value, style=KIND_STYLES[step.kind]),
            step.description,
            _format_keys(step.highlighted_keys),
            _format_keys(step.overflow_keys),
        )
    return table


def _format_keys(keys: AbstractSet[int]) -> str:
    return ", ".join(str(key) for key in sorted(keys))


def step_panel(step: OperationStep, number: int, total: int) -> Panel:
    """One playback frame: the description above the snapshot."""
    body = snapshot_tree(step.tree_snapshot, step.highlighted_keys,
                         step.overflow_keys, title=step.description)
    if step.creating_value is not None:
        body.add(Text(f"creating node for {step.creating_value}", style="magenta"))
    return Panel(body,
                 title=f"Step {number}/{total}",
                 subtitle=step.kind.value,
                 border_style=KIND_STYLES[step.kind])


def print_steps(console: Console, steps: Union[list, tuple], frames: bool = False) -> None:
    """Print a step log as a table, or frame by frame."""
    if not frames:
        console.print(step_table(steps))
        return
    for number, step in enumerate(steps, start=1):
        console.print(step_panel(step, number, len(steps)))
