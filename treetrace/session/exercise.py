"""
Practice problems: a random command sequence plus its expected answer.

Answers are plain strings so they can be compared with what a learner
types in:

- BST / AVL: ``"height,root,leftCount,rightCount#leaf,leaf,..."``, or
  ``"0,null,0,0#"`` for an empty tree
- B-tree / B+ tree: leaf key groups, ``"{10},{30,40}"``, or ``""`` for an
  empty tree
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from treetrace.config import (
    DEFAULT_OPERATION_COUNT,
    DEFAULT_ORDER,
    DELETE_PROBABILITY,
    MAX_EXERCISE_VALUE,
    MIN_EXERCISE_VALUE,
)
from treetrace.core.types import TreeType
from treetrace.engines import create_tree
from treetrace.primitives import BinarySnapshot, Command, MultiwaySnapshot

from .replay import replay

EMPTY_BINARY_ANSWER = "0,null,0,0#"


@dataclass
class Problem:
    commands: List[Command]
    tree_type: TreeType
    order: Optional[int]
    answer: str


def generate_commands(operation_count: int = DEFAULT_OPERATION_COUNT,
                      rng: Optional[random.Random] = None) -> List[Command]:
    """
    Random insert/delete sequence over distinct values.

    The first half is always inserts; afterwards each command is a delete
    of a present value with probability DELETE_PROBABILITY.
    """
    rng = rng or random.Random()
    value_range = MAX_EXERCISE_VALUE - MIN_EXERCISE_VALUE + 1
    present: List[int] = []
    commands: List[Command] = []

    for i in range(operation_count):
        wants_insert = i < operation_count / 2 or rng.random() > DELETE_PROBABILITY
        can_insert = len(present) < value_range

        if present and (not wants_insert or not can_insert):
            value = rng.choice(present)
            present.remove(value)
            commands.append(Command.delete(value))
            continue

        value = rng.randint(MIN_EXERCISE_VALUE, MAX_EXERCISE_VALUE)
        while value in present:
            value = rng.randint(MIN_EXERCISE_VALUE, MAX_EXERCISE_VALUE)
        present.append(value)
        commands.append(Command.insert(value))

    return commands


def generate_problem(tree_type: Union[TreeType, str],
                     operation_count: int = DEFAULT_OPERATION_COUNT,
                     order: int = DEFAULT_ORDER,
                     rng: Optional[random.Random] = None) -> Problem:
    tree_type = TreeType.parse(tree_type)
    commands = generate_commands(operation_count, rng)
    return Problem(
        commands=commands,
        tree_type=tree_type,
        order=order if tree_type.is_multiway() else None,
        answer=compute_answer(commands, tree_type, order),
    )


def compute_answer(commands: Sequence[Command], tree_type: Union[TreeType, str],
                   order: int = DEFAULT_ORDER) -> str:
    """Replay ``commands`` on a fresh tree and describe the result."""
    engine = create_tree(tree_type, order)
    replay(engine, commands)
    snapshot = engine.snapshot()

    if snapshot is None:
        return "" if TreeType.parse(tree_type).is_multiway() else EMPTY_BINARY_ANSWER
    if isinstance(snapshot, BinarySnapshot):
        return binary_answer(snapshot)
    return multiway_answer(snapshot)


def binary_answer(snapshot: BinarySnapshot) -> str:
    left_count = snapshot.left.count() if snapshot.left is not None else 0
    right_count = snapshot.right.count() if snapshot.right is not None else 0
    summary = f"{snapshot.height_of()},{snapshot.value},{left_count},{right_count}"
    leaves = ",".join(str(value) for value in snapshot.leaf_values())
    return f"{summary}#{leaves}"


def multiway_answer(snapshot: MultiwaySnapshot) -> str:
    groups = snapshot.leaf_keys()
    return ",".join("{" + ",".join(str(key) for key in keys) + "}" for keys in groups)


def check_answer(problem: Problem, submitted: str) -> bool:
    """Compare ignoring whitespace."""
    return "".join(submitted.split()) == "".join(problem.answer.split())
