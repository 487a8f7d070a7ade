from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from treetrace.core.types import StepKind
from .snapshot import TreeSnapshot


@dataclass(frozen=True)
class OperationStep:
    """
    One atomic transition recorded while an engine mutates its tree.

    The snapshot is taken at the instant the step is recorded, so a step
    keeps describing the same picture no matter what happens to the tree
    afterwards.
    """
    kind: StepKind
    description: str
    highlighted_keys: FrozenSet[int] = field(default_factory=frozenset)
    overflow_keys: FrozenSet[int] = field(default_factory=frozenset)
    creating_value: Optional[int] = None
    tree_snapshot: TreeSnapshot = None

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.description}"
