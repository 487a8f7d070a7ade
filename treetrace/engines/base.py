from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional

from treetrace.core.types import StepKind
from treetrace.primitives import OperationStep, TreeSnapshot
from treetrace.trace import StepRecorder


class TreeEngine(ABC):
    """
    Abstract base class for the step-traced tree engines.

    An engine owns exactly one root. ``insert`` and ``delete`` mutate it in
    place and return the ordered list of steps taken; the list is never
    touched again by the engine. Duplicate inserts, deletes of absent keys
    and emptying the tree are recorded as steps rather than raised.

    Engines are not thread-safe: callers issue one command at a time.
    """

    def __init__(self):
        self.root = None
        self._recorder = StepRecorder(self.snapshot)
        self._last_steps: List[OperationStep] = []

    # ------------------------------
    # PUBLIC API
    # ------------------------------
    def insert(self, value: int) -> List[OperationStep]:
        """Insert ``value`` and return the steps taken."""
        self._begin(f"Insert {value}", value)
        self._insert(value)
        return self._finish(f"Insert {value} complete")

    def delete(self, value: int) -> List[OperationStep]:
        """Delete ``value`` and return the steps taken."""
        self._begin(f"Delete {value}", value)
        if self.root is None:
            self._record(StepKind.HIGHLIGHT,
                         f"The tree is empty, {value} not found")
        else:
            self._delete(value)
        return self._finish(f"Delete {value} complete")

    @abstractmethod
    def to_array(self) -> List[int]:
        """Ascending readout of every stored value."""
        pass

    @abstractmethod
    def snapshot(self) -> TreeSnapshot:
        """Independent immutable copy of the current tree."""
        pass

    @property
    def steps(self) -> List[OperationStep]:
        """Steps returned by the most recent call."""
        return list(self._last_steps)

    def contains(self, value: int) -> bool:
        return value in self.to_array()

    def is_empty(self) -> bool:
        return self.root is None

    def __contains__(self, value: int) -> bool:
        return self.contains(value)

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_array())

    def __len__(self) -> int:
        return len(self.to_array())

    # ------------------------------
    # HOOKS
    # ------------------------------
    @abstractmethod
    def _insert(self, value: int) -> None:
        pass

    @abstractmethod
    def _delete(self, value: int) -> None:
        """Delete from a non-empty tree."""
        pass

    # ------------------------------
    # STEP RECORDING
    # ------------------------------
    def _begin(self, description: str, value: int) -> None:
        self._recorder.reset()
        self._record(StepKind.HIGHLIGHT, description, highlighted=[value])

    def _finish(self, description: str) -> List[OperationStep]:
        self._record(StepKind.COMPLETE, description)
        self._last_steps = self._recorder.steps
        return self._recorder.steps

    def _record(self, kind: StepKind, description: str,
                highlighted: Iterable[int] = (),
                overflow: Iterable[int] = (),
                creating_value: Optional[int] = None) -> OperationStep:
        return self._recorder.record(kind, description, highlighted,
                                     overflow, creating_value)
