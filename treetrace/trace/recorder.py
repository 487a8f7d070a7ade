from typing import Callable, Iterable, List, Optional

from treetrace.core.types import StepKind
from treetrace.primitives import OperationStep, TreeSnapshot


class StepRecorder:
    """
    Append-only log of the steps taken by one ``insert``/``delete`` call.

    The owning engine supplies ``snapshot_source``; every recorded step
    embeds whatever it returns at that instant.

    Descriptions can be deferred: a deferred description is not recorded on
    its own but is prepended to the next recorded step, together with its
    highlighted keys. Engines use this to fold a transient state into the
    step that resolves it.
    """

    def __init__(self, snapshot_source: Callable[[], TreeSnapshot]):
        self._snapshot_source = snapshot_source
        self._steps: List[OperationStep] = []
        self._deferred: List[str] = []
        self._deferred_keys: set = set()

    def reset(self) -> None:
        """Start a fresh log. Steps handed out earlier are unaffected."""
        self._steps = []
        self._deferred = []
        self._deferred_keys = set()

    def record(self, kind: StepKind, description: str,
               highlighted: Iterable[int] = (),
               overflow: Iterable[int] = (),
               creating_value: Optional[int] = None) -> OperationStep:
        highlighted_keys = set(highlighted)
        if self._deferred:
            description = "; ".join(self._deferred + [description])
            highlighted_keys |= self._deferred_keys
            self._deferred = []
            self._deferred_keys = set()

        step = OperationStep(
            kind=kind,
            description=description,
            highlighted_keys=frozenset(highlighted_keys),
            overflow_keys=frozenset(overflow),
            creating_value=creating_value,
            tree_snapshot=self._snapshot_source(),
        )
        self._steps.append(step)
        return step

    def defer(self, description: str, highlighted: Iterable[int] = ()) -> None:
        self._deferred.append(description)
        self._deferred_keys.update(highlighted)

    def has_deferred(self) -> bool:
        return bool(self._deferred)

    @property
    def steps(self) -> List[OperationStep]:
        return list(self._steps)

    def __len__(self) -> int:
        return len(self._steps)
