from dataclasses import dataclass, field
from typing import Iterable, List

from treetrace.engines import TreeEngine
from treetrace.primitives import Command, CommandKind, OperationStep


@dataclass
class CommandTrace:
    """The steps one command produced."""
    command: Command
    steps: List[OperationStep] = field(default_factory=list)

    @property
    def final_step(self) -> OperationStep:
        return self.steps[-1]


def apply_command(engine: TreeEngine, command: Command) -> List[OperationStep]:
    if command.kind == CommandKind.INSERT:
        return engine.insert(command.value)
    return engine.delete(command.value)


def replay(engine: TreeEngine, commands: Iterable[Command]) -> List[CommandTrace]:
    """Apply ``commands`` one at a time, keeping every step log."""
    return [CommandTrace(command, apply_command(engine, command)) for command in commands]


def frames(traces: Iterable[CommandTrace]) -> List[OperationStep]:
    """Flatten traces into a single playback sequence."""
    result = []
    for trace in traces:
        result.extend(trace.steps)
    return result
