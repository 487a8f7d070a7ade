from dataclasses import dataclass
from enum import Enum


class CommandKind(Enum):
    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True)
class Command:
    """A single insert/delete request issued against an engine."""
    kind: CommandKind
    value: int

    @classmethod
    def insert(cls, value: int) -> 'Command':
        return cls(CommandKind.INSERT, value)

    @classmethod
    def delete(cls, value: int) -> 'Command':
        return cls(CommandKind.DELETE, value)

    def __str__(self) -> str:
        prefix = "i" if self.kind == CommandKind.INSERT else "d"
        return f"{prefix} {self.value}"
