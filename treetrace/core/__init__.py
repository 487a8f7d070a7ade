from .exceptions import (
    TreeTraceException,
    InvalidOrderError,
    UnknownTreeTypeError,
    CommandParseError,
    TreeInvariantError,
)
from .types import TreeType, StepKind

__all__ = [
    "TreeTraceException",
    "InvalidOrderError",
    "UnknownTreeTypeError",
    "CommandParseError",
    "TreeInvariantError",
    "TreeType",
    "StepKind",
]
