"""
Value types shared by every engine.

This module contains plain data with no dependencies on the engines,
avoiding circular imports.
"""

from .snapshot import BinarySnapshot, MultiwaySnapshot, TreeSnapshot
from .operation_step import OperationStep
from .command import Command, CommandKind

__all__ = [
    "BinarySnapshot",
    "MultiwaySnapshot",
    "TreeSnapshot",
    "OperationStep",
    "Command",
    "CommandKind",
]
