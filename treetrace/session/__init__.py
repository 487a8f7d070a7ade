from .commands import parse_command, parse_commands, format_commands
from .replay import CommandTrace, apply_command, replay, frames
from .exercise import (
    Problem,
    generate_commands,
    generate_problem,
    compute_answer,
    check_answer,
)

__all__ = [
    "parse_command",
    "parse_commands",
    "format_commands",
    "CommandTrace",
    "apply_command",
    "replay",
    "frames",
    "Problem",
    "generate_commands",
    "generate_problem",
    "compute_answer",
    "check_answer",
]
