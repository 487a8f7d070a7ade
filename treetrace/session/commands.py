"""
Parsing of bulk command text such as ``"d 45, i 30, 20"``.

Commands are separated by commas or newlines. ``i <n>`` inserts, ``d <n>``
deletes, and a bare number is an insert.
"""

import re
from typing import List

from treetrace.core.exceptions import CommandParseError
from treetrace.primitives import Command, CommandKind

_SEPARATOR = re.compile(r"[,\n]")
_PREFIXED = re.compile(r"^(i|d|insert|delete)\s+(-?\d+)$", re.IGNORECASE)
_BARE = re.compile(r"^(-?\d+)$")


def parse_command(token: str, position: int = 0) -> Command:
    """Parse a single command token."""
    text = token.strip()

    match = _PREFIXED.match(text)
    if match:
        kind = CommandKind.INSERT if match.group(1)[0].lower() == "i" else CommandKind.DELETE
        return Command(kind, int(match.group(2)))

    match = _BARE.match(text)
    if match:
        return Command.insert(int(match.group(1)))

    raise CommandParseError(text, position)


def parse_commands(text: str) -> List[Command]:
    """
    Parse bulk command text.

    Empty entries (for example a trailing comma) are skipped.

    Raises:
        CommandParseError: On the first token that is not a command
    """
    commands = []
    for position, token in enumerate(_SEPARATOR.split(text)):
        if not token.strip():
            continue
        commands.append(parse_command(token, position))
    return commands


def format_commands(commands: List[Command]) -> str:
    """Inverse of ``parse_commands``."""
    return ", ".join(str(command) for command in commands)
