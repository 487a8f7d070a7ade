"""
Defaults shared by the engines, the exercise generator and the CLI.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


DEFAULT_ORDER = 3
MIN_ORDER = 3

# Exercise generation
DEFAULT_OPERATION_COUNT = 10
MIN_EXERCISE_VALUE = 1
MAX_EXERCISE_VALUE = 100
# Share of commands after the first half that become deletions
DELETE_PROBABILITY = 0.3

DEFAULT_LOG_LEVEL = "WARNING"


def _int_from_env(environ, name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not an integer")
        return default


@dataclass
class Settings:
    """Runtime settings, overridable through the environment."""
    order: int = DEFAULT_ORDER
    log_level: str = DEFAULT_LOG_LEVEL
    operation_count: int = DEFAULT_OPERATION_COUNT

    @classmethod
    def from_env(cls, environ=None) -> 'Settings':
        """
        Build settings from ``TREETRACE_*`` environment variables.

        Validating the order is left to the engine factory.
        """
        environ = os.environ if environ is None else environ
        level = environ.get("TREETRACE_LOG_LEVEL") or DEFAULT_LOG_LEVEL
        return cls(
            order=_int_from_env(environ, "TREETRACE_ORDER", DEFAULT_ORDER),
            log_level=level.upper(),
            operation_count=_int_from_env(
                environ, "TREETRACE_OPERATIONS", DEFAULT_OPERATION_COUNT),
        )
