"""Log levels used by atetm test methods.

Test methods log through the stdlib ``logging`` package. Two levels are added
on top of the stdlib ones:

    TRACE (5): Method trace records, one per lifecycle hook invocation.
    PARAM (15): Per-site judgement records written by the judge.

The test method log level defaults to WARNING, which hides both.

Example:
    >>> import logging
    >>> from atetm_core.levels import PARAM, resolve_level
    >>> logging.getLogger("atetm").log(PARAM, "[%d](%s) : %s", 0, "cont", "PASSED")
    >>> resolve_level("param")
    15
"""

from __future__ import annotations

import logging

from atetm_core.errors import ConfigurationError

TRACE = 5
PARAM = 15
WARNING = logging.WARNING

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PARAM, "PARAM")

_LEVELS: dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "PARAM": PARAM,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(level: str | int) -> int:
    """Resolve a configured log level to its numeric value.

    Args:
        level: Level name (case-insensitive) or numeric level.

    Returns:
        The numeric logging level.

    Raises:
        ConfigurationError: If the level name is not recognized.
    """
    if isinstance(level, bool):
        raise ConfigurationError(f"Invalid log level: {level!r}")
    if isinstance(level, int):
        return level
    try:
        return _LEVELS[level.strip().upper()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown log level {level!r}, expected one of {sorted(_LEVELS)}"
        ) from None
