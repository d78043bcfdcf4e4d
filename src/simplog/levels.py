"""
Severity levels and the level policy.

The emit rule mirrors a verbosity threshold:

    FATAL, ERROR, INFO  →  always shown
    WARN, DEBUG, VERBOSE →  shown when level <= threshold
    LOGGER, STACKTRACE   →  shown when threshold >= DEBUG

Level assignments:
    ←── always ──────────── threshold-gated ───────── internal ──→
    -2     -1     0      1      2      3         4       5
    fatal  error  info   warn   debug  verbose   logger  stacktrace

LOGGER and STACKTRACE are reserved for the library's own diagnostics and
rendered stack traces. Callers never pass them in normal operation.
"""

from dataclasses import dataclass
from typing import Optional

# Always emitted
FATAL = -2         # Program will exit immediately
ERROR = -1         # Program will typically not exit
INFO = 0           # Necessary information regarding program operation

# Gated by the verbosity threshold
WARN = 1           # May not affect normal operation
DEBUG = 2          # Standard debug messages
VERBOSE = 3        # All debug messages

# Internal pseudo-levels, gated by DEBUG
LOGGER = 4         # The logger's own diagnostics
STACKTRACE = 5     # Rendered stack traces

USER_LEVELS = (FATAL, ERROR, INFO, WARN, DEBUG, VERBOSE)

# Levels whose records carry pre-formatted content
UNWRAPPABLE_LEVELS = {LOGGER, STACKTRACE}

RESET = "\033[0m"


@dataclass(frozen=True)
class LevelStyle:
    """How a level is rendered.

    Attributes:
        label: Five-character tag written between timestamp and message
        color: ANSI escape prefix, or None for the neutral reset prefix
        stderr: Whether console output goes to standard error
    """
    label: str
    color: Optional[str] = None
    stderr: bool = False

    @property
    def prefix(self) -> str:
        return self.color or RESET


_STYLES = {
    FATAL:      LevelStyle('FATAL', '\033[1;31m', stderr=True),   # bold red
    ERROR:      LevelStyle('ERROR', '\033[31m', stderr=True),     # red
    INFO:       LevelStyle('INFO '),
    WARN:       LevelStyle('WARN ', '\033[33m'),                  # yellow
    DEBUG:      LevelStyle('DEBUG', '\033[36m'),                  # cyan
    VERBOSE:    LevelStyle('DEBUG', '\033[34m'),                  # blue
    LOGGER:     LevelStyle('LOGGR', '\033[35m'),                  # magenta
    STACKTRACE: LevelStyle('TRACE', '\033[32m'),                  # green
}

_NAMES = {
    'fatal': FATAL,
    'error': ERROR,
    'info': INFO,
    'warn': WARN,
    'warning': WARN,
    'debug': DEBUG,
    'verbose': VERBOSE,
}


def should_emit(level: int, threshold: int) -> bool:
    """Return True if a message at `level` passes `threshold`.

    Unknown levels are never emitted, and never an error.
    """
    if level not in _STYLES:
        return False
    if level <= INFO:
        return True
    if level in UNWRAPPABLE_LEVELS:
        return threshold >= DEBUG
    return level <= threshold


def level_style(level: int, threshold: int) -> Optional[LevelStyle]:
    """Apply the level policy.

    Returns:
        The LevelStyle to render with, or None if the message is dropped.
    """
    if not should_emit(level, threshold):
        return None
    return _STYLES[level]


def is_wrappable(level: int) -> bool:
    return level not in UNWRAPPABLE_LEVELS


def parse_level(value) -> int:
    """Parse a level name ('warn', 'DEBUG') or integer string.

    Raises:
        ValueError: If the value names no known user level.
    """
    if isinstance(value, int):
        level = value
    else:
        text = str(value).strip()
        if text.lower() in _NAMES:
            return _NAMES[text.lower()]
        try:
            level = int(text)
        except ValueError:
            raise ValueError(f"unknown log level: {value!r}") from None
    if level not in USER_LEVELS:
        raise ValueError(f"unknown log level: {value!r}")
    return level
