"""
Process-wide logger settings.

One Settings instance is owned by the LogManager singleton and read on every
dispatch. Setters on the manager validate before assigning here; the
dataclass itself only stores values.
"""

from dataclasses import dataclass, replace

from .levels import INFO, DEBUG, VERBOSE

DEFAULT_DEBUG_LEVEL = DEBUG
DEFAULT_LOG_FILE = "default.log"
DEFAULT_MESSAGE_CAPACITY = 4096     # bytes of rendered user text
MAX_PATH_LENGTH = 4096


@dataclass
class Settings:
    """Configuration consumed by the dispatcher.

    Attributes:
        debug_level: Verbosity threshold, INFO..VERBOSE
        log_file: Destination path of the file sink
        silent: Skip console sinks (the file sink is never skipped)
        wrap: Reflow wrappable records to 80 columns
        color: Bracket console records with ANSI color escapes
        message_capacity: Render ceiling for user text, in UTF-8 bytes
    """
    debug_level: int = DEFAULT_DEBUG_LEVEL
    log_file: str = DEFAULT_LOG_FILE
    silent: bool = False
    wrap: bool = False
    color: bool = True
    message_capacity: int = DEFAULT_MESSAGE_CAPACITY

    def copy(self) -> "Settings":
        return replace(self)


def is_valid_debug_level(level) -> bool:
    """True for integers in INFO..VERBOSE (bools are rejected)."""
    return (isinstance(level, int) and not isinstance(level, bool)
            and INFO <= level <= VERBOSE)
