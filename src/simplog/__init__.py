"""
simplog — leveled logging to a file and the console.

Records are timestamped, filtered by a verbosity threshold, appended to a
log file and echoed to stdout (stderr for FATAL/ERROR) with ANSI colors.

Public API:
    write_log            — write one record at a level
    write_stack_trace    — log the caller's stack
    set_log_debug_level  — verbosity threshold (0..3)
    set_log_file         — destination file
    set_log_silent_mode  — file only, no console
    set_line_wrap        — wrap records at 80 columns
    set_log_color        — ANSI colors on the console
    flush_log            — empty the log file
    load_config          — apply a key=value config file
    get_settings         — copy of the active settings
    LogManager           — the dispatcher behind the functions above
    init_logger          — singleton initialization
    get_logger           — access singleton
    trace                — function tracing decorator
    FATAL, ERROR, INFO, WARN, DEBUG, VERBOSE — levels
"""

from ._version import __version__, __app_name__
from .levels import FATAL, ERROR, INFO, WARN, DEBUG, VERBOSE
from .manager import (
    LogManager, init_logger, get_logger,
    write_log, write_stack_trace,
    set_log_debug_level, set_log_file, set_log_silent_mode,
    set_line_wrap, set_log_color,
    flush_log, load_config, get_settings,
)
from .settings import Settings
from .trace import trace

__all__ = [
    '__version__', '__app_name__',
    'FATAL', 'ERROR', 'INFO', 'WARN', 'DEBUG', 'VERBOSE',
    'LogManager', 'init_logger', 'get_logger',
    'write_log', 'write_stack_trace',
    'set_log_debug_level', 'set_log_file', 'set_log_silent_mode',
    'set_line_wrap', 'set_log_color',
    'flush_log', 'load_config', 'get_settings',
    'Settings',
    'trace',
]
