"""
LogManager — the simplog dispatch core.

Every write_log() call runs the whole pipeline synchronously:

    render fmt % args  →  level policy  →  timestamp + label
        →  errno line (FATAL/ERROR)  →  wrap  →  file sink  →  console sink
        →  truncation notice

The file sink is opened in append mode, written once and closed on every
call, so nothing is left buffered if the host process dies. The console sink
is stderr for FATAL/ERROR and stdout for everything else, bracketed with ANSI
colors unless color is off, and skipped entirely in silent mode.

Nothing here raises into the caller. Configuration mistakes fall back to a
safe default and are reported at the LOGGER level; sink failures show up only
in the boolean return value. The one deliberate exception is flush_log(),
which exits the process when it cannot remove the old log file.

A module-level singleton carries the process-wide settings; the public
functions at the bottom of this module delegate to it.
"""

import os
import sys
import threading
from collections.abc import Mapping
from typing import Optional

from .clock import TIMESTAMP_WIDTH, get_date_string
from .config import APPLY_ORDER, parse_config, read_config
from .levels import (
    DEBUG, ERROR, FATAL, INFO, LOGGER, STACKTRACE, VERBOSE, WARN, RESET,
    is_wrappable, level_style, should_emit,
)
from .settings import (
    DEFAULT_DEBUG_LEVEL, DEFAULT_LOG_FILE, MAX_PATH_LENGTH, Settings,
    is_valid_debug_level,
)
from .stacktrace import MAX_FRAMES, capture_frames, format_trace, resolve_frames
from .wrap import WRAP_INDENT, WRAP_WIDTH, wrap_text

ERRNO_INDENT = " " * TIMESTAMP_WIDTH + "\t"

DEBUG_LEVEL_USAGE = (
    "Invalid debug level of '%s'. Setting to default value of '%d'\n"
    + WRAP_INDENT + "Valid Debug Levels:\n"
    + WRAP_INDENT + "0  : Info\n"
    + WRAP_INDENT + "1  : Warnings\n"
    + WRAP_INDENT + "2  : Debug\n"
    + WRAP_INDENT + "3  : Debug-Verbose"
)


class LogManager:
    """Formats records and writes them to the file and console sinks.

    Usage::

        log = LogManager(Settings(log_file="app.log", debug_level=DEBUG))
        log.write_log(INFO, "Started %s with %d workers", name, count)
        log.write_stack_trace()

    One RLock serializes dispatch and settings changes. It is reentrant
    because setters and truncation notices dispatch diagnostics while
    already holding it.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else Settings()
        self._lock = threading.RLock()
        requested = self.settings.log_file
        self.settings.log_file = DEFAULT_LOG_FILE
        self.set_log_file(requested)
        if not is_valid_debug_level(self.settings.debug_level):
            self.set_log_debug_level(self.settings.debug_level)

    # -- dispatch ----------------------------------------------------------

    def write_log(self, level: int, fmt: str, *args) -> bool:
        """Write one record at `level`.

        Args:
            level: Severity level (FATAL..VERBOSE)
            fmt: printf-style format string, %-formatted only when args
                are given
            *args: Values for the format string. A single mapping is used
                for %(name)s style formats.

        Returns:
            True if every attempted sink write succeeded (including when
            the level policy drops the message), False otherwise.
        """
        # Snapshot the errno-equivalent before anything can replace it
        active = sys.exc_info()[1]
        with self._lock:
            return self._dispatch(level, fmt, args, active)

    def _dispatch(self, level, fmt, args, active, report=True):
        text, lost, format_error = self._render(fmt, args)

        style = level_style(level, self.settings.debug_level)
        if style is None:
            return True

        record = f"{get_date_string()}\t{style.label} : {text}\n"
        if level < INFO:
            record += self._errno_line(active)

        if self.settings.wrap and is_wrappable(level):
            if any(len(line) > WRAP_WIDTH for line in record.split("\n")):
                record = wrap_text(record, WRAP_WIDTH)

        ok = self._write_file(record)
        if not self.settings.silent:
            ok = self._write_console(record, style) and ok

        if report:
            if format_error is not None:
                self._diagnostic("Unable to format previous message: %s",
                                 format_error)
            if lost > 0:
                self._diagnostic("Previous message truncated by %d bytes", lost)
        return ok

    def _diagnostic(self, fmt, *args):
        """Log at the LOGGER level without errno or further notices."""
        return self._dispatch(LOGGER, fmt, args, None, report=False)

    def _render(self, fmt, args):
        """Render the user text and cut it at the message capacity.

        Returns:
            (text, bytes lost, formatting error or None)
        """
        format_error = None
        if args:
            if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
                args = args[0]
            try:
                text = fmt % args
            except (TypeError, ValueError, KeyError) as e:
                text = f"{fmt} {args!r}"
                format_error = e
        else:
            text = str(fmt)

        data = text.encode("utf-8", errors="replace")
        lost = len(data) - self.settings.message_capacity
        if lost <= 0:
            return text, 0, format_error
        # errors="ignore" drops a multi-byte character split by the cut
        text = data[:self.settings.message_capacity].decode(
            "utf-8", errors="ignore")
        return text, lost, format_error

    @staticmethod
    def _errno_line(active) -> str:
        if isinstance(active, OSError) and active.errno:
            return f"{ERRNO_INDENT}errno : {os.strerror(active.errno)}\n"
        return ""

    def _write_file(self, record: str) -> bool:
        try:
            with open(self.settings.log_file, "a", encoding="utf-8") as f:
                f.write(record)
        except OSError:
            return False
        return True

    def _write_console(self, record: str, style) -> bool:
        stream = sys.stderr if style.stderr else sys.stdout
        if stream is None:
            return False
        if self.settings.color:
            record = style.prefix + record + RESET
        try:
            stream.write(record)
            stream.flush()
        except (OSError, ValueError):
            return False
        return True

    def write_stack_trace(self, max_frames: int = MAX_FRAMES,
                          skip: int = 0) -> bool:
        """Log the caller's stack at the STACKTRACE level.

        The record is never wrapped. When source lookup is not possible
        the standard backtrace is used and a LOGGER diagnostic says so.

        Args:
            max_frames: Maximum number of frames to include
            skip: Extra caller frames to leave out (wrappers)
        """
        with self._lock:
            if not should_emit(STACKTRACE, self.settings.debug_level):
                return True
            frames = capture_frames(max_frames, skip=skip + 1)
            try:
                entries, symbolizer = resolve_frames(frames)
            finally:
                del frames

            if symbolizer is None:
                self._diagnostic("Unable to capture stack trace")
                return False
            if symbolizer.name != "source":
                self._diagnostic("Source lookup unavailable, using %s",
                                 symbolizer.name)
            text = format_trace(entries, self.settings.message_capacity)
            return self._dispatch(STACKTRACE, "%s", (text,), None)

    # -- level shortcuts ---------------------------------------------------

    def fatal(self, fmt, *args):
        return self.write_log(FATAL, fmt, *args)

    def error(self, fmt, *args):
        return self.write_log(ERROR, fmt, *args)

    def info(self, fmt, *args):
        return self.write_log(INFO, fmt, *args)

    def warn(self, fmt, *args):
        return self.write_log(WARN, fmt, *args)

    def debug(self, fmt, *args):
        return self.write_log(DEBUG, fmt, *args)

    def verbose(self, fmt, *args):
        return self.write_log(VERBOSE, fmt, *args)

    # -- settings ----------------------------------------------------------

    def set_log_debug_level(self, level) -> None:
        """Set the verbosity threshold (0..3).

        Out-of-range values reset the threshold to the default and log the
        valid levels at the LOGGER level.
        """
        with self._lock:
            if is_valid_debug_level(level):
                self.settings.debug_level = level
                return
            self.settings.debug_level = DEFAULT_DEBUG_LEVEL
            self._diagnostic(DEBUG_LEVEL_USAGE, level, DEFAULT_DEBUG_LEVEL)

    def set_log_file(self, path) -> None:
        """Set the file sink path.

        Non-path values and paths longer than MAX_PATH_LENGTH are reported
        at the LOGGER level and the current path is kept.
        """
        with self._lock:
            try:
                path = os.fspath(path)
            except TypeError:
                self._diagnostic("Invalid log file path %r, keeping '%s'",
                                 path, self.settings.log_file)
                return
            if len(path) > MAX_PATH_LENGTH:
                self._diagnostic(
                    "Log file path of %d characters exceeds %d, keeping '%s'",
                    len(path), MAX_PATH_LENGTH, self.settings.log_file)
                return
            self.settings.log_file = path

    def set_log_silent_mode(self, silent: bool) -> None:
        with self._lock:
            self.settings.silent = bool(silent)
            self._diagnostic("Silent mode %s",
                             "enabled" if silent else "disabled")

    def set_line_wrap(self, wrap: bool) -> None:
        with self._lock:
            self.settings.wrap = bool(wrap)

    def set_log_color(self, color: bool) -> None:
        with self._lock:
            self.settings.color = bool(color)

    def flush_log(self) -> bool:
        """Delete the log file and recreate it empty.

        Exits the process with status 1 if an existing file cannot be
        removed. A missing file is reported on the console and created.

        Returns:
            True if the empty file was created.
        """
        with self._lock:
            path = self.settings.log_file
            if os.path.exists(path):
                try:
                    os.remove(path)
                except OSError as e:
                    print(f"ERROR: Unable to flush logfile!: {e.strerror}",
                          file=sys.stderr)
                    sys.exit(1)
            elif not self.settings.silent:
                print(f"{get_date_string()}\tERROR : Logfile '{path}' does not "
                      f"exist. It will be created now.", flush=True)

            try:
                open(path, "w").close()
            except OSError as e:
                self._diagnostic("Unable to create logfile '%s': %s",
                                 path, e.strerror)
                return False
            return True

    def load_config(self, path) -> bool:
        """Load settings from a ``key=value`` file.

        Values are applied as logfile, flush, silent, wrap, color, debug.
        An unreadable file is reported at the LOGGER level and ignored;
        bad lines are reported after the readable ones are applied.

        Returns:
            True if the file was read.
        """
        with self._lock:
            try:
                text = read_config(path)
            except (OSError, UnicodeDecodeError) as e:
                self._diagnostic("Unable to read config file '%s': %s",
                                 os.fspath(path), getattr(e, "strerror", None) or e)
                return False

            result = parse_config(text)
            self.apply_config(result.values)
            for problem in result.problems:
                self._diagnostic("Config file '%s', %s", os.fspath(path), problem)
            return True

    def apply_config(self, values) -> None:
        """Apply parsed config values in the fixed load order."""
        setters = {
            "logfile": self.set_log_file,
            "flush": lambda flush: flush and self.flush_log(),
            "silent": self.set_log_silent_mode,
            "wrap": self.set_line_wrap,
            "color": self.set_log_color,
            "debug": self.set_log_debug_level,
        }
        with self._lock:
            for key in APPLY_ORDER:
                if key in values:
                    setters[key](values[key])


# =============================================================================
# Module-level singleton
# =============================================================================

_manager: Optional[LogManager] = None


def init_logger(**settings) -> LogManager:
    """Replace the module-level LogManager with one built from `settings`.

    Args:
        **settings: Settings fields (debug_level, log_file, silent, wrap,
            color, message_capacity)

    Returns:
        The new LogManager instance
    """
    global _manager
    _manager = LogManager(Settings(**settings))
    return _manager


def get_logger() -> LogManager:
    """Get the module-level LogManager, creating a default if needed."""
    global _manager
    if _manager is None:
        _manager = LogManager()
    return _manager


def write_log(level: int, fmt: str, *args) -> bool:
    return get_logger().write_log(level, fmt, *args)


def write_stack_trace(max_frames: int = MAX_FRAMES) -> bool:
    return get_logger().write_stack_trace(max_frames, skip=1)


def set_log_debug_level(level) -> None:
    get_logger().set_log_debug_level(level)


def set_log_file(path) -> None:
    get_logger().set_log_file(path)


def set_log_silent_mode(silent: bool) -> None:
    get_logger().set_log_silent_mode(silent)


def set_line_wrap(wrap: bool) -> None:
    get_logger().set_line_wrap(wrap)


def set_log_color(color: bool) -> None:
    get_logger().set_log_color(color)


def flush_log() -> bool:
    return get_logger().flush_log()


def load_config(path) -> bool:
    return get_logger().load_config(path)


def get_settings() -> Settings:
    """Return a copy of the active settings."""
    return get_logger().settings.copy()
