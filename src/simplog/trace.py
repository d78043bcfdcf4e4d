"""
Function tracing decorator.

Routes call/return/raise records through the LogManager singleton at the
VERBOSE level, so tracing follows the same threshold and sinks as every
other record.
"""

import functools
import inspect
from pathlib import Path

from .levels import VERBOSE


def _short_repr(value):
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple, dict, set)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def trace(func):
    """Decorator logging entry, return value and exceptions of `func`.

    Records are written only when the threshold is VERBOSE; otherwise the
    wrapped function runs with a single threshold check of overhead.
    """
    module = inspect.getmodule(func)
    module_name = module.__name__ if module else "unknown"
    qualname = f"{module_name}.{func.__qualname__}"

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        # Lazy import to avoid circular dependency
        from .manager import get_logger

        log = get_logger()
        if log.settings.debug_level < VERBOSE:
            return func(*args, **kwargs)

        parts = [_short_repr(a) for a in args]
        parts.extend(f"{k}={_short_repr(v)}" for k, v in kwargs.items())
        log.write_log(VERBOSE, ">> %s(%s)", qualname, ", ".join(parts))

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            log.write_log(VERBOSE, "!! %s raised %s: %s",
                          qualname, type(e).__name__, e)
            raise

        if result is not None:
            log.write_log(VERBOSE, "<< %s returned %s",
                          qualname, _short_repr(result))
        return result

    return wrapper
