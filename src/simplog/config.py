"""Config-file parsing for simplog.

The format is one ``key=value`` per line:

    # comments and blank lines are ignored
    logfile=app.log
    flush=true
    silent=false
    wrap=true
    debug=3

Parsing never raises. Problems are collected on the result so the manager
can report them through its own diagnostic level and carry on.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

BOOL_KEYS = ("silent", "wrap", "flush", "color")
INT_KEYS = ("debug",)
STR_KEYS = ("logfile",)
KNOWN_KEYS = BOOL_KEYS + INT_KEYS + STR_KEYS

# Order in which loaded values are applied
APPLY_ORDER = ("logfile", "flush", "silent", "wrap", "color", "debug")


@dataclass
class ConfigResult:
    """Parsed config values plus any per-line problems."""
    values: Dict[str, Any] = field(default_factory=dict)
    problems: List[str] = field(default_factory=list)


def read_config(path):
    """Read the whole config file.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(path, encoding="utf-8") as f:
        return f.read()


def _parse_bool(value):
    if value == "true":
        return True
    if value == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', got {value!r}")


def parse_config(text):
    """Parse ``key=value`` lines into a ConfigResult.

    Later lines win when a key repeats. Booleans must be literally
    ``true`` or ``false``; ``debug`` must be a decimal integer.
    """
    result = ConfigResult()
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            result.problems.append(f"line {lineno}: missing '=' in {line!r}")
            continue
        key, value = line.split("=", 1)
        key = key.strip().lower()
        value = value.strip()

        if key not in KNOWN_KEYS:
            result.problems.append(f"line {lineno}: unknown key {key!r}")
            continue
        try:
            if key in BOOL_KEYS:
                result.values[key] = _parse_bool(value)
            elif key in INT_KEYS:
                result.values[key] = int(value, 10)
            elif not value:
                raise ValueError("empty value")
            else:
                result.values[key] = value
        except ValueError as e:
            result.problems.append(f"line {lineno}: bad value for {key!r}: {e}")
    return result
