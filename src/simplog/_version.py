"""
Version information for simplog.

This file is the canonical source for version numbers. The CLI reads its
--version string from here; setup.py repeats the pip version and must be
bumped with it.
"""

MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = None  # None, "alpha", "beta", "rc1", ...

__app_name__ = "simplog"


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_pip_version():
    """Return the PEP 440 form: 0.3.0, 0.3.0a0, 0.3.0b0, 0.3.0rc1."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    phase_map = {"alpha": "a0", "beta": "b0"}
    if PHASE:
        base += phase_map.get(PHASE, PHASE)
    return base


__version__ = get_pip_version()
VERSION = get_base_version()
