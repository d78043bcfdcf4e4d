"""Timestamp tag for log records."""

from datetime import datetime

# len("[YYYY-MM-DD HH:MM:SS]")
TIMESTAMP_WIDTH = 21


def get_date_string(now=None):
    """Return the current local time as ``[YYYY-MM-DD HH:MM:SS]``.

    Computed fresh on every call; nothing is cached.

    Args:
        now: Optional datetime to format instead of the current time.
    """
    if now is None:
        now = datetime.now()
    return now.strftime("[%Y-%m-%d %H:%M:%S]")
