"""
Line wrapping for long log records.

A record such as

    [2026-01-15 09:30:00]	INFO  : a message that runs well past eighty ...

is broken at the last space or tab before column 80. The overflow continues
on the next line behind WRAP_INDENT (30 spaces + a tab), which lands the
continuation under the message text of the first line.
"""

from typing import List, Optional

WRAP_WIDTH = 80
WRAP_INDENT = " " * 30 + "\t"

_BLANKS = " \t"


def _last_blank(text: str, limit: int) -> int:
    """Index of the last space/tab at or before `limit`, or -1."""
    for i in range(min(limit, len(text) - 1), -1, -1):
        if text[i] in _BLANKS:
            return i
    return -1


def _first_blank(text: str) -> int:
    for i, ch in enumerate(text):
        if ch in _BLANKS:
            return i
    return len(text)


def wrap_line(line: str, max_width: int = WRAP_WIDTH,
              indent: str = WRAP_INDENT) -> List[str]:
    """Split one line into wrapped segments (without trailing newlines).

    The first segment holds up to `max_width` characters; each continuation
    segment is prefixed with `indent` and holds up to
    ``max_width - len(indent)`` characters of content. A word longer than
    the available room is kept whole on its own segment.
    """
    if len(line) <= max_width:
        return [line]

    room = max(max_width - len(indent), 1)
    segments = []
    current = line
    width = max_width
    prefix = ""
    while True:
        if len(current) <= width:
            segments.append(prefix + current)
            break
        cut = _last_blank(current, width)
        if cut <= 0:
            # No break point: the whole word goes on this segment
            cut = _first_blank(current)
        head = current[:cut].rstrip(_BLANKS)
        rest = current[cut:].lstrip(_BLANKS)
        if head:
            segments.append(prefix + head)
            width = room
            prefix = indent
        if not rest:
            break
        current = rest
    return segments


def wrap_text(text: str, max_width: int = WRAP_WIDTH,
              indent: str = WRAP_INDENT, limit: Optional[int] = None) -> str:
    """Reflow `text` so no line exceeds `max_width` columns.

    Lines already within the width are left untouched, so wrapping is
    idempotent on short input. The result always ends with exactly one
    newline.

    Args:
        text: One or more newline-separated lines
        max_width: Column limit per output line
        indent: Prefix for continuation lines
        limit: Optional ceiling on the total length of the result. Output
            stops at the last whole line that fits.

    Returns:
        The wrapped text.
    """
    body = text.rstrip("\n")
    lines = []
    for line in body.split("\n"):
        lines.extend(wrap_line(line, max_width, indent))

    if limit is None:
        return "\n".join(lines) + "\n"

    out = ""
    for line in lines:
        if len(out) + len(line) + 1 > limit:
            break
        out += line + "\n"
    if not out and limit > 0:
        out = lines[0][:limit - 1] + "\n"
    return out
