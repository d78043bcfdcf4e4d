"""
Call-stack capture and symbolization.

Two symbolizers resolve captured frames into readable text:

    SourceSymbolizer     — ``function (file:line)``, needs reachable source
    BacktraceSymbolizer  — ``module(function+0xOFFSET) [0xADDR]``, always works

The source symbolizer is tried first. When it is unavailable, or every frame
resolves to the unknown marker (frozen apps, ``python -c``, stripped
installs), the standard backtrace is used instead. The choice is made at
runtime on every capture.
"""

import inspect
import linecache
import os
from typing import List, Optional, Sequence, Tuple

from .wrap import WRAP_INDENT

MAX_FRAMES = 15
UNKNOWN = "??"
TRUNCATED_MARKER = "[backtrace truncated]"
TRACE_HEADER = "Stack trace:"
TRACE_INDENT = WRAP_INDENT


def capture_frames(max_frames: int = MAX_FRAMES, skip: int = 0) -> list:
    """Capture up to `max_frames` frames, most recent first.

    The frame of this function is never included; `skip` drops that many
    additional frames (the callers inside the library).

    Returns:
        A list of frame objects, empty when the interpreter offers no
        frame support.
    """
    frame = inspect.currentframe()
    if frame is None:
        return []
    try:
        frame = frame.f_back
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back
        frames = []
        while frame is not None and len(frames) < max_frames:
            frames.append(frame)
            frame = frame.f_back
        return frames
    finally:
        del frame


class Symbolizer:
    """Resolves frames into one description string each."""

    name = "symbolizer"

    def available(self) -> bool:
        return True

    def resolve(self, frames: Sequence) -> Optional[List[str]]:
        """Return one entry per frame, or None if this variant gave up."""
        raise NotImplementedError


class SourceSymbolizer(Symbolizer):
    """Resolve frames to ``function (file:line)`` using source files."""

    name = "source"

    def available(self) -> bool:
        # Installs shipped without .py sources cannot resolve lines
        return bool(linecache.getline(__file__, 1))

    def describe(self, frame) -> str:
        code = frame.f_code
        filename = code.co_filename
        lineno = frame.f_lineno
        if not filename or filename.startswith("<"):
            return UNKNOWN
        if not (os.path.exists(filename)
                or linecache.getline(filename, lineno, frame.f_globals)):
            return UNKNOWN
        return f"{code.co_name} ({filename}:{lineno})"

    def resolve(self, frames):
        entries = [self.describe(f) for f in frames]
        if not entries or all(e == UNKNOWN for e in entries):
            return None
        return entries


class BacktraceSymbolizer(Symbolizer):
    """Standard backtrace: nearest symbol plus offset, no file or line."""

    name = "standard backtrace"

    def describe(self, frame) -> str:
        code = frame.f_code
        module = frame.f_globals.get("__name__", UNKNOWN)
        return f"{module}({code.co_name}+0x{frame.f_lasti:x}) [0x{id(code):x}]"

    def resolve(self, frames):
        return [self.describe(f) for f in frames]


SYMBOLIZERS = (SourceSymbolizer(), BacktraceSymbolizer())


def resolve_frames(frames: Sequence,
                   symbolizers: Sequence[Symbolizer] = SYMBOLIZERS
                   ) -> Tuple[List[str], Optional[Symbolizer]]:
    """Resolve frames with the first symbolizer that succeeds.

    Returns:
        (entries, symbolizer used). The symbolizer is None only when no
        variant produced output.
    """
    for symbolizer in symbolizers:
        if not symbolizer.available():
            continue
        entries = symbolizer.resolve(frames)
        if entries is not None:
            return entries, symbolizer
    return [], None


def format_trace(entries: Sequence[str], capacity: int) -> str:
    """Join frame entries under a header, one indented line each.

    Frames that would push the text past `capacity` bytes are dropped.
    Room for TRUNCATED_MARKER is kept while frames remain, so a cut trace
    always ends with it unless the header alone leaves no room.
    """
    marker = "\n" + TRACE_INDENT + TRUNCATED_MARKER
    text = TRACE_HEADER
    used = _size(text)
    for i, entry in enumerate(entries):
        piece = "\n" + TRACE_INDENT + entry
        last = i == len(entries) - 1
        reserve = 0 if last else _size(marker)
        if used + _size(piece) + reserve > capacity:
            if used + _size(marker) <= capacity:
                text += marker
            break
        text += piece
        used += _size(piece)
    return text


def _size(text: str) -> int:
    return len(text.encode("utf-8"))
