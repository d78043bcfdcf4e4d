"""Tests for simplog.stacktrace and write_stack_trace()."""

from simplog import write_stack_trace
from simplog import stacktrace as st
from simplog.levels import INFO, WARN
from simplog.stacktrace import (
    TRACE_HEADER, TRACE_INDENT, TRUNCATED_MARKER, UNKNOWN,
    BacktraceSymbolizer, SourceSymbolizer, capture_frames, format_trace,
    resolve_frames,
)


def _inner(**kwargs):
    return capture_frames(**kwargs)


def _outer(**kwargs):
    return _inner(**kwargs)


class _GiveUp(st.Symbolizer):
    name = "broken"

    def resolve(self, frames):
        return None


class _Unavailable(st.Symbolizer):
    name = "missing"

    def available(self):
        return False

    def resolve(self, frames):
        raise AssertionError("must not be called")


# =============================================================================
# Capture
# =============================================================================

class TestCaptureFrames:
    def test_most_recent_first_excluding_capture(self):
        frames = _outer()
        names = [f.f_code.co_name for f in frames[:3]]
        assert names == ["_inner", "_outer", "test_most_recent_first_excluding_capture"]

    def test_skip_drops_callers(self):
        frames = _outer(skip=1)
        assert frames[0].f_code.co_name == "_outer"

    def test_max_frames(self):
        assert len(_outer(max_frames=2)) == 2

    def test_default_limit(self):
        assert len(capture_frames()) <= st.MAX_FRAMES


# =============================================================================
# Symbolizers
# =============================================================================

class TestSourceSymbolizer:
    def test_function_file_line(self):
        frames = _outer(max_frames=1)
        entries = SourceSymbolizer().resolve(frames)
        assert entries[0].startswith("_inner (")
        assert __file__ in entries[0]
        assert entries[0].endswith(")")

    def test_unknown_source_marked(self):
        namespace = {}
        exec("def probe():\n    return capture_frames(max_frames=1)\n",
             {"capture_frames": capture_frames}, namespace)
        frames = namespace["probe"]()
        assert SourceSymbolizer().describe(frames[0]) == UNKNOWN

    def test_gives_up_when_all_unknown(self):
        namespace = {}
        exec("def probe():\n    return capture_frames(max_frames=1)\n",
             {"capture_frames": capture_frames}, namespace)
        frames = namespace["probe"]()
        assert SourceSymbolizer().resolve(frames) is None

    def test_available_with_sources(self):
        assert SourceSymbolizer().available() is True


class TestBacktraceSymbolizer:
    def test_raw_entry_shape(self):
        frames = _outer(max_frames=1)
        entry = BacktraceSymbolizer().resolve(frames)[0]
        assert entry.startswith(f"{__name__}(_inner+0x")
        assert "[0x" in entry
        assert ".py" not in entry


class TestResolveFrames:
    def test_primary_used_when_it_works(self):
        entries, used = resolve_frames(_outer(max_frames=2))
        assert used.name == "source"
        assert len(entries) == 2

    def test_fallback_when_primary_gives_up(self):
        entries, used = resolve_frames(
            _outer(max_frames=2), (_GiveUp(), BacktraceSymbolizer()))
        assert used.name == "standard backtrace"
        assert len(entries) == 2

    def test_unavailable_skipped(self):
        _, used = resolve_frames(
            _outer(max_frames=1), (_Unavailable(), BacktraceSymbolizer()))
        assert used.name == "standard backtrace"

    def test_nothing_works(self):
        assert resolve_frames(_outer(), (_GiveUp(),)) == ([], None)


# =============================================================================
# Formatting
# =============================================================================

class TestFormatTrace:
    def test_header_and_indented_frames(self):
        text = format_trace(["a (x.py:1)", "b (y.py:2)"], capacity=1000)
        assert text == (TRACE_HEADER
                        + "\n" + TRACE_INDENT + "a (x.py:1)"
                        + "\n" + TRACE_INDENT + "b (y.py:2)")

    def test_truncated_with_marker(self):
        entries = [f"frame{i} (file.py:{i})" for i in range(50)]
        text = format_trace(entries, capacity=300)
        assert len(text.encode("utf-8")) <= 300
        assert text.endswith(TRUNCATED_MARKER)
        assert "frame49" not in text

    def test_marker_room_kept_while_frames_remain(self):
        entries = ["a" * 20, "b" * 20, "c" * 20]
        piece = len("\n" + TRACE_INDENT) + 20
        marker = len("\n" + TRACE_INDENT + TRUNCATED_MARKER)
        # Room for two frames but not two frames plus the marker
        capacity = len(TRACE_HEADER) + 2 * piece + marker - 1
        text = format_trace(entries, capacity=capacity)
        assert len(text.encode("utf-8")) <= capacity
        assert "a" * 20 in text
        assert "b" * 20 not in text
        assert text.endswith(TRUNCATED_MARKER)

    def test_last_frame_needs_no_marker_room(self):
        entries = ["a" * 30, "b" * 30]
        capacity = len(TRACE_HEADER) + 2 * (len("\n" + TRACE_INDENT) + 30)
        text = format_trace(entries, capacity=capacity)
        assert text.endswith("b" * 30)
        assert TRUNCATED_MARKER not in text

    def test_marker_dropped_when_no_room(self):
        text = format_trace(["x" * 100], capacity=len(TRACE_HEADER) + 5)
        assert text == TRACE_HEADER


# =============================================================================
# write_stack_trace()
# =============================================================================

class TestWriteStackTrace:
    def test_trace_logged(self, log, read_log):
        assert log.write_stack_trace() is True
        text = read_log()
        assert f"TRACE : {TRACE_HEADER}" in text
        assert "test_trace_logged (" in text
        assert "write_stack_trace (" not in text

    def test_module_function_skips_wrapper(self, tmp_path):
        write_stack_trace()
        text = (tmp_path / "default.log").read_text(encoding="utf-8")
        first_frame = text.splitlines()[1]
        assert "test_module_function_skips_wrapper (" in first_frame

    def test_hidden_below_debug(self, log, read_log):
        log.set_log_debug_level(WARN)
        log.write_stack_trace()
        log.set_log_debug_level(INFO)
        log.write_stack_trace()
        assert read_log() == ""

    def test_never_wrapped(self, log, read_log):
        log.set_line_wrap(True)
        log.write_stack_trace(max_frames=3)
        lines = read_log().splitlines()
        assert len(lines) == 4
        assert all(line.startswith(TRACE_INDENT) for line in lines[1:])

    def test_fallback_reported(self, log, read_log, monkeypatch):
        monkeypatch.setattr(st, "SYMBOLIZERS", (_GiveUp(), BacktraceSymbolizer()))
        monkeypatch.setattr("simplog.manager.resolve_frames",
                            lambda frames: resolve_frames(frames, st.SYMBOLIZERS))
        log.write_stack_trace()
        text = read_log()
        assert "LOGGR : Source lookup unavailable, using standard backtrace" in text
        assert "TRACE : " in text

    def test_no_frames_reported(self, log, read_log, monkeypatch):
        monkeypatch.setattr("simplog.manager.resolve_frames",
                            lambda frames: ([], None))
        assert log.write_stack_trace() is False
        assert "Unable to capture stack trace" in read_log()
