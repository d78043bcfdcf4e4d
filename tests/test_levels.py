"""Tests for simplog.levels — level constants and the level policy."""

import pytest

from simplog.levels import (
    FATAL, ERROR, INFO, WARN, DEBUG, VERBOSE, LOGGER, STACKTRACE, RESET,
    USER_LEVELS, is_wrappable, level_style, parse_level, should_emit,
)


THRESHOLDS = [INFO, WARN, DEBUG, VERBOSE]


class TestLevelConstants:
    """Verify level constants have correct values."""

    def test_specific_values(self):
        assert FATAL == -2
        assert ERROR == -1
        assert INFO == 0
        assert WARN == 1
        assert DEBUG == 2
        assert VERBOSE == 3

    def test_internal_levels_above_verbose(self):
        assert VERBOSE < LOGGER < STACKTRACE

    def test_internal_levels_not_user_levels(self):
        assert LOGGER not in USER_LEVELS
        assert STACKTRACE not in USER_LEVELS


class TestShouldEmit:
    """The emit table: which level passes which threshold."""

    @pytest.mark.parametrize("threshold", THRESHOLDS)
    @pytest.mark.parametrize("level", [FATAL, ERROR, INFO])
    def test_always_emitted(self, level, threshold):
        assert should_emit(level, threshold) is True

    @pytest.mark.parametrize("threshold", THRESHOLDS)
    @pytest.mark.parametrize("level", [WARN, DEBUG, VERBOSE])
    def test_gated_by_threshold(self, level, threshold):
        assert should_emit(level, threshold) is (level <= threshold)

    @pytest.mark.parametrize("level", [LOGGER, STACKTRACE])
    def test_internal_levels_need_debug(self, level):
        assert should_emit(level, INFO) is False
        assert should_emit(level, WARN) is False
        assert should_emit(level, DEBUG) is True
        assert should_emit(level, VERBOSE) is True

    @pytest.mark.parametrize("level", [-3, 6, 42, -100])
    def test_unknown_levels_dropped(self, level):
        """Unknown levels are dropped without raising."""
        for threshold in THRESHOLDS:
            assert should_emit(level, threshold) is False
            assert level_style(level, threshold) is None


class TestLevelStyle:
    """Labels, colors and console stream per level."""

    def test_labels_are_five_wide(self):
        for level in USER_LEVELS + (LOGGER, STACKTRACE):
            assert len(level_style(level, VERBOSE).label) == 5

    def test_verbose_shares_debug_label(self):
        verbose = level_style(VERBOSE, VERBOSE)
        debug = level_style(DEBUG, VERBOSE)
        assert verbose.label == debug.label == "DEBUG"
        assert verbose.color != debug.color

    def test_info_uses_neutral_prefix(self):
        style = level_style(INFO, INFO)
        assert style.color is None
        assert style.prefix == RESET

    def test_errors_go_to_stderr(self):
        assert level_style(FATAL, INFO).stderr is True
        assert level_style(ERROR, INFO).stderr is True
        assert level_style(INFO, INFO).stderr is False
        assert level_style(WARN, WARN).stderr is False

    def test_filtered_returns_none(self):
        assert level_style(DEBUG, INFO) is None


class TestWrappable:
    def test_user_levels_wrappable(self):
        for level in USER_LEVELS:
            assert is_wrappable(level)

    def test_internal_levels_not_wrappable(self):
        assert not is_wrappable(LOGGER)
        assert not is_wrappable(STACKTRACE)


class TestParseLevel:
    @pytest.mark.parametrize("text,expected", [
        ("fatal", FATAL), ("ERROR", ERROR), ("info", INFO),
        ("warn", WARN), ("warning", WARN), ("Debug", DEBUG),
        ("verbose", VERBOSE), ("-2", FATAL), ("3", VERBOSE), (1, WARN),
    ])
    def test_valid(self, text, expected):
        assert parse_level(text) == expected

    @pytest.mark.parametrize("text", ["loud", "4", "-3", "", 5])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_level(text)
