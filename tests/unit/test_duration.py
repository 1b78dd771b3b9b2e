"""
Unit tests for duration parsing and formatting.
"""

import pytest

from utils.duration import format_duration, parse_duration


class TestParseDuration:
    """Test parse_duration."""

    def test_hours_and_bare_minutes(self):
        assert parse_duration("1h 30") == (5400, True)

    def test_seconds_suffix(self):
        assert parse_duration("90s") == (90, True)

    def test_bare_number_is_minutes(self):
        assert parse_duration("45") == (2700, True)

    def test_no_numbers(self):
        total, ok = parse_duration("hello")
        assert ok is False
        assert total == 0

    def test_empty_text(self):
        assert parse_duration("") == (0, False)

    def test_unknown_suffix_falls_back_to_minutes(self):
        assert parse_duration("10x") == (600, True)

    def test_uppercase_suffixes(self):
        assert parse_duration("1D 2H 3M 4S") == (86400 + 7200 + 180 + 4, True)

    def test_all_units_sum(self):
        assert parse_duration("2d 3h 4m 5s") == (2 * 86400 + 3 * 3600 + 4 * 60 + 5, True)

    def test_tokens_embedded_in_text(self):
        assert parse_duration("wake me in 5m please, or 30s") == (330, True)

    def test_adjacent_tokens(self):
        assert parse_duration("1h30m") == (5400, True)

    def test_zero_seconds_is_found_but_zero(self):
        assert parse_duration("0s") == (0, True)

    def test_zero_bare_number(self):
        assert parse_duration("0") == (0, True)

    def test_overflowing_token_contributes_zero(self):
        assert parse_duration("99999999999999999999999 5s") == (5, True)

    def test_non_ascii_digits_ignored(self):
        assert parse_duration("٥٦") == (0, False)


class TestFormatDuration:
    """Test format_duration."""

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (90061, "1d 1h 1m 1s"),
            (59, "59s"),
            (3600, "1h 0m 0s"),
            (0, "0s"),
            (60, "1m 0s"),
            (86400, "1d 0h 0m 0s"),
            (5400, "1h 30m 0s"),
        ],
    )
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            format_duration(-1)
