"""Tests for input validation and duration formatting."""

import math

import pytest

from multitimer.timer.validation import (
    ValidationError,
    duration_from_hms,
    format_hms,
    validate_timer_input,
)


class TestValidateTimerInput:

    def test_accepts_and_strips(self):
        assert validate_timer_input("  Tea  ", 180) == ("Tea", 180.0)

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_rejects_empty_name(self, name):
        with pytest.raises(ValidationError, match="name"):
            validate_timer_input(name, 60)

    @pytest.mark.parametrize("duration", [0, -1, -0.5, math.nan, math.inf])
    def test_rejects_non_positive_or_non_finite_duration(self, duration):
        with pytest.raises(ValidationError, match="duration"):
            validate_timer_input("Tea", duration)

    def test_is_a_value_error(self):
        assert issubclass(ValidationError, ValueError)


class TestHms:

    def test_duration_from_hms(self):
        assert duration_from_hms(1, 2, 3) == 3723
        assert duration_from_hms(0, 0, 0) == 0

    @pytest.mark.parametrize("seconds, expected", [
        (0, "00:00:00"),
        (59, "00:00:59"),
        (180, "00:03:00"),
        (3723, "01:02:03"),
        (86399, "23:59:59"),
        (0.4, "00:00:01"),
        (119.01, "00:02:00"),
        (-3, "00:00:00"),
    ])
    def test_format_hms(self, seconds, expected):
        assert format_hms(seconds) == expected
