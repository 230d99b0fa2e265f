"""test_timefmt.py - Unit tests for format_elapsed.

Covers:
    - Raw millisecond rendering below one second
    - Half-up rounding for seconds, minutes and hours
    - Boundary values that round up without promoting to the next unit
"""

import pytest

from chanlog.timefmt import HR, MIN, SEC, format_elapsed


class TestFormatElapsed:
    @pytest.mark.parametrize(
        "ms, expected",
        [
            (0, "0ms"),
            (999, "999ms"),
            (1000, "1s"),
            (1499, "1s"),
            (1500, "2s"),
            (61000, "1m"),
            (90000, "2m"),
            (3700000, "1h"),
            (5400000, "2h"),
        ],
    )
    def test_format_elapsed_known_values(self, ms, expected):
        """Each unit range renders with the expected suffix and rounding."""
        assert format_elapsed(ms) == expected

    def test_format_elapsed_just_below_minute_stays_in_seconds(self):
        """59999ms rounds to 60s rather than being promoted to 1m."""
        assert format_elapsed(59999) == "60s"

    def test_format_elapsed_just_below_hour_stays_in_minutes(self):
        """A value just under an hour rounds to 60m."""
        assert format_elapsed(HR - 1) == "60m"

    def test_format_elapsed_unit_constants(self):
        """Unit constants are expressed in milliseconds."""
        assert (SEC, MIN, HR) == (1000, 60000, 3600000)
