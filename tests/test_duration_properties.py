"""
Property-based tests for duration parsing.

Durations are in hundredths of a second and clamp to [-1, 65535].
"""

import pytest
from hypothesis import given, settings
import hypothesis.strategies as st

from blink_control.duration import (
    DURATION_MAX,
    DURATION_MIN,
    parse_duration,
    split_duration,
)
from blink_control.errors import InvalidDurationError


class TestDurationUnits:
    """Bare numbers, seconds and milliseconds."""

    def test_bare_number(self):
        assert parse_duration("50") == 50

    def test_seconds(self):
        assert parse_duration(".5s") == 50
        assert parse_duration("2s") == 200
        assert parse_duration("1.25s") == 125

    def test_milliseconds(self):
        assert parse_duration("2000ms") == 200
        assert parse_duration("500ms") == 50

    def test_bare_number_truncates_toward_zero(self):
        assert parse_duration("12.9") == 12
        assert parse_duration("-0.9") == 0

    def test_seconds_round(self):
        assert parse_duration("0.125s") == 13
        assert parse_duration("0.004s") == 0

    def test_milliseconds_lose_sub_10ms_precision(self):
        assert parse_duration("14ms") == 1
        assert parse_duration("15ms") == 2
        assert parse_duration("4ms") == 0

    def test_exponent(self):
        assert parse_duration("1e2") == 100
        assert parse_duration("1e-1s") == 10

    def test_leading_whitespace(self):
        assert parse_duration("  50") == 50


class TestDurationClamping:
    """
    *For any* parseable token, the result lies within [-1, 65535];
    out-of-range values clamp instead of failing.
    """

    def test_negative_one_sentinel(self):
        assert parse_duration("-1") == -1

    def test_clamps_high(self):
        assert parse_duration("999999") == 65535
        assert parse_duration("1000s") == 65535
        assert parse_duration("1e400") == 65535

    def test_clamps_low(self):
        assert parse_duration("-50") == -1
        assert parse_duration("-3s") == -1
        assert parse_duration("-100ms") == -1

    @settings(max_examples=100)
    @given(value=st.integers(min_value=-10**9, max_value=10**9))
    def test_bare_integers_clamp(self, value: int):
        assert parse_duration(str(value)) == max(DURATION_MIN, min(DURATION_MAX, value))

    @settings(max_examples=100)
    @given(
        value=st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False),
        suffix=st.sampled_from(["", "s", "ms"]),
    )
    def test_result_always_in_range(self, value: float, suffix: str):
        result = parse_duration(f"{value!r}{suffix}")
        assert isinstance(result, int)
        assert DURATION_MIN <= result <= DURATION_MAX

    @settings(max_examples=100)
    @given(centiseconds=st.integers(min_value=0, max_value=DURATION_MAX))
    def test_whole_milliseconds_of_tens(self, centiseconds: int):
        assert parse_duration(f"{centiseconds * 10}ms") == centiseconds


class TestInvalidDurations:
    """Only unparseable tokens fail."""

    @pytest.mark.parametrize(
        "token", ["abc", "", "s", "ms", "5m", "5sec", "5 s", "5S", ".s", "+", "inf", "nan"]
    )
    def test_invalid_tokens(self, token):
        with pytest.raises(InvalidDurationError):
            parse_duration(token)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            parse_duration("abc")

    @pytest.mark.parametrize("token", ["\uff15\uff10", "\u0665s", "5\u0660ms", "\u200350"])
    def test_non_ascii_digits_and_spaces_rejected(self, token):
        with pytest.raises(InvalidDurationError):
            parse_duration(token)


class TestSplitDuration:
    """Durations are stored big-endian on two bytes."""

    def test_known_values(self):
        assert split_duration(50) == (0x00, 0x32)
        assert split_duration(200) == (0x00, 0xC8)
        assert split_duration(0xABCD) == (0xAB, 0xCD)

    @settings(max_examples=100)
    @given(value=st.integers(min_value=0, max_value=DURATION_MAX))
    def test_bytes_recombine(self, value: int):
        high, low = split_duration(value)
        assert (high << 8) | low == value
