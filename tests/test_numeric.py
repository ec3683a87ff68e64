"""Tests for significant-digit rounding and bound display."""
import math

import pytest

from vbctree.numeric import (
    is_unbounded,
    nice,
    order_of_magnitude,
    sig_round,
    sig_round_nice,
)


def test_order_of_magnitude():
    assert order_of_magnitude(0) == 1.0
    assert order_of_magnitude(345.0) == 100.0
    assert order_of_magnitude(-345.0) == -100.0
    assert order_of_magnitude(0.05) == pytest.approx(0.01)


def test_sig_round_drops_extra_digits():
    assert sig_round(123456789.123) == 123456789.0
    assert sig_round(1.0 / 3.0) == 0.33333333
    assert sig_round(-2.0 / 3.0) == -0.66666667


def test_sig_round_zero_and_nonfinite():
    assert sig_round(0.0) == 0.0
    assert sig_round(math.inf) == math.inf
    assert math.isnan(sig_round(math.nan))


def test_sig_round_half_away_from_zero():
    assert sig_round(2.5, 0) == 3.0
    assert sig_round(-2.5, 0) == -3.0


@pytest.mark.parametrize(
    "value", [0.0, 40.0, -17.25, 1.0 / 3.0, 123456789.123, 1.23456789e-5, 6.02214076e23, 1e99]
)
def test_sig_round_idempotent(value):
    once = sig_round(value)
    assert sig_round(once) == once


class TestNice:
    def test_short_values_as_is(self):
        assert nice(50.0) == "50.0"
        assert nice(-3.5) == "-3.5"

    def test_long_values_scientific(self):
        assert nice(123456789.0) == "1.235e+08"
        assert nice(0.33333333) == "3.333e-01"

    @pytest.mark.parametrize("value", [1e99, -1e99, 1e21, -1e21, math.inf])
    def test_unbounded_placeholder(self, value):
        assert is_unbounded(value)
        assert nice(value) == "--"
        assert sig_round_nice(value) == "--"

    def test_threshold(self):
        assert not is_unbounded(0.98e20)
        assert is_unbounded(1.0e20)
        assert nice(0.98e20) != "--"

    def test_sig_round_nice(self):
        assert sig_round_nice(40.000000001) == "40.0"
