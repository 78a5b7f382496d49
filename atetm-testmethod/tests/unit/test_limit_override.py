"""Tests for the limit override."""

from __future__ import annotations

import math

import pytest

from atetm_core.types.limits import CapturedLimits, LimitPair
from atetm_sim import SimParametricDescriptor

from atetm_testmethod.limits import LimitOverride


@pytest.fixture
def override() -> LimitOverride:
    """Create a limit override."""
    return LimitOverride()


class TestCapture:
    """Tests for capturing limits."""

    def test_both_present(self, override: LimitOverride) -> None:
        captured = override.capture(SimParametricDescriptor("t", low=1.0, high=5.0))
        assert captured == CapturedLimits(present_lo=True, lo=1.0, present_hi=True, hi=5.0)

    def test_absent_limits(self, override: LimitOverride) -> None:
        captured = override.capture(SimParametricDescriptor("t", high=5.0))
        assert not captured.present_lo
        assert captured.present_hi

    def test_capture_does_not_write(self, override: LimitOverride) -> None:
        test = SimParametricDescriptor("t", low=1.0, high=5.0)
        override.capture(test)
        assert test.limit_writes == []


class TestClearAndRestore:
    """Tests for clearing and restoring limits."""

    def test_clear_writes_nan(self, override: LimitOverride) -> None:
        test = SimParametricDescriptor("t", low=1.0, high=5.0)

        override.clear(test)

        low = test.get_low_limit()
        high = test.get_high_limit()
        assert low is not None and math.isnan(low)
        assert high is not None and math.isnan(high)

    @pytest.mark.parametrize(
        "pair",
        [
            LimitPair(low=1.0, high=5.0),
            LimitPair(low=1.0),
            LimitPair(high=5.0),
            LimitPair(),
        ],
    )
    def test_restore_exact(self, override: LimitOverride, pair: LimitPair) -> None:
        test = SimParametricDescriptor("t", low=pair.low, high=pair.high)
        captured = override.capture(test)

        override.clear(test)
        override.restore(test, captured)

        assert test.limits == pair

    def test_absent_limit_not_restored_as_nan(self, override: LimitOverride) -> None:
        test = SimParametricDescriptor("t", low=2.0)
        captured = override.capture(test)

        override.clear(test)
        override.restore(test, captured)

        assert test.get_high_limit() is None
        assert test.limit_writes[-2:] == [("low", 2.0), ("high", None)]


class TestOverridden:
    """Tests for the overridden() context manager."""

    def test_limits_cleared_inside_block(self, override: LimitOverride) -> None:
        test = SimParametricDescriptor("t", low=1.0, high=5.0)

        with override.overridden(test) as captured:
            low = test.get_low_limit()
            assert low is not None and math.isnan(low)
            assert captured.to_pair() == LimitPair(low=1.0, high=5.0)

        assert test.limits == LimitPair(low=1.0, high=5.0)

    def test_restored_on_error(self, override: LimitOverride) -> None:
        test = SimParametricDescriptor("t", low=1.0)

        with pytest.raises(RuntimeError):
            with override.overridden(test):
                raise RuntimeError("evaluation failed")

        assert test.limits == LimitPair(low=1.0)

    def test_uses_given_capture(self, override: LimitOverride) -> None:
        test = SimParametricDescriptor("t", low=1.0, high=5.0)
        earlier = CapturedLimits(present_lo=True, lo=0.5, present_hi=False, hi=0.0)

        with override.overridden(test, earlier) as captured:
            assert captured is earlier

        assert test.limits == LimitPair(low=0.5)
