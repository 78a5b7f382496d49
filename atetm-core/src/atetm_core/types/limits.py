"""Test limit types for parametric test descriptors.

A parametric test descriptor carries an optional low and an optional high
limit. "Absent" (no limit configured) is a different state from "present but
NaN" (a limit cleared for a forced evaluation), and the two must never be
confused when limits are restored.

Classes:
    BoundaryPolicy: Whether a value equal to a limit passes.
    LimitPair: Low/high limits, each optional.
    CapturedLimits: Limits captured from a descriptor with presence flags.

Example:
    >>> limits = CapturedLimits(present_lo=True, lo=1.0, present_hi=True, hi=5.0)
    >>> limits.check(5.0)
    True
    >>> limits.check(5.0, BoundaryPolicy.EXCLUSIVE)
    False
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from atetm_core.errors import ConfigurationError

NO_LIMIT = math.nan
"""Value written to a limit to disable it for one evaluation."""


class BoundaryPolicy(Enum):
    """Judgement of a value exactly equal to a limit.

    Attributes:
        INCLUSIVE: A value equal to a limit passes (low <= value <= high).
        EXCLUSIVE: A value equal to a limit fails (low < value < high).
    """

    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"

    @classmethod
    def parse(cls, value: str | BoundaryPolicy) -> BoundaryPolicy:
        """Parse a policy from its configured name.

        Raises:
            ConfigurationError: If the name is not a known policy.
        """
        if isinstance(value, BoundaryPolicy):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown boundary policy: {value!r}") from None


@dataclass(frozen=True)
class LimitPair:
    """Low and high limits of a parametric test.

    Attributes:
        low: Low limit, or None if absent.
        high: High limit, or None if absent.
    """

    low: float | None = None
    high: float | None = None


@dataclass(frozen=True)
class CapturedLimits:
    """Limits read from a descriptor, with explicit presence flags.

    The numeric value of an absent limit is meaningless and kept at 0.0.

    Attributes:
        present_lo: True if the descriptor had a low limit.
        lo: The low limit value.
        present_hi: True if the descriptor had a high limit.
        hi: The high limit value.
    """

    present_lo: bool
    lo: float
    present_hi: bool
    hi: float

    @classmethod
    def from_pair(cls, pair: LimitPair) -> CapturedLimits:
        """Capture a limit pair."""
        return cls(
            present_lo=pair.low is not None,
            lo=0.0 if pair.low is None else float(pair.low),
            present_hi=pair.high is not None,
            hi=0.0 if pair.high is None else float(pair.high),
        )

    def to_pair(self) -> LimitPair:
        """Return the limits as a pair, absent limits as None."""
        return LimitPair(
            low=self.lo if self.present_lo else None,
            high=self.hi if self.present_hi else None,
        )

    def check(self, value: float, policy: BoundaryPolicy = BoundaryPolicy.INCLUSIVE) -> bool:
        """Judge a measured value against the captured limits.

        A value fails if it is below a present low limit or above a present
        high limit. Equality with a limit is decided by ``policy``.

        Args:
            value: The measured value.
            policy: Boundary equality policy.

        Returns:
            True if the value passes.
        """
        if policy is BoundaryPolicy.INCLUSIVE:
            if self.present_lo and value < self.lo:
                return False
            if self.present_hi and value > self.hi:
                return False
            return True
        if self.present_lo and value <= self.lo:
            return False
        if self.present_hi and value >= self.hi:
            return False
        return True
