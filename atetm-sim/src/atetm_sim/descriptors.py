"""In-process test descriptors.

The simulated descriptors behave like the host's: evaluate() judges the
per-site values and records them, and the recorded evaluations show what the
host would have datalogged and binned.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Mapping

from atetm_core.interfaces.descriptor import DescriptorKind
from atetm_core.types.limits import LimitPair
from atetm_core.types.sites import MultiSiteValue, SiteId, ValueKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionalRecord:
    """One recorded functional evaluation.

    Attributes:
        passed: Per-site outcome the host recorded.
    """

    passed: Mapping[int, bool]

    @property
    def failed_sites(self) -> tuple[int, ...]:
        """Return sites the host would bin out, ascending."""
        return tuple(sorted(site for site, ok in self.passed.items() if not ok))


@dataclass(frozen=True)
class ParametricRecord:
    """One recorded parametric evaluation.

    Attributes:
        values: Per-site values the host recorded.
        limits: Limits in effect during the evaluation.
        passed: Per-site outcome the host recorded.
    """

    values: Mapping[int, float]
    limits: LimitPair
    passed: Mapping[int, bool]

    @property
    def failed_sites(self) -> tuple[int, ...]:
        """Return sites the host would bin out, ascending."""
        return tuple(sorted(site for site, ok in self.passed.items() if not ok))


class SimFunctionalDescriptor:
    """Simulated functional test descriptor.

    Args:
        name: Test name.
    """

    def __init__(self, name: str) -> None:
        self._name = name
        self.records: list[FunctionalRecord] = []

    @property
    def kind(self) -> DescriptorKind:
        """Return DescriptorKind.FUNCTIONAL."""
        return DescriptorKind.FUNCTIONAL

    @property
    def name(self) -> str:
        """Return the test name."""
        return self._name

    def evaluate(self, passed: MultiSiteValue[bool]) -> None:
        """Record the per-site outcome."""
        record = FunctionalRecord(passed=passed.to_dict())
        self.records.append(record)
        logger.debug("%s evaluated: %s", self._name, record.passed)

    @property
    def last(self) -> FunctionalRecord:
        """Return the most recent evaluation.

        Raises:
            IndexError: If the descriptor was never evaluated.
        """
        return self.records[-1]


class SimParametricDescriptor:
    """Simulated parametric test descriptor.

    A value fails if it is below the low limit or above the high limit.
    Absent and NaN limits never fail a value.

    Args:
        name: Test name.
        low: Low limit, or None.
        high: High limit, or None.
    """

    def __init__(self, name: str, low: float | None = None, high: float | None = None) -> None:
        self._name = name
        self._low = low
        self._high = high
        self._pass_fail: MultiSiteValue[bool] = MultiSiteValue(ValueKind.BOOL)
        self.records: list[ParametricRecord] = []
        self.limit_writes: list[tuple[str, float | None]] = []

    @property
    def kind(self) -> DescriptorKind:
        """Return DescriptorKind.PARAMETRIC."""
        return DescriptorKind.PARAMETRIC

    @property
    def name(self) -> str:
        """Return the test name."""
        return self._name

    @property
    def limits(self) -> LimitPair:
        """Return the current limits."""
        return LimitPair(low=self._low, high=self._high)

    def get_low_limit(self) -> float | None:
        """Return the low limit."""
        return self._low

    def set_low_limit(self, value: float | None) -> None:
        """Set the low limit."""
        self.limit_writes.append(("low", value))
        self._low = value

    def get_high_limit(self) -> float | None:
        """Return the high limit."""
        return self._high

    def set_high_limit(self, value: float | None) -> None:
        """Set the high limit."""
        self.limit_writes.append(("high", value))
        self._high = value

    def _passes(self, value: float) -> bool:
        if self._low is not None and not math.isnan(self._low) and value < self._low:
            return False
        if self._high is not None and not math.isnan(self._high) and value > self._high:
            return False
        return True

    def evaluate(self, values: MultiSiteValue[float]) -> None:
        """Judge the values against the current limits and record them."""
        measured = values.to_dict()
        passed = {site: self._passes(value) for site, value in measured.items()}
        self._pass_fail = MultiSiteValue.from_mapping(ValueKind.BOOL, passed)
        self.records.append(ParametricRecord(values=measured, limits=self.limits, passed=passed))
        logger.debug("%s evaluated with %s: %s", self._name, self.limits, passed)

    def get_pass_fail(self) -> MultiSiteValue[bool]:
        """Return the outcome of the last evaluation."""
        return self._pass_fail.copy()

    @property
    def last(self) -> ParametricRecord:
        """Return the most recent evaluation.

        Raises:
            IndexError: If the descriptor was never evaluated.
        """
        return self.records[-1]


@dataclass
class SimMeasurementResult:
    """Simulated measurement result.

    Attributes:
        passed: Per-site functional outcome.
    """

    passed: dict[int, bool] = field(default_factory=dict)

    def has_passed(self) -> MultiSiteValue[bool]:
        """Return the per-site outcome."""
        return MultiSiteValue.from_mapping(ValueKind.BOOL, self.passed)

    def set_result(self, site: SiteId | int, passed: bool) -> None:
        """Set the outcome of one site."""
        self.passed[int(site)] = passed
