"""Test descriptor interfaces.

A test descriptor is the host object that represents one named test in the
test program. The host uses it to record the test in its results and to bin
the device. Two kinds exist:

- Functional: binary per-site pass/fail, e.g. a pattern burst.
- Parametric: a per-site numeric measurement checked against optional
  low/high limits.

Protocols:
    FunctionalTestDescriptor: Functional test descriptor.
    ParametricTestDescriptor: Parametric test descriptor with limits.
    MeasurementResult: Result of a host measurement with per-site pass/fail.
"""

# pylint: disable=unnecessary-ellipsis  # Ellipsis required for Protocol method stubs

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from atetm_core.types.sites import MultiSiteValue


class DescriptorKind(Enum):
    """Kind tag of a test descriptor."""

    FUNCTIONAL = "functional"
    PARAMETRIC = "parametric"


class FunctionalTestDescriptor(Protocol):
    """Protocol for a functional (pass/fail) test descriptor."""

    @property
    def kind(self) -> DescriptorKind:
        """Return DescriptorKind.FUNCTIONAL."""
        ...

    @property
    def name(self) -> str:
        """Return the test name."""
        ...

    def evaluate(self, passed: MultiSiteValue[bool]) -> None:
        """Record the per-site outcome with the host.

        Sites evaluated as False are failed and binned by the host.

        Args:
            passed: Per-site pass/fail.
        """
        ...


class ParametricTestDescriptor(Protocol):
    """Protocol for a parametric (limit-checked) test descriptor.

    Limits are optional. ``None`` means no limit is configured. NaN means the
    limit is present but disables the comparison.
    """

    @property
    def kind(self) -> DescriptorKind:
        """Return DescriptorKind.PARAMETRIC."""
        ...

    @property
    def name(self) -> str:
        """Return the test name."""
        ...

    def get_low_limit(self) -> float | None:
        """Return the low limit, or None if absent."""
        ...

    def set_low_limit(self, value: float | None) -> None:
        """Set the low limit. None removes it."""
        ...

    def get_high_limit(self) -> float | None:
        """Return the high limit, or None if absent."""
        ...

    def set_high_limit(self, value: float | None) -> None:
        """Set the high limit. None removes it."""
        ...

    def evaluate(self, values: MultiSiteValue[float]) -> None:
        """Judge the per-site values against the current limits and record them.

        Args:
            values: Per-site measured values.
        """
        ...

    def get_pass_fail(self) -> MultiSiteValue[bool]:
        """Return the per-site outcome of the last evaluate() call."""
        ...


@runtime_checkable
class MeasurementResult(Protocol):
    """Protocol for a host measurement result."""

    def has_passed(self) -> MultiSiteValue[bool]:
        """Return the per-site functional outcome of the measurement."""
        ...
