"""Offline measurement values.

Without tester hardware a parametric measurement has nothing to read. The
value is synthesized from the test limits so that an offline run passes:

    both limits -> midpoint
    low only    -> low limit
    high only   -> high limit
    no limits   -> 0.0
"""

from __future__ import annotations

from typing import Iterable

from atetm_core.interfaces.descriptor import ParametricTestDescriptor
from atetm_core.types.limits import CapturedLimits, LimitPair
from atetm_core.types.sites import MultiSiteValue, ValueKind


def offline_value(limits: LimitPair | CapturedLimits) -> float:
    """Synthesize a passing value for the given limits.

    Args:
        limits: Test limits.

    Returns:
        The synthesized value.
    """
    pair = limits.to_pair() if isinstance(limits, CapturedLimits) else limits
    if pair.low is not None and pair.high is not None:
        return ((pair.high - pair.low) / 2) + pair.low
    if pair.low is not None:
        return pair.low
    if pair.high is not None:
        return pair.high
    return 0.0


def offline_values(
    descriptor: ParametricTestDescriptor, sites: Iterable[int]
) -> MultiSiteValue[float]:
    """Synthesize offline values of a descriptor for every given site.

    Args:
        descriptor: Parametric test descriptor providing the limits.
        sites: Sites to fill.

    Returns:
        Per-site synthesized values.
    """
    value = offline_value(
        LimitPair(low=descriptor.get_low_limit(), high=descriptor.get_high_limit())
    )
    return MultiSiteValue.filled(ValueKind.FLOAT, sites, value)
