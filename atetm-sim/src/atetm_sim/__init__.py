"""In-process host emulation for atetm test methods.

Provides simulated host collaborators so test methods can run without a
tester: a changeable active site source, a dependency oracle, a counting
tester release action, device data storage, recording functional and
parametric test descriptors, and offline value synthesis.

Example:
    >>> from atetm_sim import SimHost
    >>> host = SimHost.with_sites(0, 1)
    >>> vdd = host.parametric("vdd", low=1.0, high=5.0)
    >>> list(host.site_source.active_sites())
    [0, 1]
"""

from atetm_sim.descriptors import (
    FunctionalRecord,
    ParametricRecord,
    SimFunctionalDescriptor,
    SimMeasurementResult,
    SimParametricDescriptor,
)
from atetm_sim.host import (
    SimDependencyOracle,
    SimDeviceData,
    SimHost,
    SimSiteSource,
    SimTesterRelease,
)
from atetm_sim.offline import offline_value, offline_values

__all__ = [
    # Descriptors
    "FunctionalRecord",
    "ParametricRecord",
    "SimFunctionalDescriptor",
    "SimMeasurementResult",
    "SimParametricDescriptor",
    # Host
    "SimDependencyOracle",
    "SimDeviceData",
    "SimHost",
    "SimSiteSource",
    "SimTesterRelease",
    # Offline values
    "offline_value",
    "offline_values",
]
