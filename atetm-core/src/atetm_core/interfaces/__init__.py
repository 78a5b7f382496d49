"""Protocol-based interface definitions for atetm.

This package defines the interfaces (using typing.Protocol) through which a
test method reaches its host test executive. The host supplies concrete
implementations; ``atetm_sim`` provides in-process ones for offline runs and
tests.

Interface Categories:
    Host: SiteSource, DependencyOracle, TesterRelease
    Descriptors: FunctionalTestDescriptor, ParametricTestDescriptor, MeasurementResult
    Device data: DeviceDataStorage
"""

from atetm_core.interfaces.descriptor import (
    DescriptorKind,
    FunctionalTestDescriptor,
    MeasurementResult,
    ParametricTestDescriptor,
)
from atetm_core.interfaces.device_data import DeviceDataStorage
from atetm_core.interfaces.host import (
    DependencyOracle,
    SiteSource,
    TesterRelease,
)

__all__ = [
    # Host interfaces
    "DependencyOracle",
    "SiteSource",
    "TesterRelease",
    # Descriptor interfaces
    "DescriptorKind",
    "FunctionalTestDescriptor",
    "MeasurementResult",
    "ParametricTestDescriptor",
    # Device data
    "DeviceDataStorage",
]
