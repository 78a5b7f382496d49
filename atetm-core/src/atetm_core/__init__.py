"""Core library for ATE test method execution.

This package provides the foundational data types, host interfaces, log
levels and error types shared by the atetm packages. It has no external
dependencies (stdlib-only) and serves as the base layer for
``atetm_testmethod`` and ``atetm_sim``.

Key components:
    - Types: Site ids and per-site values (MultiSiteValue), parametric
      limits (LimitPair, CapturedLimits) and the boundary policy.
    - Interfaces: Protocol-based definitions for the active-site source,
      dependency oracle, tester release, test descriptors, measurement
      results and device data storage.
    - Levels: TRACE and PARAM log levels for the stdlib logging package.
    - Errors: Hierarchy of exception types for configuration and site errors.

Example:
    >>> from atetm_core import MultiSiteValue, ValueKind
    >>> values = MultiSiteValue.from_mapping(ValueKind.FLOAT, {0: 3.0, 1: 10.0})
    >>> values.get(1)
    10.0
"""

from atetm_core.errors import (
    AtetmError,
    ConfigurationError,
    InvalidSiteAccess,
    LifecycleError,
    StateReuseError,
    UnsetSiteValueError,
)
from atetm_core.interfaces import (
    DependencyOracle,
    DescriptorKind,
    DeviceDataStorage,
    FunctionalTestDescriptor,
    MeasurementResult,
    ParametricTestDescriptor,
    SiteSource,
    TesterRelease,
)
from atetm_core.levels import PARAM, TRACE, WARNING, resolve_level
from atetm_core.types import (
    NO_LIMIT,
    BoundaryPolicy,
    CapturedLimits,
    LimitPair,
    MultiSiteValue,
    SiteId,
    ValueKind,
    check_site_id,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Types
    "MultiSiteValue",
    "SiteId",
    "ValueKind",
    "check_site_id",
    "NO_LIMIT",
    "BoundaryPolicy",
    "CapturedLimits",
    "LimitPair",
    # Interfaces
    "DependencyOracle",
    "DescriptorKind",
    "DeviceDataStorage",
    "FunctionalTestDescriptor",
    "MeasurementResult",
    "ParametricTestDescriptor",
    "SiteSource",
    "TesterRelease",
    # Log levels
    "PARAM",
    "TRACE",
    "WARNING",
    "resolve_level",
    # Errors
    "AtetmError",
    "ConfigurationError",
    "InvalidSiteAccess",
    "LifecycleError",
    "StateReuseError",
    "UnsetSiteValueError",
]
