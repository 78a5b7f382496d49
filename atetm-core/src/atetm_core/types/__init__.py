"""Core data types for atetm.

Submodules:
    sites: Site identifiers and per-site values (SiteId, ValueKind, MultiSiteValue)
    limits: Parametric test limits (LimitPair, CapturedLimits, BoundaryPolicy)

All types are exported from this package for convenience.
"""

from atetm_core.types.limits import (
    NO_LIMIT,
    BoundaryPolicy,
    CapturedLimits,
    LimitPair,
)
from atetm_core.types.sites import (
    MultiSiteValue,
    SiteId,
    ValueKind,
    check_site_id,
)

__all__ = [
    # Sites
    "MultiSiteValue",
    "SiteId",
    "ValueKind",
    "check_site_id",
    # Limits
    "NO_LIMIT",
    "BoundaryPolicy",
    "CapturedLimits",
    "LimitPair",
]
