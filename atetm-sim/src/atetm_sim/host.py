"""In-process host test executive collaborators.

Provides the host-side capabilities a test method consumes (active sites,
dependency tracking, tester release, device data storage) as small objects
that tests and offline runs can control directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from atetm_sim.descriptors import SimFunctionalDescriptor, SimParametricDescriptor

logger = logging.getLogger(__name__)


class SimSiteSource:
    """Active site source whose sites can be changed at any time.

    Args:
        sites: Initially active sites.
    """

    def __init__(self, sites: Iterable[int] = (0,)) -> None:
        self._sites: tuple[int, ...] = tuple(sites)
        self.query_count = 0

    def active_sites(self) -> Sequence[int]:
        """Return the active sites."""
        self.query_count += 1
        return self._sites

    def set_active_sites(self, sites: Iterable[int]) -> None:
        """Change the active sites."""
        self._sites = tuple(sites)
        logger.debug("Active sites changed to %s", self._sites)


class SimDependencyOracle:
    """Dependency oracle with a controllable answer.

    Args:
        unchanged: Answer returned by dependencies_unchanged().
    """

    def __init__(self, unchanged: bool = False) -> None:
        self.unchanged = unchanged
        self.call_count = 0

    def dependencies_unchanged(self) -> bool:
        """Return the configured answer."""
        self.call_count += 1
        return self.unchanged


class SimTesterRelease:
    """Tester release action that counts its invocations."""

    def __init__(self) -> None:
        self.call_count = 0

    def __call__(self) -> None:
        self.call_count += 1
        logger.debug("Tester released (%d)", self.call_count)


class SimDeviceData:
    """Device data storage with lockable variables.

    Releasing twice without locking in between is counted as a double
    release, so tests can see redundant releases within one cycle.
    """

    def __init__(self) -> None:
        self.locked: dict[str, Any] = {}
        self.release_count = 0
        self.double_releases = 0
        self._released = False

    def lock(self, name: str, value: Any) -> None:
        """Lock a device variable."""
        self.locked[name] = value
        self._released = False

    def release_variables(self) -> None:
        """Release every locked variable."""
        if self._released:
            self.double_releases += 1
        self.release_count += 1
        self.locked.clear()
        self._released = True


@dataclass
class SimHost:
    """Bundle of simulated host collaborators.

    Attributes:
        site_source: Active site source.
        dependencies: Dependency oracle.
        tester_release: Tester release action.
    """

    site_source: SimSiteSource = field(default_factory=SimSiteSource)
    dependencies: SimDependencyOracle = field(default_factory=SimDependencyOracle)
    tester_release: SimTesterRelease = field(default_factory=SimTesterRelease)

    @classmethod
    def with_sites(cls, *sites: int) -> SimHost:
        """Create a host with the given active sites."""
        return cls(site_source=SimSiteSource(sites))

    def functional(self, name: str) -> SimFunctionalDescriptor:
        """Create a functional test descriptor."""
        return SimFunctionalDescriptor(name)

    def parametric(
        self, name: str, low: float | None = None, high: float | None = None
    ) -> SimParametricDescriptor:
        """Create a parametric test descriptor."""
        return SimParametricDescriptor(name, low=low, high=high)
