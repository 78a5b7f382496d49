"""Force-pass state of one execution cycle.

In force-pass mode the host records every test as passing, so no device is
binned out, while the test method keeps track of what the true outcome would
have been. The true outcome is accumulated in two per-site flags:

    set_on_pass_flags: 1 while every test so far passed on the site, else 0.
    set_on_fail_flags: 1 once any test failed on the site, else 0.

Both flags latch: a failure can never be undone by a later passing test in
the same cycle. A fresh state is allocated at the start of every execute
cycle and tagged with the cycle generation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from atetm_core.errors import ConfigurationError, StateReuseError
from atetm_core.types.sites import MultiSiteValue, SiteId, ValueKind

from atetm_testmethod.sites import SiteSet

logger = logging.getLogger(__name__)


@dataclass
class ForcePassState:
    """Per-cycle force-pass flags.

    Attributes:
        force_pass: True if force-pass mode is active for this cycle.
        set_on_pass_flags: Per-site pass flags, None while uninitialized.
        set_on_fail_flags: Per-site fail flags, None while uninitialized.
        generation: Execution cycle this state was allocated for.
    """

    force_pass: bool = False
    set_on_pass_flags: MultiSiteValue[int] | None = None
    set_on_fail_flags: MultiSiteValue[int] | None = None
    generation: int = 0

    @classmethod
    def for_cycle(cls, force_pass: bool, sites: SiteSet, generation: int) -> ForcePassState:
        """Allocate the state for a new execution cycle.

        With force-pass active, the pass flags start at 1 and the fail flags
        at 0 on every currently active site. The flags are bound to the site
        set, so reading or writing a site that is no longer active raises
        InvalidSiteAccess. Without force-pass, the flags are left unset.

        Args:
            force_pass: Whether force-pass mode is active.
            sites: Active site set of the cycle.
            generation: Execution cycle generation.

        Returns:
            A new ForcePassState.
        """
        if not force_pass:
            return cls(force_pass=False, generation=generation)
        active = sites.active_sites()
        logger.debug("Force-pass flags allocated for cycle %d on sites %s", generation, active)
        return cls(
            force_pass=True,
            set_on_pass_flags=MultiSiteValue.filled(ValueKind.INT, active, 1, source=sites),
            set_on_fail_flags=MultiSiteValue.filled(ValueKind.INT, active, 0, source=sites),
            generation=generation,
        )

    @property
    def initialized(self) -> bool:
        """Return True if both flag sets are allocated."""
        return self.set_on_pass_flags is not None and self.set_on_fail_flags is not None

    def check(self, cycle: int | None = None) -> None:
        """Check that the state may be used for an evaluation.

        Args:
            cycle: Generation of the current cycle, if known.

        Raises:
            StateReuseError: If the state belongs to a different cycle.
            ConfigurationError: If force-pass is active without flags.
        """
        if cycle is not None and cycle != self.generation:
            raise StateReuseError(
                f"Force-pass state of cycle {self.generation} used in cycle {cycle}"
            )
        if self.force_pass and not self.initialized:
            raise ConfigurationError(
                "Force-pass is active but its flags were not initialized for this cycle"
            )

    def fold(self, outcome: Mapping[SiteId, bool]) -> None:
        """Accumulate per-site outcomes into the flags.

        Every site's flags are read before any is written, so a site without
        flags leaves the state untouched.

        Args:
            outcome: True outcome (passed) per site.

        Raises:
            ConfigurationError: If the flags were not initialized.
            InvalidSiteAccess: If a site has no flags.
        """
        if self.set_on_pass_flags is None or self.set_on_fail_flags is None:
            raise ConfigurationError("Force-pass flags are not initialized")
        pass_flags = self.set_on_pass_flags
        fail_flags = self.set_on_fail_flags
        updated = {
            site: (
                pass_flags.get(site) & (1 if passed else 0),
                fail_flags.get(site) | (0 if passed else 1),
            )
            for site, passed in outcome.items()
        }
        for site, (on_pass, on_fail) in updated.items():
            pass_flags.set(site, on_pass)
            fail_flags.set(site, on_fail)

    def failed_sites(self) -> tuple[SiteId, ...]:
        """Return sites whose fail flag is latched, ascending."""
        if self.set_on_fail_flags is None:
            return ()
        return tuple(site for site, flag in self.set_on_fail_flags.items() if flag)
