"""Capture, clear and restore of parametric test limits.

A forced parametric evaluation must not let the host fail the device on the
real limits. The limits are cleared to NaN for the evaluation and written
back afterwards. NaN is only a clearing value: a limit that was absent before
is restored as absent, so a presence flag is kept next to every value.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from atetm_core.interfaces.descriptor import ParametricTestDescriptor
from atetm_core.types.limits import NO_LIMIT, CapturedLimits, LimitPair

logger = logging.getLogger(__name__)


class LimitOverride:
    """Temporarily disables the limits of a parametric test descriptor."""

    def capture(self, descriptor: ParametricTestDescriptor) -> CapturedLimits:
        """Read the descriptor's current limits.

        Args:
            descriptor: The parametric test descriptor.

        Returns:
            The limits with presence flags. A present NaN limit is captured
            as present.
        """
        return CapturedLimits.from_pair(
            LimitPair(low=descriptor.get_low_limit(), high=descriptor.get_high_limit())
        )

    def clear(self, descriptor: ParametricTestDescriptor) -> None:
        """Set both limits to "no limit" (NaN)."""
        descriptor.set_low_limit(NO_LIMIT)
        descriptor.set_high_limit(NO_LIMIT)

    def restore(self, descriptor: ParametricTestDescriptor, captured: CapturedLimits) -> None:
        """Write back exactly the captured limits.

        Args:
            descriptor: The parametric test descriptor.
            captured: Limits returned by capture().
        """
        pair = captured.to_pair()
        descriptor.set_low_limit(pair.low)
        descriptor.set_high_limit(pair.high)

    @contextmanager
    def overridden(
        self,
        descriptor: ParametricTestDescriptor,
        captured: CapturedLimits | None = None,
    ) -> Iterator[CapturedLimits]:
        """Clear the limits for the duration of a block.

        The limits are restored when the block exits, including on error.

        Args:
            descriptor: The parametric test descriptor.
            captured: Previously captured limits. Captured now if omitted.

        Yields:
            The captured limits.
        """
        if captured is None:
            captured = self.capture(descriptor)
        self.clear(descriptor)
        try:
            yield captured
        finally:
            self.restore(descriptor, captured)
            logger.debug("Limits of %s restored to %s", descriptor.name, captured.to_pair())
