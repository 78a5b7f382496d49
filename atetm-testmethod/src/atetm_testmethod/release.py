"""End-of-cycle resource release.

Two release paths exist for a test method:

- DeviceDataReleaser: releases the variables a test method locked in the
  device data storage. Run by the lifecycle exactly once at the end of
  every execute cycle, for as long as the storage stays attached.
- ReleaseLatch: releases the tester back to the host. Fired by the test
  method itself when it no longer needs the hardware, and queried by later
  processing steps of the same cycle.
"""

from __future__ import annotations

import logging

from atetm_core.interfaces.device_data import DeviceDataStorage
from atetm_core.interfaces.host import TesterRelease

logger = logging.getLogger(__name__)


class DeviceDataReleaser:
    """Once-per-cycle release of locked device data.

    The storage handle stays attached across cycles. release() frees its
    locked variables at most once until reset() starts the next cycle, so a
    second release() in the same cycle is a no-op. Attaching a handle makes
    it pending again. Releasing with no handle attached is a no-op as well.
    """

    def __init__(self) -> None:
        self._storage: DeviceDataStorage | None = None
        self._released = True

    @property
    def attached(self) -> bool:
        """Return True if a storage handle is attached."""
        return self._storage is not None

    @property
    def storage(self) -> DeviceDataStorage | None:
        """Return the attached storage handle, if any."""
        return self._storage

    @property
    def pending(self) -> bool:
        """Return True if the attached handle still needs a release."""
        return self._storage is not None and not self._released

    def attach(self, storage: DeviceDataStorage | None) -> None:
        """Attach a device data storage handle.

        Args:
            storage: The storage handle. None detaches the current one.
        """
        self._storage = storage
        self._released = storage is None

    def detach(self) -> DeviceDataStorage | None:
        """Detach the storage handle without releasing it.

        Returns:
            The previously attached handle, if any.
        """
        storage, self._storage = self._storage, None
        self._released = True
        return storage

    def reset(self) -> None:
        """Start a new cycle, allowing one more release."""
        self._released = self._storage is None

    def release(self) -> None:
        """Release the locked variables of the attached storage, if pending."""
        if self._storage is None:
            logger.debug("No device data storage attached, nothing to release")
            return
        if self._released:
            logger.debug("Device data already released in this cycle")
            return
        self._released = True
        self._storage.release_variables()
        logger.debug("Device data variables released")


class ReleaseLatch:
    """Single-fire latch around the host's tester release action.

    The latch is set before the release action runs, so the action itself
    already sees it as fired. Firing again runs the action again but does
    not change what the latch reports.

    Args:
        action: The host's tester release action.
    """

    def __init__(self, action: TesterRelease | None = None) -> None:
        self._action = action
        self._fired = False
        self._fire_count = 0

    @property
    def fired(self) -> bool:
        """Return True if the tester was released in this cycle."""
        return self._fired

    @property
    def fire_count(self) -> int:
        """Return how many times the latch fired in this cycle."""
        return self._fire_count

    def fire(self) -> None:
        """Release the tester and set the latch."""
        if self._fired:
            logger.warning("Tester release requested again in the same cycle")
        self._fired = True
        self._fire_count += 1
        if self._action is not None:
            self._action()

    def reset(self) -> None:
        """Clear the latch for a new cycle."""
        self._fired = False
        self._fire_count = 0
