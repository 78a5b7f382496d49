"""Device data storage interface."""

# pylint: disable=unnecessary-ellipsis  # Ellipsis required for Protocol method stubs

from __future__ import annotations

from typing import Protocol


class DeviceDataStorage(Protocol):
    """Protocol for per-device data storage with locked variables.

    Test methods may lock device variables (trim codes, fuse data) while a
    device is being tested. The locks are held until the end of the execute
    cycle, when the test method asks the storage to release them.
    """

    def release_variables(self) -> None:
        """Release every variable locked by the current test method."""
        ...
