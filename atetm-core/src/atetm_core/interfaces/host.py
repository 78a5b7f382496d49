"""Host test executive interfaces.

The host test executive owns site allocation, the decision of whether a test
method's inputs changed since the previous device, and the tester release
operation. Test methods reach these capabilities only through the protocols
below, which are passed in explicitly instead of being read from a global
context.

Protocols:
    SiteSource: Reports the currently active sites.
    DependencyOracle: Reports whether setup inputs changed since last cycle.
    TesterRelease: Releases the tester back to the host.
"""

# pylint: disable=unnecessary-ellipsis  # Ellipsis required for Protocol method stubs

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class SiteSource(Protocol):
    """Protocol for the host's active site set.

    The active sites may change between calls, even within one execution
    cycle. Consumers query this at every point of use.
    """

    def active_sites(self) -> Sequence[int]:
        """Return the currently active site ids in host order.

        Returns:
            Ordered sequence of non-negative site ids.
        """
        ...


class DependencyOracle(Protocol):
    """Protocol for the host's setup dependency tracking."""

    def dependencies_unchanged(self) -> bool:
        """Check whether setup inputs are unchanged since the previous cycle.

        Returns:
            True if the expensive internal setup step may be skipped.
        """
        ...


class TesterRelease(Protocol):
    """Protocol for the host's tester release action.

    Releasing the tester hands hardware back to the host so it can start on
    the next device while the test method finishes its processing.
    """

    def __call__(self) -> None:
        """Release the tester."""
        ...
