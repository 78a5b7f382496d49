"""Read-only view of the host's active sites."""

from __future__ import annotations

from typing import Iterator

from atetm_core.errors import InvalidSiteAccess
from atetm_core.interfaces.host import SiteSource
from atetm_core.types.sites import SiteId, check_site_id


class SiteSet:
    """Active site set of the current execution.

    Wraps the host's site source. Every query goes back to the host, so a
    change of active sites between two calls is always seen. The set itself
    cannot be modified.

    Args:
        source: The host's active site source.

    Example:
        sites = SiteSet(host.site_source)
        for site in sites.active_sites():
            ...
    """

    def __init__(self, source: SiteSource) -> None:
        self._source = source

    def active_sites(self) -> tuple[SiteId, ...]:
        """Return the currently active sites in host order.

        Returns:
            Tuple of active site ids.

        Raises:
            InvalidSiteAccess: If the host reports an invalid or duplicate site id.
        """
        sites = tuple(check_site_id(site) for site in self._source.active_sites())
        if len(set(sites)) != len(sites):
            raise InvalidSiteAccess(f"Host reported duplicate active sites: {sites}")
        return sites

    def contains(self, site: int) -> bool:
        """Check whether a site is currently active."""
        return site in self.active_sites()

    def __contains__(self, site: object) -> bool:
        return site in self.active_sites()

    def __iter__(self) -> Iterator[SiteId]:
        return iter(self.active_sites())

    def __len__(self) -> int:
        return len(self.active_sites())

    def __repr__(self) -> str:
        return f"SiteSet({list(self.active_sites())})"
