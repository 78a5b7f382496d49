"""Site identifiers and multi-site values.

An ATE test head runs the same test on several devices at once, one per
site. Values produced or consumed by a test method are therefore carried per
site. This module provides the site identifier type and the container used
for per-site scalars.

Classes:
    ValueKind: Value-kind tag of a multi-site value (bool, int or float).
    MultiSiteValue: Mapping from site id to a scalar of one value kind.

Example:
    >>> passed = MultiSiteValue.from_mapping(ValueKind.BOOL, {0: True, 1: False})
    >>> passed.get(1)
    False
    >>> flags = MultiSiteValue(ValueKind.INT, default=1)
    >>> flags.get(3)
    1
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterable, Iterator, Mapping, NewType, TypeVar

from atetm_core.errors import ConfigurationError, InvalidSiteAccess, UnsetSiteValueError

if TYPE_CHECKING:
    from atetm_core.interfaces.host import SiteSource

SiteId = NewType("SiteId", int)
"""Type alias for a parallel test site number."""

T = TypeVar("T", bool, int, float)

_UNSET: Any = object()


class ValueKind(Enum):
    """Scalar kinds a multi-site value can carry.

    Attributes:
        BOOL: Per-site boolean (functional pass/fail).
        INT: Per-site integer (flags, legacy pass/fail codes, counts).
        FLOAT: Per-site floating point (parametric measurements).
    """

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"

    def coerce(self, value: Any) -> Any:
        """Validate a scalar against this kind and normalize it.

        Integers are accepted for FLOAT and converted. Booleans are only
        accepted for BOOL, even though ``bool`` is an ``int`` subclass.

        Args:
            value: The scalar to validate.

        Returns:
            The normalized scalar.

        Raises:
            ConfigurationError: If the scalar does not match the kind.
        """
        if self is ValueKind.BOOL:
            if isinstance(value, bool):
                return value
        elif self is ValueKind.INT:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise ConfigurationError(f"Expected a {self.value} value, got {value!r}")


def check_site_id(site: Any) -> SiteId:
    """Validate a site id.

    Args:
        site: Candidate site id.

    Returns:
        The site id.

    Raises:
        InvalidSiteAccess: If the site id is not a non-negative integer.
    """
    if isinstance(site, bool) or not isinstance(site, int) or site < 0:
        raise InvalidSiteAccess(f"Invalid site id: {site!r}")
    return SiteId(site)


class MultiSiteValue(Generic[T]):
    """A scalar value carried independently per site.

    A multi-site value has a value kind, an optional default and an optional
    binding to a site source. A default, when given, answers for every site
    that was never set explicitly. Without a default, reading such a site
    raises UnsetSiteValueError.

    When bound to a site source, every read and write is checked against the
    source's current active sites and an inactive site raises
    InvalidSiteAccess. The active sites are queried at each access, never
    cached, since the host may change them between calls.

    Args:
        kind: The value kind of all per-site values.
        default: Value returned for sites not set explicitly. Omit for "unset".
        sites: Optional site source used to reject inactive sites.
    """

    __slots__ = ("_kind", "_default", "_sites", "_values")

    def __init__(
        self,
        kind: ValueKind,
        default: Any = _UNSET,
        *,
        sites: SiteSource | None = None,
    ) -> None:
        self._kind = kind
        self._default = _UNSET if default is _UNSET else kind.coerce(default)
        self._sites = sites
        self._values: dict[SiteId, T] = {}

    @classmethod
    def filled(
        cls,
        kind: ValueKind,
        sites: Iterable[int],
        value: Any,
        *,
        source: SiteSource | None = None,
    ) -> MultiSiteValue[Any]:
        """Create a value with the same explicit scalar on each given site.

        Args:
            kind: Value kind.
            sites: Sites to set.
            value: Scalar to store on every site.
            source: Optional site source to bind to.

        Returns:
            A new MultiSiteValue.
        """
        msv: MultiSiteValue[Any] = cls(kind, sites=source)
        for site in sites:
            msv.set(site, value)
        return msv

    @classmethod
    def from_mapping(
        cls,
        kind: ValueKind,
        values: Mapping[int, Any],
        *,
        default: Any = _UNSET,
    ) -> MultiSiteValue[Any]:
        """Create an unbound value from a site -> scalar mapping.

        Args:
            kind: Value kind.
            values: Per-site scalars.
            default: Optional default for sites not in ``values``.

        Returns:
            A new MultiSiteValue.
        """
        msv: MultiSiteValue[Any] = cls(kind, default)
        for site, value in values.items():
            msv.set(site, value)
        return msv

    @property
    def kind(self) -> ValueKind:
        """Return the value kind."""
        return self._kind

    @property
    def has_default(self) -> bool:
        """Return True if a default value was given."""
        return self._default is not _UNSET

    @property
    def default(self) -> T | None:
        """Return the default value, or None if unset."""
        return None if self._default is _UNSET else self._default

    @property
    def bound(self) -> bool:
        """Return True if accesses are checked against a site source."""
        return self._sites is not None

    def _check(self, site: Any) -> SiteId:
        site_id = check_site_id(site)
        if self._sites is not None and site_id not in tuple(self._sites.active_sites()):
            raise InvalidSiteAccess(f"Site {site_id} is not an active site")
        return site_id

    def get(self, site: int) -> T:
        """Get the value for a site.

        Args:
            site: Site id.

        Returns:
            The explicit value for the site, or the default.

        Raises:
            InvalidSiteAccess: If the site is invalid or inactive.
            UnsetSiteValueError: If the site has no value and there is no default.
        """
        site_id = self._check(site)
        if site_id in self._values:
            return self._values[site_id]
        if self._default is _UNSET:
            raise UnsetSiteValueError(f"Site {site_id} has no {self._kind.value} value")
        return self._default

    def set(self, site: int, value: Any) -> None:
        """Set the value for a site.

        Args:
            site: Site id.
            value: Scalar matching this value's kind.

        Raises:
            InvalidSiteAccess: If the site is invalid or inactive.
            ConfigurationError: If the scalar does not match the value kind.
        """
        site_id = self._check(site)
        self._values[site_id] = self._kind.coerce(value)

    def __getitem__(self, site: int) -> T:
        return self.get(site)

    def __setitem__(self, site: int, value: Any) -> None:
        self.set(site, value)

    def __contains__(self, site: object) -> bool:
        return site in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[SiteId]:
        return iter(self.sites())

    def sites(self) -> tuple[SiteId, ...]:
        """Return the explicitly set sites in ascending order."""
        return tuple(sorted(self._values))

    def items(self) -> tuple[tuple[SiteId, T], ...]:
        """Return (site, value) pairs for explicitly set sites, ascending."""
        return tuple((site, self._values[site]) for site in self.sites())

    def to_dict(self) -> dict[int, T]:
        """Return explicitly set values as a plain dictionary."""
        return {int(site): value for site, value in self.items()}

    def copy(self) -> MultiSiteValue[T]:
        """Return an independent copy with the same kind, default and binding."""
        clone: MultiSiteValue[T] = MultiSiteValue(self._kind, self._default, sites=self._sites)
        clone._values = dict(self._values)
        return clone

    def map(self, fn: Callable[[T], Any], kind: ValueKind) -> MultiSiteValue[Any]:
        """Apply a function to every value (and the default).

        Args:
            fn: Function applied to each scalar.
            kind: Value kind of the result.

        Returns:
            A new MultiSiteValue with the same binding.
        """
        default = _UNSET if self._default is _UNSET else fn(self._default)
        result: MultiSiteValue[Any] = MultiSiteValue(kind, default, sites=self._sites)
        for site, value in self._values.items():
            result._values[site] = kind.coerce(fn(value))
        return result

    def to_float(self) -> MultiSiteValue[float]:
        """Convert an integer (or float) value to its float form.

        Raises:
            ConfigurationError: If this is a boolean value.
        """
        if self._kind is ValueKind.BOOL:
            raise ConfigurationError("Cannot convert a boolean multi-site value to float")
        return self.map(float, ValueKind.FLOAT)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiSiteValue):
            return NotImplemented
        return (
            self._kind is other._kind
            and self.has_default == other.has_default
            and self.default == other.default
            and self._values == other._values
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        default = "" if self._default is _UNSET else f", default={self._default!r}"
        return f"MultiSiteValue({self._kind.value}, {self.to_dict()!r}{default})"
