"""Exception types for atetm-core.

This module defines the exception hierarchy used throughout the atetm test
method framework. All atetm exceptions inherit from AtetmError, allowing
consumers to catch all framework-specific errors with a single except clause.

None of these errors are transient. They signal programming or configuration
mistakes in the test program, so nothing in the framework retries on them.

Exception hierarchy:
    AtetmError (base)
    +-- ConfigurationError: Test method configuration or parameter errors
    +-- InvalidSiteAccess: Access to a site outside the active site set
    |   +-- UnsetSiteValueError: Read of a site that holds no value
    +-- StateReuseError: Force-pass state reused across execution cycles
    +-- LifecycleError: setup/update/execute called out of order
"""


class AtetmError(Exception):
    """Base exception for all atetm errors.

    This is the root of the atetm exception hierarchy. Catch this to handle
    any framework-specific error.
    """


class ConfigurationError(AtetmError):
    """Raised for test method configuration errors.

    Common causes include force-pass being active without its per-site flags
    having been initialized, a required test method parameter that was never
    supplied, a malformed configuration file, or a value vector whose kind
    does not match the test descriptor it is judged against.
    """


class InvalidSiteAccess(AtetmError):
    """Raised when a site outside the active site set is read or written.

    Sites are supplied by the host and may change between execution cycles.
    Accessing an inactive site usually points to a site configuration mistake
    on the host side, so it is reported instead of silently ignored.
    """


class UnsetSiteValueError(InvalidSiteAccess):
    """Raised when reading a site that has no value and no default."""


class StateReuseError(AtetmError):
    """Raised when force-pass state from another execution cycle is used.

    Every execution cycle allocates fresh force-pass flags. Evaluating with
    flags whose cycle generation differs from the current one would leak
    pass/fail history from a previous device into the current one.
    """


class LifecycleError(AtetmError):
    """Raised when a lifecycle step is invoked out of order.

    The host is expected to call setup(), update() and execute() in that
    order for every device cycle.
    """
