"""Pass/fail judgement and datalogging of test descriptors.

The judge hands per-site results to the host's test descriptors and writes
one PARAM log record per active site. In force-pass mode it records the true
outcome in the cycle's ForcePassState and evaluates the descriptor so that
the host sees a pass on every site:

- Functional tests are evaluated with an all-true vector.
- Parametric tests are evaluated with their real values while their limits
  are cleared, then the limits are restored exactly.

The log always shows the true outcome, never the forced one.

Record formats:

    [0](contact)  : PASSED
    [1](vdd_leak) 10.0 : FAILED

Example:
    judge = Judge(logger)
    judge.evaluate_functional(contact, passed, state, sites)
    judge.evaluate_parametric(vdd_leak, currents, state, sites)
"""

from __future__ import annotations

import logging
from typing import Union

from atetm_core.errors import ConfigurationError
from atetm_core.interfaces.descriptor import (
    DescriptorKind,
    FunctionalTestDescriptor,
    MeasurementResult,
    ParametricTestDescriptor,
)
from atetm_core.levels import PARAM
from atetm_core.types.limits import BoundaryPolicy
from atetm_core.types.sites import MultiSiteValue, SiteId, ValueKind

from atetm_testmethod.forcepass import ForcePassState
from atetm_testmethod.limits import LimitOverride
from atetm_testmethod.sites import SiteSet

logger = logging.getLogger(__name__)

FunctionalInput = Union[MultiSiteValue[bool], MeasurementResult]
TestDescriptor = Union[FunctionalTestDescriptor, ParametricTestDescriptor]

PASSED = "PASSED"
FAILED = "FAILED"


def _verdict(passed: bool) -> str:
    return PASSED if passed else FAILED


def _as_pass_fail(passed: FunctionalInput) -> MultiSiteValue[bool]:
    if isinstance(passed, MultiSiteValue):
        if passed.kind is not ValueKind.BOOL:
            raise ConfigurationError(
                f"Functional tests take boolean values, got {passed.kind.value} values"
            )
        return passed
    if isinstance(passed, MeasurementResult):
        return _as_pass_fail(passed.has_passed())
    raise ConfigurationError(f"Cannot judge {type(passed).__name__} as a functional result")


class Judge:
    """Evaluates test descriptors per site and logs the outcome.

    The judge keeps no state between calls. The force-pass flags it updates
    are passed in with every call and belong to the current cycle.

    Args:
        log: Logger receiving the PARAM judgement records.
        boundary_policy: Judgement of values equal to a limit during forced
            parametric evaluation.
        limit_override: Limit clear/restore helper.
    """

    def __init__(
        self,
        log: logging.Logger | None = None,
        boundary_policy: BoundaryPolicy = BoundaryPolicy.INCLUSIVE,
        limit_override: LimitOverride | None = None,
    ) -> None:
        self._log = log if log is not None else logger
        self._boundary_policy = boundary_policy
        self._limits = limit_override if limit_override is not None else LimitOverride()

    @property
    def boundary_policy(self) -> BoundaryPolicy:
        """Return the boundary equality policy."""
        return self._boundary_policy

    def evaluate(
        self,
        descriptor: TestDescriptor,
        values: FunctionalInput | MultiSiteValue[int] | MultiSiteValue[float],
        state: ForcePassState,
        sites: SiteSet,
        *,
        cycle: int | None = None,
    ) -> MultiSiteValue[bool]:
        """Evaluate and log any descriptor, dispatching on its kind.

        Args:
            descriptor: Functional or parametric test descriptor.
            values: Boolean values or a measurement result for functional
                tests, integer or float values for parametric tests.
            state: Force-pass state of the current cycle.
            sites: Active site set.
            cycle: Generation of the current cycle, if known.

        Returns:
            The true per-site outcome.

        Raises:
            ConfigurationError: If the descriptor kind is unknown or the
                values do not fit it.
        """
        kind = getattr(descriptor, "kind", None)
        if kind is DescriptorKind.FUNCTIONAL:
            return self.evaluate_functional(
                descriptor, values, state, sites, cycle=cycle  # type: ignore[arg-type]
            )
        if kind is DescriptorKind.PARAMETRIC:
            if not isinstance(values, MultiSiteValue):
                raise ConfigurationError(
                    f"Parametric test {descriptor.name} takes numeric values, "
                    f"got {type(values).__name__}"
                )
            return self.evaluate_parametric(
                descriptor, values, state, sites, cycle=cycle  # type: ignore[arg-type]
            )
        raise ConfigurationError(f"Unknown test descriptor kind: {kind!r}")

    def evaluate_functional(
        self,
        descriptor: FunctionalTestDescriptor,
        passed: FunctionalInput,
        state: ForcePassState,
        sites: SiteSet,
        *,
        cycle: int | None = None,
    ) -> MultiSiteValue[bool]:
        """Evaluate and log a functional test.

        Args:
            descriptor: Functional test descriptor.
            passed: Per-site pass/fail, or a measurement result.
            state: Force-pass state of the current cycle.
            sites: Active site set.
            cycle: Generation of the current cycle, if known.

        Returns:
            The true per-site outcome.

        Raises:
            ConfigurationError: If force-pass is active without flags, or
                ``passed`` is not boolean.
            StateReuseError: If ``state`` belongs to another cycle.
            InvalidSiteAccess: If an active site has no result or no flags.
        """
        pass_fail = _as_pass_fail(passed)
        state.check(cycle)
        active = sites.active_sites()
        outcome = {site: bool(pass_fail.get(site)) for site in active}

        if state.force_pass:
            state.fold(outcome)
            # Record the test as executed without binning the device
            descriptor.evaluate(MultiSiteValue.filled(ValueKind.BOOL, active, True))
        else:
            descriptor.evaluate(pass_fail)

        for site in active:
            self._log.log(PARAM, "[%d](%s)  : %s", site, descriptor.name, _verdict(outcome[site]))
        return MultiSiteValue.from_mapping(ValueKind.BOOL, outcome)

    def evaluate_parametric(
        self,
        descriptor: ParametricTestDescriptor,
        values: MultiSiteValue[float] | MultiSiteValue[int],
        state: ForcePassState,
        sites: SiteSet,
        *,
        cycle: int | None = None,
    ) -> MultiSiteValue[bool]:
        """Evaluate and log a parametric test.

        Integer values are converted to float first.

        Args:
            descriptor: Parametric test descriptor.
            values: Per-site measured values.
            state: Force-pass state of the current cycle.
            sites: Active site set.
            cycle: Generation of the current cycle, if known.

        Returns:
            The true per-site outcome.

        Raises:
            ConfigurationError: If force-pass is active without flags, or
                ``values`` is boolean.
            StateReuseError: If ``state`` belongs to another cycle.
            InvalidSiteAccess: If an active site has no value or no flags.
        """
        if values.kind is ValueKind.INT:
            values = values.to_float()
        elif values.kind is not ValueKind.FLOAT:
            raise ConfigurationError(
                f"Parametric test {descriptor.name} takes numeric values, "
                f"got {values.kind.value} values"
            )
        state.check(cycle)
        active = sites.active_sites()
        measured = {site: values.get(site) for site in active}

        outcome: dict[SiteId, bool]
        if state.force_pass:
            captured = self._limits.capture(descriptor)
            outcome = {
                site: captured.check(value, self._boundary_policy)
                for site, value in measured.items()
            }
            state.fold(outcome)
            with self._limits.overridden(descriptor, captured):
                descriptor.evaluate(values)
        else:
            descriptor.evaluate(values)
            pass_fail = descriptor.get_pass_fail()
            outcome = {site: bool(pass_fail.get(site)) for site in active}

        for site in active:
            self._log.log(
                PARAM,
                "[%d](%s) %s : %s",
                site,
                descriptor.name,
                measured[site],
                _verdict(outcome[site]),
            )
        return MultiSiteValue.from_mapping(ValueKind.BOOL, outcome)

    @staticmethod
    def to_parametric_code(
        passed: FunctionalInput,
        sites: SiteSet | None = None,
    ) -> MultiSiteValue[int]:
        """Map functional pass/fail to legacy parametric codes.

        Passing sites map to 0 and failing sites to -1.

        Args:
            passed: Per-site pass/fail, or a measurement result.
            sites: Sites to convert. Defaults to the sites set in ``passed``.

        Returns:
            Per-site codes.
        """
        pass_fail = _as_pass_fail(passed)
        targets = pass_fail.sites() if sites is None else sites.active_sites()
        return MultiSiteValue.from_mapping(
            ValueKind.INT,
            {site: 0 if pass_fail.get(site) else -1 for site in targets},
        )
