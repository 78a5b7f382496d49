"""Test method lifecycle.

The host test executive drives a test method through three calls per device:

    setup()   -> internal setup, skipped when the host reports unchanged inputs
    update()  -> extension point, no-op by default
    execute() -> parameter check, pre-body, body, process, result processing

The application behavior lives in a TestMethodHooks strategy object composed
into the TestMethod. Every default hook only writes a TRACE record, and the
default body() delegates to run().

execute() always ends with the release of locked device data, exactly once,
even when a step raised. The error is re-raised after the release.

Example:
    class Continuity(TestMethodHooks):
        def run(self, method: TestMethod) -> None:
            passed = measure_continuity(method.measurement)
            method.judge_and_datalog(method.measurement.descriptor, passed)

    method = TestMethod(site_source, hooks=Continuity(), config=config)
    method.setup()
    method.update()
    method.execute()
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

from atetm_core.errors import ConfigurationError, LifecycleError
from atetm_core.interfaces.device_data import DeviceDataStorage
from atetm_core.interfaces.host import DependencyOracle, SiteSource, TesterRelease
from atetm_core.levels import TRACE
from atetm_core.types.sites import MultiSiteValue

from atetm_testmethod.config import TestMethodConfig
from atetm_testmethod.forcepass import ForcePassState
from atetm_testmethod.judge import FunctionalInput, Judge, TestDescriptor
from atetm_testmethod.release import DeviceDataReleaser, ReleaseLatch
from atetm_testmethod.sites import SiteSet

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """Lifecycle state of a test method."""

    IDLE = "idle"
    SETUP = "setup"
    UPDATED = "updated"
    EXECUTING = "executing"
    DONE = "done"


class TestMethodHooks:
    """Application hooks of a test method.

    Override the hooks a test method needs. Each hook receives the TestMethod
    it runs in, which gives access to the sites, the judge, the parameters
    and the measurement handle.
    """

    def _trace(self, method: TestMethod, hook: str) -> None:
        method.log_trace(type(self).__name__, hook)

    def setup(self, method: TestMethod) -> None:
        """Internal setup, skipped while the host reports unchanged inputs."""
        self._trace(method, "setup")

    def update(self, method: TestMethod) -> None:
        """Update extension point."""
        self._trace(method, "update")

    def check_params(self, method: TestMethod) -> None:
        """Check that the supplied parameters are complete.

        Raises:
            ConfigurationError: If a required parameter is missing.
        """
        self._trace(method, "check_params")
        method.check_required_params()

    def pre_body(self, method: TestMethod) -> None:
        """Runs before the body."""
        self._trace(method, "pre_body")

    def body(self, method: TestMethod) -> None:
        """Main test method body. Delegates to run() by default."""
        self._trace(method, "body")
        self.run(method)

    def run(self, method: TestMethod) -> None:
        """Application test code."""
        self._trace(method, "run")

    def process(self, method: TestMethod) -> None:
        """Application processing after the body."""
        self._trace(method, "process")

    def process_results(self, method: TestMethod) -> None:
        """Result post-processing."""
        self._trace(method, "process_results")


class TestMethod:
    """A test method instance driven by the host test executive.

    All host collaborators are passed in explicitly.

    Args:
        site_source: The host's active site source.
        config: Test method configuration.
        hooks: Application hooks. Defaults to no-op hooks.
        dependencies: Host dependency oracle. Without one, setup always runs.
        tester_release: Host tester release action.
        log: Logger for trace and judgement records. Defaults to a child of
            this module's logger named after the test method.
        measurement: Optional handle to the host measurement object.
        params: Supplied test method parameters.
        judge: Judge to use. Defaults to one built from the configuration.
    """

    def __init__(
        self,
        site_source: SiteSource,
        *,
        config: TestMethodConfig | None = None,
        hooks: TestMethodHooks | None = None,
        dependencies: DependencyOracle | None = None,
        tester_release: TesterRelease | None = None,
        log: logging.Logger | None = None,
        measurement: Any = None,
        params: Mapping[str, Any] | None = None,
        judge: Judge | None = None,
    ) -> None:
        self._config = config if config is not None else TestMethodConfig()
        self._hooks = hooks if hooks is not None else TestMethodHooks()
        self._sites = SiteSet(site_source)
        self._dependencies = dependencies
        self._log = log if log is not None else logger.getChild(self._config.name)
        self._judge = (
            judge
            if judge is not None
            else Judge(self._log, boundary_policy=self._config.boundary_policy)
        )
        self._measurement = measurement
        self._params: dict[str, Any] = dict(params or {})
        self._device_data = DeviceDataReleaser()
        self._release_latch = ReleaseLatch(tester_release)
        self._force_pass_state = ForcePassState()
        self._cycle = 0
        self._state = LifecycleState.IDLE
        self._setup_skipped = False

    # -- Properties -----------------------------------------------------------

    @property
    def config(self) -> TestMethodConfig:
        """Return the test method configuration."""
        return self._config

    @property
    def test_name(self) -> str:
        """Return the test method name."""
        return self._config.name

    @property
    def hooks(self) -> TestMethodHooks:
        """Return the application hooks."""
        return self._hooks

    @property
    def sites(self) -> SiteSet:
        """Return the active site set."""
        return self._sites

    @property
    def judge(self) -> Judge:
        """Return the judge."""
        return self._judge

    @property
    def log(self) -> logging.Logger:
        """Return the test method logger."""
        return self._log

    @property
    def measurement(self) -> Any:
        """Return the host measurement handle."""
        return self._measurement

    @property
    def params(self) -> Mapping[str, Any]:
        """Return the supplied parameters."""
        return self._params

    @property
    def state(self) -> LifecycleState:
        """Return the lifecycle state."""
        return self._state

    @property
    def cycle(self) -> int:
        """Return the generation of the current (or last) execute cycle."""
        return self._cycle

    @property
    def setup_skipped(self) -> bool:
        """Return True if the last setup() skipped the internal setup step."""
        return self._setup_skipped

    @property
    def force_pass_state(self) -> ForcePassState:
        """Return the force-pass state of the current cycle."""
        return self._force_pass_state

    @property
    def device_data(self) -> DeviceDataReleaser:
        """Return the device data releaser."""
        return self._device_data

    # -- Logging --------------------------------------------------------------

    def log_trace(self, class_name: str, method: str) -> None:
        """Write a method trace record.

        Args:
            class_name: Name of the class the traced method belongs to.
            method: Name of the traced method.
        """
        self._log.log(TRACE, "\t%s\t%s()", class_name, method)

    # -- Lifecycle ------------------------------------------------------------

    def _require(self, operation: str, *allowed: LifecycleState) -> None:
        if self._state not in allowed:
            raise LifecycleError(
                f"{operation}() is not allowed in state {self._state.value} "
                f"of test method {self.test_name}"
            )

    def setup(self) -> None:
        """Prepare the test method for a new device.

        Applies the configured log level and runs the internal setup hook
        unless the host reports that its inputs are unchanged. Device data
        attached since the last cycle ended is released first.

        Raises:
            LifecycleError: If called while a cycle is in progress.
        """
        self._require("setup", LifecycleState.IDLE, LifecycleState.DONE)
        self._log.setLevel(self._config.level)
        self.log_trace("TestMethod", "setup")

        if self._state is LifecycleState.DONE and self._device_data.pending:
            logger.info(
                "Releasing device data of %s attached after the last cycle",
                self.test_name,
            )
            self._device_data.release()

        unchanged = (
            self._dependencies.dependencies_unchanged()
            if self._dependencies is not None
            else False
        )
        self._setup_skipped = unchanged and not self._config.always_setup
        if self._setup_skipped:
            logger.debug("Setup of %s skipped, dependencies unchanged", self.test_name)
        else:
            self._hooks.setup(self)
        self._state = LifecycleState.SETUP

    def update(self) -> None:
        """Run the update hook.

        Raises:
            LifecycleError: If setup() has not been called.
        """
        self._require("update", LifecycleState.SETUP)
        self.log_trace("TestMethod", "update")
        self._hooks.update(self)
        self._state = LifecycleState.UPDATED

    def execute(self) -> None:
        """Run one execute cycle.

        Resets the tester release latch and the force-pass state, checks the
        parameters, then runs pre_body, body, process and process_results in
        that order. Locked device data is released at the end in all cases.

        Raises:
            LifecycleError: If update() has not been called.
            ConfigurationError: If the parameter check fails.
        """
        self._require("execute", LifecycleState.UPDATED)
        self.log_trace("TestMethod", "execute")
        self._cycle += 1
        self._state = LifecycleState.EXECUTING
        self._release_latch.reset()
        self._device_data.reset()
        self._force_pass_state = ForcePassState(generation=self._cycle)

        try:
            if self._config.check_params:
                self._hooks.check_params(self)

            if self._config.force_pass:
                self._force_pass_state = ForcePassState.for_cycle(
                    True, self._sites, self._cycle
                )

            self._hooks.pre_body(self)
            self._hooks.body(self)
            self._hooks.process(self)
            self._hooks.process_results(self)
        except Exception as e:
            self._log.error("Execute of %s aborted: %s", self.test_name, e)
            raise
        finally:
            self._device_data.release()
            self._state = LifecycleState.DONE

    # -- Parameters -----------------------------------------------------------

    def check_required_params(self) -> None:
        """Check the supplied parameters against the configuration.

        Raises:
            ConfigurationError: If a required parameter is missing, or an
                undeclared parameter was supplied while strict_params is on.
        """
        problems: list[str] = []
        missing = [name for name in self._config.required_params if name not in self._params]
        if missing:
            problems.append(f"missing required parameters {missing}")
        if self._config.strict_params:
            declared = set(self._config.declared_params)
            unknown = sorted(name for name in self._params if name not in declared)
            if unknown:
                problems.append(f"undeclared parameters {unknown}")
        if problems:
            raise ConfigurationError(f"Test method {self.test_name}: {'; '.join(problems)}")

    # -- Judgement ------------------------------------------------------------

    def judge_and_datalog(
        self,
        descriptor: TestDescriptor,
        values: FunctionalInput | MultiSiteValue[int] | MultiSiteValue[float],
    ) -> MultiSiteValue[bool]:
        """Evaluate and log a test descriptor in the current cycle.

        Args:
            descriptor: Functional or parametric test descriptor.
            values: Per-site results.

        Returns:
            The true per-site outcome.

        Raises:
            LifecycleError: If called outside execute().
        """
        self._require("judge_and_datalog", LifecycleState.EXECUTING)
        return self._judge.evaluate(
            descriptor, values, self._force_pass_state, self._sites, cycle=self._cycle
        )

    def to_parametric_code(self, passed: FunctionalInput) -> MultiSiteValue[int]:
        """Map functional pass/fail on the active sites to 0/-1 codes."""
        return Judge.to_parametric_code(passed, self._sites)

    # -- Release --------------------------------------------------------------

    def set_device_data_storage(self, storage: DeviceDataStorage | None) -> None:
        """Attach the device data storage released at the end of every execute()."""
        self._device_data.attach(storage)

    def release_tester(self) -> None:
        """Release the tester back to the host."""
        self.log_trace("TestMethod", "release_tester")
        self._release_latch.fire()

    def has_tester_release_been_called(self) -> bool:
        """Return True if release_tester() was called in the current cycle."""
        return self._release_latch.fired
