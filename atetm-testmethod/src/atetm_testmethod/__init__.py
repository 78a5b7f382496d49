"""Test method execution core for multi-site ATE test programs.

This package provides the base behavior shared by all test methods of a test
program: the setup/update/execute lifecycle, per-site pass/fail judgement
with datalogging, the force-pass override mode and end-of-cycle release of
locked resources.

Example usage:

    from atetm_testmethod import TestMethod, TestMethodHooks, load_test_method_config

    class Leakage(TestMethodHooks):
        def run(self, method: TestMethod) -> None:
            currents = method.measurement.read_currents()
            method.judge_and_datalog(method.measurement.descriptor, currents)

    method = TestMethod(
        host.site_source,
        config=load_test_method_config("vdd_leakage.yaml"),
        hooks=Leakage(),
        measurement=host.measurement("vdd_leakage"),
    )
    method.setup()
    method.update()
    method.execute()

    if method.force_pass_state.failed_sites():
        print("Force-pass suppressed failures")
"""

from atetm_testmethod.config import TestMethodConfig, load_test_method_config
from atetm_testmethod.forcepass import ForcePassState
from atetm_testmethod.judge import FAILED, PASSED, Judge
from atetm_testmethod.lifecycle import LifecycleState, TestMethod, TestMethodHooks
from atetm_testmethod.limits import LimitOverride
from atetm_testmethod.release import DeviceDataReleaser, ReleaseLatch
from atetm_testmethod.sites import SiteSet

__all__ = [
    # Configuration
    "TestMethodConfig",
    "load_test_method_config",
    # Judgement
    "FAILED",
    "PASSED",
    "ForcePassState",
    "Judge",
    "LimitOverride",
    "SiteSet",
    # Lifecycle
    "LifecycleState",
    "TestMethod",
    "TestMethodHooks",
    # Release
    "DeviceDataReleaser",
    "ReleaseLatch",
]
