"""Test method configuration loading.

A test method config holds the settings the test program author controls
per test method instance: its name, force-pass mode, parameter checking,
log level and the boundary policy used by forced parametric judgement.

Example YAML:
    test_method:
      name: "vdd_leakage"
      force_pass: false
      check_params: true
      strict_params: false
      always_setup: false
      log_level: "WARNING"
      boundary_policy: "inclusive"
      required_params: ["pin", "force_value"]
      optional_params: ["settling_time"]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from atetm_core.errors import ConfigurationError
from atetm_core.levels import resolve_level
from atetm_core.types.limits import BoundaryPolicy


@dataclass(frozen=True)
class TestMethodConfig:
    """Settings of one test method instance.

    Attributes:
        name: Test method name, used in trace records and its logger name.
        force_pass: Record every test as passing while tracking true results.
        check_params: Run the parameter completeness check before the body.
        strict_params: Also reject supplied parameters that are not declared.
        always_setup: Never skip the internal setup step.
        log_level: Log level applied to the test method logger at setup.
        boundary_policy: Equality policy for forced parametric judgement.
        required_params: Parameters that must be supplied.
        optional_params: Parameters that may be supplied.
    """

    name: str = "test_method"
    force_pass: bool = False
    check_params: bool = True
    strict_params: bool = False
    always_setup: bool = False
    log_level: str | int = "WARNING"
    boundary_policy: BoundaryPolicy = BoundaryPolicy.INCLUSIVE
    required_params: tuple[str, ...] = ()
    optional_params: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("Test method name must be non-empty")
        resolve_level(self.log_level)

    @property
    def level(self) -> int:
        """Return the numeric log level."""
        return resolve_level(self.log_level)

    @property
    def declared_params(self) -> tuple[str, ...]:
        """Return required and optional parameter names."""
        return self.required_params + self.optional_params

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestMethodConfig:
        """Create a config from the contents of a ``test_method`` section.

        Args:
            data: Mapping of config fields. Unknown keys are rejected.

        Returns:
            Parsed TestMethodConfig.

        Raises:
            ConfigurationError: If a field is unknown or has the wrong type.
        """
        known = {
            "name",
            "force_pass",
            "check_params",
            "strict_params",
            "always_setup",
            "log_level",
            "boundary_policy",
            "required_params",
            "optional_params",
        }
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown test method config fields: {unknown}")

        kwargs: dict[str, Any] = {}
        if "name" in data:
            kwargs["name"] = str(data["name"])
        for flag in ("force_pass", "check_params", "strict_params", "always_setup"):
            if flag in data:
                if not isinstance(data[flag], bool):
                    raise ConfigurationError(f"{flag} must be true or false")
                kwargs[flag] = data[flag]
        if "log_level" in data:
            kwargs["log_level"] = data["log_level"]
        if "boundary_policy" in data:
            kwargs["boundary_policy"] = BoundaryPolicy.parse(data["boundary_policy"])
        for names in ("required_params", "optional_params"):
            if names in data:
                value = data[names] or []
                if not isinstance(value, list):
                    raise ConfigurationError(f"{names} must be a list")
                kwargs[names] = tuple(str(v) for v in value)
        return cls(**kwargs)


def load_test_method_config(path: str | Path) -> TestMethodConfig:
    """Load a test method configuration from a YAML file.

    Args:
        path: Path to the configuration YAML file.

    Returns:
        Parsed TestMethodConfig.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigurationError: If the file contents are invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Test method config not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ConfigurationError("Test method config must be a YAML mapping")

    section = data.get("test_method")
    if not isinstance(section, dict):
        raise ConfigurationError("Missing required section: test_method")

    return TestMethodConfig.from_dict(section)
