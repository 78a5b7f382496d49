"""Tests for test method configuration loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from atetm_core.errors import ConfigurationError
from atetm_core.levels import PARAM, TRACE
from atetm_core.types.limits import BoundaryPolicy

from atetm_testmethod.config import TestMethodConfig, load_test_method_config


@pytest.fixture
def config_yaml(tmp_path: Path) -> Path:
    """Create a valid test method config YAML file."""
    config = tmp_path / "vdd_leakage.yaml"
    config.write_text(
        textwrap.dedent("""\
        test_method:
          name: "vdd_leakage"
          force_pass: true
          check_params: true
          strict_params: true
          always_setup: false
          log_level: "PARAM"
          boundary_policy: "exclusive"
          required_params: ["pin", "force_value"]
          optional_params: ["settling_time"]
        """)
    )
    return config


class TestTestMethodConfig:
    """Tests for TestMethodConfig."""

    def test_defaults(self) -> None:
        config = TestMethodConfig()

        assert config.name == "test_method"
        assert not config.force_pass
        assert config.check_params
        assert not config.strict_params
        assert not config.always_setup
        assert config.level == 30
        assert config.boundary_policy is BoundaryPolicy.INCLUSIVE
        assert config.declared_params == ()

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="non-empty"):
            TestMethodConfig(name="")

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            TestMethodConfig(log_level="LOUD")

    def test_numeric_level(self) -> None:
        assert TestMethodConfig(log_level=TRACE).level == TRACE

    def test_declared_params(self) -> None:
        config = TestMethodConfig(required_params=("pin",), optional_params=("wait",))
        assert config.declared_params == ("pin", "wait")

    def test_from_dict_unknown_field(self) -> None:
        with pytest.raises(ConfigurationError, match="forcepass"):
            TestMethodConfig.from_dict({"forcepass": True})

    def test_from_dict_flag_must_be_bool(self) -> None:
        with pytest.raises(ConfigurationError, match="force_pass must be true or false"):
            TestMethodConfig.from_dict({"force_pass": "yes"})

    def test_from_dict_params_must_be_list(self) -> None:
        with pytest.raises(ConfigurationError, match="required_params must be a list"):
            TestMethodConfig.from_dict({"required_params": "pin"})

    def test_from_dict_empty_params(self) -> None:
        config = TestMethodConfig.from_dict({"optional_params": None})
        assert config.optional_params == ()

    def test_from_dict_bad_policy(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown boundary policy"):
            TestMethodConfig.from_dict({"boundary_policy": "strict"})


class TestLoadTestMethodConfig:
    """Tests for load_test_method_config."""

    def test_loads_valid_config(self, config_yaml: Path) -> None:
        config = load_test_method_config(config_yaml)

        assert config.name == "vdd_leakage"
        assert config.force_pass
        assert config.strict_params
        assert config.level == PARAM
        assert config.boundary_policy is BoundaryPolicy.EXCLUSIVE
        assert config.required_params == ("pin", "force_value")
        assert config.optional_params == ("settling_time",)

    def test_accepts_str_path(self, config_yaml: Path) -> None:
        assert load_test_method_config(str(config_yaml)).name == "vdd_leakage"

    def test_minimal_section(self, tmp_path: Path) -> None:
        path = tmp_path / "tm.yaml"
        path.write_text("test_method:\n  name: contact\n")

        config = load_test_method_config(path)

        assert config.name == "contact"
        assert not config.force_pass

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_test_method_config(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "tm.yaml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="YAML mapping"):
            load_test_method_config(path)

    def test_missing_section(self, tmp_path: Path) -> None:
        path = tmp_path / "tm.yaml"
        path.write_text("station:\n  id: s1\n")

        with pytest.raises(ConfigurationError, match="test_method"):
            load_test_method_config(path)
