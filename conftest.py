"""Root conftest.py for the atetm monorepo.

This provides shared pytest configuration across all packages. Tests that
drive a test method through the in-process host emulation (atetm_sim) are
marked automatically so they can be selected or excluded as a group.
"""

from __future__ import annotations

import ast
import inspect
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


# Add all package src directories to path for imports
PROJECT_ROOT = Path(__file__).parent
for pkg_dir in PROJECT_ROOT.glob("atetm-*/src"):
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))

SIM_PACKAGE = "atetm_sim"
LIBRARY_PREFIX = "atetm_"


def pytest_configure(config: Config) -> None:
    """Register custom markers.

    Args:
        config: pytest configuration object.
    """
    config.addinivalue_line(
        "markers",
        "uses_sim: Test runs against the simulated host (auto-detected or manually marked)",
    )
    config.addinivalue_line(
        "markers",
        "integration: Integration test requiring a real test executive",
    )
    config.addinivalue_line(
        "markers",
        "slow: Slow-running test",
    )


class SimImportDetector(ast.NodeVisitor):
    """AST visitor that detects imports of the simulated host package."""

    def __init__(self) -> None:
        self.uses_sim = False

    def visit_Import(self, node: ast.Import) -> None:
        if any(alias.name.split(".")[0] == SIM_PACKAGE for alias in node.names):
            self.uses_sim = True
        self.generic_visit(node)

    def visit_ImportFrom(self, node: ast.ImportFrom) -> None:
        if node.module and node.module.split(".")[0] == SIM_PACKAGE:
            self.uses_sim = True
        self.generic_visit(node)


_module_cache: dict[str, bool] = {}


def _module_uses_sim(item: Item) -> bool:
    """Check if the module defining a test imports the simulated host.

    Args:
        item: pytest test item.

    Returns:
        True if the test module imports atetm_sim.
    """
    module = getattr(item, "module", None)
    if module is None:
        return False
    name = module.__name__
    if name not in _module_cache:
        try:
            tree = ast.parse(inspect.getsource(module))
        except (OSError, TypeError, SyntaxError):
            _module_cache[name] = False
        else:
            detector = SimImportDetector()
            detector.visit(tree)
            _module_cache[name] = detector.uses_sim
    return _module_cache[name]


def pytest_pycollect_makeitem(collector: Any, name: str, obj: object) -> list[Any] | None:
    """Skip library classes imported into test modules.

    TestMethod, TestMethodHooks and TestMethodConfig match the default
    ``Test*`` class pattern, but only classes defined in a test module are
    test classes.

    Args:
        collector: The module or class collector.
        name: Attribute name in the collected namespace.
        obj: The attribute.

    Returns:
        An empty list for library classes, None to use default collection.
    """
    if inspect.isclass(obj) and getattr(obj, "__module__", "").startswith(LIBRARY_PREFIX):
        return []
    return None


def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Auto-detect and mark tests that use the simulated host.

    Args:
        config: pytest configuration object.
        items: List of collected test items.
    """
    uses_sim_marker = pytest.mark.uses_sim

    for item in items:
        if item.get_closest_marker("uses_sim"):
            continue
        if _module_uses_sim(item):
            item.add_marker(uses_sim_marker)


def pytest_report_header(config: Config) -> list[str]:
    """Add coverage mode info to pytest header.

    Args:
        config: pytest configuration object.

    Returns:
        List of header lines.
    """
    lines = ["atetm monorepo test suite"]

    if getattr(config.option, "cov_source", None):
        lines.append("Coverage: enabled")

    return lines
