"""pytest plugin for archdsl.

Provides fixtures for workspace definition tests:
    archdsl_config: Build configuration (override in conftest.py)
    dsl: Fresh Dsl build using archdsl_config

Configuration (pytest.ini or pyproject.toml):
    archdsl_fail_fast: Abort builds on the first diagnostic (default: false)
    archdsl_max_depth: Maximum body nesting depth (default: unlimited)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Register fixtures from fixtures module
from archdsl.presentation.pytest_plugin.fixtures import archdsl_config, dsl

if TYPE_CHECKING:
    import pytest

__all__ = [
    "archdsl_config",
    "dsl",
    "pytest_addoption",
    "pytest_configure",
]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options read by archdsl_config."""
    parser.addini(
        "archdsl_fail_fast",
        "abort archdsl builds on the first diagnostic",
        type="bool",
        default=False,
    )
    parser.addini(
        "archdsl_max_depth",
        "maximum archdsl body nesting depth",
        default="",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        "archdsl: mark test as workspace definition test",
    )
