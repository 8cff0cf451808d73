"""pytest fixtures for workspace definition tests.

User overrides archdsl_config in their conftest.py.
"""

from __future__ import annotations

import pytest

from archdsl.domain.model.configuration import BuildConfig
from archdsl.presentation.api.dsl import Dsl


def _max_depth(config: pytest.Config) -> int | None:
    raw = str(config.getini("archdsl_max_depth")).strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise pytest.UsageError(f"archdsl_max_depth must be an integer, got {raw!r}") from e


@pytest.fixture
def archdsl_config(request: pytest.FixtureRequest) -> BuildConfig:
    """Build configuration from ini options.

    User overrides this fixture in their conftest.py to provide
    custom configuration.
    """
    return BuildConfig(
        fail_fast=bool(request.config.getini("archdsl_fail_fast")),
        max_depth=_max_depth(request.config),
    )


@pytest.fixture
def dsl(archdsl_config: BuildConfig) -> Dsl:
    """Fresh build. One workspace per test."""
    return Dsl(archdsl_config)
