"""Shared fixtures for BigInt / BigComplex tests."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from big_complex import BigComplex
from config import reset_config

# The autouse reset below is idempotent, so re-running it per example is fine.
settings.register_profile(
    "numeric",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("numeric")


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts and ends with the default configuration."""
    yield reset_config()
    reset_config()


@pytest.fixture
def z34() -> BigComplex:
    """The 3-4-5 triangle point used throughout the complex tests."""
    return BigComplex(3, 4)
