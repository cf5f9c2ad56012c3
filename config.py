"""Runtime configuration for the numeric value types.

The active configuration lives at module level and is replaced as a whole
by ``configure``.  Values are validated by pydantic, so a bad override is
rejected before it can affect any computation.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NumericConfig(BaseModel):
    """Tunable limits and tolerances."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    factorial_limit: int = Field(
        default=100_000,
        ge=0,
        description="Largest n accepted by BigInt.factorial",
    )
    rel_tol: float = Field(
        default=1e-9,
        ge=0.0,
        description="Relative tolerance for BigComplex.is_close",
    )
    abs_tol: float = Field(
        default=1e-9,
        ge=0.0,
        description="Absolute tolerance for BigComplex.is_close",
    )
    snap_exact_roots: bool = Field(
        default=True,
        description=(
            "Replace an approximate n-th root by the Gaussian integer it "
            "rounds to when that integer reproduces the input exactly"
        ),
    )

    @field_validator("rel_tol", "abs_tol")
    @classmethod
    def tolerance_is_finite(cls, v: float) -> float:
        if v != v or v == float("inf"):
            raise ValueError(f"Tolerance must be finite, got {v!r}")
        return v


DEFAULT_CONFIG = NumericConfig()

# Module-level configuration read by BigInt and BigComplex.
_active: NumericConfig = DEFAULT_CONFIG


def get_config() -> NumericConfig:
    return _active


def configure(**overrides: Any) -> NumericConfig:
    """Replace the active configuration with validated overrides.

    Fields not named keep their current value.
    """
    global _active
    merged = _active.model_dump()
    merged.update(overrides)
    _active = NumericConfig.model_validate(merged)
    return _active


def reset_config() -> NumericConfig:
    """Restore the defaults (useful for testing)."""
    global _active
    _active = DEFAULT_CONFIG
    return _active
