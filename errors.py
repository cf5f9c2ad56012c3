"""Error taxonomy shared by the integer and complex value types.

Every failure is local to one call: the operation raises, nothing is
partially applied, and the caller decides whether to propagate or fall
back to a default.  Each error also derives from the builtin exception a
Python caller would expect (``ZeroDivisionError``, ``ValueError``,
``ArithmeticError``) so generic handlers keep working.
"""
from __future__ import annotations

from typing import Any


class NumericError(Exception):
    """Base class for all errors raised by ``BigInt`` and ``BigComplex``."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}: {message}")


class DivideByZero(NumericError, ZeroDivisionError):
    """Raised when a divisor or modulus is zero."""

    def __init__(self, operation: str, dividend: Any = None) -> None:
        self.dividend = dividend
        super().__init__(operation, "division by zero")


class InvalidArgument(NumericError, ValueError):
    """Raised when an input is outside an operation's domain."""

    def __init__(self, operation: str, argument: Any, reason: str) -> None:
        self.argument = argument
        super().__init__(operation, f"{reason} (got {argument!r})")


class NoInverse(NumericError, ArithmeticError):
    """Raised by ``mod_inv`` when the value and modulus are not coprime."""

    def __init__(self, value: Any, modulus: Any, gcd: Any) -> None:
        self.value = value
        self.modulus = modulus
        self.gcd = gcd
        super().__init__(
            "mod_inv",
            f"{value} has no inverse modulo {modulus} (gcd is {gcd})",
        )
