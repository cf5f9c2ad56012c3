"""Complex value type over exact or approximate components.

Each component of a ``BigComplex`` is either a Python ``int`` (exact, of any
size) or a ``float``.  When both components are ints the value is
*integer-backed*: addition, subtraction, multiplication, powers, rotations
and ``magnitude_squared`` stay exact, and division truncates each component
toward zero the same way ``BigInt.div`` does.

Everything that needs an angle or a real root (``magnitude``, ``arg``,
polar conversion, ``nth_root``, ``ln_approx``, ``exp_approx``) goes through
IEEE doubles and is approximate.  For integer-backed values ``arg``,
``ln_approx`` and ``nth_root`` start from the exact components, so they
succeed whenever the result itself fits in a float; ``magnitude`` and
``exp_approx`` raise ``OverflowError`` when their result does not.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union

from big_int import BigInt, truncdiv
from config import get_config
from errors import DivideByZero, InvalidArgument

logger = logging.getLogger(__name__)

Component = Union[int, float]

# Largest bit length handed to atan2; comfortably inside the double range.
_FLOAT_BITS = 1000

# A rounded root replaces the approximate one only within this fraction of
# the root's radius, far below the spacing between neighbouring roots.
_SNAP_TOLERANCE = 1e-9


class Quadrant(IntEnum):
    """Quadrant of the angle, using half-open ranges [0, 90), [90, 180), ...

    The positive real axis belongs to FIRST, the positive imaginary axis to
    SECOND, the negative real axis to THIRD and the negative imaginary axis
    to FOURTH.
    """

    ORIGIN = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4


def _component(value: Any) -> Component:
    if isinstance(value, BigInt):
        return value.value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    raise TypeError(f"component must be int, float or BigInt, got {type(value).__name__}")


def _as_complex(value: Any) -> BigComplex | None:
    """Promote an operand to ``BigComplex``; None when unsupported."""
    if isinstance(value, BigComplex):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (BigInt, int, float)):
        return BigComplex(value, 0)
    if isinstance(value, complex):
        return BigComplex(value.real, value.imag)
    return None


def _require(operation: str, value: Any) -> BigComplex:
    promoted = _as_complex(value)
    if promoted is None:
        raise TypeError(f"{operation}: unsupported operand {type(value).__name__}")
    return promoted


def _non_negative_int(operation: str, value: Any, what: str) -> int:
    if isinstance(value, BigInt):
        value = value.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{operation}: {what} must be an int, got {type(value).__name__}")
    if value < 0:
        raise InvalidArgument(operation, value, f"{what} must be non-negative")
    return value


def _text(x: Component) -> str:
    return BigInt(x).format() if isinstance(x, int) else repr(x)


def _operators(method: str):
    """Forward and reflected dunders delegating to ``method``."""

    def forwards(self, other):
        promoted = _as_complex(other)
        if promoted is None:
            return NotImplemented
        return getattr(self, method)(promoted)

    def backwards(self, other):
        promoted = _as_complex(other)
        if promoted is None:
            return NotImplemented
        return getattr(promoted, method)(self)

    forwards.__doc__ = backwards.__doc__ = f"Operator form of ``{method}``."
    return forwards, backwards


@dataclass(frozen=True, repr=False)
class BigComplex:
    """Immutable complex number; equality is component-wise."""

    real: Component = 0
    imag: Component = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "real", _component(self.real))
        object.__setattr__(self, "imag", _component(self.imag))

    # -- construction -------------------------------------------------------

    @classmethod
    def zero(cls) -> BigComplex:
        return cls(0, 0)

    @classmethod
    def one(cls) -> BigComplex:
        return cls(1, 0)

    @classmethod
    def i(cls) -> BigComplex:
        return cls(0, 1)

    @classmethod
    def from_complex(cls, value: complex) -> BigComplex:
        return cls(value.real, value.imag)

    @classmethod
    def from_polar(cls, r: Component, theta: float) -> BigComplex:
        """``(r cos theta, r sin theta)``; r must be non-negative."""
        r = _component(r)
        if r < 0:
            raise InvalidArgument("from_polar", r, "radius must be non-negative")
        return cls(r * math.cos(theta), r * math.sin(theta))

    @classmethod
    def from_quarter_turns(cls, r: Component, turns: int) -> BigComplex:
        """Exact polar construction at an angle of ``turns * 90`` degrees."""
        r = _component(r)
        if isinstance(turns, BigInt):
            turns = turns.value
        if isinstance(turns, bool) or not isinstance(turns, int):
            raise TypeError(f"turns must be an int, got {type(turns).__name__}")
        return (cls(r, 0), cls(0, r), cls(-r, 0), cls(0, -r))[turns % 4]

    def to_complex(self) -> complex:
        return complex(float(self.real), float(self.imag))

    # -- predicates ---------------------------------------------------------

    def is_zero(self) -> bool:
        return self.real == 0 and self.imag == 0

    def is_real(self) -> bool:
        return self.imag == 0

    def is_imaginary(self) -> bool:
        return self.real == 0

    def is_integer_backed(self) -> bool:
        return isinstance(self.real, int) and isinstance(self.imag, int)

    # -- arithmetic ---------------------------------------------------------

    def add(self, other: Any) -> BigComplex:
        w = _require("add", other)
        return BigComplex(self.real + w.real, self.imag + w.imag)

    def sub(self, other: Any) -> BigComplex:
        w = _require("sub", other)
        return BigComplex(self.real - w.real, self.imag - w.imag)

    def mul(self, other: Any) -> BigComplex:
        w = _require("mul", other)
        return BigComplex(
            self.real * w.real - self.imag * w.imag,
            self.real * w.imag + self.imag * w.real,
        )

    def div(self, other: Any) -> BigComplex:
        """``self * conj(w) / |w|^2``.

        Integer-backed operands give an integer-backed result with each
        component truncated toward zero; otherwise true division is used.
        """
        w = _require("div", other)
        denom = w.magnitude_squared()
        if denom == 0:
            raise DivideByZero("div", self)
        real = self.real * w.real + self.imag * w.imag
        imag = self.imag * w.real - self.real * w.imag
        if self.is_integer_backed() and w.is_integer_backed():
            return BigComplex(truncdiv(real, denom), truncdiv(imag, denom))
        return BigComplex(real / denom, imag / denom)

    def div_exact(self, divisor: Any) -> BigComplex:
        """Divide both integer components by an integer that divides them."""
        d = _component(divisor)
        if d == 0:
            raise DivideByZero("div_exact", self)
        if not (self.is_integer_backed() and isinstance(d, int)):
            raise InvalidArgument("div_exact", divisor, "operands must be integers")
        if self.real % d or self.imag % d:
            raise InvalidArgument("div_exact", divisor, f"does not divide {self} exactly")
        return BigComplex(self.real // d, self.imag // d)

    def neg(self) -> BigComplex:
        return BigComplex(-self.real, -self.imag)

    def conjugate(self) -> BigComplex:
        return BigComplex(self.real, -self.imag)

    def scale(self, factor: Any) -> BigComplex:
        k = _component(factor)
        return BigComplex(self.real * k, self.imag * k)

    def add_real(self, amount: Any) -> BigComplex:
        return BigComplex(self.real + _component(amount), self.imag)

    def add_imag(self, amount: Any) -> BigComplex:
        return BigComplex(self.real, self.imag + _component(amount))

    def pow(self, exp: Any) -> BigComplex:
        """Square-and-multiply; ``z ** 0`` is 1."""
        n = _non_negative_int("pow", exp, "exponent")
        result = BigComplex.one()
        base = self
        while n:
            if n & 1:
                result = result.mul(base)
            n >>= 1
            if n:
                base = base.mul(base)
        return result

    __add__, __radd__ = _operators("add")
    __sub__, __rsub__ = _operators("sub")
    __mul__, __rmul__ = _operators("mul")
    __truediv__, __rtruediv__ = _operators("div")

    def __pow__(self, exp):
        if isinstance(exp, bool) or not isinstance(exp, (int, BigInt)):
            return NotImplemented
        return self.pow(exp)

    def __neg__(self) -> BigComplex:
        return self.neg()

    def __pos__(self) -> BigComplex:
        return self

    def __abs__(self) -> float:
        return self.magnitude()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __complex__(self) -> complex:
        return self.to_complex()

    # -- size ---------------------------------------------------------------

    def magnitude_squared(self) -> Component:
        """``re^2 + im^2``; exact for integer-backed values."""
        return self.real * self.real + self.imag * self.imag

    def norm(self) -> Component:
        return self.magnitude_squared()

    def magnitude(self) -> float:
        # hypot avoids squaring the components in floating point.
        return math.hypot(self.real, self.imag)

    def _log_magnitude(self) -> float:
        """ln|z|; integer-backed values never pass through a float magnitude."""
        if self.is_integer_backed():
            # math.log accepts ints of any size.
            return math.log(self.magnitude_squared()) / 2
        return math.log(self.magnitude())

    def integer_magnitude(self) -> BigInt:
        """Floor of the magnitude, computed exactly."""
        if not self.is_integer_backed():
            raise TypeError("integer_magnitude requires integer components")
        return BigInt(math.isqrt(self.magnitude_squared()))

    def distance_squared(self, other: Any) -> Component:
        return self.sub(other).magnitude_squared()

    # -- angle --------------------------------------------------------------

    def arg(self) -> float:
        """Angle in (-pi, pi]; 0.0 for zero."""
        if self.is_zero():
            return 0.0
        re, im = self.real, self.imag
        if self.is_integer_backed():
            shift = max(abs(re).bit_length(), abs(im).bit_length()) - _FLOAT_BITS
            if shift > 0:
                # Floor shift: a small negative component stays negative,
                # so the result keeps its side of the branch cut.
                re, im = re >> shift, im >> shift
        return math.atan2(im, re)

    def to_polar(self) -> tuple[float, float]:
        return self.magnitude(), self.arg()

    def arg_quadrant(self) -> Quadrant:
        re, im = self.real, self.imag
        if re == 0 and im == 0:
            return Quadrant.ORIGIN
        if re > 0 and im >= 0:
            return Quadrant.FIRST
        if re <= 0 and im > 0:
            return Quadrant.SECOND
        if re < 0 and im <= 0:
            return Quadrant.THIRD
        return Quadrant.FOURTH

    def rotate_90(self) -> BigComplex:
        """Multiply by i."""
        return BigComplex(-self.imag, self.real)

    def rotate_180(self) -> BigComplex:
        """Multiply by -1."""
        return BigComplex(-self.real, -self.imag)

    def rotate_270(self) -> BigComplex:
        """Multiply by -i."""
        return BigComplex(self.imag, -self.real)

    # -- transcendental -----------------------------------------------------

    def nth_root(self, n: Any) -> list[BigComplex]:
        """All n-th roots, ``|z|^(1/n) * cis((arg z + 2 pi k) / n)`` for k in 0..n-1.

        Zero has the single root 0.  For integer-backed values a root is
        replaced by the Gaussian integer it rounds to when that integer lies
        within rounding error of the root and its n-th power equals the
        input exactly (see ``snap_exact_roots``).  The n roots stay distinct.
        """
        n = _non_negative_int("nth_root", n, "degree")
        if n == 0:
            raise InvalidArgument("nth_root", n, "degree must be at least 1")
        if n == 1 or self.is_zero():
            return [self]
        if self.is_integer_backed():
            radius = math.exp(self._log_magnitude() / n)
        else:
            radius = self.magnitude() ** (1.0 / n)
        theta = self.arg()
        snap = get_config().snap_exact_roots and self.is_integer_backed()
        roots = []
        for k in range(n):
            angle = (theta + 2.0 * math.pi * k) / n
            root = BigComplex(radius * math.cos(angle), radius * math.sin(angle))
            if snap:
                root = self._snap_root(root, n)
            roots.append(root)
        return roots

    def _snap_root(self, root: BigComplex, n: int) -> BigComplex:
        candidate = BigComplex(round(root.real), round(root.imag))
        tolerance = _SNAP_TOLERANCE * max(1.0, root.magnitude())
        if candidate.is_close(root, rel_tol=0.0, abs_tol=tolerance) and candidate.pow(n) == self:
            logger.debug("nth_root: %s is an exact %d-th root of %s", candidate, n, self)
            return candidate
        return root

    def ln_approx(self) -> BigComplex:
        """Principal logarithm ``ln|z| + i arg(z)`` in floating point."""
        if self.is_zero():
            raise InvalidArgument("ln_approx", self, "logarithm of zero is undefined")
        return BigComplex(self._log_magnitude(), self.arg())

    def exp_approx(self) -> BigComplex:
        """``e^re (cos im + i sin im)`` in floating point."""
        scale = math.exp(self.real)
        return BigComplex(scale * math.cos(self.imag), scale * math.sin(self.imag))

    def is_close(
        self,
        other: Any,
        rel_tol: float | None = None,
        abs_tol: float | None = None,
    ) -> bool:
        """Component-wise ``math.isclose`` using the configured tolerances."""
        w = _require("is_close", other)
        config = get_config()
        rel = config.rel_tol if rel_tol is None else rel_tol
        tol = config.abs_tol if abs_tol is None else abs_tol
        return math.isclose(self.real, w.real, rel_tol=rel, abs_tol=tol) and math.isclose(
            self.imag, w.imag, rel_tol=rel, abs_tol=tol
        )

    # -- text ---------------------------------------------------------------

    def __str__(self) -> str:
        re, im = self.real, self.imag
        if im == 0:
            return _text(re)
        if im == 1:
            imag_text = ""
        elif im == -1:
            imag_text = "-"
        else:
            imag_text = _text(im)
        if re == 0:
            return f"{imag_text}i"
        sign = "+" if im > 0 else ""
        return f"{_text(re)}{sign}{imag_text}i"

    def __repr__(self) -> str:
        return f"BigComplex({_text(self.real)}, {_text(self.imag)})"
