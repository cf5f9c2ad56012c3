"""Arbitrary-precision integer value type.

``BigInt`` wraps a Python ``int`` and never mutates it: every operation
returns a new value.  Raw arithmetic is delegated to ``int``; this module
adds the conventions callers rely on and the number-theoretic helpers.

Conventions
-----------
* Division truncates toward zero and the remainder takes the sign of the
  dividend, so ``a == a.div(b) * b + a.mod(b)`` always holds.  Python's
  ``//`` floors instead, which is why ``BigInt`` does not implement it.
* Bit inspection works on the magnitude; there is no two's complement view.
* ``trailing_zeros()`` of zero is 0.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Union

from config import get_config
from errors import DivideByZero, InvalidArgument, NoInverse

logger = logging.getLogger(__name__)

IntLike = Union["BigInt", int]

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_BYTE_ORDERS = ("big", "little")

# Digits converted per step by parse/format.  Keeps every individual
# int <-> str conversion under the interpreter's max_str_digits limit.
_CHUNK_DIGITS = 1000


class Sign(Enum):
    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1


# ---------------------------------------------------------------------------
# Helpers on plain ints
# ---------------------------------------------------------------------------

def _is_operand(value: Any) -> bool:
    return isinstance(value, BigInt) or (
        isinstance(value, int) and not isinstance(value, bool)
    )


def _coerce(value: Any) -> int:
    """Return the int behind an ``int`` or ``BigInt`` operand."""
    if isinstance(value, BigInt):
        return value.value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"expected int or BigInt, got {type(value).__name__}")


def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  Most calculators
    and languages (C, Java, Rust) truncate toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def truncmod(a: int, b: int) -> int:
    """Remainder matching ``truncdiv``: same sign as the dividend."""
    return a - b * truncdiv(a, b)


def _power(base: int, exp: int, modulus: int | None = None) -> int:
    """Square-and-multiply.

    With a (positive) modulus, every product is reduced immediately so
    intermediates never exceed ``modulus ** 2``.
    """
    if modulus is not None:
        base %= modulus
        result = 1 % modulus
    else:
        result = 1
    while exp:
        if exp & 1:
            result *= base
            if modulus is not None:
                result %= modulus
        exp >>= 1
        if exp:
            base *= base
            if modulus is not None:
                base %= modulus
    return result


def _extended_gcd(a: int, b: int) -> tuple[int, int]:
    """Return ``(g, x)`` with ``a * x == g (mod b)`` for non-negative a, b."""
    old_r, r = a, b
    old_x, x = 1, 0
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_x, x = x, old_x - q * x
    return old_r, old_x


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n < 4:
        return True
    if n % 2 == 0:
        return False
    limit = math.isqrt(n)
    candidate = 3
    while candidate <= limit:
        if n % candidate == 0:
            return False
        candidate += 2
    return True


def _check_base(operation: str, base: int) -> None:
    if isinstance(base, bool) or not isinstance(base, int) or not 2 <= base <= 36:
        raise InvalidArgument(operation, base, "base must be an int in 2..36")


def _check_byteorder(operation: str, byteorder: str) -> None:
    if byteorder not in _BYTE_ORDERS:
        raise InvalidArgument(operation, byteorder, "byteorder must be 'big' or 'little'")


def _format_chunk(n: int, base: int) -> str:
    if base == 10:
        return str(n)
    if base == 2:
        return format(n, "b")
    if base == 8:
        return format(n, "o")
    if base == 16:
        return format(n, "x")
    digits = []
    while n:
        n, d = divmod(n, base)
        digits.append(_DIGITS[d])
    return "".join(reversed(digits)) or "0"


def _format_magnitude(n: int, base: int) -> str:
    chunk = base ** _CHUNK_DIGITS
    if n < chunk:
        return _format_chunk(n, base)
    pieces = []
    while n:
        n, piece = divmod(n, chunk)
        pieces.append(piece)
    head = _format_chunk(pieces.pop(), base)
    tail = [_format_chunk(p, base).rjust(_CHUNK_DIGITS, "0") for p in reversed(pieces)]
    return head + "".join(tail)


# ---------------------------------------------------------------------------
# Operator plumbing
# ---------------------------------------------------------------------------

def _operators(method: str):
    """Build forward and reflected dunders that delegate to ``method``."""

    def forwards(self, other):
        if not _is_operand(other):
            return NotImplemented
        return getattr(self, method)(other)

    def backwards(self, other):
        if not _is_operand(other):
            return NotImplemented
        return getattr(BigInt(other), method)(self)

    forwards.__doc__ = backwards.__doc__ = f"Operator form of ``{method}``."
    return forwards, backwards


# ---------------------------------------------------------------------------
# BigInt
# ---------------------------------------------------------------------------

@total_ordering
@dataclass(frozen=True, eq=False, repr=False)
class BigInt:
    """Immutable arbitrary-precision signed integer."""

    value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _coerce(self.value))

    @classmethod
    def zero(cls) -> BigInt:
        return cls(0)

    @classmethod
    def one(cls) -> BigInt:
        return cls(1)

    # -- text ---------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, base: int = 10) -> BigInt:
        """Parse an optionally signed integer written in ``base``.

        Surrounding whitespace is ignored.  Prefixes such as ``0x`` and
        digit separators are rejected.
        """
        _check_base("parse", base)
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        body = text.strip()
        negative = body.startswith("-")
        if body.startswith(("-", "+")):
            body = body[1:]
        allowed = _DIGITS[:base]
        if not body or any(ch not in allowed for ch in body.lower()):
            raise InvalidArgument("parse", text, f"not a base-{base} integer")
        value = 0
        for start in range(0, len(body), _CHUNK_DIGITS):
            piece = body[start:start + _CHUNK_DIGITS]
            value = value * base ** len(piece) + int(piece, base)
        return cls(-value if negative else value)

    def format(self, base: int = 10) -> str:
        """Canonical text in ``base``; lower-case digits, ``-`` for negatives."""
        _check_base("format", base)
        text = _format_magnitude(abs(self.value), base)
        return "-" + text if self.value < 0 else text

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"BigInt({self.format()})"

    # -- bytes --------------------------------------------------------------

    @property
    def sign(self) -> Sign:
        if self.value > 0:
            return Sign.POSITIVE
        if self.value < 0:
            return Sign.NEGATIVE
        return Sign.ZERO

    def to_bytes(self, byteorder: str = "big") -> tuple[Sign, bytes]:
        """Minimal-length magnitude bytes; the sign is returned separately."""
        _check_byteorder("to_bytes", byteorder)
        magnitude = abs(self.value)
        length = (magnitude.bit_length() + 7) // 8
        return self.sign, magnitude.to_bytes(length, byteorder)

    @classmethod
    def from_bytes(cls, sign: Sign, data: bytes, byteorder: str = "big") -> BigInt:
        _check_byteorder("from_bytes", byteorder)
        if not isinstance(sign, Sign):
            raise TypeError(f"expected Sign, got {type(sign).__name__}")
        magnitude = int.from_bytes(bytes(data), byteorder)
        return cls(sign.value * magnitude)

    # -- predicates ---------------------------------------------------------

    def is_zero(self) -> bool:
        return self.value == 0

    def is_positive(self) -> bool:
        return self.value > 0

    def is_negative(self) -> bool:
        return self.value < 0

    def is_even(self) -> bool:
        return self.value % 2 == 0

    def is_odd(self) -> bool:
        return self.value % 2 == 1

    # -- arithmetic ---------------------------------------------------------

    def add(self, other: IntLike) -> BigInt:
        return BigInt(self.value + _coerce(other))

    def sub(self, other: IntLike) -> BigInt:
        return BigInt(self.value - _coerce(other))

    def mul(self, other: IntLike) -> BigInt:
        return BigInt(self.value * _coerce(other))

    def div(self, other: IntLike) -> BigInt:
        """Quotient truncated toward zero."""
        divisor = _coerce(other)
        if divisor == 0:
            raise DivideByZero("div", self.value)
        return BigInt(truncdiv(self.value, divisor))

    def mod(self, other: IntLike) -> BigInt:
        """Remainder with the sign of the dividend."""
        divisor = _coerce(other)
        if divisor == 0:
            raise DivideByZero("mod", self.value)
        return BigInt(truncmod(self.value, divisor))

    def divmod(self, other: IntLike) -> tuple[BigInt, BigInt]:
        divisor = _coerce(other)
        if divisor == 0:
            raise DivideByZero("divmod", self.value)
        q = truncdiv(self.value, divisor)
        return BigInt(q), BigInt(self.value - q * divisor)

    def neg(self) -> BigInt:
        return BigInt(-self.value)

    def abs(self) -> BigInt:
        return BigInt(abs(self.value))

    def pow(self, exp: IntLike) -> BigInt:
        e = _coerce(exp)
        if e < 0:
            raise InvalidArgument("pow", e, "exponent must be non-negative")
        return BigInt(_power(self.value, e))

    __add__, __radd__ = _operators("add")
    __sub__, __rsub__ = _operators("sub")
    __mul__, __rmul__ = _operators("mul")
    __truediv__, __rtruediv__ = _operators("div")
    __mod__, __rmod__ = _operators("mod")
    __divmod__, __rdivmod__ = _operators("divmod")

    def __pow__(self, exp, modulus=None):
        if not _is_operand(exp) or (modulus is not None and not _is_operand(modulus)):
            return NotImplemented
        if modulus is None:
            return self.pow(exp)
        return self.mod_pow(exp, modulus)

    def __rpow__(self, base):
        if not _is_operand(base):
            return NotImplemented
        return BigInt(base).pow(self)

    def __neg__(self) -> BigInt:
        return self.neg()

    def __pos__(self) -> BigInt:
        return self

    def __abs__(self) -> BigInt:
        return self.abs()

    # -- comparison and conversion ------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.value == _coerce(other)

    def __lt__(self, other: object) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.value < _coerce(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __float__(self) -> float:
        return float(self.value)

    def __bool__(self) -> bool:
        return self.value != 0

    # -- number theory ------------------------------------------------------

    def sqrt(self) -> BigInt:
        """Floor square root: the largest r with r * r <= value."""
        if self.value < 0:
            raise InvalidArgument("sqrt", self.value, "value must be non-negative")
        return BigInt(math.isqrt(self.value))

    def gcd(self, other: IntLike) -> BigInt:
        """Greatest common divisor, never negative; gcd(0, 0) is 0."""
        return BigInt(math.gcd(self.value, _coerce(other)))

    def lcm(self, other: IntLike) -> BigInt:
        """Least common multiple, never negative; 0 if either side is 0."""
        return BigInt(math.lcm(self.value, _coerce(other)))

    def mod_pow(self, exp: IntLike, modulus: IntLike) -> BigInt:
        """``self ** exp`` reduced into ``[0, |modulus|)``.

        A negative exponent raises the modular inverse of ``self`` instead,
        so it fails with ``NoInverse`` when ``self`` and ``modulus`` share
        a factor.
        """
        e = _coerce(exp)
        m = _coerce(modulus)
        if m == 0:
            raise DivideByZero("mod_pow", self.value)
        m = abs(m)
        base = self.value
        if e < 0:
            base = self.mod_inv(m).value
            e = -e
        return BigInt(_power(base, e, m))

    def mod_inv(self, modulus: IntLike) -> BigInt:
        """Multiplicative inverse in ``[0, |modulus|)`` (extended Euclid)."""
        m = _coerce(modulus)
        if m == 0:
            raise DivideByZero("mod_inv", self.value)
        m = abs(m)
        g, x = _extended_gcd(self.value % m, m)
        if g != 1:
            raise NoInverse(self.value, _coerce(modulus), g)
        return BigInt(x % m)

    def factorial(self) -> BigInt:
        """Exact n! by iterative accumulation.

        Cost grows quickly with n; values above ``factorial_limit`` in the
        active configuration are refused rather than left to run.
        """
        n = self.value
        if n < 0:
            raise InvalidArgument("factorial", n, "value must be non-negative")
        limit = get_config().factorial_limit
        if n > limit:
            raise InvalidArgument("factorial", n, f"value exceeds factorial_limit={limit}")
        logger.debug("factorial: accumulating %d terms", n)
        result = 1
        for k in range(2, n + 1):
            result *= k
        return BigInt(result)

    def is_prime(self) -> bool:
        """Deterministic trial division by odd candidates up to isqrt(n).

        Exact for every size, but the cost grows with sqrt(n).
        """
        return _is_prime(self.value)

    def next_prime(self) -> BigInt:
        """Smallest prime strictly greater than this value.

        Each candidate is tested with ``is_prime``, so very large inputs
        can take impractically long.
        """
        n = self.value
        if n < 2:
            return BigInt(2)
        candidate = n + 1 if n % 2 == 0 else n + 2
        examined = 1
        while not _is_prime(candidate):
            candidate += 2
            examined += 1
        logger.debug("next_prime(%d): examined %d candidates", n, examined)
        return BigInt(candidate)

    # -- bits ---------------------------------------------------------------

    def bit_length(self) -> int:
        return abs(self.value).bit_length()

    def count_ones(self) -> int:
        return bin(abs(self.value)).count("1")

    def trailing_zeros(self) -> int:
        """Trailing zero bits of the magnitude; 0 for zero."""
        magnitude = abs(self.value)
        if magnitude == 0:
            return 0
        return (magnitude & -magnitude).bit_length() - 1

    def is_power_of_two(self) -> bool:
        n = self.value
        return n > 0 and n & (n - 1) == 0

    def next_power_of_two(self) -> BigInt:
        """Smallest power of two >= value; every value <= 1 gives 1."""
        n = self.value
        if n <= 1:
            return BigInt(1)
        return BigInt(1 << (n - 1).bit_length())
