"""Machine-readable contracts for ``BigInt`` and ``BigComplex``.

Each operation is described as a collection of:
- postconditions: what the output must satisfy given valid inputs
- error conditions: what inputs must cause specific exceptions
- algebraic properties: mathematical relationships that must hold

Contracts are purely declarative and carry their own finite sample
domain.  Validation tools iterate over them to drive conformance tests
and search for counterexamples.

Layers
------
OperationContract   per-operation contract (invoke/domain/post/error/properties)
ContractSuite       the full contract for one value type
build_int_contracts()       contracts for BigInt
build_complex_contracts()   contracts for BigComplex
"""
from __future__ import annotations

import cmath
import itertools
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from big_complex import BigComplex, Quadrant
from big_int import BigInt, Sign, truncdiv
from errors import DivideByZero, InvalidArgument, NoInverse


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]      # (*inputs, result) -> bool


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]    # (*inputs) -> bool
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    check: Callable[..., bool]      # (*inputs) -> bool


@dataclass(frozen=True)
class OperationContract:
    name: str
    invoke: Callable[..., Any]
    domain: tuple[Sequence[Any], ...]
    postconditions: list[Postcondition] = field(default_factory=list)
    error_conditions: list[ErrorCondition] = field(default_factory=list)
    properties: list[AlgebraicProperty] = field(default_factory=list)

    @property
    def arity(self) -> int:
        return len(self.domain)

    def inputs(self) -> Iterator[tuple]:
        """Every input combination of the sample domain."""
        return itertools.product(*self.domain)

    def expected_error(self, *inputs: Any) -> ErrorCondition | None:
        for ec in self.error_conditions:
            if ec.trigger(*inputs):
                return ec
        return None


@dataclass(frozen=True)
class ContractSuite:
    """Complete contract for one value type."""

    name: str
    operations: dict[str, OperationContract]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out


# ---------------------------------------------------------------------------
# Reference helpers used inside the predicates
# ---------------------------------------------------------------------------

PRIME_TABLE_LIMIT = 10_100


def _sieve(limit: int) -> frozenset[int]:
    """Sieve of Eratosthenes; independent of the trial-division code."""
    marks = bytearray([1]) * (limit + 1)
    marks[0:2] = b"\x00\x00"
    for p in range(2, math.isqrt(limit) + 1):
        if marks[p]:
            marks[p * p::p] = bytearray(len(range(p * p, limit + 1, p)))
    return frozenset(i for i, is_p in enumerate(marks) if is_p)


PRIMES = _sieve(PRIME_TABLE_LIMIT)


def repeated_product(base: Any, exp: int, one: Any) -> Any:
    """``base`` multiplied by itself ``exp`` times, starting from ``one``."""
    result = one
    for _ in range(exp):
        result = result * base
    return result


def _same_sign_or_zero(remainder: int, dividend: int) -> bool:
    return remainder == 0 or (remainder < 0) == (dividend < 0)


def _first_quadrant_after_unrotating(z: BigComplex, quadrant: Quadrant) -> bool:
    """Rotate back by (quadrant - 1) quarter turns and land in [0, 90)."""
    w = z
    for _ in range(int(quadrant) - 1):
        w = w.rotate_270()
    return w.real > 0 and w.imag >= 0


# ---------------------------------------------------------------------------
# BigInt contracts
# ---------------------------------------------------------------------------

SMALL = range(-12, 13)


def build_int_contracts() -> ContractSuite:
    """Construct the contract suite for ``BigInt``."""

    add = OperationContract(
        name="add",
        invoke=lambda a, b: BigInt(a) + b,
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("result_correct", "Result equals a + b",
                          lambda a, b, r: r == a + b),
        ],
        properties=[
            AlgebraicProperty("commutativity", "add(a, b) == add(b, a)",
                              lambda a, b: BigInt(a).add(b) == BigInt(b).add(a)),
            AlgebraicProperty("identity", "add(a, 0) == a",
                              lambda a, _: BigInt(a).add(0) == a),
        ],
    )

    sub = OperationContract(
        name="sub",
        invoke=lambda a, b: BigInt(a) - b,
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("result_correct", "Result equals a - b",
                          lambda a, b, r: r == a - b),
        ],
        properties=[
            AlgebraicProperty("self_inverse", "sub(a, a) == 0",
                              lambda a, _: BigInt(a).sub(a) == 0),
            AlgebraicProperty("anticommutativity", "sub(a, b) == -sub(b, a)",
                              lambda a, b: BigInt(a).sub(b) == -BigInt(b).sub(a)),
        ],
    )

    mul = OperationContract(
        name="mul",
        invoke=lambda a, b: BigInt(a) * b,
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("result_correct", "Result equals a * b",
                          lambda a, b, r: r == a * b),
        ],
        properties=[
            AlgebraicProperty("commutativity", "mul(a, b) == mul(b, a)",
                              lambda a, b: BigInt(a).mul(b) == BigInt(b).mul(a)),
            AlgebraicProperty("zero", "mul(a, 0) == 0",
                              lambda a, _: BigInt(a).mul(0) == 0),
        ],
    )

    div = OperationContract(
        name="div",
        invoke=lambda a, b: BigInt(a) / b,
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("result_correct", "Result equals the truncating quotient",
                          lambda a, b, r: r == truncdiv(a, b)),
            Postcondition("toward_zero", "|result * b| <= |a|",
                          lambda a, b, r: abs(int(r) * b) <= abs(a)),
        ],
        error_conditions=[
            ErrorCondition("div_by_zero", "DivideByZero when b == 0",
                           lambda a, b: b == 0, DivideByZero),
        ],
        properties=[
            AlgebraicProperty(
                "division_identity", "a == div(a, b) * b + mod(a, b) for b != 0",
                lambda a, b: b == 0 or BigInt(a).div(b) * b + BigInt(a).mod(b) == a,
            ),
            AlgebraicProperty("identity", "div(a, 1) == a",
                              lambda a, _: BigInt(a).div(1) == a),
        ],
    )

    mod = OperationContract(
        name="mod",
        invoke=lambda a, b: BigInt(a) % b,
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("result_correct", "Result equals a - b * truncdiv(a, b)",
                          lambda a, b, r: r == a - b * truncdiv(a, b)),
            Postcondition("sign_follows_dividend", "Result is 0 or has the sign of a",
                          lambda a, b, r: _same_sign_or_zero(int(r), a)),
            Postcondition("smaller_than_divisor", "|result| < |b|",
                          lambda a, b, r: abs(int(r)) < abs(b)),
        ],
        error_conditions=[
            ErrorCondition("mod_by_zero", "DivideByZero when b == 0",
                           lambda a, b: b == 0, DivideByZero),
        ],
    )

    pow_ = OperationContract(
        name="pow",
        invoke=lambda a, e: BigInt(a).pow(e),
        domain=(range(-6, 7), range(-2, 9)),
        postconditions=[
            Postcondition("repeated_multiplication", "Result equals a multiplied e times",
                          lambda a, e, r: r == repeated_product(a, e, 1)),
        ],
        error_conditions=[
            ErrorCondition("negative_exponent", "InvalidArgument when e < 0",
                           lambda a, e: e < 0, InvalidArgument),
        ],
    )

    sqrt = OperationContract(
        name="sqrt",
        invoke=lambda a: BigInt(a).sqrt(),
        domain=(range(-5, 400),),
        postconditions=[
            Postcondition("floor_root", "r * r <= a < (r + 1) ** 2",
                          lambda a, r: int(r) ** 2 <= a < (int(r) + 1) ** 2),
        ],
        error_conditions=[
            ErrorCondition("negative_input", "InvalidArgument when a < 0",
                           lambda a: a < 0, InvalidArgument),
        ],
    )

    gcd = OperationContract(
        name="gcd",
        invoke=lambda a, b: BigInt(a).gcd(b),
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("non_negative", "Result >= 0", lambda a, b, r: r >= 0),
            Postcondition(
                "divides_both", "Result divides a and b (gcd(0, 0) == 0)",
                lambda a, b, r: (
                    r == 0 and a == 0 and b == 0
                    if r == 0 else a % int(r) == 0 and b % int(r) == 0
                ),
            ),
        ],
        properties=[
            AlgebraicProperty("commutativity", "gcd(a, b) == gcd(b, a)",
                              lambda a, b: BigInt(a).gcd(b) == BigInt(b).gcd(a)),
        ],
    )

    lcm = OperationContract(
        name="lcm",
        invoke=lambda a, b: BigInt(a).lcm(b),
        domain=(SMALL, SMALL),
        postconditions=[
            Postcondition("non_negative", "Result >= 0", lambda a, b, r: r >= 0),
        ],
        properties=[
            AlgebraicProperty(
                "gcd_lcm_product", "lcm(a, b) * gcd(a, b) == |a * b| for nonzero a, b",
                lambda a, b: a == 0 or b == 0
                or BigInt(a).lcm(b) * BigInt(a).gcd(b) == abs(a * b),
            ),
        ],
    )

    mod_pow = OperationContract(
        name="mod_pow",
        invoke=lambda a, e, m: BigInt(a).mod_pow(e, m),
        domain=(range(-10, 11), range(0, 9), range(-7, 8)),
        postconditions=[
            Postcondition("matches_naive", "Result equals a ** e reduced mod |m|",
                          lambda a, e, m, r: r == (a ** e) % abs(m)),
            Postcondition("in_range", "0 <= result < |m|",
                          lambda a, e, m, r: 0 <= r < abs(m)),
        ],
        error_conditions=[
            ErrorCondition("zero_modulus", "DivideByZero when m == 0",
                           lambda a, e, m: m == 0, DivideByZero),
        ],
    )

    mod_inv = OperationContract(
        name="mod_inv",
        invoke=lambda a, m: BigInt(a).mod_inv(m),
        domain=(range(-15, 16), SMALL),
        postconditions=[
            Postcondition("is_inverse", "a * result == 1 (mod |m|)",
                          lambda a, m, r: (a * int(r) - 1) % abs(m) == 0),
            Postcondition("in_range", "0 <= result < |m|",
                          lambda a, m, r: 0 <= r < abs(m)),
        ],
        error_conditions=[
            ErrorCondition("zero_modulus", "DivideByZero when m == 0",
                           lambda a, m: m == 0, DivideByZero),
            ErrorCondition("not_coprime", "NoInverse when gcd(a, m) != 1",
                           lambda a, m: m != 0 and math.gcd(a, m) != 1, NoInverse),
        ],
    )

    factorial = OperationContract(
        name="factorial",
        invoke=lambda n: BigInt(n).factorial(),
        domain=(range(-3, 21),),
        postconditions=[
            Postcondition("product", "Result equals 1 * 2 * ... * n",
                          lambda n, r: r == math.prod(range(1, n + 1))),
        ],
        error_conditions=[
            ErrorCondition("negative_input", "InvalidArgument when n < 0",
                           lambda n: n < 0, InvalidArgument),
        ],
        properties=[
            AlgebraicProperty(
                "recurrence", "factorial(n) == n * factorial(n - 1) for n >= 1",
                lambda n: n < 1
                or BigInt(n).factorial() == BigInt(n - 1).factorial() * n,
            ),
        ],
    )

    is_prime = OperationContract(
        name="is_prime",
        invoke=lambda n: BigInt(n).is_prime(),
        domain=(range(-20, 10_001),),
        postconditions=[
            Postcondition("matches_sieve", "Result agrees with a sieve of Eratosthenes",
                          lambda n, r: r == (n in PRIMES)),
        ],
    )

    next_prime = OperationContract(
        name="next_prime",
        invoke=lambda n: BigInt(n).next_prime(),
        domain=(range(-5, 2_000),),
        postconditions=[
            Postcondition("greater", "Result > n", lambda n, r: r > n),
            Postcondition("prime", "Result is prime", lambda n, r: int(r) in PRIMES),
            Postcondition(
                "smallest", "No prime lies strictly between n and the result",
                lambda n, r: not any(k in PRIMES for k in range(n + 1, int(r))),
            ),
        ],
    )

    bit_length = OperationContract(
        name="bit_length",
        invoke=lambda n: BigInt(n).bit_length(),
        domain=(range(-300, 301),),
        postconditions=[
            Postcondition(
                "bounds", "2 ** (r - 1) <= |n| < 2 ** r, and 0 for 0",
                lambda n, r: r == 0 if n == 0 else 2 ** (r - 1) <= abs(n) < 2 ** r,
            ),
        ],
    )

    count_ones = OperationContract(
        name="count_ones",
        invoke=lambda n: BigInt(n).count_ones(),
        domain=(range(-300, 301),),
        postconditions=[
            Postcondition(
                "sum_of_bits", "Result equals the number of set bits of |n|",
                lambda n, r: r == sum((abs(n) >> k) & 1 for k in range(abs(n).bit_length())),
            ),
        ],
    )

    trailing_zeros = OperationContract(
        name="trailing_zeros",
        invoke=lambda n: BigInt(n).trailing_zeros(),
        domain=(range(-300, 301),),
        postconditions=[
            Postcondition(
                "lowest_set_bit", "Bit r of |n| is the lowest set bit; 0 for 0",
                lambda n, r: r == 0 if n == 0
                else abs(n) % (2 ** r) == 0 and (abs(n) >> r) & 1 == 1,
            ),
        ],
    )

    is_power_of_two = OperationContract(
        name="is_power_of_two",
        invoke=lambda n: BigInt(n).is_power_of_two(),
        domain=(range(-64, 600),),
        postconditions=[
            Postcondition("matches_table", "True exactly for 1, 2, 4, 8, ...",
                          lambda n, r: r == (n in {2 ** k for k in range(12)})),
        ],
    )

    next_power_of_two = OperationContract(
        name="next_power_of_two",
        invoke=lambda n: BigInt(n).next_power_of_two(),
        domain=(range(-4, 600),),
        postconditions=[
            Postcondition("power_of_two", "Result is a power of two",
                          lambda n, r: r.is_power_of_two()),
            Postcondition("at_least_n", "Result >= n", lambda n, r: r >= n),
            Postcondition("smallest", "Half the result is below n (or result is 1)",
                          lambda n, r: r == 1 or int(r) // 2 < n),
        ],
    )

    text_round_trip = OperationContract(
        name="text_round_trip",
        invoke=lambda n, base: BigInt.parse(BigInt(n).format(base), base),
        domain=(range(-500, 501, 37), (1, 2, 3, 7, 8, 10, 16, 35, 36, 37)),
        postconditions=[
            Postcondition("round_trip", "parse(format(n, base), base) == n",
                          lambda n, base, r: r == n),
        ],
        error_conditions=[
            ErrorCondition("bad_base", "InvalidArgument when base is outside 2..36",
                           lambda n, base: not 2 <= base <= 36, InvalidArgument),
        ],
    )

    bytes_round_trip = OperationContract(
        name="bytes_round_trip",
        invoke=lambda n, order: BigInt.from_bytes(*BigInt(n).to_bytes(order), order),
        domain=(range(-70_000, 70_001, 997), ("big", "little", "middle")),
        postconditions=[
            Postcondition("round_trip", "from_bytes(to_bytes(n)) == n",
                          lambda n, order, r: r == n),
            Postcondition(
                "sign_tracked", "Sign survives separately from the magnitude",
                lambda n, order, r: r.sign == (
                    Sign.ZERO if n == 0 else Sign.NEGATIVE if n < 0 else Sign.POSITIVE
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition("bad_byteorder", "InvalidArgument for unknown byte orders",
                           lambda n, order: order not in ("big", "little"),
                           InvalidArgument),
        ],
    )

    ops = [
        add, sub, mul, div, mod, pow_, sqrt, gcd, lcm, mod_pow, mod_inv,
        factorial, is_prime, next_prime, bit_length, count_ones,
        trailing_zeros, is_power_of_two, next_power_of_two,
        text_round_trip, bytes_round_trip,
    ]
    return ContractSuite(name="BigInt", operations={op.name: op for op in ops})


# ---------------------------------------------------------------------------
# BigComplex contracts
# ---------------------------------------------------------------------------

COMPONENTS = range(-4, 5)


def build_complex_contracts() -> ContractSuite:
    """Construct the contract suite for ``BigComplex``."""

    Z = BigComplex

    add = OperationContract(
        name="add",
        invoke=lambda a, b, c, d: Z(a, b) + Z(c, d),
        domain=(COMPONENTS,) * 4,
        postconditions=[
            Postcondition("result_correct", "(a + c) + (b + d)i",
                          lambda a, b, c, d, r: r == Z(a + c, b + d)),
        ],
        properties=[
            AlgebraicProperty("commutativity", "z + w == w + z",
                              lambda a, b, c, d: Z(a, b) + Z(c, d) == Z(c, d) + Z(a, b)),
        ],
    )

    sub = OperationContract(
        name="sub",
        invoke=lambda a, b, c, d: Z(a, b) - Z(c, d),
        domain=(COMPONENTS,) * 4,
        postconditions=[
            Postcondition("result_correct", "(a - c) + (b - d)i",
                          lambda a, b, c, d, r: r == Z(a - c, b - d)),
        ],
    )

    mul = OperationContract(
        name="mul",
        invoke=lambda a, b, c, d: Z(a, b) * Z(c, d),
        domain=(COMPONENTS,) * 4,
        postconditions=[
            Postcondition("result_correct", "(ac - bd) + (ad + bc)i",
                          lambda a, b, c, d, r: r == Z(a * c - b * d, a * d + b * c)),
            Postcondition("integer_backed", "Integer inputs stay exact",
                          lambda a, b, c, d, r: r.is_integer_backed()),
        ],
        properties=[
            AlgebraicProperty("commutativity", "z * w == w * z",
                              lambda a, b, c, d: Z(a, b) * Z(c, d) == Z(c, d) * Z(a, b)),
            AlgebraicProperty(
                "norm_multiplicative", "|zw|^2 == |z|^2 |w|^2",
                lambda a, b, c, d: (Z(a, b) * Z(c, d)).magnitude_squared()
                == Z(a, b).magnitude_squared() * Z(c, d).magnitude_squared(),
            ),
        ],
    )

    div = OperationContract(
        name="div",
        invoke=lambda a, b, c, d: Z(a, b) / Z(c, d),
        domain=(COMPONENTS,) * 4,
        postconditions=[
            Postcondition(
                "conjugate_formula", "z * conj(w) / |w|^2, truncated per component",
                lambda a, b, c, d, r: r == Z(
                    truncdiv(a * c + b * d, c * c + d * d),
                    truncdiv(b * c - a * d, c * c + d * d),
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition("div_by_zero", "DivideByZero when w == 0",
                           lambda a, b, c, d: c == 0 and d == 0, DivideByZero),
        ],
        properties=[
            AlgebraicProperty(
                "exact_when_divisible", "(z * w) / w == z for w != 0",
                lambda a, b, c, d: (c == 0 and d == 0)
                or (Z(a, b) * Z(c, d)) / Z(c, d) == Z(a, b),
            ),
        ],
    )

    div_exact = OperationContract(
        name="div_exact",
        invoke=lambda a, b, k: Z(a, b).div_exact(k),
        domain=(range(-8, 9), range(-8, 9), range(-3, 4)),
        postconditions=[
            Postcondition("scales_back", "result * k == z",
                          lambda a, b, k, r: r.scale(k) == Z(a, b)),
        ],
        error_conditions=[
            ErrorCondition("div_by_zero", "DivideByZero when k == 0",
                           lambda a, b, k: k == 0, DivideByZero),
            ErrorCondition("not_divisible", "InvalidArgument unless k divides both parts",
                           lambda a, b, k: k != 0 and (a % k != 0 or b % k != 0),
                           InvalidArgument),
        ],
    )

    conjugate = OperationContract(
        name="conjugate",
        invoke=lambda a, b: Z(a, b).conjugate(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("negated_imaginary", "a - bi", lambda a, b, r: r == Z(a, -b)),
        ],
        properties=[
            AlgebraicProperty("involution", "conj(conj(z)) == z",
                              lambda a, b: Z(a, b).conjugate().conjugate() == Z(a, b)),
            AlgebraicProperty(
                "product_is_norm", "z * conj(z) == |z|^2",
                lambda a, b: Z(a, b) * Z(a, b).conjugate()
                == Z(Z(a, b).magnitude_squared(), 0),
            ),
        ],
    )

    magnitude_squared = OperationContract(
        name="magnitude_squared",
        invoke=lambda a, b: Z(a, b).magnitude_squared(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("sum_of_squares", "a^2 + b^2", lambda a, b, r: r == a * a + b * b),
            Postcondition("non_negative", "Never negative", lambda a, b, r: r >= 0),
        ],
    )

    magnitude = OperationContract(
        name="magnitude",
        invoke=lambda a, b: Z(a, b).magnitude(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("squares_back", "magnitude^2 ~ magnitude_squared",
                          lambda a, b, r: math.isclose(r * r, a * a + b * b, abs_tol=1e-9)),
        ],
    )

    scale = OperationContract(
        name="scale",
        invoke=lambda a, b, k: Z(a, b).scale(k),
        domain=(COMPONENTS, COMPONENTS, range(-3, 4)),
        postconditions=[
            Postcondition("component_wise", "(ka) + (kb)i",
                          lambda a, b, k, r: r == Z(k * a, k * b)),
        ],
    )

    pow_ = OperationContract(
        name="pow",
        invoke=lambda a, b, n: Z(a, b).pow(n),
        domain=(COMPONENTS, COMPONENTS, range(-2, 7)),
        postconditions=[
            Postcondition("repeated_multiplication", "z multiplied by itself n times",
                          lambda a, b, n, r: r == repeated_product(Z(a, b), n, Z.one())),
        ],
        error_conditions=[
            ErrorCondition("negative_exponent", "InvalidArgument when n < 0",
                           lambda a, b, n: n < 0, InvalidArgument),
        ],
    )

    rotate_90 = OperationContract(
        name="rotate_90",
        invoke=lambda a, b: Z(a, b).rotate_90(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("times_i", "-b + ai", lambda a, b, r: r == Z(-b, a)),
        ],
        properties=[
            AlgebraicProperty(
                "four_turns_identity", "rotate_90 applied four times is exactly z",
                lambda a, b: Z(a, b).rotate_90().rotate_90().rotate_90().rotate_90()
                == Z(a, b),
            ),
            AlgebraicProperty("matches_multiplication", "rotate_90(z) == z * i",
                              lambda a, b: Z(a, b).rotate_90() == Z(a, b) * Z.i()),
        ],
    )

    rotate_180 = OperationContract(
        name="rotate_180",
        invoke=lambda a, b: Z(a, b).rotate_180(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("negated", "-a - bi", lambda a, b, r: r == Z(-a, -b)),
        ],
        properties=[
            AlgebraicProperty("two_quarter_turns", "rotate_180 == rotate_90 twice",
                              lambda a, b: Z(a, b).rotate_180()
                              == Z(a, b).rotate_90().rotate_90()),
        ],
    )

    rotate_270 = OperationContract(
        name="rotate_270",
        invoke=lambda a, b: Z(a, b).rotate_270(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("times_minus_i", "b - ai", lambda a, b, r: r == Z(b, -a)),
        ],
        properties=[
            AlgebraicProperty("undoes_rotate_90", "rotate_270(rotate_90(z)) == z",
                              lambda a, b: Z(a, b).rotate_90().rotate_270() == Z(a, b)),
        ],
    )

    arg_quadrant = OperationContract(
        name="arg_quadrant",
        invoke=lambda a, b: Z(a, b).arg_quadrant(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition(
                "origin", "ORIGIN exactly for zero",
                lambda a, b, r: (r == Quadrant.ORIGIN) == (a == 0 and b == 0),
            ),
            Postcondition(
                "half_open_ranges", "Undoing the quadrant's quarter turns lands in [0, 90)",
                lambda a, b, r: r == Quadrant.ORIGIN
                or _first_quadrant_after_unrotating(Z(a, b), r),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "rotation_advances", "rotate_90 moves a point to the next quadrant",
                lambda a, b: (a == 0 and b == 0)
                or Z(a, b).rotate_90().arg_quadrant() == Z(a, b).arg_quadrant() % 4 + 1,
            ),
        ],
    )

    from_polar = OperationContract(
        name="from_polar",
        invoke=lambda r, k: Z.from_polar(r, k * math.pi / 6),
        domain=(range(-1, 6), range(0, 12)),
        postconditions=[
            Postcondition(
                "matches_rect", "(r cos t, r sin t)",
                lambda r, k, z: z.is_close(cmath.rect(r, k * math.pi / 6), abs_tol=1e-9),
            ),
            Postcondition("radius", "magnitude == r",
                          lambda r, k, z: math.isclose(z.magnitude(), r, abs_tol=1e-9)),
        ],
        error_conditions=[
            ErrorCondition("negative_radius", "InvalidArgument when r < 0",
                           lambda r, k: r < 0, InvalidArgument),
        ],
    )

    from_quarter_turns = OperationContract(
        name="from_quarter_turns",
        invoke=lambda r, k: Z.from_quarter_turns(r, k),
        domain=(range(-3, 6), range(-4, 9)),
        postconditions=[
            Postcondition(
                "rotated_radius", "r rotated by k quarter turns, exactly",
                lambda r, k, z: z == repeated_product(Z.i(), k % 4, Z(r, 0)),
            ),
            Postcondition("integer_backed", "Stays exact", lambda r, k, z: z.is_integer_backed()),
        ],
        properties=[
            AlgebraicProperty(
                "agrees_with_polar", "Matches from_polar(r, k * pi / 2) for r >= 0",
                lambda r, k: r < 0 or Z.from_quarter_turns(r, k).is_close(
                    Z.from_polar(r, k * math.pi / 2), abs_tol=1e-9
                ),
            ),
        ],
    )

    nth_root = OperationContract(
        name="nth_root",
        invoke=lambda a, b, n: Z(a, b).nth_root(n),
        domain=(COMPONENTS, COMPONENTS, range(0, 9)),
        postconditions=[
            Postcondition(
                "count", "n roots, or the single root 0 for zero",
                lambda a, b, n, roots: len(roots) == (1 if a == 0 and b == 0 else n),
            ),
            Postcondition("distinct", "No root is listed twice",
                          lambda a, b, n, roots: len(set(roots)) == len(roots)),
            Postcondition(
                "reconstructs", "Every root raised to n is close to z",
                lambda a, b, n, roots: all(
                    root.pow(n).is_close(Z(a, b), abs_tol=1e-6) for root in roots
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition("zero_degree", "InvalidArgument when n == 0",
                           lambda a, b, n: n == 0, InvalidArgument),
        ],
    )

    ln_approx = OperationContract(
        name="ln_approx",
        invoke=lambda a, b: Z(a, b).ln_approx(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("inverts_exp", "exp(ln(z)) ~ z",
                          lambda a, b, r: r.exp_approx().is_close(Z(a, b), abs_tol=1e-9)),
            Postcondition("principal_branch", "-pi < imag <= pi",
                          lambda a, b, r: -math.pi < r.imag <= math.pi),
        ],
        error_conditions=[
            ErrorCondition("log_of_zero", "InvalidArgument when z == 0",
                           lambda a, b: a == 0 and b == 0, InvalidArgument),
        ],
    )

    exp_approx = OperationContract(
        name="exp_approx",
        invoke=lambda a, b: Z(a, b).exp_approx(),
        domain=(COMPONENTS,) * 2,
        postconditions=[
            Postcondition("matches_cmath", "Agrees with cmath.exp",
                          lambda a, b, r: r.is_close(cmath.exp(complex(a, b)))),
            Postcondition("modulus", "|exp(z)| == e^a",
                          lambda a, b, r: math.isclose(r.magnitude(), math.exp(a))),
        ],
    )

    ops = [
        add, sub, mul, div, div_exact, conjugate, magnitude_squared,
        magnitude, scale, pow_, rotate_90, rotate_180, rotate_270,
        arg_quadrant, from_polar, from_quarter_turns, nth_root, ln_approx,
        exp_approx,
    ]
    return ContractSuite(name="BigComplex", operations={op.name: op for op in ops})
