"""White-box tests for BigInt.

Each test class targets one group of operations and exercises the
decision points inside it: sign handling in division, the zero and
negative guards, the limits of the trial-division loop, and the
zero sentinel of the bit helpers.
"""
from __future__ import annotations

import pytest

from big_int import BigInt, Sign, truncdiv, truncmod
from config import configure
from errors import DivideByZero, InvalidArgument, NoInverse, NumericError


# ===================================================================
# CONSTRUCTION AND CONVERSION
# ===================================================================

class TestConstruction:

    def test_from_int(self):
        assert BigInt(42).value == 42

    def test_from_bigint(self):
        assert BigInt(BigInt(-7)) == BigInt(-7)

    def test_default_is_zero(self):
        assert BigInt() == BigInt.zero() == 0

    def test_one(self):
        assert BigInt.one() == 1

    @pytest.mark.parametrize("bad", [1.5, "12", None, True])
    def test_rejects_non_integers(self, bad):
        with pytest.raises(TypeError):
            BigInt(bad)

    def test_immutable(self):
        n = BigInt(5)
        with pytest.raises(AttributeError):
            n.value = 6

    def test_conversions(self):
        n = BigInt(-12)
        assert int(n) == -12
        assert float(n) == -12.0
        assert [10, 20, 30, 40][BigInt(2)] == 30
        assert bool(BigInt(0)) is False
        assert bool(n) is True

    def test_hash_matches_int(self):
        assert hash(BigInt(99)) == hash(99)
        assert len({BigInt(3), BigInt(3), 3}) == 1


# ===================================================================
# TEXT
# ===================================================================

class TestText:

    def test_str_and_repr(self):
        assert str(BigInt(-987654321)) == "-987654321"
        assert repr(BigInt(42)) == "BigInt(42)"

    def test_parse_large(self):
        text = "12345678901234567890"
        assert str(BigInt.parse(text)) == text

    def test_parse_signs_and_whitespace(self):
        assert BigInt.parse("  -42 ") == -42
        assert BigInt.parse("+42") == 42
        assert BigInt.parse("-0") == 0

    @pytest.mark.parametrize("text", ["", "   ", "-", "+", "12a", "1_000", "0x10", "4 2"])
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(InvalidArgument):
            BigInt.parse(text)

    def test_parse_rejects_non_string(self):
        with pytest.raises(TypeError):
            BigInt.parse(42)

    def test_other_bases(self):
        assert BigInt(255).format(16) == "ff"
        assert BigInt(-5).format(2) == "-101"
        assert BigInt(35).format(36) == "z"
        assert BigInt(100).format(3) == "10201"
        assert BigInt.parse("FF", 16) == 255
        assert BigInt.parse("z", 36) == 35

    def test_digit_outside_base(self):
        with pytest.raises(InvalidArgument):
            BigInt.parse("2", 2)

    @pytest.mark.parametrize("base", [0, 1, 37, True])
    def test_unsupported_base(self, base):
        with pytest.raises(InvalidArgument):
            BigInt(5).format(base)
        with pytest.raises(InvalidArgument):
            BigInt.parse("1", base)

    def test_round_trip_beyond_str_digit_limit(self):
        """Values with far more digits than one int/str conversion allows."""
        huge = BigInt(3000).factorial()
        text = huge.format()
        assert len(text) > 9000
        assert BigInt.parse(text) == huge
        assert BigInt.parse(huge.format(7), 7) == huge
        assert BigInt.parse("-" + text) == -huge

    def test_chunk_padding_keeps_inner_zeros(self):
        n = BigInt(10) ** 2500 + 1
        text = n.format()
        assert text == "1" + "0" * 2499 + "1"
        assert BigInt.parse(text) == n


# ===================================================================
# BYTES
# ===================================================================

class TestBytes:

    def test_sign(self):
        assert BigInt(5).sign is Sign.POSITIVE
        assert BigInt(-5).sign is Sign.NEGATIVE
        assert BigInt(0).sign is Sign.ZERO

    def test_big_endian(self):
        assert BigInt(-258).to_bytes() == (Sign.NEGATIVE, b"\x01\x02")

    def test_little_endian(self):
        assert BigInt(258).to_bytes("little") == (Sign.POSITIVE, b"\x02\x01")

    def test_zero_is_empty(self):
        assert BigInt(0).to_bytes() == (Sign.ZERO, b"")

    def test_from_bytes(self):
        assert BigInt.from_bytes(Sign.NEGATIVE, b"\x01\x00") == -256
        assert BigInt.from_bytes(Sign.POSITIVE, b"\x00\x01", "little") == 256

    def test_zero_sign_ignores_magnitude(self):
        assert BigInt.from_bytes(Sign.ZERO, b"\xff") == 0

    def test_negative_sign_with_zero_magnitude(self):
        assert BigInt.from_bytes(Sign.NEGATIVE, b"\x00\x00") == 0

    def test_bad_byteorder(self):
        with pytest.raises(InvalidArgument):
            BigInt(1).to_bytes("middle")
        with pytest.raises(InvalidArgument):
            BigInt.from_bytes(Sign.POSITIVE, b"\x01", "middle")

    def test_sign_must_be_enum(self):
        with pytest.raises(TypeError):
            BigInt.from_bytes(1, b"\x01")


# ===================================================================
# ARITHMETIC
# ===================================================================

class TestArithmetic:

    def test_basic_operators(self):
        a, b = BigInt(15), BigInt(25)
        assert a + b == 40
        assert b - a == 10
        assert a * b == 375
        assert b / a == 1

    def test_mixed_with_int(self):
        assert BigInt(5) + 3 == 8
        assert 3 + BigInt(5) == 8
        assert 10 - BigInt(4) == 6
        assert 7 * BigInt(6) == 42
        assert 20 / BigInt(6) == 3
        assert 20 % BigInt(6) == 2
        assert isinstance(3 + BigInt(5), BigInt)

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            BigInt(1) + 1.5
        with pytest.raises(TypeError):
            BigInt(1) + "1"

    def test_named_methods(self):
        assert BigInt(7).add(BigInt(1)) == 8
        assert BigInt(7).sub(1) == 6
        assert BigInt(7).mul(-1) == -7
        assert BigInt(-7).neg() == 7
        assert BigInt(-7).abs() == 7
        assert -BigInt(3) == -3
        assert abs(BigInt(-3)) == 3
        assert +BigInt(3) == 3

    def test_values_are_not_mutated(self):
        a = BigInt(10)
        a + 5
        a.mul(3)
        assert a == 10

    def test_arbitrary_precision(self):
        a = BigInt.parse("123456789012345678901234567890")
        assert a * a == 123456789012345678901234567890 ** 2


class TestTruncatingDivision:
    """Quotients truncate toward zero; remainders follow the dividend."""

    @pytest.mark.parametrize("a, b, q, r", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (6, 3, 2, 0),
        (-6, 3, -2, 0),
        (0, 5, 0, 0),
    ])
    def test_signs(self, a, b, q, r):
        assert BigInt(a).div(b) == q
        assert BigInt(a).mod(b) == r
        assert BigInt(a).divmod(b) == (q, r)
        assert divmod(BigInt(a), b) == (q, r)

    def test_differs_from_floor_division(self):
        assert -7 // 2 == -4
        assert BigInt(-7) / 2 == -3

    def test_helpers(self):
        assert truncdiv(-9, 4) == -2
        assert truncmod(-9, 4) == -1

    def test_no_floor_division_operator(self):
        with pytest.raises(TypeError):
            BigInt(7) // 2

    @pytest.mark.parametrize("method", ["div", "mod", "divmod"])
    def test_by_zero(self, method):
        with pytest.raises(DivideByZero):
            getattr(BigInt(5), method)(0)

    def test_operator_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            BigInt(5) / 0
        with pytest.raises(ZeroDivisionError):
            BigInt(5) % BigInt(0)


class TestPow:

    def test_small_powers(self):
        assert BigInt(3).pow(4) == 81
        assert BigInt(2).pow(10) == 1024
        assert BigInt(2) ** 100 == 2 ** 100

    def test_zero_exponent(self):
        assert BigInt(0).pow(0) == 1
        assert BigInt(-5).pow(0) == 1

    def test_negative_base(self):
        assert BigInt(-2).pow(3) == -8

    def test_bigint_exponent(self):
        assert BigInt(3).pow(BigInt(3)) == 27
        assert 2 ** BigInt(5) == 32

    def test_negative_exponent(self):
        with pytest.raises(InvalidArgument):
            BigInt(2).pow(-1)

    def test_three_argument_pow_routes_to_mod_pow(self):
        assert pow(BigInt(7), 3, 11) == 2


class TestComparison:

    def test_ordering(self):
        a, b = BigInt(100), BigInt(200)
        assert a < b
        assert b > a
        assert a <= a
        assert b >= a
        assert a != b

    def test_against_int(self):
        assert BigInt(5) == 5
        assert BigInt(5) < 6
        assert 4 < BigInt(5)

    def test_against_other_types(self):
        assert BigInt(1) != "1"
        with pytest.raises(TypeError):
            BigInt(1) < "2"

    def test_predicates(self):
        assert BigInt(0).is_zero()
        assert BigInt(3).is_positive()
        assert BigInt(-3).is_negative()
        assert BigInt(-4).is_even()
        assert BigInt(-3).is_odd()


# ===================================================================
# NUMBER THEORY
# ===================================================================

class TestSqrt:

    @pytest.mark.parametrize("n, root", [(0, 0), (1, 1), (144, 12), (145, 12), (143, 11)])
    def test_floor_root(self, n, root):
        assert BigInt(n).sqrt() == root

    def test_huge(self):
        n = BigInt(10) ** 200
        assert n.sqrt() == BigInt(10) ** 100

    def test_negative(self):
        with pytest.raises(InvalidArgument):
            BigInt(-4).sqrt()


class TestGcdLcm:

    def test_values(self):
        assert BigInt(12).gcd(18) == 6
        assert BigInt(12).lcm(18) == 36

    def test_signs_are_dropped(self):
        assert BigInt(-12).gcd(18) == 6
        assert BigInt(-12).lcm(-18) == 36

    def test_zero(self):
        assert BigInt(0).gcd(0) == 0
        assert BigInt(0).gcd(7) == 7
        assert BigInt(0).lcm(7) == 0


class TestModular:

    def test_mod_pow(self):
        assert BigInt(7).mod_pow(3, 11) == 2

    def test_mod_pow_large(self):
        base = BigInt.parse("123456789")
        assert base.mod_pow(100, 1_000_000_007) == pow(123456789, 100, 1_000_000_007)

    def test_mod_pow_negative_base_is_reduced(self):
        assert BigInt(-2).mod_pow(3, 5) == 2

    def test_mod_pow_negative_modulus(self):
        assert BigInt(7).mod_pow(3, -11) == 2

    def test_mod_pow_modulus_one(self):
        assert BigInt(5).mod_pow(0, 1) == 0

    def test_mod_pow_negative_exponent_uses_inverse(self):
        assert BigInt(3).mod_pow(-1, 11) == 4
        assert BigInt(3).mod_pow(-2, 11) == 5

    def test_mod_pow_negative_exponent_without_inverse(self):
        with pytest.raises(NoInverse):
            BigInt(2).mod_pow(-1, 4)

    def test_mod_pow_zero_modulus(self):
        with pytest.raises(DivideByZero):
            BigInt(2).mod_pow(3, 0)

    def test_mod_inv(self):
        assert BigInt(3).mod_inv(11) == 4

    def test_mod_inv_negative_value(self):
        inv = BigInt(-3).mod_inv(11)
        assert (-3 * int(inv)) % 11 == 1

    def test_mod_inv_missing(self):
        with pytest.raises(NoInverse) as excinfo:
            BigInt(4).mod_inv(8)
        assert excinfo.value.gcd == 4
        assert excinfo.value.modulus == 8

    def test_mod_inv_zero_modulus(self):
        with pytest.raises(DivideByZero):
            BigInt(3).mod_inv(0)


class TestFactorial:

    @pytest.mark.parametrize("n, expected", [
        (0, 1), (1, 1), (5, 120), (10, 3_628_800), (20, 2_432_902_008_176_640_000),
    ])
    def test_values(self, n, expected):
        assert BigInt(n).factorial() == expected

    def test_negative(self):
        with pytest.raises(InvalidArgument):
            BigInt(-5).factorial()

    def test_limit_from_config(self):
        configure(factorial_limit=10)
        assert BigInt(10).factorial() == 3_628_800
        with pytest.raises(InvalidArgument, match="factorial_limit"):
            BigInt(11).factorial()


class TestPrimes:

    @pytest.mark.parametrize("n", [2, 3, 5, 7, 11, 97, 101, 7919])
    def test_primes(self, n):
        assert BigInt(n).is_prime()

    @pytest.mark.parametrize("n", [-7, 0, 1, 4, 6, 8, 9, 10, 100, 121, 7917])
    def test_non_primes(self, n):
        assert not BigInt(n).is_prime()

    def test_square_of_prime_caught_at_the_limit(self):
        assert not BigInt(97 * 97).is_prime()

    def test_large_prime(self):
        assert BigInt(1_000_000_007).is_prime()

    @pytest.mark.parametrize("n, expected", [
        (-10, 2), (0, 2), (1, 2), (2, 3), (3, 5), (4, 5), (10, 11), (14, 17), (97, 101),
    ])
    def test_next_prime(self, n, expected):
        assert BigInt(n).next_prime() == expected


# ===================================================================
# BITS
# ===================================================================

class TestBits:

    @pytest.mark.parametrize("n, bits", [(0, 0), (1, 1), (2, 2), (7, 3), (8, 4), (255, 8), (-8, 4)])
    def test_bit_length(self, n, bits):
        assert BigInt(n).bit_length() == bits

    @pytest.mark.parametrize("n, ones", [(0, 0), (1, 1), (3, 2), (7, 3), (15, 4), (-5, 2)])
    def test_count_ones(self, n, ones):
        assert BigInt(n).count_ones() == ones

    @pytest.mark.parametrize("n, zeros", [(1, 0), (2, 1), (4, 2), (8, 3), (12, 2), (-12, 2)])
    def test_trailing_zeros(self, n, zeros):
        assert BigInt(n).trailing_zeros() == zeros

    def test_trailing_zeros_of_zero_is_zero(self):
        assert BigInt(0).trailing_zeros() == 0

    def test_trailing_zeros_large(self):
        assert (BigInt(3) * BigInt(2) ** 200).trailing_zeros() == 200

    @pytest.mark.parametrize("n", [1, 2, 4, 8, 16, 2 ** 100])
    def test_powers_of_two(self, n):
        assert BigInt(n).is_power_of_two()

    @pytest.mark.parametrize("n", [0, 3, 5, 6, -4, 2 ** 100 + 1])
    def test_not_powers_of_two(self, n):
        assert not BigInt(n).is_power_of_two()

    @pytest.mark.parametrize("n, expected", [
        (-3, 1), (0, 1), (1, 1), (2, 2), (3, 4), (5, 8), (9, 16), (1024, 1024), (1025, 2048),
    ])
    def test_next_power_of_two(self, n, expected):
        assert BigInt(n).next_power_of_two() == expected


# ===================================================================
# ERRORS
# ===================================================================

class TestErrorTaxonomy:

    def test_common_base(self):
        for exc in (DivideByZero, InvalidArgument, NoInverse):
            assert issubclass(exc, NumericError)

    def test_builtin_bases(self):
        assert issubclass(DivideByZero, ZeroDivisionError)
        assert issubclass(InvalidArgument, ValueError)
        assert issubclass(NoInverse, ArithmeticError)

    def test_message_names_operation(self):
        with pytest.raises(InvalidArgument) as excinfo:
            BigInt(-1).sqrt()
        assert excinfo.value.operation == "sqrt"
        assert excinfo.value.argument == -1
        assert str(excinfo.value).startswith("sqrt:")
