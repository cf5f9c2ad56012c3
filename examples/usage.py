"""Walk through the BigInt / BigComplex API and print the results.

Run with::

    python examples/usage.py
"""
from __future__ import annotations

import logging

from big_complex import BigComplex
from big_int import BigInt
from errors import NoInverse

logger = logging.getLogger("usage")


def _configure_logging() -> None:
    # Only install a handler when the host has not configured one.
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")


def big_integers() -> None:
    print("1. Big integers")
    a = BigInt.parse("123456789012345678901234567890")
    b = BigInt(987654321)
    print(f"a = {a}")
    print(f"b = {b}")
    print(f"a + b = {a + b}")
    print(f"a * b = {a * b}")
    print(f"a / b = {a / b}   (truncated)")
    print(f"a % b = {a % b}")
    print(f"gcd(a, b) = {a.gcd(b)}")
    print(f"lcm(a, b) = {a.lcm(b)}")
    print(f"a in hex = {a.format(16)}")
    sign, data = a.to_bytes()
    print(f"a as bytes = {sign.name} {data.hex()}")


def complex_numbers() -> None:
    print("\n2. Complex numbers")
    z1 = BigComplex(3, 4)
    z2 = BigComplex(BigInt.parse("123456789"), BigInt.parse("987654321"))
    print(f"z1 = {z1}, z2 = {z2}")
    print(f"z1 + z2 = {z1 + z2}")
    print(f"z1 * z2 = {z1 * z2}")
    print(f"conj(z1) = {z1.conjugate()}")
    print(f"|z1|^2 = {z1.magnitude_squared()}, |z1| = {z1.magnitude()}")
    print(f"quadrant of z1 = {z1.arg_quadrant().name}")
    print(f"z1 rotated 90 degrees = {z1.rotate_90()}")

    z = BigComplex(1, 1)
    for k in range(1, 5):
        print(f"(1+i)^{k} = {z ** k}")


def quadratic() -> None:
    print("\n3. Roots of x^2 - 3x + 2")
    a, b, c = BigComplex(1), BigComplex(-3), BigComplex(2)
    discriminant = b * b - BigComplex(4) * a * c
    root = discriminant.nth_root(2)[0]
    two_a = BigComplex(2) * a
    print(f"discriminant = {discriminant}")
    print(f"roots = {(-b + root) / two_a} and {(-b - root) / two_a}")

    print("\n4. Cube roots of 8")
    for r in BigComplex(8).nth_root(3):
        print(f"  {r}")


def geometry() -> None:
    print("\n5. Geometry")
    p, q = BigComplex(3, 4), BigComplex(6, 8)
    print(f"distance between {p} and {q} = {BigInt(p.distance_squared(q)).sqrt()}")
    print(f"point at radius 5, 90 degrees = {BigComplex.from_quarter_turns(5, 1)}")
    print(f"ln(z1) ~ {p.ln_approx()}")


def number_theory() -> None:
    print("\n6. Modular arithmetic and primes")
    base, exp, modulus = BigInt.parse("123456789"), BigInt(100), BigInt(1_000_000_007)
    print(f"{base}^{exp} mod {modulus} = {base.mod_pow(exp, modulus)}")
    print(f"3^-1 mod 11 = {BigInt(3).mod_inv(11)}")
    try:
        BigInt(4).mod_inv(8)
    except NoInverse as e:
        logger.info("expected failure: %s", e)
    print(f"20! = {BigInt(20).factorial()}")
    print(f"97 is prime: {BigInt(97).is_prime()}")
    print(f"next prime after 1000 = {BigInt(1000).next_prime()}")
    print(f"next power of two after 1000 = {BigInt(1000).next_power_of_two()}")


def main() -> None:
    _configure_logging()
    print("=== Big Complex Number Calculator Demo ===\n")
    big_integers()
    complex_numbers()
    quadratic()
    geometry()
    number_theory()


if __name__ == "__main__":
    main()
