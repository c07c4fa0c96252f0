"""Bounded signed 64-bit integer arithmetic and the GCD/LCM engine.

Python integers never overflow, so every product and sum that would leave the
64-bit range in a fixed-width implementation is passed through :func:`bound`,
which applies the active overflow policy from :mod:`fraction64.config`.
"""
from __future__ import annotations

import logging

from .config import get_settings
from .exceptions import FractionOverflowError

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_MODULUS = 2**64


def fits(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def wrap(value: int) -> int:
    """Reduce *value* to the two's-complement 64-bit range."""
    value &= _MODULUS - 1
    if value > INT64_MAX:
        value -= _MODULUS
    return value


def bound(value: int) -> int:
    """Bring *value* into the 64-bit range according to the overflow policy."""
    if fits(value):
        return value
    if get_settings().overflow == "raise":
        raise FractionOverflowError(
            f"{value} does not fit in a signed 64-bit integer", value
        )
    wrapped = wrap(value)
    logger.debug("wrapped %d to %d", value, wrapped)
    return wrapped


def saturate(value: int) -> int:
    """Clamp *value* into the 64-bit range."""
    return max(INT64_MIN, min(INT64_MAX, value))


def add(a: int, b: int) -> int:
    return bound(a + b)


def sub(a: int, b: int) -> int:
    return bound(a - b)


def mul(a: int, b: int) -> int:
    return bound(a * b)


def neg(a: int) -> int:
    # -INT64_MIN is the one negation that leaves the range.
    return bound(-a)


def trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero, as fixed-width hardware does."""
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return bound(quotient)


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two non-negative integers (Euclid).

    Callers pass absolute values; ``gcd(0, 0)`` is 0 and callers are expected
    to handle a zero numerator before reaching this point.
    """
    while b != 0:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Least common multiple, evaluated with the bounded multiply.

    Large denominators can exceed the 64-bit range; the result then follows
    the overflow policy like any other product.
    """
    a, b = abs(a), abs(b)
    if a == 0 or b == 0:
        return 0
    return mul(a // gcd(a, b), b)


__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "add",
    "bound",
    "fits",
    "gcd",
    "lcm",
    "mul",
    "neg",
    "saturate",
    "sub",
    "trunc_div",
    "wrap",
]
