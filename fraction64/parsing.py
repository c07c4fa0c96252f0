"""Decimal literal validation and decomposition.

A decimal literal is an optional leading ``-``, a run of ASCII digits, and at
most one decimal separator (``.`` or ``,``) followed by more digits. Floats
are never converted through their binary value: they are rendered to decimal
text first and then go through the same path as any other literal.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional

import numpy as np

from . import int64
from .config import get_settings
from .exceptions import FractionOverflowError

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")
SEPARATORS = (".", ",")

# 10**18 is the largest power of ten a signed 64-bit denominator can hold.
MAX_FRACTION_DIGITS = 18


class DecimalParts(NamedTuple):
    """A validated literal split around its separator.

    The literal's value is ``(-1 if negative else 1) * (whole + digits / scale)``.
    """

    negative: bool
    whole: int
    digits: int
    scale: int


def is_decimal_literal(text: str) -> bool:
    """Return ``True`` when *text* is a decimal literal."""
    if not isinstance(text, str):
        return False
    if text.startswith("-"):
        text = text[1:]
    if not text:
        return False
    if text[0] not in DIGITS:
        return False
    if text[-1] in SEPARATORS:
        return False
    separators = 0
    for char in text:
        if char in SEPARATORS:
            separators += 1
            if separators > 1:
                return False
        elif char not in DIGITS:
            return False
    return True


def split_decimal(text: str) -> Optional[DecimalParts]:
    """Decompose a literal into sign, integer part and fractional digits.

    Returns ``None`` when *text* is not a decimal literal. The integer part
    follows the overflow policy; fractional digits beyond what a 64-bit
    denominator can hold are dropped under ``wrap`` and raise under ``raise``.
    """
    if not is_decimal_literal(text):
        logger.debug("rejected decimal literal %r", text)
        return None

    negative = text.startswith("-")
    if negative:
        text = text[1:]

    separator = "." if "." in text else ","
    left, _, right = text.partition(separator)

    if len(right) > MAX_FRACTION_DIGITS:
        if get_settings().overflow == "raise":
            raise FractionOverflowError(
                f"{len(right)} fractional digits exceed a 64-bit denominator"
            )
        logger.debug(
            "truncating %r to %d fractional digits", text, MAX_FRACTION_DIGITS
        )
        right = right[:MAX_FRACTION_DIGITS]

    whole = int64.bound(int(left))
    digits = int(right) if right else 0
    scale = 10 ** len(right)
    return DecimalParts(negative, whole, digits, scale)


def render_float(value, precision: Optional[int] = None) -> str:
    """Render a float-like value as positional decimal text.

    With ``precision=None`` the shortest text that round-trips for the
    value's own width is produced, so ``numpy.float32(0.2)`` renders as
    ``"0.2"``. Otherwise exactly *precision* fractional digits are rounded
    and trailing zeros are trimmed. NaN and infinities render as ``"nan"``
    and ``"inf"``, which are not decimal literals.
    """
    if precision is None:
        precision = get_settings().float_precision
    if not isinstance(value, np.floating):
        value = float(value)
    if precision is None:
        return np.format_float_positional(value, unique=True, trim="-")
    return np.format_float_positional(
        value, precision=precision, unique=False, trim="-"
    )


__all__ = [
    "DecimalParts",
    "MAX_FRACTION_DIGITS",
    "is_decimal_literal",
    "render_float",
    "split_decimal",
]
