"""Exact rational arithmetic over bounded 64-bit integers."""

from . import linalg
from .array import (
    as_fraction_array,
    full,
    identity,
    is_valid,
    ones,
    to_float_array,
    zeros,
    zeros_like,
)
from .config import configure, get_settings, load_settings, settings
from .exceptions import (
    FractionError,
    FractionOverflowError,
    InvalidFractionError,
    SingularMatrixError,
    UnsupportedTypeError,
)
from .fraction import LARGEST, SMALLEST_POSITIVE, Fraction, normalize, promote
from .int64 import INT64_MAX, INT64_MIN
from .parsing import is_decimal_literal

__all__ = [
    "Fraction",
    "FractionError",
    "FractionOverflowError",
    "INT64_MAX",
    "INT64_MIN",
    "InvalidFractionError",
    "LARGEST",
    "SMALLEST_POSITIVE",
    "SingularMatrixError",
    "UnsupportedTypeError",
    "as_fraction_array",
    "configure",
    "full",
    "get_settings",
    "identity",
    "is_decimal_literal",
    "is_valid",
    "linalg",
    "load_settings",
    "normalize",
    "ones",
    "promote",
    "settings",
    "to_float_array",
    "zeros",
    "zeros_like",
]
