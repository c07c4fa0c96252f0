"""Exact rational numbers over bounded 64-bit integers with NumPy interoperability."""
from __future__ import annotations

import fractions
import logging
import numbers
import operator
from typing import Any, Optional, Union

import numpy as np

from . import int64
from .config import get_settings
from .exceptions import (
    FractionOverflowError,
    InvalidFractionError,
    UnsupportedTypeError,
)
from .parsing import render_float, split_decimal

logger = logging.getLogger(__name__)

# Operand types that promote into a Fraction inside arithmetic and comparisons.
SUPPORTED_TYPES = (int, float, np.integer, np.floating)

NumberLike = Union["Fraction", int, float, np.integer, np.floating]


def _embed_integer(value: numbers.Integral) -> int:
    """Embed an integer of any width as a 64-bit numerator."""
    if isinstance(value, np.unsignedinteger):
        return int64.saturate(int(value))
    return int64.bound(int(value))


def _ensure_int(value: Any, *, name: str) -> int:
    if isinstance(value, numbers.Integral):
        return _embed_integer(value)
    raise UnsupportedTypeError(f"{name} must be an integer, got {type(value)!r}")


def normalize(numerator: int, denominator: int) -> "Fraction":
    """Reduce ``numerator/denominator`` to canonical lowest terms.

    A zero denominator produces the invalid sentinel; a zero numerator
    produces ``0/1``. The sign is carried by the numerator.
    """
    numerator = int64.bound(numerator)
    denominator = int64.bound(denominator)
    if denominator == 0:
        logger.debug("zero denominator for numerator %d", numerator)
        return Fraction._make(0, 0, invalid=True)
    if numerator == 0:
        return Fraction._make(0, 1)
    if denominator == 1:
        return Fraction._make(numerator, 1)

    divisor = int64.gcd(abs(numerator), abs(denominator))
    numerator //= divisor
    denominator //= divisor
    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    if not int64.fits(denominator):
        if get_settings().overflow == "raise":
            raise FractionOverflowError(
                f"denominator {denominator} does not fit in a signed 64-bit integer",
                denominator,
            )
        logger.debug("unrepresentable denominator %d", denominator)
        return Fraction._make(0, 0, invalid=True)
    return Fraction._make(int64.bound(numerator), denominator)


class Fraction:
    """Exact ratio of two signed 64-bit integers in lowest terms.

    Values are immutable. Undefined results (zero denominators, division by
    zero, malformed text) are represented by an invalid value that reports
    ``is_valid == False`` instead of raising.

    Floats compare through their decimal text, so ``Fraction(1, 10) == 0.1``
    holds while the hashes differ: the hash follows :class:`fractions.Fraction`,
    and floats and Fractions should not be mixed as dict or set keys.
    """

    __slots__ = ("_numerator", "_denominator", "_invalid")
    __array_priority__ = 1000.0  # Prefer Fraction semantics in NumPy expressions.

    def __init__(self, value: Any = 0, denominator: Any = None) -> None:
        if denominator is not None:
            result = normalize(
                _ensure_int(value, name="numerator"),
                _ensure_int(denominator, name="denominator"),
            )
        else:
            result = Fraction.promote(value)
        self._numerator = result._numerator
        self._denominator = result._denominator
        self._invalid = result._invalid

    @classmethod
    def _make(cls, numerator: int, denominator: int, *, invalid: bool = False) -> "Fraction":
        instance = object.__new__(cls)
        instance._numerator = numerator
        instance._denominator = denominator
        instance._invalid = invalid
        return instance

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def invalid(cls) -> "Fraction":
        """Return the invalid sentinel."""
        return cls._make(0, 0, invalid=True)

    @classmethod
    def from_string(cls, text: str) -> "Fraction":
        """Parse a decimal literal such as ``"-3.25"`` or ``"0,5"`` exactly.

        Malformed text yields the invalid sentinel.
        """
        parts = split_decimal(text)
        if parts is None:
            return cls.invalid()
        whole = normalize(parts.whole, 1)
        fractional = normalize(parts.digits, parts.scale)
        result = whole + fractional
        if parts.negative:
            result = -result
        return result

    @classmethod
    def from_float(cls, value: Any, *, precision: Optional[int] = None) -> "Fraction":
        """Convert a float through its decimal text rendering.

        ``Fraction.from_float(0.1)`` is exactly ``1/10``. NaN and infinities
        yield the invalid sentinel.
        """
        return cls.from_string(render_float(value, precision))

    @classmethod
    def from_fraction(cls, value: fractions.Fraction) -> "Fraction":
        """Create a :class:`Fraction` from :class:`fractions.Fraction`."""
        return normalize(value.numerator, value.denominator)

    @classmethod
    def promote(cls, value: Any) -> "Fraction":
        """Coerce a supported value into :class:`Fraction`.

        Integers are embedded with denominator 1, floats go through their
        decimal text, strings are parsed, ``True`` is zero and ``False`` is
        the invalid sentinel.
        """
        if isinstance(value, Fraction):
            return value
        if isinstance(value, (bool, np.bool_)):
            if value:
                return cls._make(0, 1)
            logger.debug("constructed invalid Fraction from False")
            return cls.invalid()
        if isinstance(value, numbers.Integral):
            return cls._make(_embed_integer(value), 1)
        if isinstance(value, (float, np.floating)):
            return cls.from_float(value)
        if isinstance(value, str):
            return cls.from_string(value)
        raise UnsupportedTypeError(f"Cannot convert {type(value)!r} to Fraction")

    @staticmethod
    def is_supported_type(tp: Any) -> bool:
        """Return ``True`` when values of *tp* can be mixed into Fraction arithmetic."""
        if not isinstance(tp, type):
            return False
        if issubclass(tp, Fraction):
            return True
        if issubclass(tp, (bool, np.bool_)):
            return False
        return issubclass(tp, SUPPORTED_TYPES)

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def is_valid(self) -> bool:
        return not self._invalid

    def as_fraction(self) -> fractions.Fraction:
        """Return a :class:`fractions.Fraction` with the same value."""
        if self._invalid:
            raise InvalidFractionError("cannot convert an invalid Fraction")
        return fractions.Fraction(self._numerator, self._denominator)

    def as_tuple(self) -> tuple[int, int]:
        return self._numerator, self._denominator

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        if self._invalid:
            return float("nan")
        return self._numerator / self._denominator

    def __int__(self) -> int:
        if self._invalid:
            raise InvalidFractionError("cannot convert an invalid Fraction to int")
        return int64.trunc_div(self._numerator, self._denominator)

    __trunc__ = __int__

    def __bool__(self) -> bool:
        return self._numerator != 0

    def astype(self, dtype: Any) -> Any:
        """Convert to a NumPy scalar of *dtype*.

        Integer dtypes receive the quotient truncated toward zero, narrowed
        with C cast semantics (``Fraction(300).astype(np.int8) == 44``).
        Float dtypes receive the real quotient.
        """
        target = np.dtype(dtype)
        if target.kind == "b":
            return np.bool_(bool(self))
        if target.kind in "iu":
            quotient = np.array(int(self), dtype=np.int64)
            return quotient.astype(target)[()]
        if target.kind == "f":
            if self._invalid:
                return target.type("nan")
            if target == np.longdouble:
                return np.longdouble(self._numerator) / np.longdouble(self._denominator)
            return target.type(float(self))
        raise UnsupportedTypeError(f"Cannot convert Fraction to {target}")

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        if self._invalid:
            return "Fraction.invalid()"
        return f"Fraction({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        return self.to_decimal_string()

    def to_decimal_string(self, precision: Optional[int] = None) -> str:
        """Render the floating-point approximation as decimal text."""
        return render_float(float(self), precision)

    def to_ratio_string(self) -> str:
        """Return ``"numerator/denominator"``; ``"0/0"`` for an invalid value."""
        return f"{self._numerator}/{self._denominator}"

    def __format__(self, format_spec: str) -> str:
        if format_spec == "":
            return str(self)
        if format_spec in ("r", "R"):
            return self.to_ratio_string()
        try:
            return format(float(self), format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    @staticmethod
    def _coerce_operand(value: Any) -> Optional["Fraction"]:
        if isinstance(value, Fraction):
            return value
        if Fraction.is_supported_type(type(value)):
            return Fraction.promote(value)
        return None

    @staticmethod
    def _require_operand(value: Any) -> "Fraction":
        other = Fraction._coerce_operand(value)
        if other is None:
            raise UnsupportedTypeError(
                f"unsupported operand type for Fraction arithmetic: {type(value)!r}"
            )
        return other

    def _binary_operation(self, other: Any, op, *, reflected: bool = False):
        if isinstance(other, np.ndarray):
            if reflected:
                vectorised = np.vectorize(
                    lambda x: op(Fraction._require_operand(x), self), otypes=[object]
                )
            else:
                vectorised = np.vectorize(
                    lambda x: op(self, Fraction._require_operand(x)), otypes=[object]
                )
            return vectorised(other)
        other_frac = self._coerce_operand(other)
        if other_frac is None:
            return NotImplemented
        if reflected:
            return op(other_frac, self)
        return op(self, other_frac)

    @staticmethod
    def _coerce_power(value: Any) -> int:
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("Unsupported exponent type")
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Fraction):
            if value._invalid or value._denominator != 1:
                raise ValueError("Exponent must be an integer")
            return value._numerator
        if isinstance(value, (float, np.floating)):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Fraction-Fraction arithmetic
    @staticmethod
    def _add(a: "Fraction", b: "Fraction") -> "Fraction":
        if a._invalid or b._invalid:
            return Fraction.invalid()
        return normalize(
            int64.add(
                int64.mul(a._numerator, b._denominator),
                int64.mul(b._numerator, a._denominator),
            ),
            int64.mul(a._denominator, b._denominator),
        )

    @staticmethod
    def _sub(a: "Fraction", b: "Fraction") -> "Fraction":
        if a._invalid or b._invalid:
            return Fraction.invalid()
        return normalize(
            int64.sub(
                int64.mul(a._numerator, b._denominator),
                int64.mul(b._numerator, a._denominator),
            ),
            int64.mul(a._denominator, b._denominator),
        )

    @staticmethod
    def _mul(a: "Fraction", b: "Fraction") -> "Fraction":
        if a._invalid or b._invalid:
            return Fraction.invalid()
        return normalize(
            int64.mul(a._numerator, b._numerator),
            int64.mul(a._denominator, b._denominator),
        )

    @staticmethod
    def _truediv(a: "Fraction", b: "Fraction") -> "Fraction":
        if a._invalid or b._invalid:
            return Fraction.invalid()
        return normalize(
            int64.mul(a._numerator, b._denominator),
            int64.mul(a._denominator, b._numerator),
        )

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._add)

    def __radd__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._add, reflected=True)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._sub)

    def __rsub__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._sub, reflected=True)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._mul)

    def __rmul__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._mul, reflected=True)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._truediv)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Fraction._truediv, reflected=True)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.pow(x), otypes=[object])
            return vectorised(exponent)
        return self.pow(exponent)

    def __rpow__(self, base: Any) -> Any:
        base_frac = self._coerce_operand(base)
        if base_frac is None:
            return NotImplemented
        return base_frac.pow(self)

    def __neg__(self) -> "Fraction":
        if self._invalid:
            return self
        return normalize(int64.neg(self._numerator), self._denominator)

    def __pos__(self) -> "Fraction":
        return self

    def __abs__(self) -> "Fraction":
        if self._numerator < 0:
            return -self
        return self

    def increment(self) -> "Fraction":
        """Return ``self + 1``."""
        if self._invalid:
            return self
        return normalize(int64.add(self._numerator, self._denominator), self._denominator)

    def decrement(self) -> "Fraction":
        """Return ``self - 1``."""
        if self._invalid:
            return self
        return normalize(int64.sub(self._numerator, self._denominator), self._denominator)

    def invert(self) -> "Fraction":
        """Return ``1/self``; zero inverts to the invalid sentinel."""
        if self._invalid:
            return self
        return normalize(self._denominator, self._numerator)

    def pow(self, exponent: Any) -> "Fraction":
        """Raise to an integer power by repeated multiplication.

        Negative exponents invert first. Non-integer exponents raise
        :class:`ValueError`.
        """
        power = self._coerce_power(exponent)
        if self._invalid:
            return self
        if power == 0:
            return Fraction._make(1, 1)
        if power < 0:
            return self.invert().pow(-power)
        result = self
        for _ in range(power - 1):
            result = Fraction._mul(result, self)
        return result

    # ------------------------------------------------------------------
    # Comparisons
    def _scaled_numerators(self, other: "Fraction") -> tuple[int, int]:
        multiple = int64.lcm(self._denominator, other._denominator)
        return (
            int64.mul(self._numerator, int64.trunc_div(multiple, self._denominator)),
            int64.mul(other._numerator, int64.trunc_div(multiple, other._denominator)),
        )

    def _compare(self, other: Any, op) -> Any:
        other_frac = self._coerce_operand(other)
        if other_frac is None:
            return NotImplemented
        if self._invalid or other_frac._invalid:
            return False
        return op(*self._scaled_numerators(other_frac))

    def __eq__(self, other: Any) -> Any:
        other_frac = self._coerce_operand(other)
        if other_frac is None:
            return NotImplemented
        if self._invalid or other_frac._invalid:
            return False
        if self._numerator == 0:
            return other_frac._numerator == 0
        return (
            self._numerator == other_frac._numerator
            and self._denominator == other_frac._denominator
        )

    def __ne__(self, other: Any) -> Any:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, operator.lt)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, operator.gt)

    def __le__(self, other: Any) -> Any:
        greater = self.__gt__(other)
        if greater is NotImplemented:
            return greater
        if self._invalid or self._coerce_operand(other)._invalid:
            return False
        return not greater

    def __ge__(self, other: Any) -> Any:
        less = self.__lt__(other)
        if less is NotImplemented:
            return less
        if self._invalid or self._coerce_operand(other)._invalid:
            return False
        return not less

    def __hash__(self) -> int:
        if self._invalid:
            return hash((0, 0))
        if self._denominator == 1:
            return hash(self._numerator)
        return hash(fractions.Fraction(self._numerator, self._denominator))

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Fraction ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Fraction):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(Fraction._require_operand, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(Fraction._require_operand(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def promote(value: Any) -> Fraction:
    """Public helper to convert *value* into :class:`Fraction`."""

    return Fraction.promote(value)


LARGEST = Fraction._make(int64.INT64_MAX, 1)
SMALLEST_POSITIVE = Fraction._make(1, int64.INT64_MAX)


__all__ = [
    "Fraction",
    "LARGEST",
    "NumberLike",
    "SMALLEST_POSITIVE",
    "SUPPORTED_TYPES",
    "normalize",
    "promote",
]
