"""NumPy object-array helpers for :class:`Fraction` values."""
from __future__ import annotations

from typing import Any, Tuple, Union

import numpy as np

from .fraction import Fraction

Shape = Union[int, Tuple[int, ...]]


def as_fraction_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Fraction` values.

    ``values`` can be any (nested) sequence of supported values or an existing
    NumPy array. When ``copy`` is ``False`` and ``values`` is already an object
    array holding only :class:`Fraction` values, it is returned unchanged.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Fraction) for item in array.flat):
            return array
        if array.size == 0:
            return array.astype(object)
        vectorised = np.vectorize(Fraction.promote, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        nested = np.array(values, dtype=object)
        if nested.size == 0:
            return nested
        vectorised = np.vectorize(Fraction.promote, otypes=[object])
        return vectorised(nested)

    return as_fraction_array(list(values), copy=copy)


def full(shape: Shape, value: Any) -> np.ndarray:
    """Return an object array of *shape* filled with ``Fraction(value)``."""
    fill = Fraction.promote(value)
    array = np.empty(shape, dtype=object)
    array.fill(fill)
    return array


def zeros(shape: Shape) -> np.ndarray:
    """Return an array of *shape* filled with zeros."""

    if isinstance(shape, int) and shape < 0:
        raise ValueError("length must be non-negative")
    return full(shape, 0)


def ones(shape: Shape) -> np.ndarray:
    if isinstance(shape, int) and shape < 0:
        raise ValueError("length must be non-negative")
    return full(shape, 1)


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero array with the shape of *values*."""

    return zeros(np.shape(values))


def identity(n: int) -> np.ndarray:
    """Return the exact ``n x n`` identity matrix."""
    matrix = zeros((n, n))
    for i in range(n):
        matrix[i, i] = Fraction(1)
    return matrix


def to_float_array(values: Any, dtype: Any = np.float64) -> np.ndarray:
    """Convert *values* to a float array; invalid entries become NaN."""
    array = as_fraction_array(values, copy=False)
    vectorised = np.vectorize(lambda item: item.astype(dtype), otypes=[np.dtype(dtype)])
    return vectorised(array)


def is_valid(values: Any) -> np.ndarray:
    """Return a boolean array marking the valid entries of *values*."""
    array = as_fraction_array(values, copy=False)
    vectorised = np.vectorize(lambda item: item.is_valid, otypes=[bool])
    return vectorised(array)


__all__ = [
    "as_fraction_array",
    "full",
    "identity",
    "is_valid",
    "ones",
    "to_float_array",
    "zeros",
    "zeros_like",
]
