"""Exact linear algebra over :class:`Fraction` matrices.

All routines use Gauss-Jordan elimination with the first non-zero pivot in
each column, so no pivot is ever chosen by magnitude and results are exact
within the 64-bit range.
"""
from __future__ import annotations

from typing import Any

import numpy as np

from .array import as_fraction_array, identity
from .exceptions import SingularMatrixError
from .fraction import Fraction


def _square(matrix: Any) -> np.ndarray:
    array = as_fraction_array(matrix)
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise ValueError(f"expected a square matrix, got shape {array.shape}")
    return array


def _find_pivot(work: np.ndarray, col: int, start: int) -> int | None:
    for row in range(start, work.shape[0]):
        if work[row, col] != 0:
            return row
    return None


def _eliminate(work: np.ndarray, augmented: np.ndarray) -> None:
    """Reduce *work* to the identity, applying the same row operations to *augmented*."""
    n = work.shape[0]
    for col in range(n):
        piv = _find_pivot(work, col, col)
        if piv is None:
            raise SingularMatrixError("matrix is singular")

        if piv != col:
            work[[col, piv]] = work[[piv, col]]
            augmented[[col, piv]] = augmented[[piv, col]]

        scale = work[col, col]
        work[col] = work[col] / scale
        augmented[col] = augmented[col] / scale

        for row in range(n):
            if row != col and work[row, col] != 0:
                factor = work[row, col]
                work[row] = work[row] - factor * work[col]
                augmented[row] = augmented[row] - factor * augmented[col]


def inv(matrix: Any) -> np.ndarray:
    """Return the exact inverse of a square matrix.

    Raises :class:`SingularMatrixError` when the matrix has no inverse.
    """
    work = _square(matrix)
    result = identity(work.shape[0])
    _eliminate(work, result)
    return result


def solve(matrix: Any, rhs: Any) -> np.ndarray:
    """Solve ``matrix @ x == rhs`` exactly for a vector or matrix *rhs*."""
    work = _square(matrix)
    target = as_fraction_array(rhs)
    vector = target.ndim == 1
    if vector:
        target = target.reshape(-1, 1)
    if target.shape[0] != work.shape[0]:
        raise ValueError(
            f"rhs has {target.shape[0]} rows, matrix has {work.shape[0]}"
        )
    _eliminate(work, target)
    return target.reshape(-1) if vector else target


def det(matrix: Any) -> Fraction:
    """Return the exact determinant of a square matrix."""
    work = _square(matrix)
    n = work.shape[0]
    result = Fraction(1)
    for col in range(n):
        piv = _find_pivot(work, col, col)
        if piv is None:
            return Fraction(0)
        if piv != col:
            work[[col, piv]] = work[[piv, col]]
            result = -result
        pivot = work[col, col]
        result = result * pivot
        for row in range(col + 1, n):
            if work[row, col] != 0:
                factor = work[row, col] / pivot
                work[row] = work[row] - factor * work[col]
    return result


__all__ = ["det", "inv", "solve"]
