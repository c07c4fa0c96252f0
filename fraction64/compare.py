"""Invert a matrix in float64 and exactly, time both, and compare their residuals.

Installed as the ``fraction64-compare`` console script; from a checkout run
``python -m fraction64.compare``.
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import numpy as np

from . import linalg
from .array import as_fraction_array, identity, to_float_array
from .config import configure
from .fraction import Fraction

logger = logging.getLogger(__name__)


@dataclass
class InversionResult:
    name: str
    runtime: float
    inverse: np.ndarray
    l2_error: float
    linf_error: float
    exact: bool


def hilbert(n: int) -> np.ndarray:
    """Return the ``n x n`` Hilbert matrix as exact fractions."""
    if n < 1:
        raise ValueError("matrix size must be >= 1")
    return as_fraction_array([[Fraction(1, i + j + 1) for j in range(n)] for i in range(n)])


def load_matrix(parfile: Path, *, overflow: Optional[str] = None) -> np.ndarray:
    """Read ``matrix = [[...], ...]`` from a TOML parfile.

    Entries may be integers, floats or decimal strings such as ``"0.1"``.
    The parfile's ``[fraction64]`` table is applied first, then *overflow*
    overrides it, and only then are the entries parsed.
    """
    with parfile.open("rb") as pf:
        params = tomllib.load(pf)
    if "fraction64" in params:
        configure(**params["fraction64"])
    if overflow is not None:
        configure(overflow=overflow)
    if "matrix" not in params:
        raise ValueError(f"No matrix found in {parfile}")
    return as_fraction_array(params["matrix"])


def l2_norm(values: np.ndarray) -> float:
    return float(np.sqrt(np.mean(values ** 2)))


def linf_norm(values: np.ndarray) -> float:
    return float(np.max(np.abs(values)))


def _timed(func: Callable[[], np.ndarray]) -> tuple[np.ndarray, float]:
    start = time.perf_counter()
    result = func()
    return result, time.perf_counter() - start


def invert_float(matrix: np.ndarray) -> InversionResult:
    values = to_float_array(matrix)
    inverse, runtime = _timed(lambda: np.linalg.inv(values))
    residual = values @ inverse - np.eye(values.shape[0])
    return InversionResult(
        name="float64",
        runtime=runtime,
        inverse=inverse,
        l2_error=l2_norm(residual),
        linf_error=linf_norm(residual),
        exact=bool(np.all(residual == 0)),
    )


def invert_exact(matrix: np.ndarray) -> InversionResult:
    inverse, runtime = _timed(lambda: linalg.inv(matrix))
    residual = matrix.dot(inverse) - identity(matrix.shape[0])
    floats = to_float_array(residual)
    return InversionResult(
        name="fraction64",
        runtime=runtime,
        inverse=inverse,
        l2_error=l2_norm(floats),
        linf_error=linf_norm(floats),
        exact=all(item == 0 for item in residual.flat),
    )


def report(result: InversionResult) -> List[str]:
    return [
        f"Inversion {result.name}:",
        f"  Runtime: {result.runtime:.3f} s",
        f"  L2 residual: {result.l2_error:.6e}",
        f"  Linf residual: {result.linf_error:.6e}",
        f"  Exact identity: {'yes' if result.exact else 'no'}",
        "",
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Invert a matrix in float64 and exactly, time both, and compare their residuals.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--hilbert", type=int, default=6, help="Size of the Hilbert test matrix")
    source.add_argument("--parfile", type=Path, help="TOML file holding a `matrix` array")
    parser.add_argument(
        "--overflow",
        choices=("wrap", "raise"),
        default=None,
        help="Overflow policy for 64-bit intermediates",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.parfile is not None:
        matrix = load_matrix(args.parfile.expanduser().resolve(), overflow=args.overflow)
    else:
        if args.overflow is not None:
            configure(overflow=args.overflow)
        matrix = hilbert(args.hilbert)
    logger.info("comparing inversions of a %s matrix", matrix.shape)

    for result in (invert_float(matrix), invert_exact(matrix)):
        print("\n".join(report(result)))
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
