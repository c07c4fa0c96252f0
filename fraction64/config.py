"""Runtime settings for fraction64.

Settings can be changed globally with :func:`configure`, temporarily with the
:func:`settings` context manager, or loaded from a TOML file::

    [fraction64]
    overflow = "raise"
    float_precision = 6
"""
from __future__ import annotations

import tomllib
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Iterator, Optional, Union

OVERFLOW_POLICIES = ("wrap", "raise")


@dataclass(frozen=True)
class Settings:
    """Active configuration.

    ``overflow``
        ``"wrap"`` reproduces two's-complement wraparound of 64-bit products
        and sums, ``"raise"`` raises :class:`FractionOverflowError` instead.
    ``float_precision``
        ``None`` renders floats with the shortest round-tripping decimal text,
        an integer renders exactly that many fractional digits.
    """

    overflow: str = "wrap"
    float_precision: Optional[int] = None

    def __post_init__(self) -> None:
        if self.overflow not in OVERFLOW_POLICIES:
            raise ValueError(
                f"overflow must be one of {OVERFLOW_POLICIES}, got {self.overflow!r}"
            )
        if self.float_precision is not None:
            if isinstance(self.float_precision, bool) or not isinstance(self.float_precision, int):
                raise ValueError("float_precision must be an integer or None")
            if self.float_precision < 0:
                raise ValueError("float_precision must be >= 0")


_current = Settings()


def get_settings() -> Settings:
    return _current


def configure(**changes: Any) -> Settings:
    """Replace the active settings with *changes* applied; return the old ones."""
    global _current
    known = {field.name for field in fields(Settings)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    previous = _current
    _current = replace(_current, **changes)
    return previous


@contextmanager
def settings(**changes: Any) -> Iterator[Settings]:
    """Apply *changes* for the duration of a ``with`` block."""
    global _current
    previous = configure(**changes)
    try:
        yield _current
    finally:
        _current = previous


def load_settings(path: Union[str, Path], *, apply: bool = True) -> Settings:
    """Read settings from the ``[fraction64]`` table of a TOML file."""
    with open(path, "rb") as handle:
        params = tomllib.load(handle)
    table = params.get("fraction64", {})
    if not isinstance(table, dict):
        raise ValueError(f"[fraction64] in {path} must be a table")
    if apply:
        configure(**table)
        return _current
    known = {field.name for field in fields(Settings)}
    unknown = set(table) - known
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    return replace(Settings(), **table)


__all__ = [
    "OVERFLOW_POLICIES",
    "Settings",
    "configure",
    "get_settings",
    "load_settings",
    "settings",
]
