"""Exception hierarchy for fraction64.

Undefined arithmetic never raises: it yields the invalid sentinel. These
exceptions cover the cases where a caller asked for something that cannot be
expressed as data.
"""


class FractionError(Exception):
    """Base class for all fraction64 exceptions."""
    pass


class FractionOverflowError(FractionError, OverflowError):
    """Raised when a value leaves the 64-bit range under the ``raise`` policy."""

    def __init__(self, message: str, value: int | None = None):
        super().__init__(message)
        self.value = value


class UnsupportedTypeError(FractionError, TypeError):
    """Raised when a value of an unsupported type is turned into a Fraction."""
    pass


class InvalidFractionError(FractionError, ValueError):
    """Raised when an invalid Fraction is converted to a type with no NaN."""
    pass


class SingularMatrixError(FractionError, ZeroDivisionError):
    """Raised when an exact inversion or solve hits a singular matrix."""
    pass
