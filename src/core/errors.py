"""Exception types for the bonding-curve quote engine.

Every failure is a deterministic function of the inputs; none is retryable.
All types derive from ``ValueError`` so callers that catch the kernel-level
``ValueError`` keep working.
"""

from __future__ import annotations


class CurveError(ValueError):
    """Base class for curve quote failures."""


class ConfigurationViolation(CurveError):
    """Raised when range or curve parameters are malformed."""


class DomainViolation(ConfigurationViolation):
    """Raised when a range formula leaves its domain (negative integral, zero ratio)."""


class BoundsViolation(CurveError):
    """Raised when a caller-supplied amount is outside the valid domain."""


class NumericalInconsistency(CurveError):
    """Raised when an internal consistency check fails."""


class InvalidNativeAmounts(NumericalInconsistency):
    """Raised when native amounts along the curve are out of order."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"invalid native amounts: start ({start}) > end ({end})")
