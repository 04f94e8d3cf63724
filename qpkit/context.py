"""
Numerical tolerance contexts.

Every comparison against zero in the solvers and transformations goes
through a :class:`NumberContext` rather than exact equality. A context holds
an absolute threshold ``zero`` and a relative threshold ``epsilon``.
"""

from __future__ import annotations

from dataclasses import dataclass

RTOL = 1e-12
ATOL = 1e-14


@dataclass(frozen=True)
class NumberContext:
    """
    Absolute/relative tolerance pair used for numerically safe comparisons.

    Attributes:
        epsilon: Relative tolerance used by :meth:`is_small` and
            :meth:`is_different`.
        zero: Absolute threshold below which a magnitude counts as zero.
    """

    epsilon: float = RTOL
    zero: float = ATOL

    def __post_init__(self) -> None:
        if self.epsilon < 0.0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}.")
        if self.zero < 0.0:
            raise ValueError(f"zero must be non-negative, got {self.zero}.")

    def is_zero(self, value: float) -> bool:
        """Return True if ``|value|`` does not exceed the absolute threshold."""
        return abs(value) <= self.zero

    def is_small(self, compared_to: float, value: float) -> bool:
        """Return True if ``value`` is negligible relative to ``compared_to``."""
        return abs(value) <= self.epsilon * abs(compared_to) or self.is_zero(value)

    def is_different(self, expected: float, actual: float) -> bool:
        """Return True if ``expected`` and ``actual`` differ beyond tolerance."""
        scale = max(abs(expected), abs(actual))
        return abs(expected - actual) > max(self.zero, self.epsilon * scale)


__all__ = ["NumberContext", "RTOL", "ATOL"]
