"""
Error taxonomy.

Numeric code raises these; the public result API turns them into `DistanceResult`
failures and the legacy API into the -1 sentinel.
"""

from __future__ import annotations


class GeoDistanceError(Exception):
    """Base class for all geodistance errors."""


class ComputationError(GeoDistanceError):
    """Arithmetic failure: non-finite input/output or a math domain error."""


class NoConvergenceError(GeoDistanceError):
    """Inverse Vincenty exhausted its iteration limit (typically near-antipodal points)."""

    def __init__(self, iterations: int, delta_lambda: float):
        self.iterations = iterations
        self.delta_lambda = delta_lambda
        super().__init__(
            f"No convergence after {iterations} iterations (last lambda change {delta_lambda:.3e})"
        )


class UnknownMethodError(GeoDistanceError, KeyError):
    def __init__(self, name: str, known: list[str]):
        self.name = name
        super().__init__(f"Unknown distance method '{name}', expected one of: {', '.join(known)}")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownPlaceError(GeoDistanceError, KeyError):
    def __init__(self, name: str, known: list[str]):
        self.name = name
        super().__init__(f"Unknown place '{name}', known places: {', '.join(known) or '(none)'}")

    def __str__(self) -> str:
        return str(self.args[0])
