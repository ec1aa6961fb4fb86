"""Exception hierarchy for polyhedron construction."""

from __future__ import annotations

from typing import Optional


class PolysphereError(Exception):
    """Base class for every error raised by polysphere."""


class InvalidParameterError(PolysphereError, ValueError):
    """A construction parameter is out of range.

    Raised before any geometry work starts; retrying with corrected
    inputs is always possible.
    """


class DegenerateGeometryError(PolysphereError, ArithmeticError):
    """A zero-length vector was normalised or projected."""


class InvariantViolationError(PolysphereError, RuntimeError):
    """A structural invariant of the tiling does not hold.

    *index* is the offending vertex / tile index when one is known.
    """

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        if index is not None:
            message = f"{message} (index {index})"
        super().__init__(message)
        self.index = index
