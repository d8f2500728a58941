"""Error taxonomy for pair rotation planning."""
from typing import Optional


class RotationError(Exception):
    """Base class for all planner errors."""


class InvalidPairError(RotationError, ValueError):
    """A pair was built from two equal persons or from a malformed record."""


class InvalidDesireError(RotationError, ValueError):
    """A desired pairing is outside the roster, overlaps another desire, or is blocked."""


class InfeasibleError(RotationError):
    """No distribution exists even after the whole history window was forgotten."""

    def __init__(self, message: str, attempts: int = 0, forgotten: int = 0):
        super().__init__(message)
        self.attempts = attempts
        self.forgotten = forgotten


class SearchTimeout(RotationError):
    """The matcher exceeded its step or time budget."""

    def __init__(self, message: str, steps: int = 0, elapsed: Optional[float] = None):
        super().__init__(message)
        self.steps = steps
        self.elapsed = elapsed
