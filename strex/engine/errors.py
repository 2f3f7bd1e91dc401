"""Exceptions raised by the pattern engine."""

from typing import Optional


class PatternError(Exception):
    """Base class for every error raised by the engine."""


class PatternSyntaxError(PatternError):
    """Raised when a pattern string cannot be compiled.

    The message always ends with ``at position N`` so callers can point
    at the offending character.
    """

    def __init__(self, message: str, pattern: str, pos: int):
        super().__init__(f"{message} at position {pos}")
        self.msg = message
        self.pattern = pattern
        self.pos = pos


class PatternComplexityError(PatternError):
    """Raised when a search exceeds its step ceiling."""

    def __init__(self, pattern: str, steps: int, max_steps: Optional[int] = None):
        limit = max_steps if max_steps is not None else steps
        super().__init__(
            f"Pattern {pattern!r} exceeded the backtracking limit of {limit} steps"
        )
        self.pattern = pattern
        self.steps = steps
        self.max_steps = max_steps
