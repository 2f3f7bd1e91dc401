"""Teaching-grade regular expression engine."""

from .compiler import Pattern, compile
from .errors import PatternComplexityError, PatternError, PatternSyntaxError
from .matcher import (
    DEFAULT_MAX_STEPS,
    MatchResult,
    ensure_pattern,
    find_all,
    find_first,
    iter_matches,
    match_all,
    match_at,
    match_first,
)

__all__ = [
    "DEFAULT_MAX_STEPS",
    "MatchResult",
    "Pattern",
    "PatternComplexityError",
    "PatternError",
    "PatternSyntaxError",
    "compile",
    "ensure_pattern",
    "find_all",
    "find_first",
    "iter_matches",
    "match_all",
    "match_at",
    "match_first",
]
