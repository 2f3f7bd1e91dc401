"""strex: a teaching regex engine with vectorized string helpers."""

from .engine import (
    MatchResult,
    Pattern,
    PatternComplexityError,
    PatternError,
    PatternSyntaxError,
    compile,
    match_all,
    match_first,
)
from .strings import (
    concat,
    count,
    detect,
    extract,
    extract_all,
    length,
    locate,
    locate_all,
    match_groups,
    replace,
    replace_all,
    split,
    subset,
    substring,
    to_lower,
    to_title,
    to_upper,
    trim,
    which,
)

__version__ = "0.1.0"

__all__ = [
    "MatchResult",
    "Pattern",
    "PatternComplexityError",
    "PatternError",
    "PatternSyntaxError",
    "compile",
    "concat",
    "count",
    "detect",
    "extract",
    "extract_all",
    "length",
    "locate",
    "locate_all",
    "match_all",
    "match_first",
    "match_groups",
    "replace",
    "replace_all",
    "split",
    "subset",
    "substring",
    "to_lower",
    "to_title",
    "to_upper",
    "trim",
    "which",
]
