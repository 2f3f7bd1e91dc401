"""Vectorized string utilities.

Every function accepts either a single string or a sequence of strings.
A single string gives a single result; a sequence gives a list of results
in the same order and of the same length. Pattern arguments may be a
pattern string or a compiled :class:`~strex.engine.Pattern`, and are
compiled once per call no matter how many subjects are processed.

Positions are 1-based and inclusive, as in the interactive examples these
helpers were written for: the first character is position 1 and ``-1`` is
the last character.
"""

import functools
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .engine import MatchResult, Pattern, ensure_pattern, find_all, find_first

Strings = Union[str, Sequence[str]]
PatternLike = Union[str, Pattern]

WHITESPACE = " \t\r\n"


def _vectorized(func):
    """Apply ``func`` element-wise when its first argument is a sequence."""

    @functools.wraps(func)
    def wrapper(subject, *args, **kwargs):
        if isinstance(subject, str):
            return func(subject, *args, **kwargs)
        return [func(item, *args, **kwargs) for item in subject]

    return wrapper


def _pattern_vectorized(func):
    """Like :func:`_vectorized`, compiling the pattern argument up front."""
    vectorized = _vectorized(func)

    @functools.wraps(func)
    def wrapper(subject, pattern, *args, **kwargs):
        return vectorized(subject, ensure_pattern(pattern), *args, **kwargs)

    return wrapper


def _as_list(strings: Strings) -> List[str]:
    if isinstance(strings, str):
        return [strings]
    return list(strings)


# --- Positions, case and whitespace ---

@_vectorized
def length(s: str) -> int:
    return len(s)


@_vectorized
def substring(s: str, start: int = 1, end: int = -1) -> str:
    """Characters ``start`` through ``end``, inclusive.

    Negative positions count back from the end. Positions outside the
    string are clamped to its bounds, so ``substring("abc", 2, 99)`` is
    ``"bc"``; a start past the end gives ``""``.
    """
    size = len(s)
    if start < 0:
        start = size + start + 1
    if end < 0:
        end = size + end + 1
    start = max(start, 1)
    end = min(end, size)
    if start > end:
        return ""
    return s[start - 1:end]


@_vectorized
def to_upper(s: str) -> str:
    return s.upper()


@_vectorized
def to_lower(s: str) -> str:
    return s.lower()


@_vectorized
def to_title(s: str) -> str:
    return s.title()


@_vectorized
def trim(s: str, side: str = "both") -> str:
    """Strip spaces, tabs, carriage returns and newlines."""
    if side == "both":
        return s.strip(WHITESPACE)
    if side == "left":
        return s.lstrip(WHITESPACE)
    if side == "right":
        return s.rstrip(WHITESPACE)
    raise ValueError(f"side must be 'both', 'left' or 'right', not {side!r}")


def concat(a: Strings, b: Strings, separator: str = "") -> Strings:
    """Join ``a`` and ``b`` with ``separator``.

    Either side may be a sequence. A single string is recycled against a
    sequence; two sequences must have the same length.
    """
    if isinstance(a, str) and isinstance(b, str):
        return a + separator + b
    left = [a] if isinstance(a, str) else list(a)
    right = [b] if isinstance(b, str) else list(b)
    if len(left) == 1 and len(right) != 1:
        left = left * len(right)
    elif len(right) == 1 and len(left) != 1:
        right = right * len(left)
    if len(left) != len(right):
        raise ValueError(f"Cannot concatenate sequences of length {len(left)} and {len(right)}")
    return [x + separator + y for x, y in zip(left, right)]


# --- Pattern matching ---

@_pattern_vectorized
def detect(s: str, pattern: Pattern) -> bool:
    return find_first(pattern, s) is not None


@_pattern_vectorized
def count(s: str, pattern: Pattern) -> int:
    return len(find_all(pattern, s))


@_pattern_vectorized
def extract(s: str, pattern: Pattern) -> Optional[str]:
    """The text of the first match, or ``None``."""
    result = find_first(pattern, s)
    return result.text if result is not None else None


@_pattern_vectorized
def extract_all(s: str, pattern: Pattern) -> List[str]:
    return [result.text for result in find_all(pattern, s)]


@_pattern_vectorized
def match_groups(s: str, pattern: Pattern) -> Optional[Tuple[Optional[str], ...]]:
    """The first match followed by each capture group's text.

    Groups that did not participate are ``None``. Returns ``None`` when the
    pattern does not match at all.
    """
    result = find_first(pattern, s)
    if result is None:
        return None
    return (result.text,) + result.groups_text()


def _positions(result: MatchResult) -> Tuple[int, int]:
    # 1-based inclusive; an empty match at offset i reads (i + 1, i).
    return result.start + 1, result.end


@_pattern_vectorized
def locate(s: str, pattern: Pattern) -> Optional[Tuple[int, int]]:
    """1-based inclusive (start, end) of the first match, or ``None``."""
    result = find_first(pattern, s)
    return _positions(result) if result is not None else None


@_pattern_vectorized
def locate_all(s: str, pattern: Pattern) -> List[Tuple[int, int]]:
    return [_positions(result) for result in find_all(pattern, s)]


def _splice(s: str, results: Iterable[MatchResult], replacement: str) -> str:
    pieces = []
    last = 0
    for result in results:
        pieces.append(s[last:result.start])
        pieces.append(replacement)
        last = result.end
    pieces.append(s[last:])
    return "".join(pieces)


@_pattern_vectorized
def replace(s: str, pattern: Pattern, replacement: str) -> str:
    """Replace the first match with the literal ``replacement``."""
    result = find_first(pattern, s)
    if result is None:
        return s
    return _splice(s, [result], replacement)


@_pattern_vectorized
def replace_all(s: str, pattern: Pattern, replacement: str) -> str:
    """Replace every match with the literal ``replacement``."""
    return _splice(s, find_all(pattern, s), replacement)


@_pattern_vectorized
def split(s: str, pattern: Pattern) -> List[str]:
    """The pieces of ``s`` between matches of ``pattern``."""
    pieces = []
    last = 0
    for result in find_all(pattern, s):
        pieces.append(s[last:result.start])
        last = result.end
    pieces.append(s[last:])
    return pieces


# --- Filtering sequences ---

def subset(strings: Strings, pattern: PatternLike) -> List[str]:
    """The elements of ``strings`` that contain a match."""
    compiled = ensure_pattern(pattern)
    return [s for s in _as_list(strings) if detect(s, compiled)]


def which(strings: Strings, pattern: PatternLike) -> List[int]:
    """1-based positions of the elements of ``strings`` that contain a match."""
    compiled = ensure_pattern(pattern)
    return [i for i, s in enumerate(_as_list(strings), start=1) if detect(s, compiled)]
