import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import regex

from ..engine import (
    DEFAULT_MAX_STEPS,
    MatchResult,
    PatternComplexityError,
    PatternError,
    compile as compile_pattern,
    iter_matches,
    match_at,
)
from .profile_manager import RegexProfile

logger = logging.getLogger(__name__)

FEATURE_LABELS = {
    "anchors": "Anchors '^' and '$'",
    "alternation": "Alternation '|'",
    "groups": "Capturing groups '(...)'",
    "classes": "Character classes '[...]'",
    "escapes": "Escape classes like '\\d'",
    "quantifiers": "Quantifiers '*', '+', '?'",
    "bounded_quantifiers": "Bounded quantifiers '{m,n}'",
    "lazy_quantifiers": "Lazy quantifiers like '*?'",
}


@dataclass
class GroupMatch:
    """Represents a matched group in the regex."""
    span: Tuple[int, int]
    value: str
    name: Optional[str] = None
    group_index: int = 0


class RegexProvider:
    """Provides regex matching over one input text with a selectable engine."""

    def __init__(self, content: str):
        self.content = content
        self.current_profile: Optional[RegexProfile] = None

    def set_profile(self, profile: RegexProfile) -> None:
        """Set the current regex profile."""
        logger.debug("Switching to profile %s (engine %s)", profile.id, profile.engine)
        self.current_profile = profile

    @property
    def engine(self) -> str:
        return self.current_profile.engine if self.current_profile else "strex"

    @property
    def max_steps(self) -> Optional[int]:
        if self.current_profile and self.current_profile.max_steps is not None:
            return self.current_profile.max_steps
        return DEFAULT_MAX_STEPS

    def validate_pattern(self, pattern: str) -> Optional[str]:
        """Check the pattern against the current profile's enabled features.

        Only the builtin engine is gated; the comparison engines accept
        whatever they can compile.

        Returns:
            Error message string if invalid, None if valid.
        """
        if not self.current_profile or not self.current_profile.is_builtin:
            return None

        try:
            used = compile_pattern(pattern).features
        except PatternError as e:
            return f"Regex Error: {e}"

        disabled = used - self.current_profile.enabled_features
        for feature in FEATURE_LABELS:
            if feature in disabled:
                return f"Error: {FEATURE_LABELS[feature]} not enabled in this profile."
        return None

    def get_matches(self, pattern: str, mode: str = "finditer") -> Tuple[List[List[GroupMatch]], Optional[str]]:
        """
        Get matches for the given pattern.

        Args:
            pattern: The regex pattern string.
            mode: 'match' (anchored at offset 0) or 'finditer' (default).

        Returns:
            A tuple containing:
            - A list of lists of GroupMatch objects (one list of groups per match).
            - An error message string if an error occurred, or None.
        """
        if not pattern:
            return [], None

        validation_error = self.validate_pattern(pattern)
        if validation_error:
            return [], validation_error

        try:
            if self.engine == "strex":
                return self._strex_matches(pattern, mode), None
            return self._library_matches(pattern, mode), None
        except PatternComplexityError as e:
            logger.debug("Pattern %r gave up: %s", pattern, e)
            return [], f"Complexity Error: {e}"
        except (PatternError, re.error, regex.error) as e:
            logger.debug("Pattern %r rejected: %s", pattern, e)
            return [], f"Regex Error: {e}"

    def _strex_matches(self, pattern: str, mode: str) -> List[List[GroupMatch]]:
        compiled = compile_pattern(pattern)
        if mode == "match":
            match = match_at(compiled, self.content, 0, self.max_steps)
            matches = [match] if match else []
        else:
            matches = iter_matches(compiled, self.content, self.max_steps)
        return [self._groups_from_result(match) for match in matches]

    def _library_matches(self, pattern: str, mode: str) -> List[List[GroupMatch]]:
        compiled = self._compile_library_pattern(pattern)
        if mode == "match":
            match = compiled.match(self.content)
            matches = [match] if match else []
        else:
            matches = compiled.finditer(self.content)
        return [self._extract_groups(match) for match in matches]

    def _compile_library_pattern(self, pattern: str) -> Any:
        """Compile the pattern with Python's re or the regex module."""
        if self.engine == "regex":
            return regex.compile(pattern, flags=regex.VERSION1)
        return re.compile(pattern)

    @staticmethod
    def _groups_from_result(match: MatchResult) -> List[GroupMatch]:
        """Convert a strex match into GroupMatch objects."""
        groups = [GroupMatch(span=match.span, value=match.text, name=None, group_index=0)]
        for i, span in enumerate(match.groups, start=1):
            if span is None:
                continue
            groups.append(GroupMatch(
                span=span,
                value=match.subject[span[0]:span[1]],
                name=None,
                group_index=i,
            ))
        return groups

    @staticmethod
    def _extract_groups(match: Any) -> List[GroupMatch]:
        """Extract groups from an re/regex match object."""
        groups = [GroupMatch(span=match.span(0), value=match.group(0), name=None, group_index=0)]

        names = {index: name for name, index in match.re.groupindex.items()}
        for i, value in enumerate(match.groups(), start=1):
            if value is None:
                continue
            groups.append(GroupMatch(
                span=match.span(i),
                value=value,
                name=names.get(i),
                group_index=i,
            ))
        return groups
