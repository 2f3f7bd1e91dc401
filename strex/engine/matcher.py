"""Backtracking matcher.

Runs a compiled :class:`~strex.engine.compiler.Pattern` program against a
subject. Alternatives are explored depth first in priority order, so the
first ``MATCH`` reached is the leftmost-first match: the left side of an
alternation before the right, the longest count of a greedy repetition
before shorter ones.

Capture slots and loop registers are immutable tuples carried by each
thread on the work stack; backtracking restores them simply by popping.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from .compiler import Pattern, compile
from .errors import PatternComplexityError
from .program import Op

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1_000_000

Span = Tuple[int, int]
PatternLike = Union[str, Pattern]


@dataclass(frozen=True)
class MatchResult:
    """One match of a pattern against a subject.

    ``groups[i - 1]`` is the span of capture group ``i``, or ``None`` when
    the group did not take part in the match.
    """
    subject: str
    span: Span
    groups: Tuple[Optional[Span], ...] = ()

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    @property
    def text(self) -> str:
        return self.subject[self.span[0]:self.span[1]]

    def group_span(self, index: int = 0) -> Optional[Span]:
        if index == 0:
            return self.span
        if not 0 < index <= len(self.groups):
            raise IndexError(f"no such group: {index}")
        return self.groups[index - 1]

    def group(self, index: int = 0) -> Optional[str]:
        span = self.group_span(index)
        if span is None:
            return None
        return self.subject[span[0]:span[1]]

    def groups_text(self) -> Tuple[Optional[str], ...]:
        return tuple(self.group(i) for i in range(1, len(self.groups) + 1))


def ensure_pattern(pattern: PatternLike) -> Pattern:
    """Return ``pattern`` compiled, compiling it first if it is a string."""
    if isinstance(pattern, Pattern):
        return pattern
    return compile(pattern)


def match_at(
    pattern: PatternLike,
    subject: str,
    pos: int,
    max_steps: Optional[int] = DEFAULT_MAX_STEPS,
) -> Optional[MatchResult]:
    """Try to match ``pattern`` starting exactly at offset ``pos``.

    Raises:
        PatternComplexityError: when more than ``max_steps`` instructions run.
    """
    pattern = ensure_pattern(pattern)
    program = pattern.program
    code = program.instructions
    length = len(subject)
    steps = 0

    stack = [(0, pos, (None,) * program.slot_count, (None,) * program.register_count)]
    while stack:
        pc, cur, slots, registers = stack.pop()
        while True:
            steps += 1
            if max_steps is not None and steps > max_steps:
                logger.debug("Step ceiling hit for %r at offset %d", pattern.source, pos)
                raise PatternComplexityError(pattern.source, steps, max_steps)

            op, arg, arg2 = code[pc]
            if op is Op.CHAR:
                if cur < length and subject[cur] == arg:
                    pc += 1
                    cur += 1
                    continue
                break
            if op is Op.ANY:
                if cur < length:
                    pc += 1
                    cur += 1
                    continue
                break
            if op is Op.CLASS:
                if cur < length and arg.contains(subject[cur]):
                    pc += 1
                    cur += 1
                    continue
                break
            if op is Op.ASSERT_START:
                if cur != 0:
                    break
                pc += 1
            elif op is Op.ASSERT_END:
                if cur != length:
                    break
                pc += 1
            elif op is Op.SPLIT:
                stack.append((arg2, cur, slots, registers))
                pc = arg
            elif op is Op.JUMP:
                pc = arg
            elif op is Op.SAVE:
                slots = slots[:arg] + (cur,) + slots[arg + 1:]
                pc += 1
            elif op is Op.MARK:
                registers = registers[:arg] + (cur,) + registers[arg + 1:]
                pc += 1
            elif op is Op.LOOP:
                # An iteration that consumed nothing ends the repetition.
                pc = arg2 if cur != registers[arg] else pc + 1
            elif op is Op.MATCH:
                return _build_result(subject, pos, cur, slots)
    return None


def _build_result(subject: str, start: int, end: int, slots: Tuple[Optional[int], ...]) -> MatchResult:
    groups = []
    for index in range(0, len(slots), 2):
        group_start, group_end = slots[index], slots[index + 1]
        if group_start is None or group_end is None:
            groups.append(None)
        else:
            groups.append((group_start, group_end))
    return MatchResult(subject, (start, end), tuple(groups))


def iter_matches(
    pattern: PatternLike,
    subject: str,
    max_steps: Optional[int] = DEFAULT_MAX_STEPS,
) -> Iterator[MatchResult]:
    """Yield non-overlapping matches from left to right."""
    pattern = ensure_pattern(pattern)
    pos = 0
    while pos <= len(subject):
        result = match_at(pattern, subject, pos, max_steps)
        if result is None:
            pos += 1
            continue
        yield result
        pos = result.end if result.end > pos else pos + 1


def find_first(
    pattern: PatternLike,
    subject: str,
    max_steps: Optional[int] = DEFAULT_MAX_STEPS,
) -> Optional[MatchResult]:
    """Return the leftmost match, or ``None``."""
    return next(iter_matches(pattern, subject, max_steps), None)


def find_all(
    pattern: PatternLike,
    subject: str,
    max_steps: Optional[int] = DEFAULT_MAX_STEPS,
) -> List[MatchResult]:
    """Return every non-overlapping match, leftmost first."""
    return list(iter_matches(pattern, subject, max_steps))


match_first = find_first
match_all = find_all
