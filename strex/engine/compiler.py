"""Recursive-descent compiler from pattern strings to syntax trees.

Grammar, lowest precedence first::

    alternation   := concatenation ('|' concatenation)*
    concatenation := repetition*
    repetition    := atom quantifier? '?'?
    quantifier    := '*' | '+' | '?' | '{' m '}' | '{' m ',}' | '{' m ',' n '}'
    atom          := char | '.' | '^' | '$' | escape | '[' class ']' | '(' alternation ')'
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple, Union

from .errors import PatternSyntaxError
from .nodes import (
    ESCAPE_CLASSES,
    Alternation,
    AnchorEnd,
    AnchorStart,
    AnyChar,
    CharClass,
    ClassItem,
    Concatenation,
    Group,
    Literal,
    Node,
    Repetition,
    features_used,
)
from .program import Program, assemble, program_size

logger = logging.getLogger(__name__)

MAX_REPEAT = 1000
MAX_NESTING = 100
MAX_PROGRAM_SIZE = 100_000

CONTROL_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "v": "\v",
}

QUANTIFIERS = "*+?{"


@dataclass(frozen=True)
class Pattern:
    """A compiled pattern: source text, syntax tree and lowered program."""
    source: str
    root: Node
    group_count: int
    program: Program = field(repr=False, compare=False)

    @property
    def features(self) -> Set[str]:
        return features_used(self.root)


class _Parser:

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0
        self.group_count = 0
        self.depth = 0

    def parse(self) -> Node:
        node = self._parse_alternation()
        if self.pos != len(self.pattern):
            # Only a stray ')' can stop the top-level alternation early.
            raise self._error("unbalanced parenthesis", self.pos)
        size = program_size(node)
        if size > MAX_PROGRAM_SIZE:
            raise self._error(f"pattern expands to {size} instructions, limit is {MAX_PROGRAM_SIZE}", 0)
        return node

    # ========= Helpers ==========

    def _peek(self, offset: int = 0) -> Optional[str]:
        index = self.pos + offset
        if index >= len(self.pattern):
            return None
        return self.pattern[index]

    def _next(self) -> str:
        if self.pos >= len(self.pattern):
            raise self._error("unexpected end of pattern", self.pos)
        ch = self.pattern[self.pos]
        self.pos += 1
        return ch

    def _error(self, message: str, pos: int) -> PatternSyntaxError:
        return PatternSyntaxError(message, self.pattern, pos)

    # ========= Grammar ==========

    def _parse_alternation(self) -> Node:
        node = self._parse_concatenation()
        while self._peek() == "|":
            self._next()
            node = Alternation(node, self._parse_concatenation())
        return node

    def _parse_concatenation(self) -> Node:
        items: List[Node] = []
        while True:
            ch = self._peek()
            if ch is None or ch in "|)":
                break
            start = self.pos
            node = self._parse_repetition()
            if isinstance(node, AnchorStart) and items:
                raise self._error("'^' is only allowed at the start of a pattern", start)
            if isinstance(node, AnchorEnd) and self._peek() not in (None, "|", ")"):
                raise self._error("'$' is only allowed at the end of a pattern", start)
            items.append(node)
        if len(items) == 1:
            return items[0]
        return Concatenation(tuple(items))

    def _parse_repetition(self) -> Node:
        node = self._parse_atom()
        ch = self._peek()
        if ch is None or ch not in QUANTIFIERS:
            return node

        start = self.pos
        if isinstance(node, (AnchorStart, AnchorEnd)):
            raise self._error("nothing to repeat", start)
        minimum, maximum = self._parse_quantifier()
        greedy = True
        if self._peek() == "?":
            self._next()
            greedy = False
        if self._peek() is not None and self._peek() in QUANTIFIERS:
            raise self._error("multiple repeat", self.pos)
        repetition = Repetition(node, minimum, maximum, greedy, braced=ch == "{")
        size = program_size(repetition)
        if size > MAX_PROGRAM_SIZE:
            raise self._error(f"repetition expands to {size} instructions, limit is {MAX_PROGRAM_SIZE}", start)
        return repetition

    def _parse_quantifier(self) -> Tuple[int, Optional[int]]:
        start = self.pos
        ch = self._next()
        if ch == "*":
            return 0, None
        if ch == "+":
            return 1, None
        if ch == "?":
            return 0, 1

        minimum = self._parse_number()
        if minimum is None:
            raise self._error("invalid repetition, expected a number", self.pos)
        maximum: Optional[int] = minimum
        if self._peek() == ",":
            self._next()
            maximum = self._parse_number()
        if self._peek() != "}":
            raise self._error("unterminated repetition, missing '}'", start)
        self._next()

        if max(minimum, maximum or 0) > MAX_REPEAT:
            raise self._error(f"repetition count exceeds {MAX_REPEAT}", start)
        if maximum is not None and maximum < minimum:
            raise self._error(f"min repeat greater than max repeat {{{minimum},{maximum}}}", start)
        return minimum, maximum

    def _parse_number(self) -> Optional[int]:
        digits = []
        while self._peek() is not None and self._peek().isdigit():
            digits.append(self._next())
        if not digits:
            return None
        return int("".join(digits))

    def _parse_atom(self) -> Node:
        start = self.pos
        ch = self._next()
        if ch == "(":
            if self.depth >= MAX_NESTING:
                raise self._error(f"too deeply nested, more than {MAX_NESTING} groups", start)
            self.group_count += 1
            index = self.group_count
            self.depth += 1
            child = self._parse_alternation()
            self.depth -= 1
            if self._peek() != ")":
                raise self._error("missing ), unterminated subpattern", start)
            self._next()
            return Group(index, child)
        if ch == "[":
            return self._parse_class(start)
        if ch == ".":
            return AnyChar()
        if ch == "^":
            return AnchorStart()
        if ch == "$":
            return AnchorEnd()
        if ch == "\\":
            return self._parse_escape(start)
        if ch in QUANTIFIERS:
            raise self._error("nothing to repeat", start)
        return Literal(ch)

    def _parse_escape(self, start: int) -> Node:
        if self._peek() is None:
            raise self._error("bad escape (end of pattern)", start)
        ch = self._next()
        if ch in ESCAPE_CLASSES:
            return ESCAPE_CLASSES[ch]
        if ch in CONTROL_ESCAPES:
            return Literal(CONTROL_ESCAPES[ch])
        if ch.isalnum():
            raise self._error(f"bad escape \\{ch}", start)
        return Literal(ch)

    def _parse_class(self, start: int) -> CharClass:
        negated = False
        if self._peek() == "^":
            self._next()
            negated = True

        items: List[ClassItem] = []
        first = True
        while True:
            ch = self._peek()
            if ch is None:
                raise self._error("unterminated character set", start)
            if ch == "]" and not first:
                self._next()
                break
            first = False

            item_start = self.pos
            low = self._class_item()
            if self._peek() == "-" and self._peek(1) not in (None, "]"):
                self._next()
                high = self._class_item()
                if isinstance(low, CharClass) or isinstance(high, CharClass):
                    raise self._error("bad character range", item_start)
                if low > high:
                    raise self._error(f"bad character range {low}-{high}", item_start)
                items.append((low, high))
            else:
                items.append(low)
        return CharClass(tuple(items), negated)

    def _class_item(self) -> Union[str, CharClass]:
        start = self.pos
        ch = self._next()
        if ch != "\\":
            return ch
        if self._peek() is None:
            raise self._error("bad escape (end of pattern)", start)
        esc = self._next()
        if esc in ESCAPE_CLASSES:
            return ESCAPE_CLASSES[esc]
        if esc in CONTROL_ESCAPES:
            return CONTROL_ESCAPES[esc]
        if esc.isalnum():
            raise self._error(f"bad escape \\{esc}", start)
        return esc


def compile(pattern: str) -> Pattern:
    """Compile ``pattern`` into a :class:`Pattern`.

    Raises:
        PatternSyntaxError: if the pattern is malformed.
    """
    if not isinstance(pattern, str):
        raise TypeError(f"pattern must be a string, not {type(pattern).__name__}")
    parser = _Parser(pattern)
    root = parser.parse()
    program = assemble(root, parser.group_count)
    logger.debug(
        "Compiled %r: %d groups, %d instructions",
        pattern, parser.group_count, len(program.instructions),
    )
    return Pattern(pattern, root, parser.group_count, program)
