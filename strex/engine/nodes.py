"""Pattern syntax tree.

Every node is a frozen dataclass. A compiled pattern owns its tree and
never mutates it, so the same tree can be matched against any number of
subjects.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Set, Tuple, Union


class Node:
    """Base class for all syntax tree nodes."""

    def children(self) -> Tuple["Node", ...]:
        return ()


@dataclass(frozen=True)
class Literal(Node):
    """A single literal character."""
    char: str


@dataclass(frozen=True)
class AnyChar(Node):
    """``.``: any single character."""


# Class items are single characters, inclusive (low, high) ranges, or
# nested classes such as ``\d`` written inside brackets.
ClassItem = Union[str, Tuple[str, str], "CharClass"]


@dataclass(frozen=True)
class CharClass(Node):
    """A set of characters, optionally negated."""
    items: Tuple[ClassItem, ...]
    negated: bool = False
    label: Optional[str] = None

    def contains(self, ch: str) -> bool:
        found = False
        for item in self.items:
            if isinstance(item, CharClass):
                found = item.contains(ch)
            elif isinstance(item, tuple):
                found = item[0] <= ch <= item[1]
            else:
                found = item == ch
            if found:
                break
        return found != self.negated


@dataclass(frozen=True)
class AnchorStart(Node):
    """``^``: matches at offset 0 only."""


@dataclass(frozen=True)
class AnchorEnd(Node):
    """``$``: matches at the end of the subject only."""


@dataclass(frozen=True)
class Group(Node):
    index: int
    child: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


@dataclass(frozen=True)
class Alternation(Node):
    left: Node
    right: Node

    def children(self) -> Tuple[Node, ...]:
        return (self.left, self.right)


@dataclass(frozen=True)
class Concatenation(Node):
    """A sequence of nodes. An empty sequence matches the empty string."""
    items: Tuple[Node, ...]

    def children(self) -> Tuple[Node, ...]:
        return self.items


@dataclass(frozen=True)
class Repetition(Node):
    """``child`` repeated between ``min`` and ``max`` times (``None`` is unbounded)."""
    child: Node
    min: int
    max: Optional[int]
    greedy: bool = True
    # Written with braces, as in ``{0,}``, rather than ``*``, ``+`` or ``?``.
    braced: bool = field(default=False, compare=False)

    def children(self) -> Tuple[Node, ...]:
        return (self.child,)


DIGIT = CharClass((("0", "9"),), label="\\d")
WORD = CharClass((("a", "z"), ("A", "Z"), ("0", "9"), "_"), label="\\w")
SPACE = CharClass((" ", "\t", "\r", "\n", "\f", "\v"), label="\\s")

ESCAPE_CLASSES = {
    "d": DIGIT,
    "D": CharClass(DIGIT.items, negated=True, label="\\D"),
    "w": WORD,
    "W": CharClass(WORD.items, negated=True, label="\\W"),
    "s": SPACE,
    "S": CharClass(SPACE.items, negated=True, label="\\S"),
}


def alternatives(node: Node) -> Tuple[Node, ...]:
    """Branches of a chain of alternations, left to right.

    ``a|b|c`` parses as ``Alternation(Alternation(a, b), c)``; the chain is
    unrolled without recursion so long alternations stay cheap.
    """
    branches = []
    while isinstance(node, Alternation):
        branches.append(node.right)
        node = node.left
    branches.append(node)
    return tuple(reversed(branches))


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def features_used(node: Node) -> Set[str]:
    """Return the syntax feature names a tree relies on.

    The names match the ``enabled_features`` entries of engine profiles.
    """
    features: Set[str] = set()
    for current in walk(node):
        if isinstance(current, (AnchorStart, AnchorEnd)):
            features.add("anchors")
        elif isinstance(current, Alternation):
            features.add("alternation")
        elif isinstance(current, Group):
            features.add("groups")
        elif isinstance(current, CharClass):
            features.add("escapes" if current.label else "classes")
            if any(isinstance(item, CharClass) for item in current.items):
                features.add("escapes")
        elif isinstance(current, Repetition):
            if not current.braced:
                features.add("quantifiers")
            else:
                features.add("bounded_quantifiers")
            if not current.greedy:
                features.add("lazy_quantifiers")
    return features


def _show_char(ch: str) -> str:
    return repr(ch)[1:-1]


def describe(node: Node) -> str:
    """One-line, human readable description of a single node."""
    if isinstance(node, Literal):
        return f"Literal '{_show_char(node.char)}'"
    if isinstance(node, AnyChar):
        return "Any character"
    if isinstance(node, CharClass):
        if node.label:
            return f"Class {node.label}"
        parts = []
        for item in node.items:
            if isinstance(item, CharClass):
                parts.append(item.label or "[...]")
            elif isinstance(item, tuple):
                parts.append(f"{_show_char(item[0])}-{_show_char(item[1])}")
            else:
                parts.append(_show_char(item))
        prefix = "Negated class" if node.negated else "Class"
        return f"{prefix} [{''.join(parts)}]"
    if isinstance(node, AnchorStart):
        return "Start of string"
    if isinstance(node, AnchorEnd):
        return "End of string"
    if isinstance(node, Group):
        return f"Group {node.index}"
    if isinstance(node, Alternation):
        return "Alternation"
    if isinstance(node, Concatenation):
        return "Empty" if not node.items else "Sequence"
    if isinstance(node, Repetition):
        upper = "inf" if node.max is None else str(node.max)
        mode = "greedy" if node.greedy else "lazy"
        return f"Repeat {node.min}..{upper} ({mode})"
    return type(node).__name__
