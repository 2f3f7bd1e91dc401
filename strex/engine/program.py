"""Lowering of a syntax tree into a flat backtracking program.

The matcher runs the program with an explicit work stack instead of
recursing over the tree, so deep subjects never hit Python's recursion
limit. Each instruction maps onto one step of the tree walk:

    CHAR/ANY/CLASS   consume one character
    ASSERT_START/END zero-width anchors
    SPLIT            try ``arg`` first, remember ``arg2`` for backtracking
    JUMP             continue at ``arg``
    SAVE             record the current offset in capture slot ``arg``
    MARK             record the current offset in loop register ``arg``
    LOOP             jump back to ``arg2`` when the iteration made progress
    MATCH            success
"""

from enum import IntEnum
from typing import Any, List, NamedTuple, Tuple

from .nodes import (
    Alternation,
    AnchorEnd,
    AnchorStart,
    AnyChar,
    CharClass,
    Concatenation,
    Group,
    Literal,
    Node,
    Repetition,
    alternatives,
)


class Op(IntEnum):
    CHAR = 1
    ANY = 2
    CLASS = 3
    ASSERT_START = 4
    ASSERT_END = 5
    SPLIT = 6
    JUMP = 7
    SAVE = 8
    MARK = 9
    LOOP = 10
    MATCH = 11


class Instruction(NamedTuple):
    op: Op
    arg: Any = None
    arg2: Any = None


class Program(NamedTuple):
    instructions: Tuple[Instruction, ...]
    slot_count: int
    register_count: int


class _Assembler:

    def __init__(self):
        self.code: List[Instruction] = []
        self.registers = 0

    def emit(self, op: Op, arg: Any = None, arg2: Any = None) -> int:
        self.code.append(Instruction(op, arg, arg2))
        return len(self.code) - 1

    def patch(self, index: int, arg: Any = None, arg2: Any = None) -> None:
        op = self.code[index].op
        self.code[index] = Instruction(op, arg, arg2)

    def split(self, index: int, body: int, exit_: int, greedy: bool) -> None:
        if greedy:
            self.patch(index, body, exit_)
        else:
            self.patch(index, exit_, body)

    def lower(self, node: Node) -> None:
        if isinstance(node, Literal):
            self.emit(Op.CHAR, node.char)
        elif isinstance(node, AnyChar):
            self.emit(Op.ANY)
        elif isinstance(node, CharClass):
            self.emit(Op.CLASS, node)
        elif isinstance(node, AnchorStart):
            self.emit(Op.ASSERT_START)
        elif isinstance(node, AnchorEnd):
            self.emit(Op.ASSERT_END)
        elif isinstance(node, Concatenation):
            for item in node.items:
                self.lower(item)
        elif isinstance(node, Group):
            self.emit(Op.SAVE, 2 * (node.index - 1))
            self.lower(node.child)
            self.emit(Op.SAVE, 2 * (node.index - 1) + 1)
        elif isinstance(node, Alternation):
            # Every branch but the last: SPLIT branch, next / branch / JUMP end
            *branches, last = alternatives(node)
            jumps = []
            for branch in branches:
                split = self.emit(Op.SPLIT)
                self.lower(branch)
                jumps.append(self.emit(Op.JUMP))
                self.patch(split, split + 1, len(self.code))
            self.lower(last)
            for jump in jumps:
                self.patch(jump, len(self.code))
        elif isinstance(node, Repetition):
            self._lower_repetition(node)
        else:
            raise TypeError(f"Cannot lower node {node!r}")

    def _lower_repetition(self, node: Repetition) -> None:
        for _ in range(node.min):
            self.lower(node.child)

        if node.max is None:
            # head: SPLIT body, exit / body: MARK r, child, LOOP r head
            register = self.registers
            self.registers += 1
            head = self.emit(Op.SPLIT)
            self.emit(Op.MARK, register)
            self.lower(node.child)
            self.emit(Op.LOOP, register, head)
            self.split(head, head + 1, len(self.code), node.greedy)
            return

        # Optional copies share a single exit label.
        splits = []
        for _ in range(node.max - node.min):
            splits.append(self.emit(Op.SPLIT))
            self.lower(node.child)
        exit_ = len(self.code)
        for split in splits:
            self.split(split, split + 1, exit_, node.greedy)


def program_size(node: Node) -> int:
    """Number of instructions ``node`` lowers to, without lowering it."""
    if isinstance(node, Concatenation):
        return sum(program_size(item) for item in node.items)
    if isinstance(node, Group):
        return program_size(node.child) + 2
    if isinstance(node, Alternation):
        branches = alternatives(node)
        return sum(program_size(branch) for branch in branches) + 2 * (len(branches) - 1)
    if isinstance(node, Repetition):
        child = program_size(node.child)
        if node.max is None:
            return node.min * child + child + 3
        return node.min * child + (node.max - node.min) * (child + 1)
    return 1


def assemble(root: Node, group_count: int) -> Program:
    """Lower ``root`` into a program ending in ``MATCH``."""
    assembler = _Assembler()
    assembler.lower(root)
    assembler.emit(Op.MATCH)
    return Program(tuple(assembler.code), 2 * group_count, assembler.registers)
