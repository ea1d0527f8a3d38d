#!/usr/bin/env python3
r"""Ignore-pattern normalization and glob compilation.

This module turns ignore-file lines into compiled rules:
- Line normalization (comments, negation, trimming, path cleaning)
- Glob compilation into an anchored, case-insensitive GlobProgram
- Rule records with a lazily compiled matcher

Glob syntax:
    ``*``     any run of characters except ``/``
    ``?``     one character except ``/``
    ``**``    any suffix at the end of a pattern, otherwise zero or more
              directories (``a/**/b`` matches ``a/b`` and ``a/x/y/b``)
    ``\x``    the character ``x`` literally

Example:
    >>> rule = normalize_pattern("!docs/**/*.md", PosixPathStrategy())
    >>> rule.negative, rule.dirs
    (True, ('docs', '**', '*.md'))
    >>> rule.matches("docs/api/index.md")
    True
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from ctxignore.core.constants import (
    COMMENT_MARKER,
    ESCAPE_CHAR,
    GLOBSTAR,
    NEGATION_MARKER,
    SEPARATOR,
)
from ctxignore.core.path_utils import PathStrategy, PosixPathStrategy


class OpCode(Enum):
    """Glob program instruction codes."""

    CHAR = "char"  # Consume one character equal to arg
    ANY_BUT_SEP = "any_but_sep"  # Consume one character other than "/"
    ANY = "any"  # Consume any one character
    SPLIT = "split"  # Continue at both targets in arg
    JMP = "jmp"  # Continue at arg
    MATCH = "match"  # Accept


@dataclass(frozen=True)
class Instruction:
    """A single glob program instruction."""

    op: OpCode
    arg: object = None


class GlobProgram:
    """Anchored, case-insensitive matcher compiled from a glob pattern.

    The program is a Thompson-style instruction list. Matching advances the
    set of live instructions one character at a time, so a match costs
    O(len(path) * len(program)) without backtracking.
    """

    def __init__(self, pattern: str, instructions: List[Instruction]):
        """Initialize program.

        Args:
            pattern: Source glob pattern
            instructions: Compiled instructions, ending with MATCH
        """
        self.pattern = pattern
        self.instructions: Tuple[Instruction, ...] = tuple(instructions)
        self._closures: Tuple[FrozenSet[int], ...] = tuple(
            self._closure(pc) for pc in range(len(self.instructions))
        )

    def _closure(self, start: int) -> FrozenSet[int]:
        """Get the consuming instructions reachable from start without input.

        Args:
            start: Instruction index

        Returns:
            Indexes of CHAR, ANY_BUT_SEP, ANY and MATCH instructions
        """
        reached = set()
        seen = set()
        stack = [start]
        while stack:
            pc = stack.pop()
            if pc in seen:
                continue
            seen.add(pc)

            instruction = self.instructions[pc]
            if instruction.op == OpCode.JMP:
                stack.append(instruction.arg)
            elif instruction.op == OpCode.SPLIT:
                stack.extend(instruction.arg)
            else:
                reached.add(pc)
        return frozenset(reached)

    def matches(self, text: str) -> bool:
        """Check whether the whole text matches.

        Args:
            text: Forward-slash path

        Returns:
            True if the program accepts the entire text
        """
        states = self._closures[0]

        for char in text:
            folded = char.lower()
            next_states = set()
            for pc in states:
                instruction = self.instructions[pc]
                if instruction.op == OpCode.CHAR:
                    accepted = instruction.arg == folded
                elif instruction.op == OpCode.ANY_BUT_SEP:
                    accepted = char != SEPARATOR
                else:
                    accepted = instruction.op == OpCode.ANY
                if accepted:
                    next_states.update(self._closures[pc + 1])

            if not next_states:
                return False
            states = next_states

        return any(self.instructions[pc].op == OpCode.MATCH for pc in states)

    def __repr__(self) -> str:
        return f"GlobProgram({self.pattern!r}, size={len(self.instructions)})"


def _emit_loop(program: List[Instruction], op: OpCode) -> None:
    """Emit zero or more repetitions of a single-character instruction."""
    start = len(program)
    program.append(Instruction(OpCode.SPLIT, (start + 1, start + 3)))
    program.append(Instruction(op))
    program.append(Instruction(OpCode.JMP, start))


def _emit_optional_dirs(program: List[Instruction]) -> None:
    """Emit an optional run of characters that ends with a separator."""
    start = len(program)
    program.append(Instruction(OpCode.SPLIT, (start + 1, start + 5)))
    program.append(Instruction(OpCode.SPLIT, (start + 2, start + 4)))
    program.append(Instruction(OpCode.ANY))
    program.append(Instruction(OpCode.JMP, start + 1))
    program.append(Instruction(OpCode.CHAR, SEPARATOR))


def compile_pattern(pattern: str) -> GlobProgram:
    """Compile a normalized glob pattern.

    Compilation never fails: every character sequence has a meaning.

    Args:
        pattern: Normalized forward-slash pattern

    Returns:
        Compiled glob program
    """
    program: List[Instruction] = []
    length = len(pattern)
    i = 0

    while i < length:
        char = pattern[i]

        if char == "*":
            if i + 1 < length and pattern[i + 1] == "*":
                i += 1
                # "**/" behaves like "**"
                if i + 1 < length and pattern[i + 1] == SEPARATOR:
                    i += 1

                if i + 1 >= length:
                    _emit_loop(program, OpCode.ANY)
                else:
                    _emit_optional_dirs(program)
            else:
                _emit_loop(program, OpCode.ANY_BUT_SEP)
        elif char == "?":
            program.append(Instruction(OpCode.ANY_BUT_SEP))
        elif char == ESCAPE_CHAR:
            # A trailing backslash stays a literal backslash
            if i + 1 < length:
                i += 1
                program.append(Instruction(OpCode.CHAR, pattern[i].lower()))
            else:
                program.append(Instruction(OpCode.CHAR, ESCAPE_CHAR))
        else:
            program.append(Instruction(OpCode.CHAR, char.lower()))

        i += 1

    program.append(Instruction(OpCode.MATCH))
    return GlobProgram(pattern, program)


@dataclass
class Rule:
    """A compiled ignore rule.

    The matcher is compiled on first use and reused afterwards.
    """

    origin: str
    pattern: str
    dirs: Tuple[str, ...]
    negative: bool = False
    _program: Optional[GlobProgram] = field(default=None, init=False, repr=False, compare=False)

    @property
    def matcher(self) -> GlobProgram:
        """Get the compiled matcher, compiling it once."""
        if self._program is None:
            self._program = compile_pattern(self.pattern)
        return self._program

    @property
    def is_compiled(self) -> bool:
        """Return True once the matcher has been built."""
        return self._program is not None

    @property
    def has_globstar(self) -> bool:
        """Return True if any segment is ``**``."""
        return GLOBSTAR in self.dirs

    @property
    def literal_depth(self) -> int:
        """Number of segments other than ``**``."""
        return sum(1 for segment in self.dirs if segment != GLOBSTAR)

    def matches(self, path: str) -> bool:
        """Check if the rule's pattern matches the whole path.

        Args:
            path: Forward-slash path

        Returns:
            True if matched
        """
        return self.matcher.matches(path)


def _ends_with_escape(text: str) -> bool:
    """Check whether text ends with an unescaped escape character."""
    run = len(text) - len(text.rstrip(ESCAPE_CHAR))
    return run % 2 == 1


def trim_pattern(text: str) -> str:
    """Trim whitespace around pattern text.

    Trailing whitespace after an unescaped backslash is kept as a single
    escaped character.

    Args:
        text: Pattern text

    Returns:
        Trimmed text
    """
    head = text.lstrip()
    body = head.rstrip()
    if len(body) < len(head) and _ends_with_escape(body):
        return body + head[len(body)]
    return body


def normalize_pattern(line: object, strategy: Optional[PathStrategy] = None) -> Optional[Rule]:
    """Normalize one ignore-file line into a rule.

    Args:
        line: Raw line; anything but a string is rejected
        strategy: Path strategy used for cleaning (POSIX if None)

    Returns:
        Rule, or None when the line produces no rule (blank, comment,
        non-string or empty after cleaning)
    """
    if not isinstance(line, str) or line.startswith(COMMENT_MARKER):
        return None

    origin = trim_pattern(line)
    if not origin:
        return None

    strategy = strategy or PosixPathStrategy()
    pattern = origin
    negative = False

    if pattern.startswith(NEGATION_MARKER):
        negative = True
        pattern = trim_pattern(pattern[1:])

    if pattern:
        pattern = strategy.clean_pattern(pattern)
        if len(pattern) > 1 and pattern.startswith(SEPARATOR):
            pattern = pattern[1:]

    pattern = trim_pattern(pattern)
    if not pattern:
        return None

    return Rule(
        origin=origin,
        pattern=pattern,
        dirs=tuple(pattern.split(SEPARATOR)),
        negative=negative,
    )
