from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple, Union


class Opcode(Enum):
    RIGHT = '>'
    LEFT = '<'
    INC = '+'
    DEC = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_BEGIN = '['
    LOOP_END = ']'

    @property
    def is_run_length_eligible(self) -> bool:
        return self in _COUNTED

    def as_instruction(self) -> "Instruction":
        """Default (unit) instruction form of this opcode."""
        if self in _COUNTED:
            return _COUNTED[self](1)
        return _UNIT[self]()

    def as_counted(self, n: int) -> "Instruction":
        if self not in _COUNTED:
            raise ValueError(f"{self.name} cannot carry a repetition count")
        return _COUNTED[self](n)


# ---------------- Instructions ----------------
# Loop targets are indices into the owning Program; -1 means unresolved.

@dataclass(frozen=True)
class Right:
    n: int = 1


@dataclass(frozen=True)
class Left:
    n: int = 1


@dataclass(frozen=True)
class Inc:
    n: int = 1


@dataclass(frozen=True)
class Dec:
    n: int = 1


@dataclass(frozen=True)
class Output:
    pass


@dataclass(frozen=True)
class Input:
    pass


@dataclass(frozen=True)
class LoopBegin:
    end: int = -1


@dataclass(frozen=True)
class LoopEnd:
    begin: int = -1


Instruction = Union[Right, Left, Inc, Dec, Output, Input, LoopBegin, LoopEnd]

_COUNTED = {
    Opcode.RIGHT: Right,
    Opcode.LEFT: Left,
    Opcode.INC: Inc,
    Opcode.DEC: Dec,
}

_UNIT = {
    Opcode.OUTPUT: Output,
    Opcode.INPUT: Input,
    Opcode.LOOP_BEGIN: LoopBegin,
    Opcode.LOOP_END: LoopEnd,
}

# Used for disassembly and re-emission
INSTRUCTION_NAMES = {
    Right: ('right', '>'),
    Left: ('left', '<'),
    Inc: ('inc', '+'),
    Dec: ('dec', '-'),
    Output: ('out', '.'),
    Input: ('in', ','),
    LoopBegin: ('begin', '['),
    LoopEnd: ('end', ']'),
}


def describe(instr: Instruction) -> str:
    name, _ = INSTRUCTION_NAMES[type(instr)]
    if isinstance(instr, (Right, Left, Inc, Dec)):
        return f"{name} {instr.n}"
    if isinstance(instr, LoopBegin):
        return f"{name} -> {instr.end}"
    if isinstance(instr, LoopEnd):
        return f"{name} -> {instr.begin}"
    return name


@dataclass(frozen=True)
class Program:
    """Lowered, jump-resolved instruction sequence. Never mutated after compilation."""

    instructions: Tuple[Instruction, ...]

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)
