from __future__ import annotations

from itertools import groupby
from typing import Iterable, List, Optional, Sequence

from .errors import BFCompileError, make_compile_error
from .instructions import (
    INSTRUCTION_NAMES,
    Dec,
    Inc,
    Instruction,
    Left,
    LoopBegin,
    LoopEnd,
    Opcode,
    Program,
    Right,
    describe,
)
from .lexer import parse, scan


class BrainFuckCompiler:
    """
    BrainFuck compiler

    Lowers source text into a flat, jump-resolved Program for the machine.

    Pipeline:
    - parse: one Opcode per command character, everything else dropped
    - validate: bracket balance, the only structural check
    - compress: runs of > < + - collapse into one counted instruction
    - resolve_jumps: each [ and ] learns the index of its partner

    There is no best-effort mode: unbalanced source produces no Program.
    """

    def __init__(self, compress=True):
        self.compress_runs = compress

    # ===== Main Compilation Pipeline =====

    def compile(self, source: str) -> Optional[Program]:
        opcodes = parse(source)
        if not self.validate(opcodes):
            return None
        return Program(tuple(self.lower(opcodes)))

    def validate(self, opcodes: Iterable[Opcode]) -> bool:
        unclosed = 0
        for op in opcodes:
            if op is Opcode.LOOP_BEGIN:
                unclosed += 1
            elif op is Opcode.LOOP_END:
                unclosed -= 1
                if unclosed < 0:
                    return False
        return unclosed == 0

    def lower(self, opcodes: Sequence[Opcode]) -> List[Instruction]:
        if self.compress_runs:
            instructions = self.compress(opcodes)
        else:
            instructions = [op.as_instruction() for op in opcodes]
        return self.resolve_jumps(instructions)

    # ===== Passes =====

    def compress(self, opcodes: Iterable[Opcode]) -> List[Instruction]:
        """Run-length encode > < + -; I/O and brackets stay one instruction each."""
        out: List[Instruction] = []
        for op, run in groupby(opcodes):
            n = sum(1 for _ in run)
            if n > 1 and op.is_run_length_eligible:
                out.append(op.as_counted(n))
            else:
                out.extend(op.as_instruction() for _ in range(n))
        return out

    def resolve_jumps(self, instructions: Sequence[Instruction]) -> List[Instruction]:
        bound = list(instructions)
        pending: List[int] = []

        for index, instr in enumerate(instructions):
            if isinstance(instr, LoopBegin):
                pending.append(index)
            elif isinstance(instr, LoopEnd):
                begin = pending.pop()
                bound[index] = LoopEnd(begin)
                bound[begin] = LoopBegin(index)

        assert not pending, "resolve_jumps called on unbalanced input"
        return bound


def validate(opcodes: Iterable[Opcode]) -> bool:
    return BrainFuckCompiler().validate(opcodes)


def lower(opcodes: Sequence[Opcode], *, compress: bool = True) -> List[Instruction]:
    return BrainFuckCompiler(compress=compress).lower(opcodes)


def compile_program(source: str, *, compress: bool = True) -> Optional[Program]:
    """Compile source text. Returns None when the brackets do not balance."""
    return BrainFuckCompiler(compress=compress).compile(source)


def check_brackets(source: str) -> Optional[BFCompileError]:
    """
    Locate the first bracket that breaks the nesting rules.

    An unmatched ']' is reported where it occurs. When the text ends with
    loops still open, the innermost unclosed '[' is reported.
    """
    open_at = []
    for op, line, column in scan(source):
        if op is Opcode.LOOP_BEGIN:
            open_at.append((line, column))
        elif op is Opcode.LOOP_END:
            if not open_at:
                return make_compile_error(
                    message="Unmatched ']' found", source=source, line=line, column=column
                )
            open_at.pop()

    if open_at:
        line, column = open_at[-1]
        return make_compile_error(
            message="Unmatched '[' found", source=source, line=line, column=column
        )
    return None


def compile_or_raise(source: str, *, compress: bool = True) -> Program:
    program = compile_program(source, compress=compress)
    if program is None:
        error = check_brackets(source)
        assert error is not None
        raise error
    return program


def format_program(program: Program) -> str:
    width = len(str(max(len(program) - 1, 0)))
    return "\n".join(f"{i:>{width}}  {describe(instr)}" for i, instr in enumerate(program))


def emit(program: Iterable[Instruction]) -> str:
    """Render instructions back to canonical source text."""
    out: List[str] = []
    for instr in program:
        _, ch = INSTRUCTION_NAMES[type(instr)]
        if isinstance(instr, (Right, Left, Inc, Dec)):
            out.append(ch * instr.n)
        else:
            out.append(ch)
    return ''.join(out)
