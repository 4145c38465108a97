from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, MutableSequence, Optional

import numpy as np

from .compiler import BrainFuckCompiler, compile_or_raise
from .instructions import Program
from .lexer import parse
from .machine import EOF_POLICIES, run
from .state import MachineState

DEFAULT_TAPE_SIZE = 1048576  # 1 MiB


@dataclass(frozen=True)
class CompileOptions:
    compress: bool = True


@dataclass(frozen=True)
class RunOptions:
    on_eof: str = 'stall'
    trace: bool = False

    def __post_init__(self) -> None:
        if self.on_eof not in EOF_POLICIES:
            raise ValueError(f"Unknown EOF policy: {self.on_eof!r}")


@dataclass(frozen=True)
class CompileResult:
    program: Program
    opcode_count: int
    instruction_count: int


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape: np.ndarray
    state: MachineState


def allocate_tape(size: int = DEFAULT_TAPE_SIZE) -> np.ndarray:
    if size <= 0:
        raise ValueError(f"Tape size must be positive, got {size}")
    return np.zeros(size, dtype=np.uint8)


def compile_string(source: str, *, options: Optional[CompileOptions] = None) -> Optional[CompileResult]:
    compiler = BrainFuckCompiler(compress=True if options is None else options.compress)
    opcodes = parse(source)
    if not compiler.validate(opcodes):
        return None
    program = Program(tuple(compiler.lower(opcodes)))
    return CompileResult(program=program, opcode_count=len(opcodes), instruction_count=len(program))


def compile_file(path: str | Path, *, options: Optional[CompileOptions] = None, encoding: str = "utf-8") -> Optional[CompileResult]:
    p = Path(path)
    return compile_string(p.read_text(encoding=encoding, errors="replace"), options=options)


def run_program(
    program: Program,
    tape: MutableSequence[int],
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> MachineState:
    opts = options or RunOptions()
    return run(program, tape, stdin=stdin, stdout=stdout, on_eof=opts.on_eof, trace=opts.trace)


def run_string(
    source: str,
    *,
    input_data: bytes = b"",
    tape_size: int = DEFAULT_TAPE_SIZE,
    compile_options: Optional[CompileOptions] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    """
    Compile and run source entirely in memory.

    Raises BFCompileError for unbalanced brackets and the tape faults from
    the machine unchanged.
    """
    compress = True if compile_options is None else compile_options.compress
    program = compile_or_raise(source, compress=compress)
    tape = allocate_tape(tape_size)
    stdout = io.BytesIO()
    state = run_program(program, tape, stdin=io.BytesIO(input_data), stdout=stdout, options=options)
    return RunResult(output=stdout.getvalue(), tape=tape, state=state)
