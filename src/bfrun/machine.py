from __future__ import annotations

import sys
from typing import BinaryIO, MutableSequence, Optional

from .errors import make_runtime_error
from .instructions import (
    Dec,
    Inc,
    Input,
    Left,
    LoopBegin,
    LoopEnd,
    Output,
    Program,
    Right,
    describe,
)
from .state import MachineState

EOF_POLICIES = ('stall', 'unchanged', 'zero')


def run(
    program: Program,
    tape: MutableSequence[int],
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    on_eof: str = 'stall',
    trace: bool = False,
) -> MachineState:
    """
    Execute a compiled program against a caller-owned tape.

    The tape is any mutable sequence of 0..255 values (bytearray, numpy uint8
    array). Execution stops when the instruction pointer leaves the program.
    Moving the data pointer off either end of the tape raises
    TapeOverflowError / TapeUnderflowError from the faulting instruction.

    on_eof decides what ',' does once the input is exhausted:
      stall     - leave the cell alone and retry the same ',' next cycle
      unchanged - leave the cell alone and move on
      zero      - store 0 and move on

    Returns the final MachineState (pointers, step count, optional trace).
    """
    if on_eof not in EOF_POLICIES:
        raise ValueError(f"Unknown EOF policy: {on_eof!r} (expected one of {', '.join(EOF_POLICIES)})")

    if stdin is None:
        stdin = sys.stdin.buffer
    if stdout is None:
        stdout = sys.stdout.buffer

    state = MachineState(is_tracing=trace)
    size = len(program)
    tape_len = len(tape)
    ip, dp = 0, 0

    read = stdin.read
    write = stdout.write
    flush = getattr(stdout, 'flush', None)

    try:
        while 0 <= ip < size:
            instr = program[ip]
            state.steps += 1
            if trace:
                state.add_trace(f"{ip} {dp} {describe(instr)} {int(tape[dp])}")

            if isinstance(instr, Right):
                if dp + instr.n >= tape_len:
                    raise make_runtime_error(underflow=False, ip=ip, dp=dp + instr.n, tape_size=tape_len, state=state)
                dp += instr.n
                ip += 1

            elif isinstance(instr, Left):
                if dp - instr.n < 0:
                    raise make_runtime_error(underflow=True, ip=ip, dp=dp - instr.n, tape_size=tape_len, state=state)
                dp -= instr.n
                ip += 1

            elif isinstance(instr, Inc):
                tape[dp] = (int(tape[dp]) + instr.n) % 256
                ip += 1

            elif isinstance(instr, Dec):
                tape[dp] = (int(tape[dp]) - instr.n) % 256
                ip += 1

            elif isinstance(instr, LoopBegin):
                if tape[dp] == 0:
                    ip = instr.end + 1
                else:
                    ip += 1

            elif isinstance(instr, LoopEnd):
                if tape[dp] == 0:
                    ip += 1
                else:
                    ip = instr.begin

            elif isinstance(instr, Output):
                write(bytes((int(tape[dp]),)))
                if flush is not None:
                    flush()
                ip += 1

            elif isinstance(instr, Input):
                ch = read(1)
                if ch:
                    tape[dp] = ch[0]
                elif on_eof == 'stall':
                    continue
                elif on_eof == 'zero':
                    tape[dp] = 0
                ip += 1

            else:
                raise TypeError(f"Not an instruction: {instr!r}")
    finally:
        state.ip, state.dp = ip, dp

    return state
