from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .state import MachineState


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column > 0:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'compile':
        if "unmatched ']'" in msg:
            return "Every ']' needs an earlier '[' to close. Remove it or add the missing '['."
        if "unmatched '['" in msg:
            return "This loop is never closed. Add the missing ']'."
        return None
    if kind == 'runtime':
        if 'overflow' in msg:
            return 'The program walked off the end of the tape. Try a larger memory size.'
        if 'underflow' in msg:
            return "The program moved left of cell 0. Check for an extra '<'."
        return None
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class BFCompileError(BFError):
    line: int
    column: int
    context: str


@dataclass
class BFRuntimeError(BFError):
    ip: int
    dp: int
    state: Optional[MachineState] = None  # Machine state at the fault, trace included


@dataclass
class TapeOverflowError(BFRuntimeError):
    pass


@dataclass
class TapeUnderflowError(BFRuntimeError):
    pass


def make_compile_error(*, message: str, source: str, line: int, column: int) -> BFCompileError:
    lines = source.split('\n')
    ctx = _build_context(lines, line, column)
    hint = _hint_for(message, kind='compile')
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFCompileError(
        message=f"CompileError: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        line=line,
        column=column,
        context=ctx,
    )


def make_runtime_error(
    *, underflow: bool, ip: int, dp: int, tape_size: int, state: Optional[MachineState] = None
) -> BFRuntimeError:
    kind = 'underflow' if underflow else 'overflow'
    message = f"data pointer {kind}"
    hint = _hint_for(message, kind='runtime')
    hint_block = f"\nHint: {hint}" if hint else ""
    cls = TapeUnderflowError if underflow else TapeOverflowError
    return cls(
        message=f"RuntimeError: {message} (instruction {ip}, cell {dp}, tape size {tape_size}){hint_block}",
        ip=ip,
        dp=dp,
        state=state,
    )
