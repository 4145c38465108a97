from typing import Iterator, List, Tuple

from .instructions import Opcode

# Source character -> opcode. Anything missing from this table is a comment.
CHAR_TO_OPCODE = {op.value: op for op in Opcode}


def is_code_char(ch: str) -> bool:
    return ch in CHAR_TO_OPCODE


def cleanup(source: str) -> str:
    """Strip every character that is not one of the eight commands."""
    return ''.join(ch for ch in source if ch in CHAR_TO_OPCODE)


def parse(source: str) -> List[Opcode]:
    return [CHAR_TO_OPCODE[ch] for ch in source if ch in CHAR_TO_OPCODE]


def scan(source: str) -> Iterator[Tuple[Opcode, int, int]]:
    """
    Like parse(), but also yields the 1-based (line, column) of every opcode.

    Used for error reporting only; the compiler itself works on parse().
    """
    line, column = 1, 0
    for ch in source:
        if ch == '\n':
            line += 1
            column = 0
            continue
        column += 1
        op = CHAR_TO_OPCODE.get(ch)
        if op is not None:
            yield op, line, column
