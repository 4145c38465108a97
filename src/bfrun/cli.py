from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .api import DEFAULT_TAPE_SIZE, RunOptions, allocate_tape, run_program
from .compiler import check_brackets, compile_program, format_program
from .errors import BFRuntimeError

EXIT_FAULT = 101


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid memory size: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"memory size must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Compile and run a BrainFuck program.",
        epilog=f"Memory size in bytes. Defaults to 1MiB ({DEFAULT_TAPE_SIZE} bytes).",
    )
    parser.add_argument("program", help="Path to the .bf source file")
    parser.add_argument("memory_size", nargs="?", type=_positive_int, default=DEFAULT_TAPE_SIZE,
                        help="Tape size in bytes")
    parser.add_argument("--dump", action="store_true", help="Print the compiled instructions and exit")
    parser.add_argument("--trace", action="store_true", help="Write an execution trace to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        # Only ASCII command characters matter; undecodable bytes are comments.
        with open(args.program, 'r', encoding='utf-8', errors='replace') as f:
            source = f.read()
    except OSError as e:
        print(f"Couldn't read {args.program}: {e.strerror or e}", file=sys.stderr)
        return 1

    program = compile_program(source)
    if program is None:
        print(check_brackets(source), file=sys.stderr)
        return 1

    if args.dump:
        print(format_program(program))
        return 0

    tape = allocate_tape(args.memory_size)
    try:
        state = run_program(program, tape, options=RunOptions(trace=args.trace))
    except BFRuntimeError as e:
        sys.stdout.flush()
        if args.trace and e.state is not None:
            print("\n".join(e.state.trace), file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_FAULT

    if args.trace:
        print("\n".join(state.trace), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
