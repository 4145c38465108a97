#!/usr/bin/env python3
"""
Tests for the string/file level helpers in bfrun.api.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest

from bfrun.api import (
    DEFAULT_TAPE_SIZE,
    CompileOptions,
    RunOptions,
    allocate_tape,
    compile_file,
    compile_string,
    run_string,
)
from bfrun.errors import BFCompileError, TapeOverflowError

HELLO = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def test_allocate_tape_defaults_to_one_mebibyte_of_zeros():
    tape = allocate_tape()
    assert tape.dtype == np.uint8
    assert tape.shape == (DEFAULT_TAPE_SIZE,)
    assert DEFAULT_TAPE_SIZE == 1048576
    assert not tape.any()


def test_allocate_tape_rejects_non_positive_sizes():
    with pytest.raises(ValueError):
        allocate_tape(0)


def test_compile_string_reports_counts():
    result = compile_string("+++ ++ [-] .")
    assert result.opcode_count == 9
    assert result.instruction_count == 5


def test_compile_string_without_compression():
    result = compile_string("+++", options=CompileOptions(compress=False))
    assert result.instruction_count == 3


def test_compile_string_returns_none_for_unbalanced_source():
    assert compile_string("[[]") is None


def test_compile_file(tmp_path):
    path = tmp_path / "prog.bf"
    path.write_text("copy: [->+<]\n", encoding="utf-8")
    result = compile_file(path)
    assert result is not None
    assert result.instruction_count == 6


def test_compile_file_tolerates_non_utf8_comments(tmp_path):
    path = tmp_path / "latin1.bf"
    path.write_bytes(b"caf\xe9: +++\n")
    result = compile_file(path)
    assert result.opcode_count == 3
    assert result.instruction_count == 1


def test_run_string_hello_world():
    result = run_string(HELLO)
    assert result.output == b"Hello World!\n"
    assert result.state.ip == len(compile_string(HELLO).program)


def test_run_string_uncompressed_matches():
    fast = run_string(HELLO, tape_size=32)
    slow = run_string(HELLO, tape_size=32, compile_options=CompileOptions(compress=False))
    assert fast.output == slow.output
    assert fast.tape.tolist() == slow.tape.tolist()
    assert slow.state.steps > fast.state.steps


def test_run_string_with_input():
    result = run_string(",[.,]", input_data=b"abc", options=RunOptions(on_eof='zero'))
    assert result.output == b"abc"


def test_run_string_raises_for_unbalanced_source():
    with pytest.raises(BFCompileError):
        run_string("+]")


def test_run_string_propagates_tape_faults():
    with pytest.raises(TapeOverflowError):
        run_string("+[>+]", tape_size=8)


def test_run_options_validate_eof_policy():
    with pytest.raises(ValueError):
        RunOptions(on_eof='retry')


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
