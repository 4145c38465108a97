#!/usr/bin/env python3
"""
End-to-end tests for the bfrun command line.
"""

import subprocess
import sys
import os

import pytest

ROOT = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..')


def run_cli(*args, input_data=b""):
    env = dict(os.environ)
    src = os.path.join(ROOT, 'src')
    env['PYTHONPATH'] = src + os.pathsep + env['PYTHONPATH'] if env.get('PYTHONPATH') else src
    return subprocess.run(
        [sys.executable, '-m', 'bfrun', *args],
        input=input_data,
        capture_output=True,
        cwd=ROOT,
        env=env,
        timeout=60,
    )


@pytest.fixture
def bf_file(tmp_path):
    def _write(code):
        path = tmp_path / "prog.bf"
        path.write_text(code, encoding="utf-8")
        return str(path)
    return _write


def test_missing_program_prints_usage():
    result = run_cli()
    assert result.returncode == 2
    assert b"usage" in result.stderr.lower()


def test_runs_program(bf_file):
    result = run_cli(bf_file("+" * 72 + "." + "+" * 33 + "."))
    assert result.returncode == 0
    assert result.stdout == b"Hi"


def test_reads_stdin(bf_file):
    result = run_cli(bf_file(",+.,+."), input_data=b"HI")
    assert result.returncode == 0
    assert result.stdout == b"IJ"


def test_unbalanced_program_is_not_run(bf_file):
    result = run_cli(bf_file("+.\n]"))
    assert result.returncode == 1
    assert result.stdout == b""
    assert b"Unmatched ']'" in result.stderr


def test_overflow_aborts_with_fault_status(bf_file):
    result = run_cli(bf_file("+.>>"), "2")
    assert result.returncode == 101
    assert result.stdout == b"\x01"
    assert b"overflow" in result.stderr


def test_memory_size_is_honoured(bf_file):
    assert run_cli(bf_file(">>"), "3").returncode == 0
    assert run_cli(bf_file(">>>"), "3").returncode == 101


def test_rejects_bad_memory_size(bf_file):
    assert run_cli(bf_file("+"), "0").returncode == 2
    assert run_cli(bf_file("+"), "lots").returncode == 2


def test_non_utf8_comments_are_ignored(tmp_path):
    path = tmp_path / "latin1.bf"
    path.write_bytes(b"caf\xe9 comment\n" + b"+" * 65 + b".")
    result = run_cli(str(path))
    assert result.returncode == 0
    assert result.stdout == b"A"
    assert result.stderr == b""


def test_missing_file(tmp_path):
    result = run_cli(str(tmp_path / "nope.bf"))
    assert result.returncode == 1
    assert b"Couldn't read" in result.stderr


def test_dump_prints_instructions(bf_file):
    result = run_cli(bf_file("+++[-]"), "--dump")
    assert result.returncode == 0
    assert result.stdout.decode().splitlines() == [
        "0  inc 3",
        "1  begin -> 3",
        "2  dec 1",
        "3  end -> 1",
    ]


def test_trace_goes_to_stderr(bf_file):
    result = run_cli(bf_file("++."), "--trace")
    assert result.returncode == 0
    assert result.stdout == b"\x02"
    assert result.stderr.decode().splitlines() == ["0 0 inc 2 0", "1 0 out 2"]


def test_trace_survives_a_fault(bf_file):
    result = run_cli(bf_file("+>>"), "2", "--trace")
    assert result.returncode == 101
    lines = result.stderr.decode().splitlines()
    assert lines[:2] == ["0 0 inc 1 0", "1 0 right 2 1"]
    assert "overflow" in lines[2]


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__]))
