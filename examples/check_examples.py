#!/usr/bin/env python3

import os
import subprocess
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _env() -> dict:
    env = dict(os.environ)
    src = os.path.join(ROOT, 'src')
    env['PYTHONPATH'] = src + os.pathsep + env['PYTHONPATH'] if env.get('PYTHONPATH') else src
    return env


def _run_example(path: str, *, input_data: bytes, args=(), timeout_s: float = 10.0) -> dict:
    cmd = [sys.executable, "-m", "bfrun", path, *args]
    try:
        p = subprocess.run(
            cmd,
            input=input_data,
            capture_output=True,
            cwd=ROOT,
            env=_env(),
            timeout=timeout_s,
        )
        return {
            "returncode": p.returncode,
            "stdout": p.stdout,
            "stderr": p.stderr.decode("utf-8", "replace"),
            "timeout": False,
        }
    except subprocess.TimeoutExpired as e:
        return {
            "returncode": None,
            "stdout": e.stdout or b"",
            "stderr": (e.stderr or b"").decode("utf-8", "replace") + "\n[TIMEOUT]",
            "timeout": True,
        }


def main() -> int:
    examples = [
        {
            "file": "examples/hello.bf",
            "input": b"",
            "check": lambda r: r["returncode"] == 0 and r["stdout"] == b"Hello World!\n",
            "expect": "exit 0, exactly 'Hello World!\\n'",
        },
        {
            "file": "examples/line_echo.bf",
            "input": b"bfrun\n",
            "check": lambda r: r["returncode"] == 0 and r["stdout"] == b"bfrun",
            "expect": "exit 0, exactly 'bfrun'",
        },
        {
            "file": "examples/transfer.bf",
            "input": b"",
            "check": lambda r: r["returncode"] == 0 and r["stdout"] == b"3",
            "expect": "exit 0, exactly '3'",
        },
        {
            "file": "examples/fall_off.bf",
            "input": b"",
            "args": ["64"],
            "check": lambda r: r["returncode"] == 101 and "overflow" in r["stderr"],
            "expect": "exit 101 with a data pointer overflow",
        },
    ]

    print("=== bfrun Examples Verification ===")

    any_fail = False
    for ex in examples:
        r = _run_example(ex["file"], input_data=ex["input"], args=ex.get("args", ()), timeout_s=10.0)

        passed = ex["check"](r)
        status = "PASS" if passed else "FAIL"
        print(f"\n[{status}] {ex['file']}")

        if passed:
            continue

        any_fail = True
        print(f"Expected: {ex['expect']}")
        print(f"Return code: {r['returncode']}  Timeout: {r['timeout']}")

        def trunc(s: str) -> str:
            if len(s) > 2000:
                return s[:2000] + "\n...[truncated]"
            return s

        print("--- program output ---")
        print(trunc(repr(r["stdout"])))
        print("--- stderr ---")
        print(trunc(r["stderr"]))

    if any_fail:
        print("\nSome examples FAILED.")
        return 1

    print("\nAll examples passed (output checks).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
