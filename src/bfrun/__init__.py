
from .api import (
    DEFAULT_TAPE_SIZE,
    CompileOptions,
    CompileResult,
    RunOptions,
    RunResult,
    allocate_tape,
    compile_file,
    compile_string,
    run_program,
    run_string,
)
from .compiler import BrainFuckCompiler, check_brackets, compile_or_raise, compile_program, emit, format_program, lower, validate
from .errors import BFCompileError, BFError, BFRuntimeError, TapeOverflowError, TapeUnderflowError
from .instructions import Opcode, Program
from .lexer import parse
from .machine import run
from .state import MachineState

__all__ = [
    'BrainFuckCompiler',
    'parse',
    'validate',
    'lower',
    'compile_program',
    'compile_or_raise',
    'check_brackets',
    'format_program',
    'emit',
    'run',
    'Opcode',
    'Program',
    'MachineState',
    'BFError',
    'BFCompileError',
    'BFRuntimeError',
    'TapeOverflowError',
    'TapeUnderflowError',
    'DEFAULT_TAPE_SIZE',
    'CompileOptions',
    'CompileResult',
    'RunOptions',
    'RunResult',
    'allocate_tape',
    'compile_string',
    'compile_file',
    'run_program',
    'run_string',
]
