"""
pancake: a small stack-based virtual machine with a two-pass assembler.
"""

from . import logging_config  # noqa: F401
from .assembler import Program, assemble, build_label_table, load_program, map_op, resolve_labels
from .core import (
    VMError,
    AssemblyError,
    ExecutionError,
    MissingArgumentError,
    InvalidPushValueError,
    InvalidInstructionError,
    DuplicateLabelError,
    UndefinedLabelError,
    StackUnderflowError,
    CallStackUnderflowError,
    DivisionByZeroError,
    MemoryAccessOutOfBoundsError,
    UnresolvedInstructionError,
    JumpTargetOutOfBoundsError,
    SourceReadError,
    StateExportError,
    Instruction,
    Opcode,
    MachineState,
    MAX_MEMORY_SIZE,
)
from .vm import VirtualMachine, run_file, run_source, run_vm

__version__ = "0.3.0"

__all__ = [
    # Assembly
    "Program",
    "assemble",
    "build_label_table",
    "load_program",
    "map_op",
    "resolve_labels",
    # Execution
    "VirtualMachine",
    "MachineState",
    "MAX_MEMORY_SIZE",
    "run_file",
    "run_source",
    "run_vm",
    # Instructions
    "Instruction",
    "Opcode",
    # Errors
    "VMError",
    "AssemblyError",
    "ExecutionError",
    "MissingArgumentError",
    "InvalidPushValueError",
    "InvalidInstructionError",
    "DuplicateLabelError",
    "UndefinedLabelError",
    "StackUnderflowError",
    "CallStackUnderflowError",
    "DivisionByZeroError",
    "MemoryAccessOutOfBoundsError",
    "UnresolvedInstructionError",
    "JumpTargetOutOfBoundsError",
    "SourceReadError",
    "StateExportError",
]
