from .errors import (
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
)
from .instruction import Instruction, Opcode, MNEMONICS, STACK_EFFECTS, get_stack_effect
from .machine_state import MachineState, MAX_MEMORY_SIZE
