"""
Exception hierarchy for the pancake assembler and virtual machine.

Every failure raised by assembly or execution derives from ``VMError`` so the
command-line entry point can convert any of them into an exit status with a
single handler.
"""

from typing import Optional


class VMError(Exception):
    """Base class for all assembler and execution failures."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message

    def at_line(self, line: int) -> "VMError":
        """Attach a 1-based source line number to this error and return it."""
        self.line = line
        self.args = (self._format(),)
        return self


# --- Assembly-time errors ---

class AssemblyError(VMError):
    """Raised while decoding source lines or resolving labels."""


class MissingArgumentError(AssemblyError):
    def __init__(self, mnemonic: str):
        self.mnemonic = mnemonic
        super().__init__(f"Missing argument for operation '{mnemonic}'")


class InvalidPushValueError(AssemblyError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid push value '{value}'")


class InvalidInstructionError(AssemblyError):
    def __init__(self, mnemonic: str):
        self.mnemonic = mnemonic
        super().__init__(f"Invalid instruction '{mnemonic}'")


class DuplicateLabelError(AssemblyError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Duplicate label '{label}'")


class UndefinedLabelError(AssemblyError):
    def __init__(self, label: str, message: Optional[str] = None):
        self.label = label
        super().__init__(message or f"Undefined label '{label}'")


# --- Execution-time errors ---

class ExecutionError(VMError):
    """Raised by the execution engine; aborts the run immediately."""


class StackUnderflowError(ExecutionError):
    def __init__(self):
        super().__init__("Stack underflow encountered")


class CallStackUnderflowError(ExecutionError):
    def __init__(self):
        super().__init__("Call stack underflow encountered")


class DivisionByZeroError(ExecutionError):
    def __init__(self):
        super().__init__("Attempted division by zero")


class MemoryAccessOutOfBoundsError(ExecutionError):
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Memory access out of bounds at address {address}")


class UnresolvedInstructionError(ExecutionError):
    """An unresolved label reference reached the engine (a resolver defect)."""

    def __init__(self, instruction, pc: int):
        self.instruction = instruction
        self.pc = pc
        super().__init__(f"Unresolved label at pc {pc}: {instruction!r}")


class JumpTargetOutOfBoundsError(ExecutionError, UndefinedLabelError):
    """A resolved jump or call points past the end of the program."""

    def __init__(self, target: int, size: int, kind: str = "Jump"):
        self.target = target
        self.size = size
        self.label = None
        VMError.__init__(self, f"{kind} address {target} is out of bounds (program has {size} instructions)")


# --- I/O ---

class SourceReadError(VMError):
    """The source file could not be read. The OSError is chained as __cause__."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"I/O error reading '{path}': {reason}")


class StateExportError(VMError):
    """The machine state could not be written. The OSError is chained as __cause__."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"I/O error writing '{path}': {reason}")
