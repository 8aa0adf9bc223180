"""
Instruction set definitions for the pancake virtual machine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Opcode(Enum):
    """Pancake opcodes"""

    # stack operations
    PUSH = "push"
    POP = "pop"
    PRINT = "print"
    SWAP = "swap"

    # arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"

    # memory
    LOAD = "load"
    STORE = "store"

    # control flow referring to a label by name (assembler only)
    JUMP = "jump"
    JUMPZ = "jumpz"
    JUMPNOTZ = "jumpnotz"
    CALL = "call"

    # control flow referring to an absolute instruction index
    JUMP_TO = "jump_to"
    JUMPZ_TO = "jumpz_to"
    JUMPNOTZ_TO = "jumpnotz_to"
    CALL_TO = "call_to"

    RET = "ret"
    HALT = "halt"

    # label declaration kept as a no-op
    LABEL = "label"


# Opcodes reachable from source text, keyed by mnemonic
MNEMONICS = {
    op.value: op
    for op in (
        Opcode.PUSH, Opcode.POP, Opcode.PRINT, Opcode.SWAP,
        Opcode.ADD, Opcode.SUB, Opcode.MUL, Opcode.DIV,
        Opcode.LOAD, Opcode.STORE,
        Opcode.JUMP, Opcode.JUMPZ, Opcode.JUMPNOTZ, Opcode.CALL,
        Opcode.RET, Opcode.HALT,
    )
}

# Unresolved control flow -> the resolved form produced by the second pass
RESOLVED_FORMS = {
    Opcode.JUMP: Opcode.JUMP_TO,
    Opcode.JUMPZ: Opcode.JUMPZ_TO,
    Opcode.JUMPNOTZ: Opcode.JUMPNOTZ_TO,
    Opcode.CALL: Opcode.CALL_TO,
}

UNRESOLVED_OPCODES = frozenset(RESOLVED_FORMS)
BRANCH_OPCODES = frozenset(RESOLVED_FORMS.values())

# Map from opcode to (pops, pushes)
STACK_EFFECTS = {
    Opcode.PUSH: (0, 1),
    Opcode.POP: (1, 0),
    Opcode.PRINT: (1, 1),  # reads the top without consuming it
    Opcode.SWAP: (2, 2),
    Opcode.ADD: (2, 1),
    Opcode.SUB: (2, 1),
    Opcode.MUL: (2, 1),
    Opcode.DIV: (2, 1),
    Opcode.LOAD: (1, 1),
    Opcode.STORE: (2, 0),
    Opcode.JUMP: (0, 0),
    Opcode.JUMPZ: (1, 0),
    Opcode.JUMPNOTZ: (1, 0),
    Opcode.CALL: (0, 0),
    Opcode.JUMP_TO: (0, 0),
    Opcode.JUMPZ_TO: (1, 0),
    Opcode.JUMPNOTZ_TO: (1, 0),
    Opcode.CALL_TO: (0, 0),
    Opcode.RET: (0, 0),
    Opcode.HALT: (0, 0),
    Opcode.LABEL: (0, 0),
}


@dataclass(frozen=True)
class Instruction:
    """A single decoded instruction.

    ``operand`` is the pushed value for PUSH, the label name for unresolved
    control flow and LABEL, the target index for resolved control flow, and
    ``None`` for everything else.
    """

    opcode: Opcode
    operand: Optional[Union[int, str]] = None

    @property
    def is_unresolved(self) -> bool:
        return self.opcode in UNRESOLVED_OPCODES

    @property
    def is_branch(self) -> bool:
        return self.opcode in BRANCH_OPCODES

    def resolved(self, target: int) -> "Instruction":
        """Return the resolved form of an unresolved control-flow instruction."""
        return Instruction(RESOLVED_FORMS[self.opcode], target)

    def __str__(self) -> str:
        name = self.opcode.name
        if self.operand is None:
            return name
        return f"{name} {self.operand}"


def get_stack_effect(opcode: Opcode):
    """
    Get the stack effect of an opcode.

    Returns:
        Tuple (pops, pushes)
    """
    return STACK_EFFECTS.get(opcode, (0, 0))
