"""
Execution engine for assembled pancake programs.

The engine owns one MachineState per run and executes instructions until
HALT, the end of the program, or the first error.
"""

import sys
from typing import Optional, TextIO

import structlog

from .assembler import Program, assemble, load_program
from .core.errors import (
    DivisionByZeroError,
    InvalidInstructionError,
    JumpTargetOutOfBoundsError,
    UnresolvedInstructionError,
)
from .core.instruction import Opcode, UNRESOLVED_OPCODES
from .core.machine_state import MAX_MEMORY_SIZE, MachineState
from .utils.word_ops import word_add, word_div, word_mul, word_sub

logger = structlog.get_logger(__name__)


class VirtualMachine:
    def __init__(self, output: Optional[TextIO] = None,
                 max_memory: int = MAX_MEMORY_SIZE,
                 trace: bool = False):
        self.output = output
        self.max_memory = max_memory
        self.trace = trace

    def _emit(self, value: int):
        print(value, file=self.output if self.output is not None else sys.stdout)

    def _check_target(self, program: Program, target: int, kind: str = "Jump"):
        if target >= len(program):
            raise JumpTargetOutOfBoundsError(target, len(program), kind)

    def run(self, program: Program) -> MachineState:
        """
        Execute a resolved program from index 0.

        Returns:
            The final MachineState, for inspection.

        Raises:
            ExecutionError: On the first runtime failure. Execution stops there.
        """
        state = MachineState(max_memory=self.max_memory)
        size = len(program)
        logger.debug("Starting execution", instructions=size, max_memory=self.max_memory)

        while state.pc < size:
            instr = program[state.pc]
            opcode = instr.opcode
            if self.trace:
                logger.debug("step", pc=state.pc, opcode=opcode.name,
                             operand=instr.operand, stack_depth=len(state.stack))
            state.steps += 1

            # --- Stack operations ---
            if opcode is Opcode.PUSH:
                state.push(instr.operand)
            elif opcode is Opcode.POP:
                state.pop()
            elif opcode is Opcode.PRINT:
                self._emit(state.peek())
            elif opcode is Opcode.SWAP:
                a = state.pop()
                b = state.pop()
                state.push(a)
                state.push(b)
            # --- Arithmetic: right operand is on top ---
            elif opcode is Opcode.ADD:
                b = state.pop()
                a = state.pop()
                state.push(word_add(a, b))
            elif opcode is Opcode.SUB:
                b = state.pop()
                a = state.pop()
                state.push(word_sub(a, b))
            elif opcode is Opcode.MUL:
                b = state.pop()
                a = state.pop()
                state.push(word_mul(a, b))
            elif opcode is Opcode.DIV:
                b = state.pop()
                a = state.pop()
                if b == 0:
                    raise DivisionByZeroError()
                state.push(word_div(a, b))
            # --- Memory ---
            elif opcode is Opcode.LOAD:
                addr = state.pop()
                state.push(state.memory_read(addr))
            elif opcode is Opcode.STORE:
                addr = state.pop()
                value = state.pop()
                state.memory_write(addr, value)
            # --- Control flow; these set pc themselves ---
            elif opcode is Opcode.JUMP_TO:
                self._check_target(program, instr.operand)
                state.pc = instr.operand
                continue
            elif opcode is Opcode.JUMPZ_TO or opcode is Opcode.JUMPNOTZ_TO:
                cond = state.pop()
                taken = cond == 0 if opcode is Opcode.JUMPZ_TO else cond != 0
                if taken:
                    self._check_target(program, instr.operand)
                    state.pc = instr.operand
                    continue
            elif opcode is Opcode.CALL_TO:
                self._check_target(program, instr.operand, kind="Call")
                state.push_return(state.pc + 1)
                state.pc = instr.operand
                continue
            elif opcode is Opcode.RET:
                state.pc = state.pop_return()
                continue
            elif opcode is Opcode.HALT:
                state.halted = True
                break
            elif opcode is Opcode.LABEL:
                pass
            elif opcode in UNRESOLVED_OPCODES:
                raise UnresolvedInstructionError(instr, state.pc)
            else:
                raise InvalidInstructionError(opcode.name)

            state.pc += 1

        logger.debug("Execution finished", pc=state.pc, steps=state.steps, halted=state.halted)
        return state


def run_vm(program: Program, **kwargs) -> MachineState:
    """Run a resolved program on a fresh VirtualMachine."""
    return VirtualMachine(**kwargs).run(program)


def run_source(text: str, **kwargs) -> MachineState:
    """Assemble source text and run it."""
    return run_vm(assemble(text), **kwargs)


def run_file(path: str, **kwargs) -> MachineState:
    """Read, assemble and run a source file."""
    return run_vm(load_program(path), **kwargs)
