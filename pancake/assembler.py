"""
Two-pass assembler for pancake source.

The first pass decodes every instruction line and records where each label
points. The second pass rewrites label references into absolute instruction
indices, so forward references resolve to concrete targets before execution.
"""

import re
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import structlog

from .core.errors import (
    DuplicateLabelError,
    InvalidInstructionError,
    InvalidPushValueError,
    MissingArgumentError,
    UndefinedLabelError,
    VMError,
)
from .core.instruction import MNEMONICS, UNRESOLVED_OPCODES, Instruction, Opcode
from .source import SourceLine, read_source, tokenize
from .utils.word_ops import is_word

logger = structlog.get_logger(__name__)

PUSH_VALUE_PATTERN = re.compile(r"^\+?[0-9]+$")


class Program:
    """A fully resolved instruction sequence plus the label table used to build it."""

    def __init__(self, instructions: Sequence[Instruction], labels: Optional[Mapping[str, int]] = None):
        self.instructions: Tuple[Instruction, ...] = tuple(instructions)
        self.labels: Mapping[str, int] = MappingProxyType(dict(labels or {}))

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self):
        return iter(self.instructions)

    def __repr__(self) -> str:
        return f"Program(instructions={len(self.instructions)}, labels={len(self.labels)})"


def parse_push_value(text: str) -> int:
    if not PUSH_VALUE_PATTERN.match(text):
        raise InvalidPushValueError(text)
    value = int(text)
    if not is_word(value):
        raise InvalidPushValueError(text)
    return value


def map_op(mnemonic: str, argument: Optional[str] = None) -> Instruction:
    """
    Decode one mnemonic and its optional argument into an Instruction.

    Args:
        mnemonic: Lowercase opcode name as written in source
        argument: The text following the mnemonic, if any

    Returns:
        The decoded Instruction. Control flow keeps its label name unresolved.

    Raises:
        MissingArgumentError: push/jump/jumpz/jumpnotz/call without an argument
        InvalidPushValueError: push argument is not an integer in 0..65535
        InvalidInstructionError: unknown mnemonic
    """
    opcode = MNEMONICS.get(mnemonic)
    if opcode is None:
        raise InvalidInstructionError(mnemonic)

    if opcode is Opcode.PUSH:
        if argument is None:
            raise MissingArgumentError(mnemonic)
        return Instruction(opcode, parse_push_value(argument))

    if opcode in UNRESOLVED_OPCODES:
        if argument is None:
            raise MissingArgumentError(mnemonic)
        return Instruction(opcode, argument)

    return Instruction(opcode)


def build_label_table(lines: Iterable[SourceLine]) -> Tuple[List[Instruction], Dict[str, int]]:
    """
    First pass: decode instructions and record label positions.

    A label maps to the index of the next instruction; labels are not emitted.

    Returns:
        Tuple of (decoded instructions, label table)
    """
    instructions: List[Instruction] = []
    labels: Dict[str, int] = {}

    for line in lines:
        try:
            if line.is_label:
                if line.label in labels:
                    raise DuplicateLabelError(line.label)
                labels[line.label] = len(instructions)
                continue
            instructions.append(map_op(line.mnemonic, line.argument))
        except VMError as e:
            e.at_line(line.line_number)
            raise

    return instructions, labels


def resolve_labels(instructions: Iterable[Instruction], labels: Mapping[str, int]) -> List[Instruction]:
    """
    Second pass: replace label references with absolute instruction indices.

    Raises:
        UndefinedLabelError: If a referenced label was never declared
    """
    resolved = []
    for instr in instructions:
        if instr.is_unresolved:
            target = labels.get(instr.operand)
            if target is None:
                raise UndefinedLabelError(instr.operand)
            instr = instr.resolved(target)
        resolved.append(instr)
    return resolved


def assemble(text: str) -> Program:
    """Tokenize, decode and resolve source text into a runnable Program."""
    lines = tokenize(text)
    instructions, labels = build_label_table(lines)
    program = Program(resolve_labels(instructions, labels), labels)
    logger.debug("Assembled program", instructions=len(program), labels=len(labels))
    return program


def load_program(path: str) -> Program:
    """Read a source file and assemble it."""
    logger.debug("Loading program", path=str(path))
    return assemble(read_source(path))
