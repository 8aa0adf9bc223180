from typing import Dict

import structlog

from ..assembler import Program
from ..core.instruction import Opcode
from .basic_block import BasicBlock
from .stack_analyzer import analyze_stack_locally

logger = structlog.get_logger(__name__)

TERMINATING_OPCODES = {Opcode.JUMP_TO, Opcode.JUMPZ_TO, Opcode.JUMPNOTZ_TO,
                       Opcode.CALL_TO, Opcode.RET, Opcode.HALT}


def identify_basic_blocks(program: Program) -> Dict[int, BasicBlock]:
    """
    Split a resolved program into basic blocks.

    A new basic block starts at:
    1. The first instruction (index 0).
    2. Any label target or branch/call target.
    3. The instruction following a branch, call, RET or HALT.

    Successors are the branch target (if any) and the fall-through block,
    except after JUMP_TO, RET and HALT. Call edges point at the callee and
    fall through to the return site.
    """
    size = len(program)
    if size == 0:
        return {}

    # 1. Collect leaders
    block_starts = {0}
    block_starts.update(index for index in program.labels.values() if index < size)
    for index, instr in enumerate(program):
        if instr.is_branch and isinstance(instr.operand, int) and instr.operand < size:
            block_starts.add(instr.operand)
        if instr.opcode in TERMINATING_OPCODES and index + 1 < size:
            block_starts.add(index + 1)

    # 2. Build blocks
    basic_blocks: Dict[int, BasicBlock] = {}
    sorted_starts = sorted(block_starts)
    for i, start in enumerate(sorted_starts):
        end = sorted_starts[i + 1] - 1 if i + 1 < len(sorted_starts) else size - 1
        block = BasicBlock(
            start_index=start,
            end_index=end,
            instructions=list(program.instructions[start:end + 1]),
            labels=sorted(name for name, index in program.labels.items() if index == start),
        )
        analyze_stack_locally(block)
        basic_blocks[start] = block

    # 3. Successors and predecessors
    for block in basic_blocks.values():
        last = block.terminator
        if last.is_branch and last.operand in basic_blocks:
            block.successors.append(basic_blocks[last.operand])
        fallthrough = block.end_index + 1
        if block.falls_through and fallthrough in basic_blocks:
            if basic_blocks[fallthrough] not in block.successors:
                block.successors.append(basic_blocks[fallthrough])

    for block in basic_blocks.values():
        for successor in block.successors:
            if block not in successor.predecessors:
                successor.predecessors.append(block)

    logger.debug("Identified basic blocks", blocks=len(basic_blocks))
    return basic_blocks
