from ..core.instruction import get_stack_effect


def analyze_stack_locally(block):
    """
    Analyze stack effects within a single basic block.
    Computes how many values the block needs on entry and the height it
    leaves behind, relative to that entry height.
    """
    stack_height = 0  # Relative to the start of the block
    total_pushes = 0
    total_pops = 0
    min_height = 0

    for instr in block.instructions:
        pops, pushes = get_stack_effect(instr.opcode)

        if stack_height < pops:
            min_height = min(min_height, stack_height - pops)

        stack_height -= pops
        stack_height += pushes

        total_pops += pops
        total_pushes += pushes

    block.stack_height_in = max(0, -min_height)
    block.stack_height_out = block.stack_height_in + stack_height
    block.stack_effect = (total_pushes, total_pops)
    return block
