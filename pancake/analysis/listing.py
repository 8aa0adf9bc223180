from collections import defaultdict

from ..assembler import Program
from .blocks import identify_basic_blocks


def format_listing(program: Program) -> str:
    """
    Render a resolved program one instruction per line.

    Each basic block opens with a ``; block_N in=.. out=.. -> ...`` line giving
    the stack height it needs on entry, the height it leaves, and its
    successors. Label names are printed above the instruction they point at.
    """
    blocks = identify_basic_blocks(program)
    labels_at = defaultdict(list)
    for name, index in program.labels.items():
        labels_at[index].append(name)

    width = len(str(max(len(program) - 1, 0)))
    lines = []
    for index, instr in enumerate(program):
        if index in blocks:
            lines.append(blocks[index].summary())
        for name in labels_at.get(index, ()):
            lines.append(f"{name}:")
        lines.append(f"{index:>{width}}: {instr}")
    # Labels declared after the last instruction
    for name in labels_at.get(len(program), ()):
        lines.append(f"{name}:")
    return "\n".join(lines)
