from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..core.instruction import Instruction, Opcode

NO_FALLTHROUGH_OPCODES = frozenset({Opcode.JUMP_TO, Opcode.RET, Opcode.HALT})


# Blocks reference each other through successors/predecessors, so identity
# equality keeps comparisons and repr from walking the graph.
@dataclass(eq=False, repr=False)
class BasicBlock:
    """A straight-line run of resolved instructions with a single entry point."""

    start_index: int
    end_index: int  # Index of the last instruction in the block
    instructions: List[Instruction] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    predecessors: List["BasicBlock"] = field(default_factory=list)
    successors: List["BasicBlock"] = field(default_factory=list)
    stack_height_in: Optional[int] = None
    stack_height_out: Optional[int] = None
    stack_effect: Optional[Tuple[int, int]] = None  # (pushes, pops)

    @property
    def name(self) -> str:
        return f"block_{self.start_index}"

    @property
    def terminator(self) -> Instruction:
        return self.instructions[-1]

    @property
    def falls_through(self) -> bool:
        return self.terminator.opcode not in NO_FALLTHROUGH_OPCODES

    def summary(self) -> str:
        """One-line description used by the program listing."""
        text = f"; {self.name} in={self.stack_height_in} out={self.stack_height_out}"
        if self.successors:
            text += " -> " + ", ".join(s.name for s in self.successors)
        return text

    def __repr__(self):
        return f"BasicBlock(start={self.start_index}, end={self.end_index}, instructions={len(self.instructions)})"
