from typing import Any, Dict, List, Optional

from .errors import CallStackUnderflowError, MemoryAccessOutOfBoundsError, StackUnderflowError

# Maximum number of memory cells a program may grow to
MAX_MEMORY_SIZE = 1_000_000


class MachineState:
    """Represents the state of one program run (stack, memory, call stack, pc)."""

    def __init__(self, pc: int = 0, stack: Optional[List[int]] = None,
                 memory: Optional[List[int]] = None,
                 call_stack: Optional[List[int]] = None,
                 max_memory: int = MAX_MEMORY_SIZE):
        self.pc = pc
        self.stack = stack if stack is not None else []
        self.memory = memory if memory is not None else []
        self.call_stack = call_stack if call_stack is not None else []
        self.max_memory = max_memory
        self.halted = False
        self.steps = 0

    def push(self, value: int):
        self.stack.append(value)

    def pop(self) -> int:
        if not self.stack:
            raise StackUnderflowError()
        return self.stack.pop()

    def peek(self, index: int = 0) -> int:
        """Access stack item without popping (0 is top)."""
        if index < 0 or index >= len(self.stack):
            raise StackUnderflowError()
        return self.stack[-(index + 1)]

    def memory_read(self, addr: int) -> int:
        """Read a memory cell. Cells never written read as zero."""
        if addr < len(self.memory):
            return self.memory[addr]
        return 0

    def memory_write(self, addr: int, value: int):
        """Write a memory cell, zero-filling any gap up to ``addr``."""
        if addr >= len(self.memory):
            if addr + 1 > self.max_memory:
                raise MemoryAccessOutOfBoundsError(addr)
            self.memory.extend([0] * (addr + 1 - len(self.memory)))
        self.memory[addr] = value

    def push_return(self, address: int):
        self.call_stack.append(address)

    def pop_return(self) -> int:
        if not self.call_stack:
            raise CallStackUnderflowError()
        return self.call_stack.pop()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pc": self.pc,
            "halted": self.halted,
            "steps": self.steps,
            "stack": list(self.stack),
            "memory": list(self.memory),
            "call_stack": list(self.call_stack),
        }

    def __repr__(self) -> str:
        return (f"MachineState(pc={self.pc}, stack={self.stack}, "
                f"memory_size={len(self.memory)}, call_depth={len(self.call_stack)})")
