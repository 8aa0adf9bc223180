from .basic_block import BasicBlock
from .blocks import identify_basic_blocks
from .listing import format_listing
from .stack_analyzer import analyze_stack_locally

__all__ = [
    "BasicBlock",
    "identify_basic_blocks",
    "format_listing",
    "analyze_stack_locally",
]
