"""Utilities for 16-bit word arithmetic."""

WORD_BITS = 16
WORD_MASK = (1 << WORD_BITS) - 1
WORD_MAX = WORD_MASK


def word_add(a: int, b: int) -> int:
    """Perform addition (wrapping at 2^16)."""
    return (a + b) & WORD_MASK


def word_sub(a: int, b: int) -> int:
    """Perform subtraction (wrapping at 2^16)."""
    return (a - b) & WORD_MASK


def word_mul(a: int, b: int) -> int:
    """Perform multiplication (wrapping at 2^16)."""
    return (a * b) & WORD_MASK


def word_div(a: int, b: int) -> int:
    """Perform unsigned division truncating toward zero. Caller rejects b == 0."""
    return a // b


def is_word(value: int) -> bool:
    return 0 <= value <= WORD_MAX
