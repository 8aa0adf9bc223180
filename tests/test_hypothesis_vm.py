import io

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

from pancake.assembler import assemble, map_op
from pancake.core.errors import InvalidPushValueError, VMError
from pancake.core.instruction import MNEMONICS
from pancake.vm import run_source

word_strategy = st.integers(min_value=0, max_value=0xFFFF)


def run_and_capture(source):
    out = io.StringIO()
    state = run_source(source, output=out)
    return out.getvalue(), state


@settings(max_examples=300, deadline=None)
@given(value=word_strategy)
def test_push_print_outputs_value(value):
    """Any 16-bit value pushed and printed comes back out unchanged."""
    output, _ = run_and_capture(f"push {value}\nprint\n")
    assert output == f"{value}\n"


@settings(max_examples=200, deadline=None)
@given(value=st.one_of(st.integers(max_value=-1), st.integers(min_value=0x10000)))
def test_push_rejects_out_of_range(value):
    with pytest.raises(InvalidPushValueError):
        map_op("push", str(value))


@settings(max_examples=200, deadline=None)
@given(a=word_strategy, b=word_strategy)
def test_binary_arithmetic_wraps(a, b):
    source = "\n".join([
        f"push {a}", f"push {b}", "add", "print", "pop",
        f"push {a}", f"push {b}", "sub", "print", "pop",
        f"push {a}", f"push {b}", "mul", "print", "pop",
    ])
    output, state = run_and_capture(source)
    assert output.splitlines() == [
        str((a + b) % 65536),
        str((a - b) % 65536),
        str((a * b) % 65536),
    ]
    assert state.stack == []


@settings(max_examples=200, deadline=None)
@given(a=word_strategy, b=st.integers(min_value=1, max_value=0xFFFF))
def test_division_truncates(a, b):
    output, _ = run_and_capture(f"push {a}\npush {b}\ndiv\nprint\n")
    assert output == f"{a // b}\n"


@settings(max_examples=200, deadline=None)
@given(value=word_strategy, addr=st.integers(min_value=0, max_value=2000))
def test_store_load_round_trip(value, addr):
    output, state = run_and_capture(f"push {value}\npush {addr}\nstore\npush {addr}\nload\nprint\n")
    assert output == f"{value}\n"
    assert len(state.memory) == addr + 1
    assert all(cell == 0 for cell in state.memory[:addr])


# Strategy for generating straight-line programs from the argumentless mnemonics and pushes
@composite
def straight_line_program(draw):
    simple = sorted(m for m in MNEMONICS if m not in ("push", "jump", "jumpz", "jumpnotz", "call"))
    lines = []
    length = draw(st.integers(min_value=0, max_value=40))
    for _ in range(length):
        if draw(st.booleans()):
            lines.append(f"push {draw(word_strategy)}")
        else:
            lines.append(draw(st.sampled_from(simple)))
    return "\n".join(lines)


@settings(max_examples=300, deadline=None)
@given(source=straight_line_program())
def test_straight_line_programs_only_fail_with_vm_errors(source):
    """Random programs either finish or raise a VMError; values stay 16-bit."""
    program = assemble(source)
    try:
        _, state = run_and_capture(source)
    except VMError:
        return
    assert state.steps <= len(program)
    assert all(0 <= v <= 0xFFFF for v in state.stack)
    assert all(0 <= v <= 0xFFFF for v in state.memory)
