import pytest
from pancake.assembler import Program, assemble, build_label_table, load_program, resolve_labels
from pancake.core.errors import (
    DuplicateLabelError,
    InvalidInstructionError,
    InvalidPushValueError,
    SourceReadError,
    UndefinedLabelError,
)
from pancake.core.instruction import Instruction, Opcode
from pancake.source import tokenize


def test_labels_point_at_following_instruction():
    """Labels are not emitted and map to the index of the next instruction."""
    source = """
    start:
    push 1
    middle:
    push 2
    add
    end:
    """
    instructions, labels = build_label_table(tokenize(source))

    assert len(instructions) == 3
    assert labels == {"start": 0, "middle": 1, "end": 3}
    assert all(instr.opcode != Opcode.LABEL for instr in instructions)


def test_forward_and_backward_references_resolve():
    source = """
    top:
    push 0
    jumpz bottom
    jump top
    bottom:
    call top
    halt
    """
    program = assemble(source)

    assert program.instructions == (
        Instruction(Opcode.PUSH, 0),
        Instruction(Opcode.JUMPZ_TO, 3),
        Instruction(Opcode.JUMP_TO, 0),
        Instruction(Opcode.CALL_TO, 0),
        Instruction(Opcode.HALT),
    )
    assert not any(instr.is_unresolved for instr in program)


def test_jumpnotz_resolves():
    program = assemble("again:\npush 1\njumpnotz again\n")
    assert program[1] == Instruction(Opcode.JUMPNOTZ_TO, 0)


def test_resolve_passes_other_instructions_through():
    instructions = [Instruction(Opcode.PUSH, 3), Instruction(Opcode.PRINT)]
    assert resolve_labels(instructions, {}) == instructions


def test_undefined_label():
    with pytest.raises(UndefinedLabelError) as exc:
        assemble("push 1\njump nowhere\n")
    assert exc.value.label == "nowhere"
    assert "Undefined label 'nowhere'" in str(exc.value)


def test_labels_are_case_sensitive():
    with pytest.raises(UndefinedLabelError):
        assemble("Loop:\njump loop\n")


def test_duplicate_label_is_rejected():
    with pytest.raises(DuplicateLabelError) as exc:
        assemble("a:\npush 1\na:\npush 2\n")
    assert exc.value.label == "a"
    assert exc.value.line == 3


def test_decode_errors_carry_line_numbers():
    source = "// comment\npush 1\n\nfrobnicate\n"
    with pytest.raises(InvalidInstructionError) as exc:
        assemble(source)
    assert exc.value.line == 4
    assert str(exc.value) == "line 4: Invalid instruction 'frobnicate'"

    with pytest.raises(InvalidPushValueError) as exc:
        assemble("push 70000")
    assert exc.value.line == 1


def test_empty_source_assembles_to_empty_program():
    program = assemble("// nothing here\n\n")
    assert len(program) == 0
    assert dict(program.labels) == {}


def test_program_labels_are_read_only():
    program = assemble("x:\npush 1\n")
    with pytest.raises(TypeError):
        program.labels["y"] = 0


def test_program_wraps_plain_instruction_lists():
    program = Program([Instruction(Opcode.HALT)])
    assert len(program) == 1
    assert list(program) == [Instruction(Opcode.HALT)]


def test_load_program(tmp_path):
    path = tmp_path / "prog.pk"
    path.write_text("push 3\npush 4\nadd\nprint\n", encoding="utf-8")
    program = load_program(str(path))
    assert [instr.opcode for instr in program] == [Opcode.PUSH, Opcode.PUSH, Opcode.ADD, Opcode.PRINT]


def test_load_program_missing_file(tmp_path):
    with pytest.raises(SourceReadError):
        load_program(str(tmp_path / "missing.pk"))
