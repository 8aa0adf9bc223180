import pytest
from pancake.assembler import map_op
from pancake.core.errors import InvalidInstructionError, InvalidPushValueError, MissingArgumentError
from pancake.core.instruction import Instruction, Opcode


@pytest.mark.parametrize("mnemonic, opcode", [
    ("pop", Opcode.POP),
    ("print", Opcode.PRINT),
    ("swap", Opcode.SWAP),
    ("add", Opcode.ADD),
    ("sub", Opcode.SUB),
    ("mul", Opcode.MUL),
    ("div", Opcode.DIV),
    ("load", Opcode.LOAD),
    ("store", Opcode.STORE),
    ("ret", Opcode.RET),
    ("halt", Opcode.HALT),
])
def test_argumentless_mnemonics(mnemonic, opcode):
    """Mnemonics without operands decode with or without a stray argument."""
    assert map_op(mnemonic) == Instruction(opcode)
    assert map_op(mnemonic, "ignored") == Instruction(opcode)


def test_push_decodes_value():
    assert map_op("push", "42") == Instruction(Opcode.PUSH, 42)
    assert map_op("push", "0").operand == 0
    assert map_op("push", "65535").operand == 65535


def test_push_missing_argument():
    with pytest.raises(MissingArgumentError) as exc:
        map_op("push")
    assert exc.value.mnemonic == "push"
    assert "Missing argument for operation 'push'" in str(exc.value)


@pytest.mark.parametrize("text", ["65536", "-1", "abc", "1.5", "0x10", ""])
def test_push_invalid_value(text):
    with pytest.raises(InvalidPushValueError) as exc:
        map_op("push", text)
    assert exc.value.value == text
    assert f"Invalid push value '{text}'" in str(exc.value)


@pytest.mark.parametrize("mnemonic, opcode", [
    ("jump", Opcode.JUMP),
    ("jumpz", Opcode.JUMPZ),
    ("jumpnotz", Opcode.JUMPNOTZ),
    ("call", Opcode.CALL),
])
def test_control_flow_keeps_label_name(mnemonic, opcode):
    instr = map_op(mnemonic, "Target_1")
    assert instr.opcode == opcode
    assert instr.operand == "Target_1"
    assert instr.is_unresolved


@pytest.mark.parametrize("mnemonic", ["jump", "jumpz", "jumpnotz", "call"])
def test_control_flow_missing_label(mnemonic):
    with pytest.raises(MissingArgumentError) as exc:
        map_op(mnemonic)
    assert exc.value.mnemonic == mnemonic


@pytest.mark.parametrize("mnemonic", ["nop", "PUSH", "jump_to", "label", "dup"])
def test_unknown_mnemonic(mnemonic):
    with pytest.raises(InvalidInstructionError) as exc:
        map_op(mnemonic, "1")
    assert exc.value.mnemonic == mnemonic
    assert f"Invalid instruction '{mnemonic}'" in str(exc.value)
