"""Tests for instruction decoding and disassembly."""

import pytest
from chip8vm import Op, UnknownOpcodeError, decode, disassemble


def test_decode_fields():
    """Bitfields are extracted once from the instruction word."""
    decoded = decode(0xD125)
    assert decoded.raw == 0xD125
    assert decoded.op is Op.DRW
    assert decoded.opcode == 0xD
    assert decoded.x == 1
    assert decoded.y == 2
    assert decoded.n == 5
    assert decoded.nn == 0x25
    assert decoded.nnn == 0x125


@pytest.mark.parametrize("instruction,op", [
    (0x00E0, Op.CLS), (0x00EE, Op.RET), (0x1234, Op.JP), (0x2345, Op.CALL),
    (0x3A12, Op.SE_BYTE), (0x4A12, Op.SNE_BYTE), (0x5AB0, Op.SE_REG),
    (0x6A12, Op.LD_BYTE), (0x7A12, Op.ADD_BYTE),
    (0x8AB0, Op.LD_REG), (0x8AB1, Op.OR), (0x8AB2, Op.AND), (0x8AB3, Op.XOR),
    (0x8AB4, Op.ADD_REG), (0x8AB5, Op.SUB), (0x8AB6, Op.SHR), (0x8AB7, Op.SUBN),
    (0x8ABE, Op.SHL), (0x9AB0, Op.SNE_REG), (0xA123, Op.LD_I), (0xB123, Op.JP_V0),
    (0xCA12, Op.RND), (0xDAB3, Op.DRW), (0xEA9E, Op.SKP), (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT), (0xFA0A, Op.LD_VX_K), (0xFA15, Op.LD_DT_VX),
    (0xFA18, Op.LD_ST_VX), (0xFA1E, Op.ADD_I), (0xFA29, Op.LD_F), (0xFA33, Op.LD_B),
    (0xFA55, Op.LD_MEM_VX), (0xFA65, Op.LD_VX_MEM),
])
def test_decode_op(instruction, op):
    assert decode(instruction).op is op


def test_every_op_is_reachable():
    """Each opcode pattern has a word that decodes to it."""
    ops = {decode(word).op for word in range(0x10000) if disassemble(word)[:2] != "DW"}
    assert ops == set(Op)


@pytest.mark.parametrize("instruction", [0x0000, 0x00E1, 0x5121, 0x8008, 0x900F, 0xE000, 0xF0FF])
def test_decode_unknown(instruction):
    with pytest.raises(UnknownOpcodeError) as excinfo:
        decode(instruction, pc=0x2A4)
    assert excinfo.value.opcode == instruction
    assert excinfo.value.pc == 0x2A4
    assert "0x2A4" in str(excinfo.value)


@pytest.mark.parametrize("instruction,text", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1228, "JP 0x228"),
    (0x612A, "LD V1, 0x2A"),
    (0x8AB4, "ADD VA, VB"),
    (0x8106, "SHR V1"),
    (0xA2F0, "LD I, 0x2F0"),
    (0xB300, "JP V0, 0x300"),
    (0xD015, "DRW V0, V1, 5"),
    (0xE39E, "SKP V3"),
    (0xF20A, "LD V2, K"),
    (0xF433, "LD B, V4"),
    (0xF355, "LD [I], V3"),
    (0xF365, "LD V3, [I]"),
    (0xFFFF, "DW 0xFFFF"),
    (0x0123, "DW 0x0123"),
])
def test_disassemble(instruction, text):
    assert disassemble(instruction) == text
