"""CHIP-8 instruction decoding."""

import enum
from typing import Optional

from chex import dataclass

from chip8vm.errors import UnknownOpcodeError


class Op(enum.Enum):
    """One member per pattern of the opcode table."""
    CLS = enum.auto()        # 00E0
    RET = enum.auto()        # 00EE
    JP = enum.auto()         # 1NNN
    CALL = enum.auto()       # 2NNN
    SE_BYTE = enum.auto()    # 3XNN
    SNE_BYTE = enum.auto()   # 4XNN
    SE_REG = enum.auto()     # 5XY0
    LD_BYTE = enum.auto()    # 6XNN
    ADD_BYTE = enum.auto()   # 7XNN
    LD_REG = enum.auto()     # 8XY0
    OR = enum.auto()         # 8XY1
    AND = enum.auto()        # 8XY2
    XOR = enum.auto()        # 8XY3
    ADD_REG = enum.auto()    # 8XY4
    SUB = enum.auto()        # 8XY5
    SHR = enum.auto()        # 8XY6
    SUBN = enum.auto()       # 8XY7
    SHL = enum.auto()        # 8XYE
    SNE_REG = enum.auto()    # 9XY0
    LD_I = enum.auto()       # ANNN
    JP_V0 = enum.auto()      # BNNN
    RND = enum.auto()        # CXNN
    DRW = enum.auto()        # DXYN
    SKP = enum.auto()        # EX9E
    SKNP = enum.auto()       # EXA1
    LD_VX_DT = enum.auto()   # FX07
    LD_VX_K = enum.auto()    # FX0A
    LD_DT_VX = enum.auto()   # FX15
    LD_ST_VX = enum.auto()   # FX18
    ADD_I = enum.auto()      # FX1E
    LD_F = enum.auto()       # FX29
    LD_B = enum.auto()       # FX33
    LD_MEM_VX = enum.auto()  # FX55
    LD_VX_MEM = enum.auto()  # FX65


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


# Families fully identified by the first nibble
_SINGLE_OP_FAMILIES = {
    0x1: Op.JP,
    0x2: Op.CALL,
    0x3: Op.SE_BYTE,
    0x4: Op.SNE_BYTE,
    0x6: Op.LD_BYTE,
    0x7: Op.ADD_BYTE,
    0xA: Op.LD_I,
    0xB: Op.JP_V0,
    0xC: Op.RND,
    0xD: Op.DRW,
}

_SYSTEM_OPS = {0x00E0: Op.CLS, 0x00EE: Op.RET}

_REGISTER_COMPARE_OPS = {0x5: Op.SE_REG, 0x9: Op.SNE_REG}

_ALU_OPS = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

_KEY_OPS = {0x9E: Op.SKP, 0xA1: Op.SKNP}

_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_B,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}

_MNEMONICS = {
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SE_BYTE: "SE V{x:X}, 0x{nn:02X}",
    Op.SNE_BYTE: "SNE V{x:X}, 0x{nn:02X}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.LD_BYTE: "LD V{x:X}, 0x{nn:02X}",
    Op.ADD_BYTE: "ADD V{x:X}, 0x{nn:02X}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{nnn:03X}",
    Op.JP_V0: "JP V0, 0x{nnn:03X}",
    Op.RND: "RND V{x:X}, 0x{nn:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I: "ADD I, V{x:X}",
    Op.LD_F: "LD F, V{x:X}",
    Op.LD_B: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
}


def _classify(instruction: int) -> Optional[Op]:
    """Match the narrowest nibble group of the instruction's family."""
    family = (instruction & 0xF000) >> 12
    if family in _SINGLE_OP_FAMILIES:
        return _SINGLE_OP_FAMILIES[family]
    if family == 0x0:
        return _SYSTEM_OPS.get(instruction)
    if family in _REGISTER_COMPARE_OPS:
        return _REGISTER_COMPARE_OPS[family] if instruction & 0x000F == 0 else None
    if family == 0x8:
        return _ALU_OPS.get(instruction & 0x000F)
    if family == 0xE:
        return _KEY_OPS.get(instruction & 0x00FF)
    return _MISC_OPS.get(instruction & 0x00FF)


def decode(instruction: int, pc: Optional[int] = None) -> DecodedInstruction:
    """Decode 16-bit instruction into components.

    Raises:
        UnknownOpcodeError: if the word matches no opcode pattern. ``pc`` is
            only used to enrich the error.
    """
    instruction = int(instruction) & 0xFFFF
    op = _classify(instruction)
    if op is None:
        raise UnknownOpcodeError(instruction, pc)
    return DecodedInstruction(
        raw=instruction,
        op=op,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


def disassemble(instruction: int) -> str:
    """Render an instruction word as an assembler mnemonic, e.g. ``LD V1, 0x2A``."""
    try:
        decoded = decode(instruction)
    except UnknownOpcodeError:
        return f"DW 0x{int(instruction) & 0xFFFF:04X}"
    return _MNEMONICS[decoded.op].format(x=decoded.x, y=decoded.y, n=decoded.n, nn=decoded.nn, nnn=decoded.nnn)
