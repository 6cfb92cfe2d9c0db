"""Main CHIP-8 emulator execution engine.

The engine is a set of pure functions over ``EmulatorState``. It owns no
clock: the host calls :func:`step` at its instruction rate and
:func:`tick_timers` at 60 Hz.
"""

from typing import Iterable

import jax.numpy as jnp
import numpy as np

from chip8vm.constants import ADDRESS_MASK, MAX_PROGRAM_SIZE, MEMORY_SIZE, NUM_KEYS, PROGRAM_START
from chip8vm.decode import DecodedInstruction, Op, decode
from chip8vm.errors import ProgramTooLargeError
from chip8vm.state import EmulatorState, as_u16
from chip8vm.instructions.system import execute_clear_screen, execute_return
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

HANDLERS = {
    Op.CLS: execute_clear_screen,
    Op.RET: execute_return,
    Op.JP: execute_jump,
    Op.CALL: execute_call,
    Op.SE_BYTE: execute_skip_if_equal_immediate,
    Op.SNE_BYTE: execute_skip_if_not_equal_immediate,
    Op.SE_REG: execute_skip_if_equal_register,
    Op.LD_BYTE: execute_set,
    Op.ADD_BYTE: execute_add,
    Op.LD_REG: execute_alu_operation,
    Op.OR: execute_alu_operation,
    Op.AND: execute_alu_operation,
    Op.XOR: execute_alu_operation,
    Op.ADD_REG: execute_alu_operation,
    Op.SUB: execute_alu_operation,
    Op.SHR: execute_alu_operation,
    Op.SUBN: execute_alu_operation,
    Op.SHL: execute_alu_operation,
    Op.SNE_REG: execute_skip_if_not_equal_register,
    Op.LD_I: execute_set_index,
    Op.JP_V0: execute_jump_with_offset,
    Op.RND: execute_random,
    Op.DRW: execute_display,
    Op.SKP: execute_skip_if_key,
    Op.SKNP: execute_skip_if_not_key,
    Op.LD_VX_DT: execute_get_delay_timer,
    Op.LD_VX_K: execute_wait_for_key,
    Op.LD_DT_VX: execute_set_delay_timer,
    Op.LD_ST_VX: execute_set_sound_timer,
    Op.ADD_I: execute_add_to_index,
    Op.LD_F: execute_font_character,
    Op.LD_B: execute_bcd_conversion,
    Op.LD_MEM_VX: execute_store_registers,
    Op.LD_VX_MEM: execute_load_registers,
}

_missing = set(Op) - set(HANDLERS)
if _missing:
    raise RuntimeError(f"No handler for {sorted(op.name for op in _missing)}")

# Instructions that leave PC where their handler put it
SETS_PC = frozenset({
    Op.RET, Op.JP, Op.CALL, Op.JP_V0,
    Op.SE_BYTE, Op.SNE_BYTE, Op.SE_REG, Op.SNE_REG,
    Op.SKP, Op.SKNP, Op.LD_VX_K,
})

REDRAW_OPS = frozenset({Op.CLS, Op.DRW})


def fetch(state: EmulatorState) -> int:
    """Read the big-endian instruction word at PC."""
    pc = int(state.pc)
    high = int(state.memory[pc & ADDRESS_MASK])
    low = int(state.memory[(pc + 1) & ADDRESS_MASK])
    return (high << 8) | low


def dispatch(state: EmulatorState, decoded_instruction: DecodedInstruction) -> EmulatorState:
    """Apply an already decoded instruction."""
    state = HANDLERS[decoded_instruction.op](state, decoded_instruction)
    if decoded_instruction.op not in SETS_PC:
        state = state.replace(pc=as_u16(int(state.pc) + 2))
    return state


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Raises:
        UnknownOpcodeError: the word is not in the opcode table
        StackOverflowError: CALL with a full stack
        StackUnderflowError: RET with an empty stack
    """
    return dispatch(state, decode(instruction, int(state.pc)))


def step(state: EmulatorState) -> tuple[EmulatorState, bool]:
    """Fetch and execute one instruction.

    Returns:
        The new state and whether the framebuffer needs redrawing. On error
        nothing is returned and the caller keeps its previous state.
    """
    decoded_instruction = decode(fetch(state), int(state.pc))
    return dispatch(state, decoded_instruction), decoded_instruction.op in REDRAW_OPS


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.maximum(state.delay_timer, 1) - 1,
        sound_timer=jnp.maximum(state.sound_timer, 1) - 1,
    )


def set_key(state: EmulatorState, index: int, pressed: bool) -> EmulatorState:
    """Record a keypad key as pressed or released."""
    if not 0 <= index < NUM_KEYS:
        raise ValueError(f"Key index must be in 0..{NUM_KEYS - 1}, got {index}")
    return state.replace(keypad=state.keypad.at[index].set(bool(pressed)))


def load_program(state: EmulatorState, program: bytes | Iterable[int]) -> EmulatorState:
    """Copy program bytes into memory starting at 0x200."""
    program = bytes(program)
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLargeError(len(program), MAX_PROGRAM_SIZE)
    if not program:
        return state
    rom_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)
    return state.replace(memory=new_memory)


def framebuffer_snapshot(state: EmulatorState) -> np.ndarray:
    """Copy of the display as a (64, 32) uint8 array of 0/1, indexed [x, y]."""
    return np.array(state.display, dtype=np.uint8)


def dump_memory(state: EmulatorState) -> list[tuple[int, int]]:
    """Every memory cell as an (address, byte) pair."""
    return list(enumerate(np.asarray(state.memory).tolist()))


def format_memory_dump(state: EmulatorState, start: int = 0, end: int = MEMORY_SIZE) -> str:
    """Text dump of memory, one ``[0x200]: 0x6a`` line per byte."""
    return "\n".join(
        f"[0x{address:03x}]: 0x{value:02x}"
        for address, value in dump_memory(state)[start:end]
    )
