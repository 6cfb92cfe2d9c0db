"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.constants import ADDRESS_MASK, FLAG_REGISTER, FONT_START, FONT_GLYPH_SIZE
from chip8vm.state import EmulatorState, as_u8, as_u16
from chip8vm.decode import DecodedInstruction


def _addresses(state: EmulatorState, count: int) -> jnp.ndarray:
    """``count`` consecutive addresses starting at I, wrapped to 12 bits."""
    return (int(state.I) + jnp.arange(count)) & ADDRESS_MASK


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, VF flags a result past 0xFFF."""
    new_i = int(state.I) + int(state.V[instruction.x])
    overflow_flag = int(new_i > ADDRESS_MASK)
    return state.replace(
        I=as_u16(new_i),
        V=state.V.at[FLAG_REGISTER].set(as_u8(overflow_flag))
    )


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the state comes back unchanged, PC included, so the
    host re-executes this instruction on its next step. Otherwise the lowest
    pressed key index lands in VX and PC moves on.
    """
    if not bool(jnp.any(state.keypad)):
        return state
    pressed_key = int(jnp.argmax(state.keypad))
    return state.replace(
        V=state.V.at[instruction.x].set(as_u8(pressed_key)),
        pc=as_u16(int(state.pc) + 2)
    )


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + int(state.V[instruction.x]) * FONT_GLYPH_SIZE
    return state.replace(I=as_u16(font_address))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    new_memory = state.memory.at[_addresses(state, 3)].set(digits)
    return state.replace(memory=new_memory)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    new_memory = state.memory.at[_addresses(state, count)].set(state.V[:count])
    return state.replace(memory=new_memory, I=as_u16(int(state.I) + count))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    new_V = state.V.at[:count].set(state.memory[_addresses(state, count)])
    return state.replace(V=new_V, I=as_u16(int(state.I) + count))
