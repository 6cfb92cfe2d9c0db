"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState, as_u8, as_u16
from chip8vm.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(as_u8(instruction.nn)))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX without touching VF."""
    total = int(state.V[instruction.x]) + instruction.nn
    return state.replace(V=state.V.at[instruction.x].set(as_u8(total)))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=as_u16(instruction.nnn))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    if state.random_byte is not None:
        random_value = int(state.random_byte()) & 0xFF
        return state.replace(V=state.V.at[instruction.x].set(as_u8(random_value & instruction.nn)))

    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return state.replace(V=state.V.at[instruction.x].set(as_u8(int(random_value) & instruction.nn)), rng=key)
