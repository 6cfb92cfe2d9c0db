"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.constants import ADDRESS_MASK, FLAG_REGISTER, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.state import EmulatorState, as_u8
from chip8vm.decode import DecodedInstruction

# Bit offsets within a sprite row, MSB first
_columns = jnp.arange(8)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Every pixel wraps around the screen edges independently. VF is set when
    any lit pixel is switched off.
    """
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    rows = jnp.arange(instruction.n)

    sprite_bytes = state.memory[(int(state.I) + rows) & ADDRESS_MASK]
    bits = ((sprite_bytes[:, None] >> (7 - _columns)[None, :]) & 1).astype(jnp.bool_)

    xs = (sprite_x + _columns) % SCREEN_WIDTH
    ys = (sprite_y + rows) % SCREEN_HEIGHT
    sprite = jnp.zeros_like(state.display).at[xs[None, :], ys[:, None]].set(bits)

    collision = bool(jnp.any(state.display & sprite))
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(as_u8(collision))
    )
