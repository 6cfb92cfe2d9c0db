"""CHIP-8 emulator state structures."""

from typing import Callable, Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.constants import (
    MEMORY_SIZE, NUM_REGISTERS, NUM_KEYS, PROGRAM_START, FONT_START, FONT_DATA,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
)


@dataclass(frozen=True)
class StackState:
    """Return-address stack for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Complete CHIP-8 machine state.

    Every operation returns a new state; nothing is mutated in place.
    ``display`` is indexed ``[x, y]``. ``random_byte``, when set, replaces
    the PRNG key as the source of ``CXNN`` random bytes.
    """
    rng: jax.Array
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    random_byte: Optional[Callable[[], int]] = field(pytree_node=False, default=None)


def as_u8(value: int) -> jnp.ndarray:
    """Wrap a Python int into an 8-bit scalar."""
    return jnp.asarray(int(value) & 0xFF, dtype=jnp.uint8)


def as_u16(value: int) -> jnp.ndarray:
    """Wrap a Python int into a 16-bit scalar."""
    return jnp.asarray(int(value) & 0xFFFF, dtype=jnp.uint16)


def create_state(
    rng: jax.Array | int = 0,
    random_byte: Optional[Callable[[], int]] = None,
) -> EmulatorState:
    """Create a zeroed emulator state with the font table loaded.

    Args:
        rng: PRNG key, or an integer seed to build one from
        random_byte: Optional callable returning 0-255, used instead of the key

    Returns:
        Fresh state with PC at PROGRAM_START
    """
    if isinstance(rng, int):
        rng = jax.random.PRNGKey(rng)
    state = EmulatorState(rng, random_byte=random_byte)
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))
