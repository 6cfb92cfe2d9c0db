"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import Chip8, create_state, load_program


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def machine():
    """Provide a fresh machine facade."""
    return Chip8(seed=0)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program_bytes(*instructions):
    """Assemble 16-bit instruction words into big-endian program bytes."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


def state_with_program(state, *instructions):
    """Load instruction words at 0x200."""
    return load_program(state, program_bytes(*instructions))
