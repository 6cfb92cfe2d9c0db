"""Tests for register load/add, index and random instructions."""

import itertools

import pytest
from chip8vm import create_state, execute


class TestSetRegister:
    """Test 6XNN."""

    @pytest.mark.parametrize("x", range(16))
    def test_set_every_register(self, fresh_state, x):
        """6XNN - VX = NN and PC advances by exactly 2."""
        for nn in (0x00, 0x01, 0x7F, 0xFF):
            state = execute(fresh_state, 0x6000 | (x << 8) | nn)
            assert state.V[x] == nn
            assert state.pc == fresh_state.pc + 2

    def test_set_leaves_other_registers(self, fresh_state):
        """6XNN - Only VX changes."""
        state = execute(fresh_state, 0x6A42)
        assert state.V[0xA] == 0x42
        assert int(state.V.sum()) == 0x42


class TestAddImmediate:
    """Test 7XNN."""

    def test_add_basic(self, fresh_state):
        """7XNN - Add NN to VX."""
        state = execute(fresh_state, 0x6110)
        state = execute(state, 0x7105)
        assert state.V[1] == 0x15

    def test_add_wraps_without_carry(self, fresh_state):
        """7XNN - Overflow wraps and VF is untouched."""
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0x07))
        state = execute(state, 0x61FF)
        state = execute(state, 0x7102)
        assert state.V[1] == 0x01
        assert state.V[15] == 0x07


class TestIndex:
    """Test ANNN."""

    def test_set_index(self, fresh_state):
        """ANNN - I = NNN."""
        state = execute(fresh_state, 0xA123)
        assert state.I == 0x123
        assert state.pc == 0x202


class TestRandom:
    """Test CXNN."""

    def test_random_from_injected_source(self):
        """CXNN - Injected byte source is masked by NN."""
        state = create_state(random_byte=lambda: 0xAB)
        state = execute(state, 0xC30F)
        assert state.V[3] == 0x0B
        state = execute(state, 0xC3F0)
        assert state.V[3] == 0xA0

    def test_random_fixed_sequence(self):
        """CXNN - Successive draws consume the injected sequence in order."""
        values = iter([0x12, 0x34, 0x56])
        state = create_state(random_byte=lambda: next(values))
        for x in range(3):
            state = execute(state, 0xC0FF | (x << 8))
        assert [int(v) for v in state.V[:3]] == [0x12, 0x34, 0x56]

    def test_random_mask_zero(self, fresh_state):
        """CXNN - NN = 0 always yields 0."""
        state = execute(fresh_state, 0xC500)
        assert state.V[5] == 0

    def test_random_seeded_is_deterministic(self):
        """CXNN - Same seed gives same bytes, and the key advances."""
        first = create_state(42)
        second = create_state(42)

        first = execute(execute(first, 0xC0FF), 0xC1FF)
        second = execute(execute(second, 0xC0FF), 0xC1FF)

        assert first.V[0] == second.V[0]
        assert first.V[1] == second.V[1]
        assert not (first.rng == create_state(42).rng).all()

    def test_random_draws_vary(self):
        """CXNN - Repeated draws from the seeded key are not all equal."""
        state = create_state(7)
        seen = set()
        for _ in range(16):
            state = execute(state, 0xC0FF)
            seen.add(int(state.V[0]))
        assert len(seen) > 1

    def test_cycle_source(self):
        """CXNN - Any zero-argument callable works as a source."""
        source = itertools.cycle([0xFF, 0x00])
        state = create_state(random_byte=source.__next__)
        state = execute(state, 0xC1FF)
        state = execute(state, 0xC2FF)
        assert state.V[1] == 0xFF
        assert state.V[2] == 0x00
