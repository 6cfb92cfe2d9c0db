"""Tests for the window-less runner."""

import io

import pytest
from chip8vm import Chip8, UnknownOpcodeError
from chip8vm.headless import run_headless
from chip8vm.logging import EmulatorLogger
from conftest import program_bytes


def test_records_frames():
    machine = Chip8()
    # Draw glyph 0 once, then spin
    machine.load_program(program_bytes(0xD015, 0x1202))

    machine, frames = run_headless(machine, 3, instructions_per_frame=4, record=True, show_progress=False)

    assert frames.shape == (3, 64, 32)
    assert frames[0].sum() == frames[2].sum() > 0


def test_without_recording():
    machine = Chip8()
    machine.load_program(program_bytes(0x1200))

    machine, frames = run_headless(machine, 2, show_progress=False)

    assert frames is None
    assert machine.pc == 0x200


def test_error_without_logger_raises():
    machine = Chip8()
    machine.load_program(program_bytes(0xFFFF))

    with pytest.raises(UnknownOpcodeError):
        run_headless(machine, 2, show_progress=False)


def test_error_with_logger_stops():
    stream = io.StringIO()
    logger = EmulatorLogger(stream=stream)
    machine = Chip8()
    machine.load_program(program_bytes(0x6001, 0xFFFF))

    machine, frames = run_headless(machine, 5, record=True, logger=logger, show_progress=False)

    assert frames.shape == (0, 64, 32)
    assert machine.pc == 0x202
    assert "UnknownOpcodeError at 0x202 (FFFF DW 0xFFFF)" in stream.getvalue()
    assert "Stopped after 0 of 5 frames" in stream.getvalue()
