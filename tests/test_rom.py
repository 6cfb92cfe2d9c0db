"""Tests for ROM file reading."""

import pytest
from chip8vm import ProgramTooLargeError, MAX_PROGRAM_SIZE
from chip8vm.rom import read_rom


def test_read_rom(tmp_path):
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0\x12\x00")
    assert read_rom(path) == b"\x00\xE0\x12\x00"


def test_read_missing_rom(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_rom(tmp_path / "missing.ch8")


def test_read_oversized_rom(tmp_path):
    path = tmp_path / "big.ch8"
    path.write_bytes(bytes(MAX_PROGRAM_SIZE + 1))
    with pytest.raises(ProgramTooLargeError):
        read_rom(path)
