"""ROM file reading."""

import os

from chip8vm.constants import MAX_PROGRAM_SIZE
from chip8vm.errors import ProgramTooLargeError


def read_rom(filename: str | os.PathLike) -> bytes:
    """Read a CHIP-8 ROM image from disk.

    Raises:
        FileNotFoundError: the file does not exist
        ProgramTooLargeError: the image does not fit above 0x200
    """
    with open(filename, 'rb') as f:
        rom_data = f.read()
    if len(rom_data) > MAX_PROGRAM_SIZE:
        raise ProgramTooLargeError(len(rom_data), MAX_PROGRAM_SIZE)
    return rom_data
