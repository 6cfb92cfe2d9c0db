"""CHIP-8 emulator package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import (
    execute, fetch, step, tick_timers, set_key, load_program,
    framebuffer_snapshot, dump_memory, format_memory_dump,
)
from chip8vm.decode import DecodedInstruction, Op, decode, disassemble
from chip8vm.errors import (
    Chip8Error, UnknownOpcodeError, StackOverflowError, StackUnderflowError, ProgramTooLargeError,
)
from chip8vm.machine import Chip8
from chip8vm.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "set_key",
    "load_program",
    "framebuffer_snapshot",
    "dump_memory",
    "format_memory_dump",
    "DecodedInstruction",
    "Op",
    "decode",
    "disassemble",
    "Chip8Error",
    "UnknownOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "ProgramTooLargeError",
    "Chip8",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
