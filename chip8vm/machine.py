"""Stateful CHIP-8 machine facade for hosts.

:class:`Chip8` is the single owner of an :class:`EmulatorState`. Each call
runs the matching pure function from :mod:`chip8vm.emulator` and keeps the
returned state. When a call raises, the previous state is kept.
"""

from typing import Callable, Iterable, Optional

import numpy as np

from chip8vm import emulator
from chip8vm.decode import disassemble
from chip8vm.state import EmulatorState, as_u16, create_state


class Chip8:
    """CHIP-8 virtual machine driven by a host loop.

    Args:
        seed: Seed for the random source used by ``CXNN``
        random_byte: Optional callable returning 0-255 that replaces the seeded source
        logger: Optional :class:`chip8vm.logging.ConsoleLogger` for lifecycle messages
    """

    def __init__(
        self,
        seed: int = 0,
        random_byte: Optional[Callable[[], int]] = None,
        logger=None,
    ):
        self.seed = seed
        self.random_byte = random_byte
        self.logger = logger
        self.program = b""
        self._state: EmulatorState = None
        self.initialize()

    @property
    def state(self) -> EmulatorState:
        return self._state

    def initialize(self, seed: Optional[int] = None):
        """Zero all state, reinstall the font and reseed the random source."""
        if seed is not None:
            self.seed = seed
        self._state = create_state(self.seed, random_byte=self.random_byte)
        if self.logger:
            self.logger.debug(f"Machine initialized (seed={self.seed})")

    def load_program(self, program: bytes | Iterable[int]):
        """Copy a program into memory at 0x200."""
        program = bytes(program)
        self._state = emulator.load_program(self._state, program)
        self.program = program
        if self.logger:
            self.logger.debug(f"Loaded {len(program)} bytes at 0x200")

    def reset(self):
        """Initialize and reload the last loaded program."""
        self.initialize()
        if self.program:
            self.load_program(self.program)

    def step(self) -> bool:
        """Execute one instruction; returns whether the screen needs redrawing."""
        self._state, redraw = emulator.step(self._state)
        return redraw

    def skip_instruction(self):
        """Move PC past the current instruction without executing it."""
        self._state = self._state.replace(pc=as_u16(int(self._state.pc) + 2))

    def run_frame(self, instructions_per_frame: int) -> bool:
        """Run one 60 Hz frame: ``instructions_per_frame`` steps then one timer tick."""
        redraw = False
        for _ in range(instructions_per_frame):
            redraw |= self.step()
        self.tick_timers()
        return redraw

    def tick_timers(self):
        self._state = emulator.tick_timers(self._state)

    def set_key(self, index: int, pressed: bool):
        self._state = emulator.set_key(self._state, index, pressed)

    def framebuffer_snapshot(self) -> np.ndarray:
        return emulator.framebuffer_snapshot(self._state)

    def dump_memory(self) -> list[tuple[int, int]]:
        return emulator.dump_memory(self._state)

    @property
    def pc(self) -> int:
        return int(self._state.pc)

    @property
    def current_instruction(self) -> int:
        """Instruction word at PC."""
        return emulator.fetch(self._state)

    @property
    def waiting_for_key(self) -> bool:
        """True while PC sits on an FX0A key wait."""
        return self.current_instruction & 0xF0FF == 0xF00A

    @property
    def sound_active(self) -> bool:
        return int(self._state.sound_timer) > 0

    def describe(self) -> str:
        """One-line summary of PC and the instruction it points at."""
        return f"PC=0x{self.pc:03X} {self.current_instruction:04X} {disassemble(self.current_instruction)}"
