"""Window-less CHIP-8 runner."""

from typing import Optional

import numpy as np

from chip8vm.errors import Chip8Error
from chip8vm.logging import EmulatorLogger, progress
from chip8vm.machine import Chip8


def run_headless(
    machine: Chip8,
    frames: int,
    instructions_per_frame: int = 10,
    record: bool = False,
    logger: Optional[EmulatorLogger] = None,
    show_progress: bool = True,
) -> tuple[Chip8, Optional[np.ndarray]]:
    """Run ``frames`` 60 Hz frames without a window.

    Stops early on a :class:`Chip8Error`, which is logged when a logger is
    given and re-raised otherwise.

    Returns:
        The machine and, when ``record`` is set, an array of shape
        (frames_run, 64, 32) holding the framebuffer after every frame
    """
    recorded = []
    frame_iter = progress(frames) if show_progress else range(frames)

    for frame in frame_iter:
        try:
            machine.run_frame(instructions_per_frame)
        except Chip8Error as e:
            if logger is None:
                raise
            logger.log_fault(e, machine.pc, machine.current_instruction)
            logger.warning(f"Stopped after {frame} of {frames} frames")
            break
        if record:
            recorded.append(machine.framebuffer_snapshot())

    if not record:
        return machine, None
    if not recorded:
        return machine, np.zeros((0, *machine.framebuffer_snapshot().shape), dtype=np.uint8)
    return machine, np.stack(recorded)
