"""Console logging utilities for the CHIP-8 hosts.

This module provides a small level-filtered console logger with optional
colors, an emulator-specific subclass for session, status and error lines,
and a tqdm progress helper for headless runs.
"""

import time
import sys
from typing import Any, Dict, Iterator, Optional, TextIO

from tqdm import tqdm

from chip8vm.decode import disassemble

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
RESET_COLOR = "\033[0m"


class ConsoleLogger:
    """Level-filtered console logger writing to ``stream`` (stdout by default).

    Colors are only used when the stream is a terminal.
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")

        self.name = name
        self.log_level = level
        self.stream = stream or sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>7s}]"
        if self.use_colors:
            level_str = f"{LEVEL_COLORS[level]}{level_str}{RESET_COLOR}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for emulator sessions: configuration, throughput and faults."""

    def __init__(self, name: str = "chip8vm", **kwargs):
        super().__init__(name, **kwargs)
        self.last_status_time = time.time()

    def log_session_start(self, config: Dict[str, Any]):
        """Log the session configuration."""
        self.info("=" * 60)
        self.info("Starting session with configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_status(self, instruction_count: int, frame_count: int, interval: float = 5.0):
        """Log throughput at most once every ``interval`` seconds."""
        current_time = time.time()
        if current_time - self.last_status_time < interval:
            return
        self.last_status_time = current_time

        elapsed = current_time - self.start_time
        ips = instruction_count / elapsed if elapsed > 0 else 0.0
        fps = frame_count / elapsed if elapsed > 0 else 0.0
        self.info(
            f"Instructions: {instruction_count} | "
            f"CPU: {ips:.0f} Hz | FPS: {fps:.1f}"
        )

    def log_fault(self, error: Exception, pc: int, instruction: Optional[int] = None):
        """Log an engine error with the address and instruction it happened at."""
        if instruction is None:
            self.error(f"{type(error).__name__} at 0x{pc:03X}: {error}")
        else:
            self.error(
                f"{type(error).__name__} at 0x{pc:03X} "
                f"({instruction:04X} {disassemble(instruction)}): {error}"
            )


def progress(n: int, desc: Optional[str] = None, **kwargs) -> Iterator[int]:
    """Iterate ``range(n)`` behind a tqdm progress bar."""
    if desc is None:
        desc = f"Running ({n:,} frames)"

    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)

    with tqdm(total=n, desc=desc, unit="frame", **kwargs) as bar:
        for i in range(n):
            yield i
            bar.update(1)
