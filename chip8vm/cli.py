"""Command line entry point.

Configuration lives in ``conf/config.yaml``; any key can be overridden on the
command line, e.g. ``chip8vm rom=pong.ch8 ipf=15 mode=headless frames=600``.
"""

import sys

import hydra
from omegaconf import DictConfig, OmegaConf

from chip8vm.errors import Chip8Error
from chip8vm.headless import run_headless
from chip8vm.logging import EmulatorLogger
from chip8vm.machine import Chip8
from chip8vm.rendering import create_video, save_screenshot
from chip8vm.rom import read_rom

MODES = ("window", "headless")


def build_machine(cfg: DictConfig, logger: EmulatorLogger) -> Chip8:
    """Create a machine with the configured ROM loaded."""
    machine = Chip8(seed=cfg.seed, logger=logger)
    machine.load_program(read_rom(cfg.rom))
    logger.info(f"Loaded: {cfg.rom} ({len(machine.program)} bytes)")
    return machine


def run(cfg: DictConfig) -> int:
    """Run the configured session; returns a process exit code."""
    logger = EmulatorLogger(log_level=cfg.log_level)
    logger.log_session_start(OmegaConf.to_container(cfg))

    if OmegaConf.is_missing(cfg, "rom"):
        logger.error("No ROM given, pass rom=path/to/game.ch8")
        return 2

    if cfg.mode not in MODES:
        logger.error(f"Unknown mode '{cfg.mode}'. Available: {list(MODES)}")
        return 2

    try:
        machine = build_machine(cfg, logger)
    except (OSError, Chip8Error) as e:
        logger.error(f"Could not load ROM: {e}")
        return 1

    if cfg.mode == "window":
        from chip8vm.frontend import run_emulator

        run_emulator(
            machine,
            scale=cfg.scale,
            ipf=cfg.ipf,
            color_scheme=cfg.color_scheme,
            screenshot_dir=cfg.screenshot_dir,
            logger=logger,
        )
        return 0

    machine, frames = run_headless(
        machine, cfg.frames, cfg.ipf, record=cfg.video is not None, logger=logger
    )
    logger.info(machine.describe())
    if cfg.video is not None:
        written = create_video(frames, cfg.video, scale=cfg.scale, color_scheme=cfg.color_scheme)
        logger.info(f"Video saved: {cfg.video} ({written} frames)")
    if cfg.screenshot is not None:
        save_screenshot(machine.framebuffer_snapshot(), cfg.screenshot, scale=cfg.scale, color_scheme=cfg.color_scheme)
        logger.info(f"Screenshot saved: {cfg.screenshot}")
    return 0


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    code = run(cfg)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
