"""Tests for configuration and the command line runner."""

import pytest
from hydra import compose, initialize
from chip8vm.cli import run
from conftest import program_bytes


def load_config(*overrides):
    with initialize(version_base=None, config_path="../chip8vm/conf"):
        return compose(config_name="config", overrides=list(overrides))


def test_default_config():
    cfg = load_config()
    assert cfg.mode == "window"
    assert cfg.ipf == 10
    assert cfg.seed == 0
    assert cfg.video is None


def test_overrides():
    cfg = load_config("ipf=15", "mode=headless", "color_scheme=amber")
    assert cfg.ipf == 15
    assert cfg.mode == "headless"
    assert cfg.color_scheme == "amber"


def test_missing_rom_is_an_error():
    assert run(load_config("log_level=ERROR")) == 2


def test_unreadable_rom(tmp_path):
    cfg = load_config(f"rom={tmp_path / 'missing.ch8'}", "mode=headless", "log_level=ERROR")
    assert run(cfg) == 1


def test_unknown_mode(tmp_path):
    rom = tmp_path / "loop.ch8"
    rom.write_bytes(program_bytes(0x1200))
    assert run(load_config(f"rom={rom}", "mode=terminal", "log_level=ERROR")) == 2


def test_headless_run_with_screenshot(tmp_path):
    rom = tmp_path / "draw.ch8"
    rom.write_bytes(program_bytes(0xD015, 0x1202))
    screenshot = tmp_path / "final.png"

    cfg = load_config(
        f"rom={rom}", "mode=headless", "frames=2", "ipf=3", "scale=1",
        f"screenshot={screenshot}", "log_level=ERROR",
    )

    assert run(cfg) == 0
    assert screenshot.exists()
