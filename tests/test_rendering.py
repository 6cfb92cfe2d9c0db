"""Tests for rendering helpers."""

import numpy as np
import pytest
from PIL import Image
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme, create_video, save_screenshot


def test_display_to_rgb_shape_and_colors():
    display = np.zeros((64, 32), dtype=bool)
    display[1, 2] = True

    rgb = chip8_display_to_rgb(display, scale=1, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert rgb.shape == (32, 64, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[2, 1]) == (1, 2, 3)
    assert tuple(rgb[0, 0]) == (9, 9, 9)


def test_display_to_rgb_upscales():
    display = np.zeros((64, 32), dtype=bool)
    display[0, 0] = True

    rgb = chip8_display_to_rgb(display, scale=4)

    assert rgb.shape == (128, 256, 3)
    assert (rgb[:4, :4] == (0, 255, 0)).all()
    assert (rgb[4, 4] == (0, 0, 0)).all()


def test_display_to_rgb_rejects_wrong_shape():
    with pytest.raises(ValueError):
        chip8_display_to_rgb(np.zeros((32, 64), dtype=bool))


def test_color_schemes():
    assert create_color_scheme("classic") == ((0, 255, 0), (0, 0, 0))
    with pytest.raises(ValueError, match="Unknown color scheme"):
        create_color_scheme("neon")


def test_save_screenshot(tmp_path):
    display = np.zeros((64, 32), dtype=np.uint8)
    display[63, 31] = 1
    path = tmp_path / "frame.png"

    save_screenshot(display, path, scale=2, color_scheme="white")

    image = np.array(Image.open(path))
    assert image.shape == (64, 128, 3)
    assert tuple(image[63, 127]) == (255, 255, 255)
    assert tuple(image[0, 0]) == (0, 0, 0)


def test_create_video_rejects_wrong_shape(tmp_path):
    with pytest.raises(ValueError):
        create_video(np.zeros((64, 32)), str(tmp_path / "out.mp4"))
