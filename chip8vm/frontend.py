"""Interactive pygame frontend for the CHIP-8 machine."""

import os
import time
from typing import Optional

import pygame

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, TIMER_FREQUENCY
from chip8vm.errors import Chip8Error
from chip8vm.logging import EmulatorLogger
from chip8vm.machine import Chip8
from chip8vm.rendering import create_color_scheme, save_screenshot

# COSMAC VIP keypad on the left block of a QWERTY keyboard:
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <-   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

MIN_IPF = 1
MAX_IPF = 100


def draw_overlay_text(surface, text_lines, position, font, bg_color=(0, 0, 0), text_color=(255, 255, 255), alpha=120):
    """Draw text with semi-transparent background overlay"""
    if not text_lines:
        return

    line_height = font.get_height()
    max_width = max(font.size(line)[0] for line in text_lines)
    overlay_height = len(text_lines) * line_height + 8
    overlay_width = max_width + 16

    overlay = pygame.Surface((overlay_width, overlay_height))
    overlay.set_alpha(alpha)
    overlay.fill(bg_color)
    surface.blit(overlay, position)

    x, y = position
    for i, line in enumerate(text_lines):
        text_surface = font.render(line, True, text_color)
        surface.blit(text_surface, (x + 8, y + 4 + i * line_height))


def draw_display(screen, machine: Chip8, scale: int, on_color, off_color):
    """Paint the framebuffer onto the window surface."""
    screen.fill(off_color)
    display = machine.framebuffer_snapshot()
    for x, y in zip(*display.nonzero()):
        pygame.draw.rect(screen, on_color, pygame.Rect(int(x) * scale, int(y) * scale, scale, scale))


def debug_lines(machine: Chip8, instruction_count: int, ipf: int, fps: float, paused: bool) -> list[str]:
    """Text for the register/status overlay."""
    state = machine.state
    lines = [
        machine.describe(),
        f"I: 0x{int(state.I):03X}  SP: {int(state.stack.pointer)}",
        f"DT: {int(state.delay_timer)}  ST: {int(state.sound_timer)}",
        f"Instructions: {instruction_count}",
        f"IPF: {ipf}  FPS: {fps:.1f}",
        f"Status: {'PAUSED' if paused else 'WAITING FOR KEY' if machine.waiting_for_key else 'RUNNING'}",
    ]
    for i in range(0, 16, 4):
        lines.append(" ".join(f"V{j:X}:{int(state.V[j]):02X}" for j in range(i, i + 4)))
    return lines


def run_emulator(
    machine: Chip8,
    scale: int = 10,
    ipf: int = 10,
    color_scheme: str = "classic",
    screenshot_dir: str = "screenshots",
    logger: Optional[EmulatorLogger] = None,
):
    """Main window loop at 60 frames per second.

    Each frame polls input into the keypad, runs ``ipf`` instructions, ticks
    the timers once and repaints when the machine asked for it.
    """
    logger = logger or EmulatorLogger()
    on_color, off_color = create_color_scheme(color_scheme)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
    pygame.display.set_caption("chip8vm")
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 18)

    instruction_count = 0
    frame_count = 0
    running = True
    paused = False
    show_debug = False
    redraw = True

    fps_start_time = time.time()
    fps_frames = 0
    current_fps = float(TIMER_FREQUENCY)

    logger.info("Controls: ESC=Quit, P=Pause, N=Skip instruction while paused, F5=Reset, +/-=Speed, F1=Debug, F12=Screenshot")

    try:
        while running:
            clock.tick(TIMER_FREQUENCY)

            fps_frames += 1
            current_time = time.time()
            if current_time - fps_start_time >= 1.0:
                current_fps = fps_frames / (current_time - fps_start_time)
                fps_frames = 0
                fps_start_time = current_time

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_p:
                        paused = not paused
                        logger.info("Paused" if paused else "Resumed")
                    elif event.key == pygame.K_n and paused:
                        machine.skip_instruction()
                        logger.info(f"Skipped to 0x{machine.pc:03X}")
                    elif event.key == pygame.K_F1:
                        show_debug = not show_debug
                        redraw = True
                    elif event.key == pygame.K_F5:
                        machine.reset()
                        instruction_count = 0
                        paused = False
                        redraw = True
                        logger.info("Reset")
                    elif event.key == pygame.K_EQUALS:
                        ipf = min(MAX_IPF, ipf + 1)
                        logger.info(f"Speed: {ipf} IPF")
                    elif event.key == pygame.K_MINUS:
                        ipf = max(MIN_IPF, ipf - 1)
                        logger.info(f"Speed: {ipf} IPF")
                    elif event.key == pygame.K_F12:
                        os.makedirs(screenshot_dir, exist_ok=True)
                        path = os.path.join(screenshot_dir, f"chip8_{time.strftime('%Y%m%d_%H%M%S')}.png")
                        save_screenshot(machine.framebuffer_snapshot(), path, color_scheme=color_scheme)
                        logger.info(f"Screenshot saved: {path}")
                    elif event.key in KEY_MAP:
                        machine.set_key(KEY_MAP[event.key], True)
                elif event.type == pygame.KEYUP:
                    if event.key in KEY_MAP:
                        machine.set_key(KEY_MAP[event.key], False)

            if not paused:
                try:
                    redraw |= machine.run_frame(ipf)
                    instruction_count += ipf
                except Chip8Error as e:
                    logger.log_fault(e, machine.pc, machine.current_instruction)
                    paused = True
                    redraw = True
                frame_count += 1
                logger.log_status(instruction_count, frame_count, interval=30.0)

            if redraw or show_debug:
                draw_display(screen, machine, scale, on_color, off_color)
                if show_debug:
                    draw_overlay_text(screen, debug_lines(machine, instruction_count, ipf, current_fps, paused),
                                      (5, 5), font, alpha=100)
                pygame.display.flip()
                redraw = False
    finally:
        pygame.quit()
