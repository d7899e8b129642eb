# Copyright (C) 2025 Richard Owen
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""pygame window that drives a replay and its transport controls."""
from typing import Optional, Tuple

try:
    import pygame
except Exception:
    pygame = None

from ghostboard.engine.config import ENGINE_CONFIG
from ghostboard.engine.playback import PlaybackEngine, clamp_progress
from ghostboard.models.prediction import PredictionResult

from .renderer import accent_color_for, render
from .surface import PygameSurface

CONTROLS_HEIGHT = 64


def scrub_progress(mouse_x: float, bar_left: float, bar_width: float) -> float:
    """Convert a click on the scrub bar into a progress value.

    Parameters
    ----------
    mouse_x : float
        Pointer x coordinate in window pixels.
    bar_left : float
        Left edge of the scrub bar.
    bar_width : float
        Width of the scrub bar.

    Returns
    -------
    float
        Progress in ``[0, 100]``.
    """
    if bar_width <= 0:
        return 0.0
    return clamp_progress((mouse_x - bar_left) / bar_width * 100)


def start_visualizer(
    engine: PlaybackEngine,
    result: PredictionResult,
    screen_size: Optional[Tuple[int, int]] = None,
    fps: Optional[int] = None,
    autoplay: bool = True,
) -> None:
    """Open a pygame window that replays ``result`` through ``engine``.

    One engine tick runs per rendered frame. Space toggles playback, ``r``
    rewinds, ``q`` quits and clicking or dragging on the scrub bar seeks. If
    `pygame` is not installed the function will return immediately.

    Parameters
    ----------
    engine : PlaybackEngine
        Engine loaded with the prediction's sequence; disposed on exit.
    result : PredictionResult
        Prediction providing the verdict shown in the overlay.
    screen_size : Tuple[int, int] | None, optional
        Replay area size; defaults to ``ENGINE_CONFIG.render.surface_size``.
    fps : int | None, optional
        Frame rate; defaults to ``ENGINE_CONFIG.playback.fps``.
    autoplay : bool, optional
        Start playing as soon as the window opens.
    """
    if pygame is None:
        # pygame not available; skip visualizer
        return

    render_cfg = ENGINE_CONFIG.render
    field_w, field_h = screen_size or render_cfg.surface_size
    fps = fps or ENGINE_CONFIG.playback.fps

    pygame.init()
    screen = pygame.display.set_mode((field_w, field_h + CONTROLS_HEIGHT))
    pygame.display.set_caption("Prediction Replay")
    clock = pygame.time.Clock()

    font = pygame.font.SysFont(None, 18)
    small_font = pygame.font.SysFont(None, 14)
    verdict_font = pygame.font.SysFont(None, 48)

    accent = accent_color_for(result.verdict, render_cfg)
    field = PygameSurface(screen.subsurface((0, 0, field_w, field_h)), small_font)

    PANEL = (24, 24, 27)
    TRACK = (63, 63, 70)
    MUTED = (113, 113, 122)
    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)

    button_rect = pygame.Rect(16, field_h + 12, 40, 40)
    bar_rect = pygame.Rect(button_rect.right + 16, field_h + 22, field_w - button_rect.right - 32, 8)

    if autoplay:
        engine.play()

    scrubbing = False
    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_SPACE:
                    engine.toggle()
                elif event.key == pygame.K_r:
                    engine.reset()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if button_rect.collidepoint(event.pos):
                    engine.toggle()
                elif bar_rect.inflate(0, 16).collidepoint(event.pos):
                    scrubbing = True
                    engine.seek(scrub_progress(event.pos[0], bar_rect.left, bar_rect.width))
            elif event.type == pygame.MOUSEMOTION and scrubbing:
                engine.seek(scrub_progress(event.pos[0], bar_rect.left, bar_rect.width))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                scrubbing = False

        if not running:
            break

        engine.tick()
        cursor = engine.cursor()
        render(field, engine.current_frame(), accent, render_cfg)

        # Badge
        badge = small_font.render("PREDICTION REPLAY", True, WHITE)
        badge_bg = pygame.Surface((badge.get_width() + 12, badge.get_height() + 8), pygame.SRCALPHA)
        badge_bg.fill((0, 0, 0, 150))
        screen.blit(badge_bg, (field_w - badge_bg.get_width() - 12, 12))
        screen.blit(badge, (field_w - badge.get_width() - 18, 16))

        if result.is_inconclusive:
            tag = small_font.render("INCONCLUSIVE", True, (245, 158, 11))
            screen.blit(tag, (12, 16))

        # Verdict overlay once the replay has run out
        if cursor.progress >= 100:
            overlay = pygame.Surface((field_w, field_h), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 100))
            screen.blit(overlay, (0, 0))
            text = verdict_font.render(result.verdict.upper(), True, accent[:3])
            screen.blit(text, ((field_w - text.get_width()) // 2, (field_h - text.get_height()) // 2))

        # Controls
        pygame.draw.rect(screen, PANEL, (0, field_h, field_w, CONTROLS_HEIGHT))
        pygame.draw.circle(screen, WHITE, button_rect.center, button_rect.w // 2)
        cx, cy = button_rect.center
        if cursor.is_playing:
            pygame.draw.rect(screen, BLACK, (cx - 7, cy - 8, 5, 16))
            pygame.draw.rect(screen, BLACK, (cx + 2, cy - 8, 5, 16))
        else:
            pygame.draw.polygon(screen, BLACK, [(cx - 5, cy - 9), (cx - 5, cy + 9), (cx + 9, cy)])

        pygame.draw.rect(screen, TRACK, bar_rect, border_radius=4)
        filled = bar_rect.copy()
        filled.width = int(bar_rect.width * cursor.progress / 100)
        pygame.draw.rect(screen, render_cfg.home, filled, border_radius=4)
        pygame.draw.circle(screen, WHITE, (filled.right, bar_rect.centery), 7)

        screen.blit(small_font.render("NOW", True, MUTED), (bar_rect.left, bar_rect.bottom + 10))
        end_label = small_font.render("PREDICTED OUTCOME (+3s)", True, MUTED)
        screen.blit(end_label, (bar_rect.right - end_label.get_width(), bar_rect.bottom + 10))
        step_text = f"Step {cursor.step_index}/{cursor.step_count}"
        step_label = font.render(step_text, True, WHITE)
        screen.blit(step_label, ((field_w - step_label.get_width()) // 2, bar_rect.bottom + 8))

        pygame.display.flip()
        clock.tick(fps)

    # Window gone: make any late tick from another owner a no-op.
    engine.dispose()
    pygame.quit()
