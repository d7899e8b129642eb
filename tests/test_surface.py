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
"""Tests for the pygame drawing surface, run against an offscreen display."""

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from ghostboard.engine.config import ENGINE_CONFIG  # noqa: E402
from ghostboard.models.entity import Entity  # noqa: E402
from ghostboard.visualizer.renderer import accent_color_for, render  # noqa: E402
from ghostboard.visualizer.surface import PygameSurface  # noqa: E402

BLACK = (0, 0, 0)


@pytest.fixture
def target():
    """Provide a black 100x60 surface wrapped for drawing."""
    pygame.init()
    pygame.font.init()
    raw = pygame.Surface((100, 60))
    surface = PygameSurface(raw)
    surface.fill(BLACK)
    yield raw, surface
    pygame.quit()


class TestPygameSurface:
    """Drawing calls land on the wrapped pygame surface."""

    def test_dimensions(self, target) -> None:
        """Width and height come from the wrapped surface."""
        _, surface = target
        assert (surface.width, surface.height) == (100, 60)

    def test_opaque_fill_rect(self, target) -> None:
        """An RGB fill paints the rectangle and nothing else."""
        raw, surface = target
        surface.fill_rect((10, 10, 20, 20), (0, 255, 0))
        assert tuple(raw.get_at((15, 15)))[:3] == (0, 255, 0)
        assert tuple(raw.get_at((40, 40)))[:3] == BLACK

    def test_translucent_fill_rect_blends(self, target) -> None:
        """An RGBA fill is blended over what is already there."""
        raw, surface = target
        surface.fill_rect((10, 10, 20, 20), (255, 0, 0, 51))
        r, g, b = tuple(raw.get_at((15, 15)))[:3]
        assert 45 <= r <= 57
        assert g == 0 and b == 0
        assert tuple(raw.get_at((5, 5)))[:3] == BLACK

    def test_circles_and_lines(self, target) -> None:
        """Circles and lines ignore the alpha channel and paint solid pixels."""
        raw, surface = target
        surface.fill_circle((50, 30), 5, (255, 255, 255, 10))
        surface.line((0, 55), (99, 55), (0, 0, 255), 1)
        surface.stroke_rect((70, 5, 20, 20), (255, 255, 0), 1)
        assert tuple(raw.get_at((50, 30)))[:3] == (255, 255, 255)
        assert tuple(raw.get_at((20, 55)))[:3] == (0, 0, 255)
        assert tuple(raw.get_at((70, 10)))[:3] == (255, 255, 0)
        assert tuple(raw.get_at((80, 15)))[:3] == BLACK

    def test_text_and_empty_text(self, target) -> None:
        """Labels render without error and an empty label draws nothing."""
        raw, surface = target
        surface.text("", (50, 30), (255, 255, 255))
        assert tuple(raw.get_at((50, 30)))[:3] == BLACK
        surface.text("ST", (50, 30), (255, 255, 255))

    def test_full_frame(self, target) -> None:
        """A whole frame renders through the pygame adapter."""
        raw, surface = target
        frame = [
            Entity("p1", "player", "home", 25, 50, "ST"),
            Entity("ball", "ball", "neutral", 50, 50, "BALL"),
            Entity("goal", "goal", "neutral", 95, 50, "GOAL"),
        ]
        render(surface, frame, accent_color_for("Goal Likely"), ENGINE_CONFIG.render)
        assert tuple(raw.get_at((1, 1)))[:3] != BLACK
