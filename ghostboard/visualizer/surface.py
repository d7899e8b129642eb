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
"""pygame implementation of the renderer's drawing surface."""
from typing import Any, Optional

try:
    import pygame
except Exception:
    pygame = None

from ghostboard.engine.config import Color

from .renderer import Point, Rect


class PygameSurface:
    """Adapter that exposes a ``pygame.Surface`` as a ``DrawingSurface``.

    Parameters
    ----------
    surface : Any
        Target ``pygame.Surface``.
    font : Any, optional
        ``pygame.font.Font`` used for labels; a small system font when omitted.
    """

    def __init__(self, surface: Any, font: Optional[Any] = None) -> None:
        """Wrap ``surface`` and resolve the label font.

        Parameters
        ----------
        surface : Any
            Target ``pygame.Surface``.
        font : Any, optional
            ``pygame.font.Font`` used for labels.
        """
        if pygame is None:
            raise RuntimeError("pygame is required for PygameSurface")
        self.surface = surface
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont(None, 14)
        self.font = font

    @property
    def width(self) -> int:
        """Surface width in pixels."""
        return self.surface.get_width()

    @property
    def height(self) -> int:
        """Surface height in pixels."""
        return self.surface.get_height()

    def fill(self, color: Color) -> None:
        """Clear the whole surface.

        Parameters
        ----------
        color : Color
            Fill colour.
        """
        self.surface.fill(color)

    def fill_rect(self, rect: Rect, color: Color) -> None:
        """Fill a rectangle, blending when ``color`` carries alpha.

        Parameters
        ----------
        rect : Rect
            ``(left, top, width, height)`` in pixels.
        color : Color
            RGB or RGBA colour.
        """
        left, top, w, h = (int(round(v)) for v in rect)
        if len(color) == 4:
            # Per-pixel alpha needs an intermediate surface; draw.rect ignores it.
            overlay = pygame.Surface((w, h), pygame.SRCALPHA)
            overlay.fill(color)
            self.surface.blit(overlay, (left, top))
        else:
            pygame.draw.rect(self.surface, color, (left, top, w, h))

    def stroke_rect(self, rect: Rect, color: Color, width: int) -> None:
        """Outline a rectangle.

        Parameters
        ----------
        rect : Rect
            ``(left, top, width, height)`` in pixels.
        color : Color
            Outline colour.
        width : int
            Line thickness in pixels.
        """
        left, top, w, h = (int(round(v)) for v in rect)
        pygame.draw.rect(self.surface, color[:3], (left, top, w, h), width)

    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        """Fill a circle.

        Parameters
        ----------
        center : Point
            Centre in pixels.
        radius : float
            Radius in pixels.
        color : Color
            Fill colour.
        """
        pygame.draw.circle(self.surface, color[:3], _round_point(center), radius)

    def stroke_circle(self, center: Point, radius: float, color: Color, width: int) -> None:
        """Outline a circle.

        Parameters
        ----------
        center : Point
            Centre in pixels.
        radius : float
            Radius in pixels.
        color : Color
            Outline colour.
        width : int
            Line thickness in pixels.
        """
        pygame.draw.circle(self.surface, color[:3], _round_point(center), radius, width)

    def line(self, start: Point, end: Point, color: Color, width: int) -> None:
        """Draw a straight line.

        Parameters
        ----------
        start : Point
            First endpoint in pixels.
        end : Point
            Second endpoint in pixels.
        color : Color
            Line colour.
        width : int
            Line thickness in pixels.
        """
        pygame.draw.line(self.surface, color[:3], _round_point(start), _round_point(end), width)

    def text(self, text: str, position: Point, color: Color) -> None:
        """Draw text centred on ``position`` with its baseline there.

        Parameters
        ----------
        text : str
            String to draw.
        position : Point
            Anchor in pixels.
        color : Color
            Text colour.
        """
        if not text:
            return
        rendered = self.font.render(text, True, color[:3])
        x, y = _round_point(position)
        self.surface.blit(rendered, (x - rendered.get_width() // 2, y - self.font.get_ascent()))


def _round_point(point: Point) -> "tuple[int, int]":
    """Round a float point to integer pixels.

    Parameters
    ----------
    point : Point
        Point in pixels.

    Returns
    -------
    tuple[int, int]
        Rounded coordinates.
    """
    return int(round(point[0])), int(round(point[1]))
