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
"""Paint a snapshot onto any 2D drawing surface.

The renderer is stateless: it reads a snapshot, draws it, and keeps nothing.
Drawing goes through the small :class:`DrawingSurface` protocol so the same
code paints a pygame window or a recording surface in tests.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Tuple

from ghostboard.engine.config import ENGINE_CONFIG, Color, RenderConfig
from ghostboard.models.entity import Entity

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]

# Goals underneath, then players, then the ball on top.
_LAYER = {"goal": 0, "player": 1, "ball": 2}


class DrawingSurface(Protocol):
    """Minimal drawing API the renderer relies on."""

    @property
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    def height(self) -> int:
        """Surface height in pixels."""
        ...

    def fill(self, color: Color) -> None:
        """Clear the whole surface.

        Parameters
        ----------
        color : Color
            Fill colour.
        """
        ...

    def fill_rect(self, rect: Rect, color: Color) -> None:
        """Fill a rectangle; 4-tuple colours carry alpha.

        Parameters
        ----------
        rect : Rect
            ``(left, top, width, height)`` in pixels.
        color : Color
            RGB or RGBA colour.
        """
        ...

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
        ...

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
        ...

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
        ...

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
        ...

    def text(self, text: str, position: Point, color: Color) -> None:
        """Draw text horizontally centred on ``position`` with its baseline there.

        Parameters
        ----------
        text : str
            String to draw.
        position : Point
            Anchor in pixels.
        color : Color
            Text colour.
        """
        ...


def to_pixels(x: float, y: float, width: float, height: float) -> Point:
    """Map percentage coordinates onto a surface.

    Parameters
    ----------
    x : float
        Horizontal percentage.
    y : float
        Vertical percentage.
    width : float
        Surface width in pixels.
    height : float
        Surface height in pixels.

    Returns
    -------
    Point
        Pixel coordinates ``(x / 100 * width, y / 100 * height)``.
    """
    return x / 100 * width, y / 100 * height


def accent_color_for(verdict: str, config: Optional[RenderConfig] = None) -> Color:
    """Pick the accent colour that matches a verdict.

    Parameters
    ----------
    verdict : str
        Verdict label from the prediction.
    config : RenderConfig | None, optional
        Palette; defaults to ``ENGINE_CONFIG.render``.

    Returns
    -------
    Color
        Accent colour for goal markers and overlays.
    """
    cfg = config or ENGINE_CONFIG.render
    return cfg.verdict_accents.get(verdict, cfg.default_accent)


def side_color(side: str, config: Optional[RenderConfig] = None) -> Color:
    """Return the fill colour for a player's side.

    Parameters
    ----------
    side : str
        ``"home"``, ``"away"`` or ``"neutral"``.
    config : RenderConfig | None, optional
        Palette; defaults to ``ENGINE_CONFIG.render``.

    Returns
    -------
    Color
        Fill colour; unknown sides use the neutral colour.
    """
    cfg = config or ENGINE_CONFIG.render
    if side == "home":
        return cfg.home
    if side == "away":
        return cfg.away
    return cfg.neutral


def draw_order(snapshot: Iterable[Entity]) -> List[Entity]:
    """Order entities so the ball lands on top of anything it overlaps.

    Parameters
    ----------
    snapshot : Iterable[Entity]
        Entities in snapshot order.

    Returns
    -------
    List[Entity]
        Goals, then players, then balls; stable within each group.
    """
    return sorted(snapshot, key=lambda entity: _LAYER.get(entity.kind, 1))


def draw_field(surface: DrawingSurface, config: Optional[RenderConfig] = None) -> None:
    """Clear the surface and draw the background grid.

    Parameters
    ----------
    surface : DrawingSurface
        Target surface.
    config : RenderConfig | None, optional
        Palette; defaults to ``ENGINE_CONFIG.render``.
    """
    cfg = config or ENGINE_CONFIG.render
    width, height = surface.width, surface.height
    surface.fill(cfg.background)
    for x in range(0, width + 1, cfg.grid_size):
        surface.line((x, 0), (x, height), cfg.grid, 1)
    for y in range(0, height + 1, cfg.grid_size):
        surface.line((0, y), (width, y), cfg.grid, 1)


def draw_entity(
    surface: DrawingSurface,
    entity: Entity,
    accent_color: Color,
    config: Optional[RenderConfig] = None,
) -> None:
    """Draw one entity in the style of its kind.

    Parameters
    ----------
    surface : DrawingSurface
        Target surface.
    entity : Entity
        Entity to draw; not modified.
    accent_color : Color
        Colour used for goal markers.
    config : RenderConfig | None, optional
        Palette; defaults to ``ENGINE_CONFIG.render``.
    """
    cfg = config or ENGINE_CONFIG.render
    center = to_pixels(entity.x, entity.y, surface.width, surface.height)
    cx, cy = center

    if entity.kind == "ball":
        surface.fill_circle(center, cfg.ball_radius, cfg.ball)
    elif entity.kind == "goal":
        goal_w, goal_h = cfg.goal_size
        rect = (cx - goal_w / 2, cy - goal_h / 2, goal_w, goal_h)
        surface.fill_rect(rect, (*accent_color[:3], cfg.goal_fill_alpha))
        surface.stroke_rect(rect, accent_color, cfg.goal_line_width)
    else:
        surface.fill_circle(center, cfg.player_radius, side_color(entity.side, cfg))
        surface.stroke_circle(center, cfg.player_radius, cfg.ring, 1)
        surface.text(entity.label, (cx, cy + cfg.label_offset), cfg.label)


def render(
    surface: DrawingSurface,
    snapshot: Iterable[Entity],
    accent_color: Color,
    config: Optional[RenderConfig] = None,
) -> None:
    """Paint a full frame.

    Parameters
    ----------
    surface : DrawingSurface
        Target surface; the only thing modified.
    snapshot : Iterable[Entity]
        Entities to draw.
    accent_color : Color
        Verdict accent used for goal markers.
    config : RenderConfig | None, optional
        Palette; defaults to ``ENGINE_CONFIG.render``.
    """
    cfg = config or ENGINE_CONFIG.render
    draw_field(surface, cfg)
    for entity in draw_order(snapshot):
        draw_entity(surface, entity, accent_color, cfg)
