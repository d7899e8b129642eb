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
"""Central configuration for playback timing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

Color = Tuple[int, ...]


@dataclass(slots=True)
class PlaybackConfig:
    """Timing controls for the replay loop.

    Parameters
    ----------
    progress_per_tick : float, default=0.5
        Progress units (out of 100) advanced on every animation frame.
    fps : int, default=60
        Frame rate the visualizer targets.
    """

    progress_per_tick: float = 0.5  # ~200 frames for a full replay
    fps: int = 60


@dataclass(slots=True)
class RenderConfig:
    """Colours and sizes used when painting a snapshot.

    Parameters
    ----------
    surface_size : Tuple[int, int], default=(800, 450)
        Default drawing surface size in pixels.
    background : Color, default=(24, 24, 27)
        Fill colour behind the grid.
    grid : Color, default=(39, 39, 42)
        Grid line colour.
    grid_size : int, default=40
        Grid cell size in pixels.
    home : Color, default=(16, 185, 129)
        Home player fill.
    away : Color, default=(59, 130, 246)
        Away player fill.
    neutral : Color, default=(113, 113, 122)
        Neutral player fill.
    ball : Color, default=(255, 255, 255)
        Ball fill.
    ring : Color, default=(255, 255, 255)
        Outline drawn around players.
    label : Color, default=(255, 255, 255)
        Player label colour.
    ball_radius : float, default=6.0
        Ball radius in pixels.
    player_radius : float, default=8.0
        Player marker radius in pixels.
    label_offset : float, default=20.0
        Vertical distance from a player's centre to its label baseline.
    goal_size : Tuple[float, float], default=(40.0, 20.0)
        Goal marker width and height in pixels.
    goal_line_width : int, default=3
        Goal outline thickness.
    goal_fill_alpha : int, default=51
        Alpha of the translucent goal fill.
    verdict_accents : Dict[str, Color]
        Accent colour per verdict label.
    default_accent : Color, default=(59, 130, 246)
        Accent used for verdicts without a dedicated colour.
    """

    surface_size: Tuple[int, int] = (800, 450)
    background: Color = (24, 24, 27)
    grid: Color = (39, 39, 42)
    grid_size: int = 40
    home: Color = (16, 185, 129)
    away: Color = (59, 130, 246)
    neutral: Color = (113, 113, 122)
    ball: Color = (255, 255, 255)
    ring: Color = (255, 255, 255)
    label: Color = (255, 255, 255)
    ball_radius: float = 6.0
    player_radius: float = 8.0
    label_offset: float = 20.0
    goal_size: Tuple[float, float] = (40.0, 20.0)
    goal_line_width: int = 3
    goal_fill_alpha: int = 51  # 0x33
    verdict_accents: Dict[str, Color] = field(
        default_factory=lambda: {
            "Goal Likely": (16, 185, 129),
            "Defense Likely": (244, 63, 94),
        }
    )
    default_accent: Color = (59, 130, 246)


@dataclass(slots=True)
class EngineConfig:
    """Top-level container for all configuration structures.

    Parameters
    ----------
    playback : PlaybackConfig, default=PlaybackConfig()
        Replay timing.
    render : RenderConfig, default=RenderConfig()
        Renderer palette and sizes.
    """

    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


ENGINE_CONFIG = EngineConfig()
"""Singleton-style access to the engine configuration."""
