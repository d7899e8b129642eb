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
"""Sparse keyframe models describing a predicted sequence of moves."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .entity import clamp_coordinate


@dataclass(frozen=True)
class KeyframeUpdate:
    """Cumulative target position for one entity at one step.

    Parameters
    ----------
    entity_id : str
        Identifier of the entity being moved.
    x : float
        Target horizontal percentage, clamped to ``[0, 100]``.
    y : float
        Target vertical percentage, clamped to ``[0, 100]``.
    """

    entity_id: str
    x: float
    y: float

    def __post_init__(self) -> None:
        """Clamp the target coordinates into the field."""
        object.__setattr__(self, "x", clamp_coordinate(self.x))
        object.__setattr__(self, "y", clamp_coordinate(self.y))


@dataclass(frozen=True)
class KeyframeStep:
    """One discrete step of a prediction.

    Only entities that move during the step are listed; everything else holds
    its position from the previous step.

    Parameters
    ----------
    step_index : int
        One-based position of the step in its sequence.
    updates : Tuple[KeyframeUpdate, ...], optional
        Position updates applied at this step.
    """

    step_index: int
    updates: Tuple[KeyframeUpdate, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Freeze ``updates`` into a tuple and check the index."""
        if self.step_index < 1:
            raise ValueError("step_index must be at least 1")
        object.__setattr__(self, "updates", tuple(self.updates))


KeyframeSequence = Tuple[KeyframeStep, ...]
"""Ordered, immutable run of steps; position ``i`` in the tuple is step ``i + 1``."""
