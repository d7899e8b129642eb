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
"""Editing session for a detected layout."""
from __future__ import annotations

from typing import Iterable, List, Optional

from .entity import Entity, copy_entities, ensure_unique_ids, find_entity
from .prediction import PredictionResult


class TacticalBoard:
    """Holds the detected layout alongside the user's edited copy.

    The detected layout is kept as a private value copy so resetting the board
    never depends on what callers did with the list they passed in.

    Parameters
    ----------
    detected : Iterable[Entity]
        Entities as reported by detection.
    """

    def __init__(self, detected: Iterable[Entity]) -> None:
        """Store the detected layout and start a working copy.

        Parameters
        ----------
        detected : Iterable[Entity]
            Entities as reported by detection.
        """
        self._original: List[Entity] = copy_entities(detected)
        ensure_unique_ids(self._original)
        self._working: List[Entity] = copy_entities(self._original)
        self.result: Optional[PredictionResult] = None

    @property
    def original(self) -> List[Entity]:
        """Copy of the layout as detected."""
        return copy_entities(self._original)

    @property
    def entities(self) -> List[Entity]:
        """Copy of the current edited layout."""
        return copy_entities(self._working)

    def move_entity(self, entity_id: str, x: float, y: float) -> bool:
        """Move one entity on the working layout.

        Parameters
        ----------
        entity_id : str
            Identifier of the entity being dragged.
        x : float
            Requested horizontal percentage; clamped to ``[0, 100]``.
        y : float
            Requested vertical percentage; clamped to ``[0, 100]``.

        Returns
        -------
        bool
            ``True`` when the entity exists and was moved.
        """
        entity = find_entity(self._working, entity_id)
        if entity is None:
            return False
        entity.move_to(x, y)
        # Any edit invalidates the last prediction.
        self.result = None
        return True

    def moved_entity_ids(self) -> List[str]:
        """List entities whose position differs from detection.

        Returns
        -------
        List[str]
            Ids in layout order.
        """
        moved = []
        for original, current in zip(self._original, self._working):
            if original.position != current.position:
                moved.append(current.id)
        return moved

    def reset(self) -> None:
        """Restore the detected layout and drop any prediction."""
        self._working = copy_entities(self._original)
        self.result = None

    def attach_result(self, result: PredictionResult) -> None:
        """Record the prediction for the current edit.

        Parameters
        ----------
        result : PredictionResult
            Outcome returned for the working layout.
        """
        self.result = result
