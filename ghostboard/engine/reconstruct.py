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
"""Rebuild full snapshots from a sparse keyframe sequence.

Each keyframe step lists only the entities that move, so the world at step
``k`` is the initial layout with steps ``1..k`` folded over it. The fold is
pure: the same inputs always give identical positions, which is what lets the
replay scrub backwards and forwards without drifting.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ghostboard.models.entity import Entity, copy_entities
from ghostboard.models.keyframe import KeyframeStep
from ghostboard.utils.debug import PlaybackDebugger


def _clamp_step(at_step: int, step_count: int) -> int:
    """Limit a requested step to the valid ``[0, step_count]`` range.

    Parameters
    ----------
    at_step : int
        Requested step index.
    step_count : int
        Number of steps in the sequence.

    Returns
    -------
    int
        Clamped step index.
    """
    return max(0, min(step_count, int(at_step)))


def _apply_step(
    working: List[Entity],
    index: Dict[str, Entity],
    step: KeyframeStep,
    step_number: int,
    debugger: Optional[PlaybackDebugger] = None,
) -> None:
    """Overwrite positions on ``working`` for every update in ``step``.

    Parameters
    ----------
    working : List[Entity]
        Snapshot being built; modified in place.
    index : Dict[str, Entity]
        Lookup from id to the entities inside ``working``.
    step : KeyframeStep
        Step whose updates are applied.
    step_number : int
        One-based position of ``step`` in its sequence, used for logging.
    debugger : PlaybackDebugger | None, optional
        Receives a line for every update naming an unknown entity.
    """
    for update in step.updates:
        entity = index.get(update.entity_id)
        if entity is None:
            if debugger:
                debugger.log_ignored_update(step_number, update.entity_id)
            continue
        entity.x = update.x
        entity.y = update.y


def reconstruct(
    initial: Sequence[Entity],
    sequence: Sequence[KeyframeStep],
    at_step: int,
    debugger: Optional[PlaybackDebugger] = None,
) -> List[Entity]:
    """Compute the full snapshot after ``at_step`` keyframe steps.

    Parameters
    ----------
    initial : Sequence[Entity]
        Layout at step 0; never modified.
    sequence : Sequence[KeyframeStep]
        Keyframe steps in order.
    at_step : int
        Number of steps to apply; clamped to ``[0, len(sequence)]``.
    debugger : PlaybackDebugger | None, optional
        Receives a line for every update naming an unknown entity.

    Returns
    -------
    List[Entity]
        Fresh entities in the order of ``initial``.
    """
    working = copy_entities(initial)
    index = {entity.id: entity for entity in working}
    for step_number in range(1, _clamp_step(at_step, len(sequence)) + 1):
        _apply_step(working, index, sequence[step_number - 1], step_number, debugger)
    return working


class SnapshotCache:
    """Cumulative snapshots for every step of one sequence.

    Folding from scratch on every frame costs ``O(N)`` per lookup. The cache
    folds once when the sequence is loaded and then serves copies, producing
    exactly what :func:`reconstruct` would for the same step.

    Parameters
    ----------
    initial : Sequence[Entity]
        Layout at step 0.
    sequence : Sequence[KeyframeStep]
        Keyframe steps in order.
    debugger : PlaybackDebugger | None, optional
        Receives a line for every update naming an unknown entity.
    """

    def __init__(
        self,
        initial: Sequence[Entity],
        sequence: Sequence[KeyframeStep],
        debugger: Optional[PlaybackDebugger] = None,
    ) -> None:
        """Fold the sequence once and keep every intermediate snapshot.

        Parameters
        ----------
        initial : Sequence[Entity]
            Layout at step 0.
        sequence : Sequence[KeyframeStep]
            Keyframe steps in order.
        debugger : PlaybackDebugger | None, optional
            Receives a line for every update naming an unknown entity.
        """
        working = copy_entities(initial)
        index = {entity.id: entity for entity in working}
        self._snapshots: List[List[Entity]] = [copy_entities(working)]
        for step_number, step in enumerate(sequence, start=1):
            _apply_step(working, index, step, step_number, debugger)
            self._snapshots.append(copy_entities(working))

    @property
    def step_count(self) -> int:
        """Number of keyframe steps covered by the cache."""
        return len(self._snapshots) - 1

    def snapshot(self, at_step: int) -> List[Entity]:
        """Return a copy of the snapshot after ``at_step`` steps.

        Parameters
        ----------
        at_step : int
            Number of steps applied; clamped to ``[0, step_count]``.

        Returns
        -------
        List[Entity]
            Fresh entities the caller may mutate freely.
        """
        return copy_entities(self._snapshots[_clamp_step(at_step, self.step_count)])
