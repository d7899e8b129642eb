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
"""Replay engine that turns a keyframe sequence into smooth frames.

The engine owns a single cursor measured in progress units from 0 to 100. A
frame is never carried over from the previous tick: every call maps the
current progress to a pair of bracketing keyframe snapshots and interpolates
between them. Seeking is therefore exact no matter how playback got there.

Cursor mutations are serialised through a lock so a visualizer thread can tick
the engine while another thread issues transport commands.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from threading import Lock
from typing import List, Literal, Optional, Sequence, Tuple

from ghostboard.models.entity import Entity, find_entity
from ghostboard.models.keyframe import KeyframeStep
from ghostboard.utils.debug import PlaybackDebugger

from .config import ENGINE_CONFIG, PlaybackConfig
from .reconstruct import SnapshotCache

PlaybackState = Literal["stopped", "playing", "finished"]

PROGRESS_MIN = 0.0
PROGRESS_MAX = 100.0


def clamp_progress(progress: float) -> float:
    """Clamp a progress value into ``[0, 100]``.

    Parameters
    ----------
    progress : float
        Raw progress, possibly out of range.

    Returns
    -------
    float
        ``progress`` limited to the valid range.
    """
    return max(PROGRESS_MIN, min(PROGRESS_MAX, float(progress)))


def lerp(start: float, end: float, t: float) -> float:
    """Linearly interpolate between two values.

    Parameters
    ----------
    start : float
        Value at ``t == 0``.
    end : float
        Value at ``t == 1``.
    t : float
        Interpolation fraction.

    Returns
    -------
    float
        ``start * (1 - t) + end * t``.
    """
    return start * (1 - t) + end * t


def locate(progress: float, step_count: int) -> Tuple[int, int, float]:
    """Map progress to the bracketing steps and the fraction between them.

    Parameters
    ----------
    progress : float
        Cursor position in ``[0, 100]``.
    step_count : int
        Number of keyframe steps ``N``.

    Returns
    -------
    Tuple[int, int, float]
        ``(step_index, next_step_index, fraction)``. With no steps this is
        always ``(0, 0, 0.0)``.
    """
    if step_count <= 0:
        return 0, 0, 0.0
    scaled = clamp_progress(progress) / 100 * step_count
    step_index = min(int(math.floor(scaled)), step_count)
    next_step_index = min(step_index + 1, step_count)
    return step_index, next_step_index, scaled - step_index


def interpolate(start: Sequence[Entity], end: Sequence[Entity], fraction: float) -> List[Entity]:
    """Blend two compatible snapshots.

    Parameters
    ----------
    start : Sequence[Entity]
        Snapshot at the earlier step; provides order and non-positional fields.
    end : Sequence[Entity]
        Snapshot at the later step.
    fraction : float
        Blend factor, 0 yields ``start`` and 1 yields ``end`` positions.

    Returns
    -------
    List[Entity]
        New entities with interpolated positions.
    """
    frame = []
    for start_entity in start:
        end_entity = find_entity(end, start_entity.id) or start_entity
        moved = start_entity.copy()
        moved.x = lerp(start_entity.x, end_entity.x, fraction)
        moved.y = lerp(start_entity.y, end_entity.y, fraction)
        frame.append(moved)
    return frame


@dataclass(frozen=True)
class PlaybackCursor:
    """Read-only view of the cursor for transport displays.

    Parameters
    ----------
    progress : float
        Position in ``[0, 100]``.
    state : PlaybackState
        ``"stopped"``, ``"playing"`` or ``"finished"``.
    step_index : int
        Keyframe step the cursor sits in.
    fraction : float
        Position between ``step_index`` and the following step.
    step_count : int
        Number of steps in the loaded sequence.
    """

    progress: float
    state: PlaybackState
    step_index: int
    fraction: float
    step_count: int

    @property
    def is_playing(self) -> bool:
        """Whether playback is advancing."""
        return self.state == "playing"


class PlaybackEngine:
    """Transport and frame computation for one predicted sequence.

    Parameters
    ----------
    initial : Sequence[Entity]
        Layout at step 0; copied, never modified.
    sequence : Sequence[KeyframeStep]
        Keyframe steps produced by the prediction service.
    config : PlaybackConfig | None, optional
        Timing configuration; defaults to ``ENGINE_CONFIG.playback``.
    debugger : PlaybackDebugger | None, optional
        Optional session log for transitions, seeks and step changes.
    """

    def __init__(
        self,
        initial: Sequence[Entity],
        sequence: Sequence[KeyframeStep],
        config: Optional[PlaybackConfig] = None,
        debugger: Optional[PlaybackDebugger] = None,
    ) -> None:
        """Load the sequence and place the cursor at the start.

        Parameters
        ----------
        initial : Sequence[Entity]
            Layout at step 0; copied, never modified.
        sequence : Sequence[KeyframeStep]
            Keyframe steps produced by the prediction service.
        config : PlaybackConfig | None, optional
            Timing configuration; defaults to ``ENGINE_CONFIG.playback``.
        debugger : PlaybackDebugger | None, optional
            Optional session log for transitions, seeks and step changes.
        """
        self.config = config or ENGINE_CONFIG.playback
        self.debugger = debugger
        self._lock = Lock()
        self._disposed = False
        self._progress = PROGRESS_MIN
        self._state: PlaybackState = "stopped"
        self._last_step = 0
        self._sequence: Tuple[KeyframeStep, ...] = ()
        self._cache = SnapshotCache((), ())
        self.load(initial, sequence)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def progress(self) -> float:
        """Current cursor position in ``[0, 100]``."""
        return self._progress

    @property
    def state(self) -> PlaybackState:
        """Current transport state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        """Whether the cursor advances on each tick."""
        return self._state == "playing"

    @property
    def is_finished(self) -> bool:
        """Whether playback stopped by reaching the end."""
        return self._state == "finished"

    @property
    def is_disposed(self) -> bool:
        """Whether :meth:`dispose` has been called."""
        return self._disposed

    @property
    def step_count(self) -> int:
        """Number of keyframe steps in the loaded sequence."""
        return len(self._sequence)

    @property
    def initial(self) -> List[Entity]:
        """Copy of the step-0 layout."""
        return self._cache.snapshot(0)

    def cursor(self) -> PlaybackCursor:
        """Capture the cursor for a transport display.

        Returns
        -------
        PlaybackCursor
            Immutable view of progress, state and the derived step position.
        """
        with self._lock:
            progress, state = self._progress, self._state
        step_index, _, fraction = locate(progress, self.step_count)
        return PlaybackCursor(progress, state, step_index, fraction, self.step_count)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def load(self, initial: Sequence[Entity], sequence: Sequence[KeyframeStep]) -> None:
        """Replace the sequence and rewind to a stopped cursor at 0.

        Parameters
        ----------
        initial : Sequence[Entity]
            Layout at step 0; copied, never modified.
        sequence : Sequence[KeyframeStep]
            New keyframe steps.
        """
        with self._lock:
            if self._disposed:
                return
            self._sequence = tuple(sequence)
            self._cache = SnapshotCache(initial, self._sequence, self.debugger)
            self._progress = PROGRESS_MIN
            self._last_step = 0
            self._set_state("stopped")

    def play(self) -> None:
        """Start advancing; replays from 0 when already at the end."""
        with self._lock:
            if self._disposed:
                return
            if self._progress >= PROGRESS_MAX:
                self._progress = PROGRESS_MIN
                self._last_step = 0
            self._set_state("playing")

    def pause(self) -> None:
        """Stop advancing at the current progress."""
        with self._lock:
            if self._disposed or self._state != "playing":
                return
            self._set_state("stopped")

    def toggle(self) -> None:
        """Pause when playing, otherwise play.

        The check and the change happen under one lock so two callers can
        never both see the same state and act on it.
        """
        with self._lock:
            if self._disposed:
                return
            if self._state == "playing":
                self._set_state("stopped")
                return
            if self._progress >= PROGRESS_MAX:
                self._progress = PROGRESS_MIN
                self._last_step = 0
            self._set_state("playing")

    def seek(self, progress: float) -> None:
        """Jump to ``progress`` and stop.

        Parameters
        ----------
        progress : float
            Requested position; clamped to ``[0, 100]``.
        """
        with self._lock:
            if self._disposed:
                return
            applied = clamp_progress(progress)
            if self.debugger:
                self.debugger.log_seek(progress, applied)
            self._progress = applied
            self._track_step()
            self._set_state("stopped")

    def reset(self) -> None:
        """Rewind to 0 without playing."""
        self.seek(PROGRESS_MIN)

    def tick(self) -> bool:
        """Advance the cursor by one animation frame.

        Returns
        -------
        bool
            ``True`` when progress moved; ``False`` when not playing or disposed.
        """
        with self._lock:
            if self._disposed or self._state != "playing":
                return False
            self._progress = min(PROGRESS_MAX, self._progress + self.config.progress_per_tick)
            self._track_step()
            if self._progress >= PROGRESS_MAX:
                self._set_state("finished")
            return True

    def dispose(self) -> None:
        """Detach the engine from its owner; later calls become no-ops."""
        with self._lock:
            if self._state == "playing":
                self._set_state("stopped")
            self._disposed = True

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------
    def snapshot_at_step(self, at_step: int) -> List[Entity]:
        """Return the reconstructed snapshot after ``at_step`` steps.

        Parameters
        ----------
        at_step : int
            Step index; clamped to ``[0, step_count]``.

        Returns
        -------
        List[Entity]
            Fresh copy of the snapshot.
        """
        return self._cache.snapshot(at_step)

    def compute_frame(self, progress: float) -> List[Entity]:
        """Compute the interpolated frame for an arbitrary progress value.

        Parameters
        ----------
        progress : float
            Position in ``[0, 100]``; clamped when out of range.

        Returns
        -------
        List[Entity]
            Fresh entities positioned for ``progress``.
        """
        step_index, next_step_index, fraction = locate(progress, self.step_count)
        start = self._cache.snapshot(step_index)
        if next_step_index == step_index:
            return start
        end = self._cache.snapshot(next_step_index)
        return interpolate(start, end, fraction)

    def current_frame(self) -> List[Entity]:
        """Compute the frame at the cursor.

        Returns
        -------
        List[Entity]
            Fresh entities positioned for the current progress.
        """
        with self._lock:
            progress = self._progress
        return self.compute_frame(progress)

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------
    def _set_state(self, new_state: PlaybackState) -> None:
        """Switch state and log the transition.

        Parameters
        ----------
        new_state : PlaybackState
            State to enter.
        """
        previous = self._state
        self._state = new_state
        if self.debugger and previous != new_state:
            self.debugger.log_transition(self._progress, previous, new_state)

    def _track_step(self) -> None:
        """Log when the cursor crosses into a different keyframe step."""
        step_index, _, _ = locate(self._progress, self.step_count)
        if step_index != self._last_step:
            self._last_step = step_index
            if self.debugger:
                self.debugger.log_step(self._progress, step_index, self.step_count)
