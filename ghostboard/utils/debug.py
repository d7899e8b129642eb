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
"""Structured logging utilities used to trace replay sessions."""
import time
from collections import deque
from pathlib import Path
from threading import Lock
from typing import Deque, List, Optional, TextIO, Tuple


class PlaybackDebugger:
    """Helper object that streams playback telemetry to disk.

    Parameters
    ----------
    output_dir : str | None, default="debug_logs"
        Directory where new session logs are created; created automatically when
        missing. ``None`` keeps entries in memory only.
    """

    def __init__(self, output_dir: Optional[str] = "debug_logs") -> None:
        """Initialise the debugger and start the first logging session.

        Parameters
        ----------
        output_dir : str | None
            Filesystem directory where log files are created, or ``None``.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        self.log_file: Optional[TextIO] = None
        self.session_start = time.strftime("%Y%m%d_%H%M%S")
        self._lock = Lock()
        self._line_number = 1
        self._recent_events: Deque[Tuple[int, str]] = deque(maxlen=200)
        self.start_new_session()

    @property
    def log_path(self) -> Optional[Path]:
        """Path of the current session file, if writing to disk."""
        if self.output_dir is None:
            return None
        return self.output_dir / f"playback_debug_{self.session_start}.txt"

    def start_new_session(self) -> None:
        """Start a new debug logging session."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None

        path = self.log_path
        if path is None:
            return
        self.log_file = open(path, "w", encoding="utf-8")
        self.log_file.write(f"=== Playback Debug Session: {time.strftime('%Y-%m-%d %H:%M:%S')} ===\n\n")

    def log_transition(self, progress: float, previous: str, current: str) -> None:
        """Log a change of playback state.

        Parameters
        ----------
        progress : float
            Cursor progress when the transition happened.
        previous : str
            State before the transition.
        current : str
            State after the transition.
        """
        self._write_log("STATE", f"Progress: {progress:.1f} | {previous} -> {current}")

    def log_seek(self, requested: float, applied: float) -> None:
        """Log a manual seek.

        Parameters
        ----------
        requested : float
            Progress value asked for by the caller.
        applied : float
            Progress value after clamping.
        """
        clamped = " (clamped)" if requested != applied else ""
        self._write_log("SEEK", f"Requested: {requested:.1f} | Applied: {applied:.1f}{clamped}")

    def log_step(self, progress: float, step_index: int, step_count: int) -> None:
        """Log the cursor entering a new keyframe step.

        Parameters
        ----------
        progress : float
            Cursor progress at the boundary.
        step_index : int
            Step the cursor now sits in.
        step_count : int
            Total steps in the loaded sequence.
        """
        self._write_log("STEP", f"Progress: {progress:.1f} | Step {step_index}/{step_count}")

    def log_ignored_update(self, step_index: int, entity_id: str) -> None:
        """Log a keyframe update that names an unknown entity.

        Parameters
        ----------
        step_index : int
            Step carrying the update.
        entity_id : str
            Identifier missing from the initial layout.
        """
        self._write_log("IGNORED_UPDATE", f"Step {step_index} | Unknown entity: {entity_id}")

    def log_error(self, error_type: str, description: str) -> None:
        """Log an error or warning.

        Parameters
        ----------
        error_type : str
            Label describing the error classification.
        description : str
            Human-readable explanation of the issue.
        """
        self._write_log("ERROR", f"Type: {error_type} | Details: {description}")

    def _write_log(self, event_type: str, details: str) -> None:
        """Write a log entry to the file.

        Parameters
        ----------
        event_type : str
            Category label for the log entry.
        details : str
            Formatted message body to persist.
        """
        timestamp = time.strftime("%H:%M:%S")
        log_entry = f"[{timestamp}] {event_type}: {details}"

        with self._lock:
            line_no = self._line_number
            self._line_number += 1
            self._recent_events.append((line_no, log_entry))

            if self.log_file:
                self.log_file.write(f"{log_entry}\n")
                self.log_file.flush()

    def get_recent_events(self, limit: int = 20) -> List[str]:
        """Return the latest debug entries with line numbers for live displays.

        Parameters
        ----------
        limit : int
            Maximum number of entries to return.

        Returns
        -------
        List[str]
            Up to ``limit`` most recent log lines with prefixed line numbers.
        """
        with self._lock:
            selected = list(self._recent_events)[-limit:]
        return [f"{line_no:05d} {entry}" for line_no, entry in selected]

    def close(self) -> None:
        """Close the log file."""
        if self.log_file:
            self.log_file.close()
            self.log_file = None
