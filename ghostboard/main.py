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
"""Entry point for replaying a saved prediction, with or without a window."""
import argparse
from typing import List, Optional

from ghostboard.engine.playback import PlaybackEngine
from ghostboard.models.board import TacticalBoard
from ghostboard.models.entity import Entity
from ghostboard.models.prediction import PredictionResult, probability_band
from ghostboard.utils.debug import PlaybackDebugger
from ghostboard.utils.loader import load_layout_from_json, load_prediction_from_json


def format_frame(frame: List[Entity]) -> str:
    """Summarise entity positions on one line.

    Parameters
    ----------
    frame : List[Entity]
        Snapshot to describe.

    Returns
    -------
    str
        ``label(x, y)`` pairs separated by spaces.
    """
    return " ".join(f"{e.label}({e.x:.1f}, {e.y:.1f})" for e in frame)


def print_prediction_summary(result: PredictionResult) -> None:
    """Print the verdict and probability shift.

    Parameters
    ----------
    result : PredictionResult
        Prediction to describe.
    """
    print(f"Verdict: {result.verdict}")
    if result.is_inconclusive:
        print("The prediction could not be produced; showing a static frame.")
    delta = result.probability_delta
    sign = "+" if delta >= 0 else ""
    print(
        f"Scoring probability: {result.original_win_probability:.0f}% -> "
        f"{result.new_win_probability:.0f}% ({sign}{delta:.0f}, {probability_band(result.new_win_probability)})"
    )
    if result.is_big_jump:
        print("Big swing: the edit turns this into a likely score.")
    if result.analysis:
        print(f"\n{result.analysis}")
    if result.butterfly_effect:
        print(f"Butterfly effect: {result.butterfly_effect}")


def run_headless(engine: PlaybackEngine, max_ticks: Optional[int] = None) -> int:
    """Play the sequence to the end without a window, printing each step.

    Parameters
    ----------
    engine : PlaybackEngine
        Engine to drive.
    max_ticks : int | None, optional
        Safety limit on the number of ticks.

    Returns
    -------
    int
        Number of ticks that advanced the cursor.
    """
    print(f"Step 0/{engine.step_count}: {format_frame(engine.current_frame())}")
    if engine.step_count == 0:
        return 0

    engine.play()
    ticks = 0
    last_step = 0
    while engine.tick():
        ticks += 1
        cursor = engine.cursor()
        if cursor.step_index != last_step:
            last_step = cursor.step_index
            print(f"Step {last_step}/{cursor.step_count}: {format_frame(engine.current_frame())}")
        if max_ticks is not None and ticks >= max_ticks:
            engine.pause()
            break
    return ticks


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the ``ghostboard`` command.
    """
    parser = argparse.ArgumentParser(description="Replay a predicted play over an edited layout.")
    parser.add_argument("layout", help="JSON file with the edited entity layout")
    parser.add_argument("prediction", help="JSON file with the simulation service response")
    parser.add_argument("--headless", action="store_true", help="print frames instead of opening a window")
    parser.add_argument("--fps", type=int, default=None, help="window frame rate")
    parser.add_argument("--log-dir", default=None, help="write a playback debug log to this directory")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Load a layout and prediction, then replay them.

    Parameters
    ----------
    argv : List[str] | None, optional
        Command line arguments; ``sys.argv`` when omitted.

    Returns
    -------
    int
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    debugger = PlaybackDebugger(args.log_dir) if args.log_dir else None

    try:
        board = TacticalBoard(load_layout_from_json(args.layout))
        result = load_prediction_from_json(args.prediction, debugger)
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error loading replay input: {e}")
        if debugger:
            debugger.close()
        return 1

    board.attach_result(result)
    print_prediction_summary(result)

    engine = PlaybackEngine(board.entities, result.sequence, debugger=debugger)
    try:
        if args.headless:
            run_headless(engine)
        else:
            from ghostboard.visualizer.visualizer import start_visualizer

            start_visualizer(engine, result, fps=args.fps)
    except KeyboardInterrupt:
        print("\nReplay interrupted.")
    finally:
        engine.dispose()
        if debugger:
            debugger.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
