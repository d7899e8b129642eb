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
"""Tests for snapshot reconstruction."""

from ghostboard.engine.reconstruct import SnapshotCache, reconstruct
from ghostboard.models.entity import Entity, find_entity
from ghostboard.models.keyframe import KeyframeStep, KeyframeUpdate
from ghostboard.utils.debug import PlaybackDebugger


def _initial() -> list:
    return [
        Entity("ball", "ball", "neutral", 50, 50, "BALL"),
        Entity("p1", "player", "home", 40, 50, "ST"),
        Entity("p2", "player", "away", 80, 20, "CB"),
    ]


def _sequence() -> tuple:
    return (
        KeyframeStep(1, (KeyframeUpdate("ball", 60, 50),)),
        KeyframeStep(2, (KeyframeUpdate("ball", 70, 40), KeyframeUpdate("p1", 55, 48))),
        KeyframeStep(3, (KeyframeUpdate("p2", 75, 30),)),
    )


def _pos(snapshot: list, entity_id: str) -> tuple:
    return find_entity(snapshot, entity_id).position


class TestReconstruct:
    """Tests for the fold over keyframe steps."""

    def test_step_zero_is_fresh_copy(self) -> None:
        """Step 0 equals the initial layout but shares nothing with it."""
        initial = _initial()
        snapshot = reconstruct(initial, _sequence(), 0)
        assert snapshot == initial
        snapshot[0].move_to(0, 0)
        assert initial[0].position == (50.0, 50.0)

    def test_cumulative_updates(self) -> None:
        """Each step applies on top of the previous ones."""
        initial = _initial()
        sequence = _sequence()
        assert _pos(reconstruct(initial, sequence, 1), "ball") == (60.0, 50.0)
        step2 = reconstruct(initial, sequence, 2)
        assert _pos(step2, "ball") == (70.0, 40.0)
        assert _pos(step2, "p1") == (55.0, 48.0)
        assert _pos(step2, "p2") == (80.0, 20.0)

    def test_untouched_entities_hold(self) -> None:
        """Entities move only in steps that list them."""
        initial = _initial()
        sequence = _sequence()
        snapshots = [reconstruct(initial, sequence, k) for k in range(len(sequence) + 1)]
        touched = {k: {u.entity_id for u in sequence[k - 1].updates} for k in range(1, len(sequence) + 1)}
        for i in range(len(snapshots)):
            for j in range(i + 1, len(snapshots)):
                moved = set().union(*(touched[k] for k in range(i + 1, j + 1)))
                for entity in initial:
                    if entity.id not in moved:
                        assert _pos(snapshots[i], entity.id) == _pos(snapshots[j], entity.id)

    def test_step_clamped(self) -> None:
        """Requests outside ``[0, N]`` are clamped."""
        initial = _initial()
        sequence = _sequence()
        assert reconstruct(initial, sequence, -4) == initial
        assert reconstruct(initial, sequence, 99) == reconstruct(initial, sequence, 3)

    def test_empty_sequence(self) -> None:
        """No steps means the layout never changes."""
        initial = _initial()
        assert reconstruct(initial, (), 0) == initial
        assert reconstruct(initial, (), 5) == initial

    def test_unknown_entity_update_ignored(self) -> None:
        """An update naming an unknown id is skipped without touching the rest."""
        initial = _initial()
        sequence = (
            KeyframeStep(1, (KeyframeUpdate("ghost", 10, 10), KeyframeUpdate("ball", 61, 49))),
        )
        debugger = PlaybackDebugger(None)
        snapshot = reconstruct(initial, sequence, 1, debugger)
        assert _pos(snapshot, "ball") == (61.0, 49.0)
        assert [e.id for e in snapshot] == ["ball", "p1", "p2"]
        assert any("ghost" in line for line in debugger.get_recent_events())

    def test_repeatable(self) -> None:
        """Repeated calls give identical results."""
        initial = _initial()
        sequence = _sequence()
        assert reconstruct(initial, sequence, 2) == reconstruct(initial, sequence, 2)

    def test_other_fields_unchanged(self) -> None:
        """Kind, side and label survive reconstruction."""
        snapshot = reconstruct(_initial(), _sequence(), 3)
        p2 = find_entity(snapshot, "p2")
        assert (p2.kind, p2.side, p2.label) == ("player", "away", "CB")


class TestSnapshotCache:
    """Tests for the per-step snapshot cache."""

    def test_matches_fold_for_every_step(self) -> None:
        """Cached snapshots equal the reference fold."""
        initial = _initial()
        sequence = _sequence()
        cache = SnapshotCache(initial, sequence)
        assert cache.step_count == 3
        for step in range(-1, 5):
            assert cache.snapshot(step) == reconstruct(initial, sequence, step)

    def test_snapshots_are_copies(self) -> None:
        """Mutating a served snapshot does not corrupt the cache."""
        cache = SnapshotCache(_initial(), _sequence())
        first = cache.snapshot(1)
        first[0].move_to(0, 0)
        assert _pos(cache.snapshot(1), "ball") == (60.0, 50.0)

    def test_cache_does_not_alias_initial(self) -> None:
        """Later edits to the caller's layout do not leak into the cache."""
        initial = _initial()
        cache = SnapshotCache(initial, _sequence())
        initial[1].move_to(0, 0)
        assert _pos(cache.snapshot(0), "p1") == (40.0, 50.0)
