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
"""Tests for entity, keyframe, prediction and board models."""

import pytest

from ghostboard.models.board import TacticalBoard
from ghostboard.models.entity import (
    Entity,
    are_compatible,
    clamp_coordinate,
    copy_entities,
    ensure_unique_ids,
    find_entity,
)
from ghostboard.models.keyframe import KeyframeStep, KeyframeUpdate
from ghostboard.models.prediction import PredictionResult, probability_band


def _layout() -> list:
    return [
        Entity("ball", "ball", "neutral", 50, 50, "BALL"),
        Entity("p1", "player", "home", 40, 50, "ST"),
        Entity("p2", "player", "away", 70, 30, "CB"),
    ]


class TestEntity:
    """Tests for the Entity model."""

    def test_create_entity(self) -> None:
        """Create an entity and read its fields back."""
        entity = Entity("gk", "player", "away", 88.0, 50.0, "GK")
        assert entity.id == "gk"
        assert entity.kind == "player"
        assert entity.side == "away"
        assert entity.position == (88.0, 50.0)
        assert entity.label == "GK"

    def test_position_clamped_on_creation(self) -> None:
        """Out-of-range coordinates are stored at the field edge."""
        entity = Entity("p", "player", "home", -5, 107)
        assert entity.position == (0.0, 100.0)

    def test_move_to_clamps(self) -> None:
        """Moving past the edge stops at the edge."""
        entity = Entity("p", "player", "home", 10, 10)
        entity.move_to(150, -20)
        assert entity.position == (100.0, 0.0)

    def test_unknown_kind_rejected(self) -> None:
        """Only player, ball and goal are valid kinds."""
        with pytest.raises(ValueError):
            Entity("x", "referee", "neutral", 0, 0)

    def test_unknown_side_rejected(self) -> None:
        """Only home, away and neutral are valid sides."""
        with pytest.raises(ValueError):
            Entity("x", "player", "visitors", 0, 0)

    def test_clamp_coordinate(self) -> None:
        """Clamp values on both sides of the range."""
        assert clamp_coordinate(-0.1) == 0.0
        assert clamp_coordinate(42.5) == 42.5
        assert clamp_coordinate(100.1) == 100.0


class TestEntitySet:
    """Tests for entity-set helpers."""

    def test_copy_entities_is_independent(self) -> None:
        """Mutating a copy leaves the source untouched."""
        source = _layout()
        copied = copy_entities(source)
        assert copied == source
        copied[0].move_to(0, 0)
        assert source[0].position == (50.0, 50.0)
        assert copied[0] is not source[0]

    def test_find_entity(self) -> None:
        """Look up entities by id."""
        layout = _layout()
        assert find_entity(layout, "p2") is layout[2]
        assert find_entity(layout, "missing") is None

    def test_compatibility(self) -> None:
        """Sets with the same ids are compatible regardless of positions."""
        first = _layout()
        second = copy_entities(first)
        second[1].move_to(1, 1)
        assert are_compatible(first, second)
        assert not are_compatible(first, second[:2])

    def test_duplicate_ids_rejected(self) -> None:
        """Two entities may not share an id."""
        layout = _layout() + [Entity("p1", "player", "home", 1, 1)]
        with pytest.raises(ValueError):
            ensure_unique_ids(layout)


class TestKeyframes:
    """Tests for keyframe models."""

    def test_update_clamped(self) -> None:
        """Update targets are clamped like entity positions."""
        update = KeyframeUpdate("ball", 120, -3)
        assert (update.x, update.y) == (100.0, 0.0)

    def test_step_freezes_updates(self) -> None:
        """Updates passed as a list are stored as a tuple."""
        step = KeyframeStep(1, [KeyframeUpdate("ball", 60, 50)])
        assert isinstance(step.updates, tuple)
        assert len(step.updates) == 1

    def test_step_index_starts_at_one(self) -> None:
        """Step zero is the initial layout, not a keyframe."""
        with pytest.raises(ValueError):
            KeyframeStep(0, ())


class TestPredictionResult:
    """Tests for prediction results."""

    def test_inconclusive_result(self) -> None:
        """The failure sentinel has no steps and the inconclusive verdict."""
        result = PredictionResult.inconclusive()
        assert result.is_inconclusive
        assert result.step_count == 0
        assert result.sequence == ()

    def test_unknown_verdict_rejected(self) -> None:
        """Verdicts outside the schema are refused."""
        with pytest.raises(ValueError):
            PredictionResult(verdict="Success")

    def test_probability_delta_and_big_jump(self) -> None:
        """A large rise past 50% counts as a big jump."""
        result = PredictionResult(verdict="Goal Likely", original_win_probability=22, new_win_probability=61)
        assert result.probability_delta == 39
        assert result.is_big_jump
        small = PredictionResult(verdict="Goal Likely", original_win_probability=45, new_win_probability=55)
        assert not small.is_big_jump

    def test_probability_band(self) -> None:
        """Bands split at 30 and 60."""
        assert probability_band(10) == "low"
        assert probability_band(30) == "medium"
        assert probability_band(59.9) == "medium"
        assert probability_band(60) == "high"


class TestTacticalBoard:
    """Tests for the editing session."""

    def test_move_and_reset(self) -> None:
        """Reset restores detected positions by value."""
        detected = _layout()
        board = TacticalBoard(detected)
        assert board.move_entity("p1", 55, 48)
        assert board.moved_entity_ids() == ["p1"]
        board.reset()
        assert board.entities == detected
        assert board.moved_entity_ids() == []

    def test_move_clamps(self) -> None:
        """Dragging beyond the image stops at the edge."""
        board = TacticalBoard(_layout())
        board.move_entity("p1", -5, 107)
        assert find_entity(board.entities, "p1").position == (0.0, 100.0)

    def test_move_unknown_entity(self) -> None:
        """Moving an unknown id reports failure."""
        board = TacticalBoard(_layout())
        assert not board.move_entity("nobody", 1, 1)

    def test_board_does_not_share_state(self) -> None:
        """Neither the caller's list nor returned copies alias the board."""
        detected = _layout()
        board = TacticalBoard(detected)
        detected[0].move_to(0, 0)
        board.entities[1].move_to(0, 0)
        assert find_entity(board.original, "ball").position == (50.0, 50.0)
        assert find_entity(board.entities, "p1").position == (40.0, 50.0)

    def test_edit_clears_result(self) -> None:
        """A new edit invalidates the previous prediction."""
        board = TacticalBoard(_layout())
        board.attach_result(PredictionResult.inconclusive())
        board.move_entity("p1", 41, 50)
        assert board.result is None
