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
"""Domain models for the entities placed on the tactical board.

An entity is anything the board tracks by position: players, the ball and the
goal marker. Positions are percentages of the source image's bounding box so
the same layout can be drawn onto any surface size. Every coordinate is
clamped into ``[0, 100]`` on the way in, which keeps interpolated frames inside
the field without further checks downstream.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Literal, Optional, Set, Tuple

EntityKind = Literal["player", "ball", "goal"]
Side = Literal["home", "away", "neutral"]

ENTITY_KINDS: Tuple[str, ...] = ("player", "ball", "goal")
SIDES: Tuple[str, ...] = ("home", "away", "neutral")

POSITION_MIN = 0.0
POSITION_MAX = 100.0


def clamp_coordinate(value: float) -> float:
    """Clamp a percentage coordinate into the field range.

    Parameters
    ----------
    value : float
        Raw coordinate, possibly outside ``[0, 100]``.

    Returns
    -------
    float
        ``value`` limited to ``[0, 100]``.
    """
    return max(POSITION_MIN, min(POSITION_MAX, float(value)))


@dataclass
class Entity:
    """Positioned object on the board.

    Parameters
    ----------
    id : str
        Stable identifier assigned at detection time.
    kind : EntityKind
        One of ``"player"``, ``"ball"`` or ``"goal"``.
    side : Side
        Team affiliation; only meaningful for players.
    x : float
        Horizontal offset as a percentage of the field width.
    y : float
        Vertical offset as a percentage of the field height.
    label : str, optional
        Short display string such as ``"GK"`` or ``"BALL"``.
    """

    id: str
    kind: EntityKind
    side: Side
    x: float
    y: float
    label: str = ""

    def __post_init__(self) -> None:
        """Validate the tagged fields and clamp the position."""
        if self.kind not in ENTITY_KINDS:
            raise ValueError(f"Unknown entity kind: {self.kind!r}")
        if self.side not in SIDES:
            raise ValueError(f"Unknown entity side: {self.side!r}")
        self.x = clamp_coordinate(self.x)
        self.y = clamp_coordinate(self.y)

    @property
    def position(self) -> Tuple[float, float]:
        """Return the ``(x, y)`` pair.

        Returns
        -------
        Tuple[float, float]
            Current percentage coordinates.
        """
        return self.x, self.y

    def move_to(self, x: float, y: float) -> None:
        """Move the entity, clamping both components.

        Parameters
        ----------
        x : float
            Requested horizontal percentage.
        y : float
            Requested vertical percentage.
        """
        self.x = clamp_coordinate(x)
        self.y = clamp_coordinate(y)

    def copy(self) -> "Entity":
        """Return an independent copy of this entity.

        Returns
        -------
        Entity
            New instance with identical field values.
        """
        return replace(self)


def copy_entities(entities: Iterable[Entity]) -> List[Entity]:
    """Return a value copy of an entity set.

    Parameters
    ----------
    entities : Iterable[Entity]
        Source entities; left untouched.

    Returns
    -------
    List[Entity]
        Fresh entities in the same order, sharing no mutable state with the source.
    """
    return [entity.copy() for entity in entities]


def find_entity(entities: Iterable[Entity], entity_id: str) -> Optional[Entity]:
    """Look up an entity by id.

    Parameters
    ----------
    entities : Iterable[Entity]
        Entity set to search.
    entity_id : str
        Identifier to match.

    Returns
    -------
    Entity | None
        The first matching entity, or ``None`` when the id is absent.
    """
    return next((entity for entity in entities if entity.id == entity_id), None)


def entity_ids(entities: Iterable[Entity]) -> Set[str]:
    """Collect the ids present in an entity set.

    Parameters
    ----------
    entities : Iterable[Entity]
        Entity set to inspect.

    Returns
    -------
    Set[str]
        Identifiers of every entity.
    """
    return {entity.id for entity in entities}


def are_compatible(first: Iterable[Entity], second: Iterable[Entity]) -> bool:
    """Check whether two snapshots describe the same entities.

    Parameters
    ----------
    first : Iterable[Entity]
        Earlier snapshot.
    second : Iterable[Entity]
        Later snapshot.

    Returns
    -------
    bool
        ``True`` when both sets hold exactly the same ids.
    """
    return entity_ids(first) == entity_ids(second)


def ensure_unique_ids(entities: Iterable[Entity]) -> None:
    """Raise when an entity set reuses an identifier.

    Parameters
    ----------
    entities : Iterable[Entity]
        Entity set to validate.

    Raises
    ------
    ValueError
        If two entities share the same ``id``.
    """
    seen: Set[str] = set()
    for entity in entities:
        if entity.id in seen:
            raise ValueError(f"Duplicate entity id: {entity.id}")
        seen.add(entity.id)
