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
"""Utilities for building layouts and predictions from serialized payloads.

Layouts come from the detection step and predictions from the simulation
service, both as JSON. Layout problems are raised to the caller because the
user can fix them. Prediction problems are not: a payload that cannot be
understood is replaced by the inconclusive result so the replay simply shows a
static frame.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from ghostboard.models.entity import Entity, ensure_unique_ids
from ghostboard.models.keyframe import KeyframeStep, KeyframeUpdate
from ghostboard.models.prediction import PredictionResult
from ghostboard.utils.debug import PlaybackDebugger

# Older detections tagged the goal marker as "goal_net".
_KIND_ALIASES = {"goal_net": "goal"}


def entity_from_dict(d: Mapping[str, Any]) -> Entity:
    """Build an ``Entity`` from a plain dictionary payload.

    Parameters
    ----------
    d : Mapping[str, Any]
        Serialized entity. ``id``, ``x`` and ``y`` are required; ``type`` (or
        ``kind``), ``team`` (or ``side``) and ``label`` fall back to defaults.

    Returns
    -------
    Entity
        Entity with clamped coordinates.

    Raises
    ------
    KeyError
        When ``id``, ``x`` or ``y`` is missing.
    ValueError
        When the payload is not a mapping, a coordinate is not numeric, or the
        kind or side is not recognised.
    """
    if not isinstance(d, Mapping):
        raise ValueError(f"Entity payload must be an object, got {type(d).__name__}")
    entity_id = str(d["id"])
    try:
        kind = d.get("type") or d.get("kind") or "player"
        kind = _KIND_ALIASES.get(kind, kind)
        return Entity(
            id=entity_id,
            kind=kind,
            side=d.get("team") or d.get("side") or "neutral",
            x=float(d["x"]),
            y=float(d["y"]),
            label=str(d.get("label") or entity_id.upper()),
        )
    except TypeError as exc:
        raise ValueError(f"Malformed entity {entity_id!r}: {exc}") from exc


def layout_from_list(items: List[Mapping[str, Any]]) -> List[Entity]:
    """Build a validated layout from a list of entity payloads.

    Parameters
    ----------
    items : List[Mapping[str, Any]]
        Serialized entities.

    Returns
    -------
    List[Entity]
        Entities in payload order.

    Raises
    ------
    ValueError
        When two entities share an id or an entity is malformed.
    """
    if not isinstance(items, list):
        raise ValueError(f"Layout must be a list of entities, got {type(items).__name__}")
    entities = [entity_from_dict(item) for item in items]
    ensure_unique_ids(entities)
    return entities


def load_layout_from_json(path: Union[str, Path]) -> List[Entity]:
    """Load a detected layout from disk.

    Parameters
    ----------
    path : str | Path
        JSON file holding either a list of entities or ``{"players": [...]}``.

    Returns
    -------
    List[Entity]
        Validated entities.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Layout JSON not found: {path}")

    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)

    if isinstance(data, dict):
        data = data.get("players", data.get("entities", []))
    return layout_from_list(data)


def step_from_dict(d: Mapping[str, Any], position: int) -> KeyframeStep:
    """Build a ``KeyframeStep`` from a plain dictionary payload.

    Parameters
    ----------
    d : Mapping[str, Any]
        Serialized step with ``updates`` and an optional ``step`` or ``stepIndex``.
    position : int
        One-based position in the sequence, used when no index is given.

    Returns
    -------
    KeyframeStep
        Parsed step.

    Raises
    ------
    TypeError
        When the step or one of its updates is not a mapping.
    """
    if not isinstance(d, Mapping):
        raise TypeError(f"Keyframe step must be an object, got {type(d).__name__}")
    index = d.get("stepIndex", d.get("step", position))
    updates = []
    for u in d["updates"]:
        if not isinstance(u, Mapping):
            raise TypeError(f"Keyframe update must be an object, got {type(u).__name__}")
        updates.append(KeyframeUpdate(str(u["id"]), float(u["x"]), float(u["y"])))
    return KeyframeStep(int(index), tuple(updates))


def prediction_from_dict(d: Mapping[str, Any]) -> PredictionResult:
    """Build a ``PredictionResult`` from the service's response schema.

    Parameters
    ----------
    d : Mapping[str, Any]
        Decoded response with ``verdict`` and ``predictionSequence``.

    Returns
    -------
    PredictionResult
        Parsed prediction with steps ordered by index.

    Raises
    ------
    KeyError
        When a required field is missing.
    TypeError
        When ``predictionSequence`` or a step has the wrong shape.
    ValueError
        When the verdict or a step is invalid.
    """
    raw_steps = d["predictionSequence"]
    if not isinstance(raw_steps, list):
        raise TypeError("predictionSequence must be a list")
    steps = [step_from_dict(step, position) for position, step in enumerate(raw_steps, start=1)]
    steps.sort(key=lambda step: step.step_index)
    return PredictionResult(
        verdict=d["verdict"],
        sequence=tuple(steps),
        analysis=str(d.get("analysis", "")),
        butterfly_effect=str(d.get("butterflyEffect", "")),
        original_win_probability=float(d.get("originalWinProbability", 0.0)),
        new_win_probability=float(d.get("newWinProbability", 0.0)),
        grounding_urls=tuple(d.get("groundingUrls") or ()),
    )


def parse_prediction(
    payload: Union[str, Mapping[str, Any]],
    debugger: Optional[PlaybackDebugger] = None,
) -> PredictionResult:
    """Parse a service response, substituting the inconclusive result on failure.

    Parameters
    ----------
    payload : str | Mapping[str, Any]
        Raw JSON text or an already decoded mapping.
    debugger : PlaybackDebugger | None, optional
        Receives an error line when the payload is rejected.

    Returns
    -------
    PredictionResult
        Parsed prediction, or ``PredictionResult.inconclusive()``.
    """
    try:
        data: Dict[str, Any] = json.loads(payload) if isinstance(payload, str) else dict(payload)
        return prediction_from_dict(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        if debugger:
            debugger.log_error("prediction", f"{type(exc).__name__}: {exc}")
        return PredictionResult.inconclusive()


def load_prediction_from_json(
    path: Union[str, Path],
    debugger: Optional[PlaybackDebugger] = None,
) -> PredictionResult:
    """Load a saved service response from disk.

    Parameters
    ----------
    path : str | Path
        JSON file holding one response.
    debugger : PlaybackDebugger | None, optional
        Receives an error line when the payload is rejected.

    Returns
    -------
    PredictionResult
        Parsed prediction, or the inconclusive result for a malformed file.

    Raises
    ------
    FileNotFoundError
        Raised when ``path`` does not exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Prediction JSON not found: {path}")
    return parse_prediction(p.read_text(encoding="utf-8"), debugger)
