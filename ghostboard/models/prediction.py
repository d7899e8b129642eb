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
"""Outcome predictions returned by the external simulation service.

A prediction bundles the keyframe sequence that drives the replay with the
verdict and commentary shown next to it. The playback engine only consumes the
sequence; the remaining fields feed the HUD.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Tuple

from .keyframe import KeyframeSequence

Verdict = Literal["Goal Likely", "Defense Likely", "Inconclusive", "No Immediate Threat"]
VERDICTS: Tuple[str, ...] = ("Goal Likely", "Defense Likely", "Inconclusive", "No Immediate Threat")
INCONCLUSIVE: Verdict = "Inconclusive"

ProbabilityBand = Literal["low", "medium", "high"]


def probability_band(value: float) -> ProbabilityBand:
    """Bucket a win probability for colouring.

    Parameters
    ----------
    value : float
        Probability expressed as a percentage.

    Returns
    -------
    ProbabilityBand
        ``"low"`` below 30, ``"medium"`` below 60, otherwise ``"high"``.
    """
    if value < 30:
        return "low"
    if value < 60:
        return "medium"
    return "high"


@dataclass(frozen=True)
class PredictionResult:
    """Atomic result of one counterfactual simulation.

    Parameters
    ----------
    verdict : Verdict
        Headline outcome label.
    sequence : KeyframeSequence, optional
        Predicted keyframes; empty when the prediction could not be produced.
    analysis : str, optional
        Tactical breakdown of the modified play.
    butterfly_effect : str, optional
        Short explanation of the knock-on changes.
    original_win_probability : float, optional
        Scoring probability of the unedited layout, as a percentage.
    new_win_probability : float, optional
        Scoring probability of the edited layout, as a percentage.
    grounding_urls : Tuple[str, ...], optional
        Source links cited by the service.
    """

    verdict: Verdict
    sequence: KeyframeSequence = field(default_factory=tuple)
    analysis: str = ""
    butterfly_effect: str = ""
    original_win_probability: float = 0.0
    new_win_probability: float = 0.0
    grounding_urls: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Reject verdicts outside the service schema."""
        if self.verdict not in VERDICTS:
            raise ValueError(f"Unknown verdict: {self.verdict!r}")
        object.__setattr__(self, "sequence", tuple(self.sequence))
        object.__setattr__(self, "grounding_urls", tuple(self.grounding_urls))

    @classmethod
    def inconclusive(cls) -> "PredictionResult":
        """Build the canonical result used when the service fails.

        Returns
        -------
        PredictionResult
            Empty sequence with the ``"Inconclusive"`` verdict.
        """
        return cls(
            verdict=INCONCLUSIVE,
            analysis="Error analyzing the simulation.",
            butterfly_effect="The simulation engine encountered a data mismatch.",
        )

    @property
    def is_inconclusive(self) -> bool:
        """Whether the verdict is the inconclusive sentinel."""
        return self.verdict == INCONCLUSIVE

    @property
    def step_count(self) -> int:
        """Number of keyframe steps in the prediction."""
        return len(self.sequence)

    @property
    def probability_delta(self) -> float:
        """Change in scoring probability caused by the edit."""
        return self.new_win_probability - self.original_win_probability

    @property
    def is_big_jump(self) -> bool:
        """Whether the edit turned the play into a likely score."""
        return self.probability_delta > 15 and self.new_win_probability > 50
