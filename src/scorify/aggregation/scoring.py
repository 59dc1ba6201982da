"""Lead score bands.

Thresholds:
- high: score >= 0.8
- medium: 0.6 <= score < 0.8
- low: score < 0.6
"""

from __future__ import annotations

from typing import Iterable, Literal

from scorify.models.types import ScoreDistribution

HIGH_SCORE_FLOOR = 0.8
MEDIUM_SCORE_FLOOR = 0.6

ScoreBand = Literal["high", "medium", "low"]

# [lower, upper) bounds per band, usable as repository score filters
BAND_RANGES: dict[ScoreBand, tuple[float | None, float | None]] = {
    "high": (HIGH_SCORE_FLOOR, None),
    "medium": (MEDIUM_SCORE_FLOOR, HIGH_SCORE_FLOOR),
    "low": (None, MEDIUM_SCORE_FLOOR),
}


def to_score_band(score: float) -> ScoreBand:
    """Classify a score into its band."""
    if score >= HIGH_SCORE_FLOOR:
        return "high"
    if score >= MEDIUM_SCORE_FLOOR:
        return "medium"
    return "low"


def compute_score_distribution(scores: Iterable[float]) -> ScoreDistribution:
    """Fraction of scored customers per band.

    Expects one score per distinct customer. With no scores every
    fraction is 0.0.
    """
    tally: dict[ScoreBand, int] = {"high": 0, "medium": 0, "low": 0}
    for score in scores:
        tally[to_score_band(score)] += 1

    total = max(1, sum(tally.values()))
    return ScoreDistribution(
        high=tally["high"] / total,
        medium=tally["medium"] / total,
        low=tally["low"] / total,
    )
