"""Ranking strategies for recommendation candidates."""

from __future__ import annotations

from typing import Sequence

from .base import RankedCandidate, RankingStrategy

MAX_RATING = 5.0


def lexicographic_key(candidate: RankedCandidate) -> tuple[int, float, float]:
    # fastest first, higher rating next, nearest last; full-precision distance
    return (candidate.total_minutes, -candidate.rating, candidate.distance_km)


class LexicographicRanking(RankingStrategy):
    """Sequential tie-breaking on total time, then rating, then distance.

    Python's sort is stable, so candidates equal on all three keys keep the
    order in which the places were supplied.
    """

    name = "lexicographic"

    def rank(self, candidates: Sequence[RankedCandidate]) -> list[RankedCandidate]:
        return sorted(candidates, key=lexicographic_key)


def _normalise_lower_is_better(value: float, low: float, high: float) -> float:
    if high == low:
        return 1.0
    return 1.0 - (value - low) / (high - low)


class WeightedScoreRanking(RankingStrategy):
    """Blend of time, rating and distance into one score, highest first.

    This is a separate policy, not a reformulation of the lexicographic order:
    a much better rated place can outrank a slightly faster one. Time and
    distance are min-max normalised within the candidate set, rating against
    the 5.0 scale. Equal scores fall back to the lexicographic key.
    """

    name = "weighted"

    def __init__(
        self,
        *,
        time_weight: float = 0.40,
        rating_weight: float = 0.35,
        distance_weight: float = 0.25,
    ) -> None:
        if min(time_weight, rating_weight, distance_weight) < 0:
            raise ValueError("ranking weights must be >= 0")
        self.time_weight = time_weight
        self.rating_weight = rating_weight
        self.distance_weight = distance_weight

    def score(
        self,
        candidate: RankedCandidate,
        time_bounds: tuple[float, float],
        distance_bounds: tuple[float, float],
    ) -> float:
        time_score = _normalise_lower_is_better(candidate.total_minutes, *time_bounds)
        distance_score = _normalise_lower_is_better(candidate.distance_km, *distance_bounds)
        rating_score = candidate.rating / MAX_RATING
        return (
            self.time_weight * time_score
            + self.rating_weight * rating_score
            + self.distance_weight * distance_score
        )

    def rank(self, candidates: Sequence[RankedCandidate]) -> list[RankedCandidate]:
        if not candidates:
            return []
        times = [item.total_minutes for item in candidates]
        distances = [item.distance_km for item in candidates]
        time_bounds = (min(times), max(times))
        distance_bounds = (min(distances), max(distances))
        scored = [
            (self.score(candidate, time_bounds, distance_bounds), candidate)
            for candidate in candidates
        ]
        scored.sort(key=lambda item: (-item[0], lexicographic_key(item[1])))
        return [candidate for _, candidate in scored]
