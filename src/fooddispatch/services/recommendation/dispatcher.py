"""Factory for ranking strategies based on configuration."""

from __future__ import annotations

from typing import Any

from ...config import settings
from .base import RankingStrategy
from .ranking import LexicographicRanking, WeightedScoreRanking


def get_ranking_strategy(method: str, **kwargs: Any) -> RankingStrategy:
    match method:
        case "lexicographic":
            return LexicographicRanking()
        case "weighted":
            time_weight, rating_weight, distance_weight = kwargs.get("weights", settings.ranking_weights)
            return WeightedScoreRanking(
                time_weight=time_weight,
                rating_weight=rating_weight,
                distance_weight=distance_weight,
            )
        case _:
            raise ValueError(f"Unknown ranking method '{method}'.")
