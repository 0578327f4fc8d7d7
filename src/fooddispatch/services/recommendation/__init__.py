"""Restaurant recommendation services."""

from .base import RankedCandidate, RankingStrategy
from .dispatcher import get_ranking_strategy
from .ranking import LexicographicRanking, WeightedScoreRanking
from .service import RecommendationEngine, recommend

__all__ = [
    "RecommendationEngine",
    "recommend",
    "RankedCandidate",
    "RankingStrategy",
    "LexicographicRanking",
    "WeightedScoreRanking",
    "get_ranking_strategy",
]
