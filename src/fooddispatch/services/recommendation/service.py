"""Restaurant recommendation pipeline.

Each stage only narrows the candidate set, and stages are ordered from cheapest
to most expensive: the open flag is a field read, the radius check costs one
haversine evaluation, menu filtering walks the offerings, and the time estimate
depends on both of the previous results.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ...config import settings
from ...models.domain import DeliverablePlace, FoodCategory, MenuOffering
from ...schemas.recommendation import RecommendationQuery, RecommendationResult, RecommendedOffering
from ..delivery import DeliveryEstimator
from ..geospatial import distance_km
from .base import RankedCandidate, RankingStrategy
from .dispatcher import get_ranking_strategy

logger = logging.getLogger(__name__)


def _matching_offerings(place: DeliverablePlace, category: FoodCategory) -> tuple[MenuOffering, ...]:
    return tuple(
        offering for offering in place.offerings if offering.available and offering.category == category
    )


def _to_result(candidate: RankedCandidate) -> RecommendationResult:
    place = candidate.place
    return RecommendationResult(
        place_id=place.place_id,
        name=place.name,
        rating=place.rating,
        distance_km=round(candidate.distance_km, 2),
        total_estimated_time_minutes=candidate.total_minutes,
        delivery_address=place.delivery_address,
        offerings=[
            RecommendedOffering(
                offering_id=offering.offering_id,
                name=offering.name,
                price=offering.price,
                category=offering.category,
                prep_time_minutes=offering.prep_time_minutes,
                available=offering.available,
            )
            for offering in candidate.matching_offerings
        ],
    )


class RecommendationEngine:
    """Filter and rank restaurants for a requester location and category."""

    def __init__(
        self,
        estimator: Optional[DeliveryEstimator] = None,
        ranking: str | RankingStrategy | None = None,
        *,
        earth_radius_km: Optional[float] = None,
    ) -> None:
        self.estimator = estimator or DeliveryEstimator.from_settings()
        if ranking is None or isinstance(ranking, str):
            ranking = get_ranking_strategy(ranking or settings.ranking_method)
        self.ranking = ranking
        self.earth_radius_km = earth_radius_km or settings.earth_radius_km

    def candidates(
        self,
        query: RecommendationQuery,
        places: Iterable[DeliverablePlace],
    ) -> list[RankedCandidate]:
        """Run the four filtering stages and return unranked survivors."""

        origin = query.coordinate
        open_places = [place for place in places if place.is_open]

        in_range: list[tuple[DeliverablePlace, float]] = []
        for place in open_places:
            distance = distance_km(origin, place.coordinate, radius_km=self.earth_radius_km)
            if distance > place.delivery_radius_km:
                continue
            in_range.append((place, distance))

        with_menu: list[tuple[DeliverablePlace, float, tuple[MenuOffering, ...]]] = []
        for place, distance in in_range:
            matching = _matching_offerings(place, query.category)
            if not matching:
                continue
            with_menu.append((place, distance, matching))

        survivors: list[RankedCandidate] = []
        for place, distance, matching in with_menu:
            candidate = RankedCandidate(
                place=place,
                distance_km=distance,
                matching_offerings=matching,
                fastest_prep_minutes=min(offering.prep_time_minutes for offering in matching),
                delivery_minutes=self.estimator.estimate_minutes(distance),
            )
            if candidate.total_minutes > query.max_time_minutes:
                continue
            survivors.append(candidate)

        logger.debug(
            f"Recommendation stages for {query.category.value}: open={len(open_places)} "
            f"in_range={len(in_range)} with_menu={len(with_menu)} within_time={len(survivors)}"
        )
        return survivors

    def recommend(
        self,
        query: RecommendationQuery,
        places: Iterable[DeliverablePlace],
    ) -> list[RecommendationResult]:
        ranked = self.ranking.rank(self.candidates(query, places))
        return [_to_result(candidate) for candidate in ranked]


def recommend(
    query: RecommendationQuery,
    places: Sequence[DeliverablePlace],
    **kwargs,
) -> list[RecommendationResult]:
    return RecommendationEngine(**kwargs).recommend(query, places)
