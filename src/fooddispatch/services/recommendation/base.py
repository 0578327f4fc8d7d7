"""Base classes for recommendation ranking strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from ...models.domain import DeliverablePlace, MenuOffering


@dataclass(frozen=True, slots=True)
class RankedCandidate:
    """A place that survived filtering, with the metrics computed along the way."""

    place: DeliverablePlace
    distance_km: float
    matching_offerings: tuple[MenuOffering, ...]
    fastest_prep_minutes: int
    delivery_minutes: int

    @property
    def total_minutes(self) -> int:
        return self.fastest_prep_minutes + self.delivery_minutes

    @property
    def rating(self) -> float:
        return self.place.rating


class RankingStrategy(ABC):
    """Contract for ordering recommendation candidates."""

    name: str

    @abstractmethod
    def rank(self, candidates: Sequence[RankedCandidate]) -> list[RankedCandidate]:
        raise NotImplementedError
