"""Rider dispatch services."""

from .engine import DispatchEngine, RiderDistance
from .outcomes import Assigned, DispatchOutcome, InvalidState, NoCapacity, NotFound
from .prefilter import BoundingBoxPrefilter, CandidatePrefilter, NoPrefilter, get_prefilter
from .service import AcceptanceResult, DispatchService

__all__ = [
    "DispatchEngine",
    "DispatchService",
    "AcceptanceResult",
    "RiderDistance",
    "Assigned",
    "NoCapacity",
    "NotFound",
    "InvalidState",
    "DispatchOutcome",
    "CandidatePrefilter",
    "NoPrefilter",
    "BoundingBoxPrefilter",
    "get_prefilter",
]
