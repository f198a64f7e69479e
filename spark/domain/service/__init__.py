"""Domain services."""

from .base import Service
from .broadcast import BroadcastEvent, BroadcastSink
from .idea_service import IdeaService
from .jwt_service import JWTService
from .karma import KarmaAccumulator
from .preferences_service import PreferencesService
from .ranking import ranking_key, sort_ideas
from .recommendation import RecommendationEngine
from .trending import TrendingWindowCalculator
from .vote_ledger import VoteLedger, resolve_transition

__all__ = [
    "BroadcastEvent",
    "BroadcastSink",
    "IdeaService",
    "JWTService",
    "KarmaAccumulator",
    "PreferencesService",
    "RecommendationEngine",
    "Service",
    "TrendingWindowCalculator",
    "VoteLedger",
    "ranking_key",
    "resolve_transition",
    "sort_ideas",
]
