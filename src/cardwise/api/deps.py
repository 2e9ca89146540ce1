from functools import lru_cache

from cardwise.agents.orchestrator import RecommendationOrchestrator
from cardwise.config import settings
from cardwise.repository.card_store import CardStore


@lru_cache
def get_store() -> CardStore:
    return CardStore(settings.card_file, settings.preferences_file)


@lru_cache
def get_orchestrator() -> RecommendationOrchestrator:
    return RecommendationOrchestrator(max_query_length=settings.max_query_length)
