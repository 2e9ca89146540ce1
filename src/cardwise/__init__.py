from cardwise.agents.orchestrator import RecommendationOrchestrator
from cardwise.domain.errors import (
    CardNotFoundError,
    CardwiseError,
    CategoryLimitNotFoundError,
    QueryValidationError,
)
from cardwise.domain.models import (
    Card,
    CardRecommendation,
    CardScore,
    ParsedQuery,
    PointType,
    QueryIntent,
    RecommendationResponse,
    SpendingCategory,
    SpendingLimit,
    UserPreferences,
)
from cardwise.engine.evaluator import score_card
from cardwise.engine.limits import check_and_reset_if_expired, collect_limit_alerts, record_spend
from cardwise.engine.selectors import rank_cards
from cardwise.nlp.parser import parse_query, validate_query
from cardwise.repository.card_store import CardStore

__all__ = [
    "Card",
    "CardNotFoundError",
    "CardRecommendation",
    "CardScore",
    "CardStore",
    "CardwiseError",
    "CategoryLimitNotFoundError",
    "ParsedQuery",
    "PointType",
    "QueryIntent",
    "QueryValidationError",
    "RecommendationOrchestrator",
    "RecommendationResponse",
    "SpendingCategory",
    "SpendingLimit",
    "UserPreferences",
    "check_and_reset_if_expired",
    "collect_limit_alerts",
    "parse_query",
    "rank_cards",
    "record_spend",
    "score_card",
    "validate_query",
]
