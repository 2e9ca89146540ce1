import logging
from datetime import date
from typing import Iterable

from cardwise.domain.errors import QueryValidationError
from cardwise.domain.models import (
    Card,
    CardRecommendation,
    CardScore,
    ParsedQuery,
    RecommendationResponse,
    SpendingCategory,
    UserPreferences,
)
from cardwise.engine.selectors import rank_cards
from cardwise.nlp.parser import parse_query, validate_query

logger = logging.getLogger(__name__)

LOW_SCORE_THRESHOLD = 2.0
CLARIFY_SUGGESTIONS = [
    "Can you specify what you're purchasing?",
    "Try naming a store or a category, e.g. 'groceries at Whole Foods' or 'booking a flight'.",
]


def _category_label(category: SpendingCategory) -> str:
    return category.display_name.lower()


def _card_reasoning(score: CardScore) -> str:
    points = score.point_type.value if score.point_type else "reward"
    reasoning = (
        f"{score.card.name} offers {score.category_score:g}x {points} points "
        f"on {_category_label(score.category)}"
    )

    limit = score.spending_limit
    if limit is None:
        return reasoning + "."

    reasoning += f", and you have ${limit.remaining_amount:,.0f} remaining in your limit."
    if limit.is_limit_reached:
        reasoning += " Limit reached - consider using another card."
    elif limit.is_warning_threshold:
        reasoning += " Limit almost reached."
    return reasoning


def _is_capped(score: CardScore) -> bool:
    return score.spending_limit is not None and score.spending_limit.is_limit_reached


def _to_recommendation(score: CardScore, rank: int) -> CardRecommendation:
    limit = score.spending_limit
    return CardRecommendation(
        card_id=score.card.card_id,
        card_name=score.card.name,
        category=score.category,
        multiplier=score.category_score,
        point_type=score.point_type,
        reasoning=_card_reasoning(score),
        current_spending=limit.current_spending if limit else 0.0,
        limit=limit.limit if limit else 0.0,
        remaining_amount=limit.remaining_amount if limit else None,
        is_limit_reached=limit.is_limit_reached if limit else False,
        is_warning_threshold=limit.is_warning_threshold if limit else False,
        rank=rank,
    )


class RecommendationOrchestrator:
    def __init__(self, max_query_length: int | None = None):
        self.max_query_length = max_query_length

    def _warnings(self, primary: CardScore, secondary: CardScore | None) -> list[str]:
        warnings: list[str] = []
        for score in (primary, secondary):
            if score is None or score.spending_limit is None:
                continue
            limit = score.spending_limit
            label = _category_label(score.category)
            if limit.is_limit_reached:
                message = f"{score.card.name} has reached its {label} limit."
                if score is primary and secondary is not None and not _is_capped(secondary):
                    message += f" Use {secondary.card.name} instead."
                warnings.append(message)
            elif limit.is_warning_threshold:
                warnings.append(
                    f"{score.card.name} is approaching its {label} limit "
                    f"({limit.usage_percentage:.0%} used)."
                )
        return warnings

    def _suggestions(
        self,
        recommended: list[CardScore],
        preferences: UserPreferences,
    ) -> list[str]:
        suggestions: list[str] = []
        primary = recommended[0]

        if all(score.total_score < LOW_SCORE_THRESHOLD for score in recommended):
            suggestions.append(
                "Consider adding a card that offers better rewards for "
                f"{_category_label(primary.category)}."
            )

        if primary.point_type != preferences.preferred_point_system:
            suggestions.append(
                "You might want to prioritize cards that earn "
                f"{preferences.preferred_point_system.display_name} points."
            )
        return suggestions

    def _confidence(self, parsed: ParsedQuery) -> float:
        return 1.0 if parsed.category is not None else parsed.confidence

    def recommend(
        self,
        query: str,
        cards: Iterable[Card],
        preferences: UserPreferences,
        as_of: date | None = None,
    ) -> RecommendationResponse:
        validation = validate_query(query, self.max_query_length)
        if not validation.is_valid:
            raise QueryValidationError(validation)

        parsed = parse_query(query)
        active_cards = [card for card in cards if card.is_active]

        if not active_cards:
            return RecommendationResponse(
                reasoning="You don't have any active cards yet.",
                suggestions=["Add a credit card to get personalized recommendations."],
                confidence=self._confidence(parsed),
                parsed_query=parsed,
            )

        if parsed.category is None:
            logger.info("Could not resolve a category for %r", query)
            return RecommendationResponse(
                reasoning="I couldn't tell what kind of purchase this is.",
                suggestions=list(CLARIFY_SUGGESTIONS),
                confidence=self._confidence(parsed),
                parsed_query=parsed,
            )

        ranked = rank_cards(active_cards, parsed.category, preferences, as_of)
        primary = ranked[0]
        secondary = ranked[1] if len(ranked) > 1 else None

        reasoning = (
            f"Based on your {_category_label(parsed.category)} purchase, "
            f"I recommend using your {primary.card.name}. {_card_reasoning(primary)}"
        )
        if secondary is not None:
            reasoning += (
                f"\n\nAs a backup option, {secondary.card.name} offers "
                f"{secondary.category_score:g}x points."
            )

        recommended = [primary] if secondary is None else [primary, secondary]
        logger.info(
            "Recommending %s for %s (score %.2f)",
            primary.card.name,
            parsed.category.value,
            primary.total_score,
        )

        return RecommendationResponse(
            primary_recommendation=_to_recommendation(primary, rank=1),
            secondary_recommendation=_to_recommendation(secondary, rank=2) if secondary else None,
            reasoning=reasoning,
            warnings=self._warnings(primary, secondary),
            suggestions=self._suggestions(recommended, preferences),
            confidence=self._confidence(parsed),
            parsed_query=parsed,
        )
