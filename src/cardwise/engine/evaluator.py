import logging
from datetime import date

from cardwise.domain.models import (
    Card,
    CardScore,
    PointType,
    SpendingCategory,
    SpendingLimit,
    UserPreferences,
)
from cardwise.engine.limits import refresh_card

logger = logging.getLogger(__name__)

BASE_WEIGHT = 0.10
CATEGORY_WEIGHT = 0.60
PREFERENCE_WEIGHT = 0.20
LIMIT_WEIGHT = 0.10

BASE_SCORE = 1.0
DEFAULT_MULTIPLIER = 1.0
PREFERRED_POINTS_SCORE = 1.0
OTHER_POINTS_SCORE = 0.5


def _category_multiplier(card: Card, category: SpendingCategory) -> tuple[float, PointType | None]:
    reward = card.reward_for(category) or card.reward_for(SpendingCategory.GENERAL)
    if reward is not None:
        multiplier, point_type = reward.multiplier, reward.point_type
    else:
        multiplier, point_type = DEFAULT_MULTIPLIER, None

    bonus = card.quarterly_bonus
    if bonus is not None and bonus.category == category and not bonus.is_capped:
        if bonus.multiplier > multiplier:
            return bonus.multiplier, bonus.point_type
    return multiplier, point_type


def _preference_score(point_type: PointType | None, preferences: UserPreferences) -> float:
    if point_type is not None and point_type == preferences.preferred_point_system:
        return PREFERRED_POINTS_SCORE
    return OTHER_POINTS_SCORE


def _limit_score(limit: SpendingLimit | None) -> float:
    if limit is None:
        return 1.0
    if limit.is_limit_reached:
        return 0.0
    if limit.is_warning_threshold:
        return 0.5
    return 1.0


def weighted_total(
    base_score: float,
    category_score: float,
    preference_score: float,
    limit_score: float,
) -> float:
    return (
        base_score * BASE_WEIGHT
        + category_score * CATEGORY_WEIGHT
        + preference_score * PREFERENCE_WEIGHT
        + limit_score * LIMIT_WEIGHT
    )


def score_card(
    card: Card,
    category: SpendingCategory,
    preferences: UserPreferences,
    as_of: date | None = None,
) -> CardScore:
    card = refresh_card(card, as_of)

    category_score, point_type = _category_multiplier(card, category)
    preference_score = _preference_score(point_type, preferences)
    spending_limit = card.limit_for(category)
    limit_score = _limit_score(spending_limit)
    total = weighted_total(BASE_SCORE, category_score, preference_score, limit_score)

    logger.debug(
        "%s on %s: category=%.2f preference=%.2f limit=%.2f total=%.3f",
        card.name,
        category.value,
        category_score,
        preference_score,
        limit_score,
        total,
    )

    return CardScore(
        card=card,
        category=category,
        base_score=BASE_SCORE,
        category_score=category_score,
        preference_score=preference_score,
        limit_score=limit_score,
        total_score=total,
        point_type=point_type,
        spending_limit=spending_limit,
    )
