import logging
from datetime import date
from typing import Iterable

from cardwise.domain.errors import CardNotFoundError, CategoryLimitNotFoundError
from cardwise.domain.models import (
    Card,
    LimitAlert,
    QuarterlyBonus,
    SpendingCategory,
    SpendingLimit,
    UserPreferences,
    quarter_of,
)

logger = logging.getLogger(__name__)

BONUS_REMINDER_THRESHOLD = 0.9


def check_and_reset_if_expired(limit: SpendingLimit, as_of: date | None = None) -> SpendingLimit:
    as_of = as_of or date.today()
    cadence = limit.reset_type.cadence
    if cadence is None or limit.reset_date is None or as_of < limit.reset_date:
        return limit

    reset_date = limit.reset_date
    while reset_date <= as_of:
        reset_date = reset_date + cadence

    logger.debug(
        "Resetting %s limit (was %.2f), next reset %s",
        limit.category.value,
        limit.current_spending,
        reset_date,
    )
    return limit.model_copy(update={"current_spending": 0.0, "reset_date": reset_date})


def roll_quarterly_bonus(bonus: QuarterlyBonus, as_of: date | None = None) -> QuarterlyBonus:
    as_of = as_of or date.today()
    current = (as_of.year, quarter_of(as_of))
    if current <= (bonus.year, bonus.quarter):
        return bonus

    return bonus.model_copy(
        update={"current_spending": 0.0, "quarter": current[1], "year": current[0]}
    )


def refresh_card(card: Card, as_of: date | None = None) -> Card:
    """Apply any due limit resets and quarter rollovers to ``card``."""
    as_of = as_of or date.today()
    limits = [check_and_reset_if_expired(limit, as_of) for limit in card.spending_limits]
    bonus = roll_quarterly_bonus(card.quarterly_bonus, as_of) if card.quarterly_bonus else None

    if limits == card.spending_limits and bonus == card.quarterly_bonus:
        return card
    return card.model_copy(update={"spending_limits": limits, "quarterly_bonus": bonus})


def record_spend(
    card: Card,
    category: SpendingCategory,
    amount: float,
    as_of: date | None = None,
) -> Card:
    if amount <= 0:
        raise ValueError(f"Spend amount must be positive, got {amount}")

    card = refresh_card(card, as_of)
    tracked = False

    limits = []
    for limit in card.spending_limits:
        if limit.category == category:
            limit = limit.model_copy(update={"current_spending": limit.current_spending + amount})
            tracked = True
        limits.append(limit)

    bonus = card.quarterly_bonus
    if bonus is not None and bonus.category == category:
        bonus = bonus.model_copy(update={"current_spending": bonus.current_spending + amount})
        tracked = True

    if not tracked:
        raise CategoryLimitNotFoundError(card.card_id, category)

    logger.info("Recorded %.2f of %s spend on %s", amount, category.value, card.name)
    return card.model_copy(update={"spending_limits": limits, "quarterly_bonus": bonus})


def record_spend_for(
    cards: Iterable[Card],
    card_id: str,
    category: SpendingCategory,
    amount: float,
    as_of: date | None = None,
) -> Card:
    card = next((item for item in cards if item.card_id == card_id), None)
    if card is None:
        raise CardNotFoundError(card_id)
    return record_spend(card, category, amount, as_of)


def collect_limit_alerts(
    cards: Iterable[Card],
    preferences: UserPreferences,
    as_of: date | None = None,
) -> list[LimitAlert]:
    if not preferences.notifications_enabled:
        return []

    as_of = as_of or date.today()
    alerts: list[LimitAlert] = []

    for card in cards:
        if not card.is_active:
            continue
        card = refresh_card(card, as_of)

        for limit in card.spending_limits:
            usage = limit.usage_percentage
            category_name = limit.category.display_name.lower()
            if usage >= 1.0:
                alerts.append(
                    LimitAlert(
                        card_id=card.card_id,
                        card_name=card.name,
                        category=limit.category,
                        kind="reached",
                        usage_percentage=usage,
                        message=(
                            f"Your {card.name} has reached its limit for {category_name}. "
                            "Consider using another card."
                        ),
                    )
                )
            elif usage >= preferences.alert_threshold:
                alerts.append(
                    LimitAlert(
                        card_id=card.card_id,
                        card_name=card.name,
                        category=limit.category,
                        kind="warning",
                        usage_percentage=usage,
                        message=f"Your {card.name} is {int(usage * 100)}% full for {category_name}.",
                    )
                )

        bonus = card.quarterly_bonus
        if bonus is not None and BONUS_REMINDER_THRESHOLD <= bonus.usage_percentage < 1.0:
            alerts.append(
                LimitAlert(
                    card_id=card.card_id,
                    card_name=card.name,
                    category=bonus.category,
                    kind="bonus",
                    usage_percentage=bonus.usage_percentage,
                    message=(
                        f"Your {card.name} quarterly bonus for "
                        f"{bonus.category.display_name.lower()} is almost maxed out."
                    ),
                )
            )

    return alerts
