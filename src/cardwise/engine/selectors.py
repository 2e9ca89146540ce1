from datetime import date
from typing import Iterable

from cardwise.domain.models import Card, CardScore, SpendingCategory, UserPreferences
from cardwise.engine.evaluator import score_card


def rank_cards(
    cards: Iterable[Card],
    category: SpendingCategory,
    preferences: UserPreferences,
    as_of: date | None = None,
) -> list[CardScore]:
    scores = [score_card(card, category, preferences, as_of) for card in cards if card.is_active]
    scores.sort(key=lambda item: (-item.total_score, item.card.name.casefold()))
    return scores
