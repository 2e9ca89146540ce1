from datetime import date
from pathlib import Path

import pytest

from cardwise.domain.models import (
    Card,
    CardType,
    PointType,
    QuarterlyBonus,
    ResetType,
    RewardCategory,
    SpendingCategory,
    SpendingLimit,
    UserPreferences,
)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SAMPLE_CARDS_PATH = PROJECT_ROOT / "data" / "cards" / "sample_cards.json"
AS_OF = date(2026, 10, 17)


def make_amex_gold(grocery_spend: float = 8000, grocery_limit: float = 25000) -> Card:
    return Card(
        card_id="amex_gold",
        name="Amex Gold",
        card_type=CardType.AMEX_GOLD,
        reward_categories=[
            RewardCategory(category=SpendingCategory.GROCERIES, multiplier=4.0, point_type=PointType.MEMBERSHIP_REWARDS),
            RewardCategory(category=SpendingCategory.DINING, multiplier=4.0, point_type=PointType.MEMBERSHIP_REWARDS),
            RewardCategory(category=SpendingCategory.GENERAL, multiplier=1.0, point_type=PointType.MEMBERSHIP_REWARDS),
        ],
        spending_limits=[
            SpendingLimit(
                category=SpendingCategory.GROCERIES,
                limit=grocery_limit,
                current_spending=grocery_spend,
                reset_type=ResetType.ANNUALLY,
                reset_date=date(2027, 1, 1),
            )
        ],
    )


def make_sapphire_reserve() -> Card:
    return Card(
        card_id="csr",
        name="Chase Sapphire Reserve",
        card_type=CardType.CHASE_SAPPHIRE_RESERVE,
        reward_categories=[
            RewardCategory(category=SpendingCategory.TRAVEL, multiplier=3.0, point_type=PointType.ULTIMATE_REWARDS),
            RewardCategory(category=SpendingCategory.DINING, multiplier=3.0, point_type=PointType.ULTIMATE_REWARDS),
            RewardCategory(category=SpendingCategory.GENERAL, multiplier=1.0, point_type=PointType.ULTIMATE_REWARDS),
        ],
    )


def make_freedom(gas_spend: float = 1400, bonus_spend: float = 1400) -> Card:
    return Card(
        card_id="freedom",
        name="Chase Freedom",
        card_type=CardType.CHASE_FREEDOM,
        quarterly_bonus=QuarterlyBonus(
            category=SpendingCategory.GAS,
            multiplier=5.0,
            point_type=PointType.ULTIMATE_REWARDS,
            limit=1500,
            current_spending=bonus_spend,
            quarter=4,
            year=2026,
        ),
        spending_limits=[
            SpendingLimit(
                category=SpendingCategory.GAS,
                limit=1500,
                current_spending=gas_spend,
                reset_type=ResetType.QUARTERLY,
                reset_date=date(2027, 1, 1),
            )
        ],
    )


@pytest.fixture
def amex_gold() -> Card:
    return make_amex_gold()


@pytest.fixture
def sapphire_reserve() -> Card:
    return make_sapphire_reserve()


@pytest.fixture
def freedom() -> Card:
    return make_freedom()


@pytest.fixture
def preferences() -> UserPreferences:
    return UserPreferences()


@pytest.fixture
def amex_gold_factory():
    return make_amex_gold


@pytest.fixture
def freedom_factory():
    return make_freedom


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def sample_cards_path() -> Path:
    return SAMPLE_CARDS_PATH
