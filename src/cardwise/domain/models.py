from datetime import date
from enum import Enum
from typing import Any, Literal
from uuid import uuid4

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field, model_validator

WARNING_THRESHOLD = 0.85


class SpendingCategory(str, Enum):
    # Declaration order is the keyword resolution order.
    GROCERIES = "groceries"
    DINING = "dining"
    TRAVEL = "travel"
    GAS = "gas"
    ONLINE = "online"
    DRUGSTORES = "drugstores"
    STREAMING = "streaming"
    TRANSIT = "transit"
    OFFICE = "office"
    PHONE = "phone"
    COFFEE = "coffee"
    WHOLESALE = "wholesale"
    GENERAL = "general"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


class PointType(str, Enum):
    MEMBERSHIP_REWARDS = "MR"
    ULTIMATE_REWARDS = "UR"
    THANK_YOU_POINTS = "TYP"
    CASH_BACK = "Cash Back"
    CAPITAL_ONE_MILES = "Capital One Miles"
    DISCOVER_CASH_BACK = "Discover Cash Back"

    @property
    def display_name(self) -> str:
        return POINT_TYPE_DISPLAY_NAMES[self]


class ResetType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"
    NEVER = "never"

    @property
    def cadence(self) -> relativedelta | None:
        return RESET_CADENCES[self]


class Language(str, Enum):
    ENGLISH = "English"
    CHINESE = "Chinese"
    BILINGUAL = "Bilingual"


class CardType(str, Enum):
    AMEX_GOLD = "Amex Gold"
    AMEX_PLATINUM = "Amex Platinum"
    CHASE_FREEDOM = "Chase Freedom"
    CHASE_SAPPHIRE_PREFERRED = "Chase Sapphire Preferred"
    CHASE_SAPPHIRE_RESERVE = "Chase Sapphire Reserve"
    CITI_DOUBLE_CASH = "Citi Double Cash"
    CUSTOM = "Custom"


class QueryIntent(str, Enum):
    RECOMMENDATION = "recommendation"
    SPENDING_UPDATE = "spending_update"
    LIMIT_INQUIRY = "limit_inquiry"
    CARD_MANAGEMENT = "card_management"


class QueryValidationStatus(str, Enum):
    VALID = "valid"
    EMPTY = "empty"
    TOO_LONG = "too_long"


CATEGORY_DISPLAY_NAMES: dict[SpendingCategory, str] = {
    SpendingCategory.GROCERIES: "Groceries",
    SpendingCategory.DINING: "Dining",
    SpendingCategory.TRAVEL: "Travel",
    SpendingCategory.GAS: "Gas",
    SpendingCategory.ONLINE: "Online Shopping",
    SpendingCategory.DRUGSTORES: "Drugstores",
    SpendingCategory.STREAMING: "Streaming",
    SpendingCategory.TRANSIT: "Transit",
    SpendingCategory.OFFICE: "Office Supply",
    SpendingCategory.PHONE: "Phone Services",
    SpendingCategory.COFFEE: "Coffee Shops",
    SpendingCategory.WHOLESALE: "Wholesale Clubs",
    SpendingCategory.GENERAL: "General Purchases",
}

POINT_TYPE_DISPLAY_NAMES: dict[PointType, str] = {
    PointType.MEMBERSHIP_REWARDS: "Membership Rewards (MR)",
    PointType.ULTIMATE_REWARDS: "Ultimate Rewards (UR)",
    PointType.THANK_YOU_POINTS: "ThankYou Points (TYP)",
    PointType.CASH_BACK: "Cash Back",
    PointType.CAPITAL_ONE_MILES: "Capital One Miles",
    PointType.DISCOVER_CASH_BACK: "Discover Cash Back",
}

RESET_CADENCES: dict[ResetType, relativedelta | None] = {
    ResetType.MONTHLY: relativedelta(months=1),
    ResetType.QUARTERLY: relativedelta(months=3),
    ResetType.ANNUALLY: relativedelta(years=1),
    ResetType.NEVER: None,
}


def quarter_of(day: date) -> int:
    return (day.month - 1) // 3 + 1


class RewardCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: SpendingCategory
    multiplier: float = Field(gt=0)
    point_type: PointType
    is_active: bool = True


class QuarterlyBonus(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: SpendingCategory
    multiplier: float = Field(gt=0)
    point_type: PointType
    limit: float = Field(ge=0)
    current_spending: float = Field(default=0.0, ge=0)
    quarter: int = Field(default_factory=lambda: quarter_of(date.today()), ge=1, le=4)
    year: int = Field(default_factory=lambda: date.today().year)

    @property
    def usage_percentage(self) -> float:
        if self.limit <= 0:
            return 0.0
        return self.current_spending / self.limit

    @property
    def is_capped(self) -> bool:
        return self.current_spending >= self.limit


class SpendingLimit(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: SpendingCategory
    limit: float = Field(ge=0)
    current_spending: float = Field(default=0.0, ge=0)
    reset_type: ResetType = ResetType.ANNUALLY
    reset_date: date | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_reset_date(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("reset_date") is None:
            cadence = ResetType(data.get("reset_type", ResetType.ANNUALLY)).cadence
            if cadence is not None:
                data = {**data, "reset_date": date.today() + cadence}
        return data

    @property
    def usage_percentage(self) -> float:
        if self.limit <= 0:
            return 0.0
        return self.current_spending / self.limit

    @property
    def remaining_amount(self) -> float:
        return max(0.0, self.limit - self.current_spending)

    @property
    def is_limit_reached(self) -> bool:
        return self.current_spending >= self.limit

    @property
    def is_warning_threshold(self) -> bool:
        return self.usage_percentage >= WARNING_THRESHOLD


def _rewards(point_type: PointType, **multipliers: float) -> list[RewardCategory]:
    return [
        RewardCategory(category=SpendingCategory(name), multiplier=value, point_type=point_type)
        for name, value in multipliers.items()
    ]


CARD_TYPE_DEFAULT_REWARDS: dict[CardType, list[RewardCategory]] = {
    CardType.AMEX_GOLD: _rewards(
        PointType.MEMBERSHIP_REWARDS, groceries=4.0, dining=4.0, travel=3.0, general=1.0
    ),
    CardType.AMEX_PLATINUM: _rewards(
        PointType.MEMBERSHIP_REWARDS, travel=5.0, dining=1.0, general=1.0
    ),
    CardType.CHASE_FREEDOM: _rewards(PointType.ULTIMATE_REWARDS, general=1.0),
    CardType.CHASE_SAPPHIRE_PREFERRED: _rewards(
        PointType.ULTIMATE_REWARDS, travel=2.0, dining=3.0, general=1.0
    ),
    CardType.CHASE_SAPPHIRE_RESERVE: _rewards(
        PointType.ULTIMATE_REWARDS, travel=3.0, dining=3.0, general=1.0
    ),
    CardType.CITI_DOUBLE_CASH: _rewards(PointType.THANK_YOU_POINTS, general=2.0),
    CardType.CUSTOM: [],
}


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    card_id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    card_type: CardType = CardType.CUSTOM
    reward_categories: list[RewardCategory] = Field(default_factory=list)
    quarterly_bonus: QuarterlyBonus | None = None
    spending_limits: list[SpendingLimit] = Field(default_factory=list)
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _apply_card_type_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("reward_categories"):
            card_type = CardType(data.get("card_type", CardType.CUSTOM))
            data = {**data, "reward_categories": list(CARD_TYPE_DEFAULT_REWARDS[card_type])}
        return data

    @model_validator(mode="after")
    def _check_unique_categories(self) -> "Card":
        active = [reward.category for reward in self.reward_categories if reward.is_active]
        if len(active) != len(set(active)):
            raise ValueError(f"{self.name}: duplicate active reward category")

        limited = [limit.category for limit in self.spending_limits]
        if len(limited) != len(set(limited)):
            raise ValueError(f"{self.name}: duplicate spending limit category")
        return self

    def reward_for(self, category: SpendingCategory) -> RewardCategory | None:
        return next(
            (r for r in self.reward_categories if r.category == category and r.is_active),
            None,
        )

    def limit_for(self, category: SpendingCategory) -> SpendingLimit | None:
        return next((lim for lim in self.spending_limits if lim.category == category), None)


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    preferred_point_system: PointType = PointType.MEMBERSHIP_REWARDS
    alert_threshold: float = Field(default=0.85, ge=0, le=1)
    language: Language = Language.ENGLISH
    notifications_enabled: bool = True
    auto_update_spending: bool = False


class ParsedQuery(BaseModel):
    original_query: str
    category: SpendingCategory | None = None
    merchant: str | None = None
    amount: float | None = None
    intent: QueryIntent = QueryIntent.RECOMMENDATION
    confidence: float = Field(default=0.0, ge=0, le=1)


class ValidationResult(BaseModel):
    status: QueryValidationStatus
    message: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.status == QueryValidationStatus.VALID


class CardScore(BaseModel):
    card: Card
    category: SpendingCategory
    base_score: float
    category_score: float
    preference_score: float
    limit_score: float
    total_score: float
    point_type: PointType | None = None
    spending_limit: SpendingLimit | None = None


class CardRecommendation(BaseModel):
    card_id: str
    card_name: str
    category: SpendingCategory
    multiplier: float
    point_type: PointType | None = None
    reasoning: str
    current_spending: float = 0.0
    limit: float = 0.0
    remaining_amount: float | None = None
    is_limit_reached: bool = False
    is_warning_threshold: bool = False
    rank: int = Field(default=1, ge=1, le=2)


class RecommendationResponse(BaseModel):
    primary_recommendation: CardRecommendation | None = None
    secondary_recommendation: CardRecommendation | None = None
    reasoning: str = ""
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0, le=1)
    parsed_query: ParsedQuery | None = None


class LimitAlert(BaseModel):
    card_id: str
    card_name: str
    category: SpendingCategory
    kind: Literal["reached", "warning", "bonus"]
    usage_percentage: float
    message: str
