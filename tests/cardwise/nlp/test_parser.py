import pytest

from cardwise.domain.models import QueryIntent, QueryValidationStatus, SpendingCategory
from cardwise.nlp.parser import classify_intent, extract_amount, parse_query, validate_query


def test_parse_merchant_query() -> None:
    parsed = parse_query("I'm buying groceries at Whole Foods")

    assert parsed.original_query == "I'm buying groceries at Whole Foods"
    assert parsed.category == SpendingCategory.GROCERIES
    assert parsed.merchant == "Whole Foods"
    assert parsed.amount is None
    assert parsed.intent == QueryIntent.RECOMMENDATION
    assert parsed.confidence == pytest.approx(0.8)


def test_parse_spending_update_with_amount() -> None:
    parsed = parse_query("I spent $45.50 at Starbucks")

    assert parsed.intent == QueryIntent.SPENDING_UPDATE
    assert parsed.amount == 45.5
    assert parsed.category == SpendingCategory.COFFEE
    assert parsed.merchant == "Starbucks"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("dinner for $120", 120.0),
        ("spent $1,200.00 on a flight", 1200.0),
        ("paid 35.75 for gas", 35.75),
        ("2 coffees, then 18 on lunch", 2.0),
        ("no numbers here", None),
        ("mp3 player for $20", 20.0),
        ("renewing my g2 subscription, 15 a month", 15.0),
    ],
)
def test_extract_amount_takes_first_number(text, expected) -> None:
    assert extract_amount(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("How much is left on my dining limit?", QueryIntent.LIMIT_INQUIRY),
        ("what is my remaining limit for travel", QueryIntent.LIMIT_INQUIRY),
        ("Charged 60 at Shell", QueryIntent.SPENDING_UPDATE),
        ("Add card Amex Platinum", QueryIntent.CARD_MANAGEMENT),
        ("please delete card ending 1234", QueryIntent.CARD_MANAGEMENT),
        ("Which card for Costco?", QueryIntent.RECOMMENDATION),
    ],
)
def test_classify_intent(text, expected) -> None:
    assert classify_intent(text) == expected


def test_intent_priority_prefers_spending_update() -> None:
    assert classify_intent("I spent 20 on dinner, how much left?") == QueryIntent.SPENDING_UPDATE
    assert classify_intent("how much left before I add card?") == QueryIntent.LIMIT_INQUIRY


def test_validate_query_statuses() -> None:
    assert validate_query("").status == QueryValidationStatus.EMPTY
    assert validate_query(" \n\t ").status == QueryValidationStatus.EMPTY
    assert validate_query("x" * 500).status == QueryValidationStatus.VALID
    assert validate_query("x" * 501).status == QueryValidationStatus.TOO_LONG
    assert validate_query("groceries", max_length=5).status == QueryValidationStatus.TOO_LONG


def test_validation_result_flags() -> None:
    assert validate_query("gas for the road trip").is_valid
    result = validate_query("")
    assert not result.is_valid
    assert result.message == "Query cannot be empty."
