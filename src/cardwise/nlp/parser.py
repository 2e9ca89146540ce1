import logging
import re

from cardwise.config import settings
from cardwise.domain.models import (
    ParsedQuery,
    QueryIntent,
    QueryValidationStatus,
    ValidationResult,
)
from cardwise.nlp.keywords import contains_phrase, match_category, normalize

logger = logging.getLogger(__name__)

AMOUNT_PATTERN = re.compile(r"(?<![\w.])\$?\s?(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)")

# Checked in order; the first intent with a matching phrase wins.
INTENT_RULES: list[tuple[QueryIntent, tuple[str, ...]]] = [
    (
        QueryIntent.SPENDING_UPDATE,
        ("i spent", "spent", "charged", "paid", "update my spending", "track spending"),
    ),
    (
        QueryIntent.LIMIT_INQUIRY,
        (
            "how much left", "how much is left", "how much do i have left",
            "remaining limit", "limit left", "how close", "remaining",
        ),
    ),
    (
        QueryIntent.CARD_MANAGEMENT,
        ("add card", "add a card", "add my", "remove card", "remove my", "delete card", "delete my"),
    ),
]

INTENT_CONFIDENCE: dict[QueryIntent, float] = {
    QueryIntent.RECOMMENDATION: 0.1,
    QueryIntent.SPENDING_UPDATE: 0.05,
    QueryIntent.LIMIT_INQUIRY: 0.05,
    QueryIntent.CARD_MANAGEMENT: 0.0,
}


def extract_amount(text: str) -> float | None:
    match = AMOUNT_PATTERN.search(text)
    if match is None:
        return None
    return float(match.group(1).replace(",", ""))


def classify_intent(text: str) -> QueryIntent:
    normalized = normalize(text)
    for intent, phrases in INTENT_RULES:
        if any(contains_phrase(normalized, phrase) for phrase in phrases):
            return intent
    return QueryIntent.RECOMMENDATION


def _confidence(parsed: ParsedQuery) -> float:
    confidence = 0.0
    if parsed.category is not None:
        confidence += 0.4
    if parsed.merchant is not None:
        confidence += 0.3
    if parsed.amount is not None:
        confidence += 0.2
    confidence += INTENT_CONFIDENCE[parsed.intent]
    return round(min(confidence, 1.0), 2)


def parse_query(text: str) -> ParsedQuery:
    match = match_category(text)
    parsed = ParsedQuery(
        original_query=text,
        category=match.category,
        merchant=match.merchant,
        amount=extract_amount(text),
        intent=classify_intent(text),
    )
    parsed = parsed.model_copy(update={"confidence": _confidence(parsed)})
    logger.debug("Parsed query %r -> %s", text, parsed.model_dump())
    return parsed


def validate_query(text: str, max_length: int | None = None) -> ValidationResult:
    limit = max_length if max_length is not None else settings.max_query_length
    trimmed = text.strip()

    if not trimmed:
        return ValidationResult(status=QueryValidationStatus.EMPTY, message="Query cannot be empty.")

    if len(trimmed) > limit:
        return ValidationResult(
            status=QueryValidationStatus.TOO_LONG,
            message=f"Query is too long ({len(trimmed)} > {limit} characters).",
        )

    return ValidationResult(status=QueryValidationStatus.VALID)
