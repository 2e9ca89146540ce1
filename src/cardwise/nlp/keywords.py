"""Keyword and merchant tables that map free text to a spending category.

Merchants are checked first; the first merchant whose alias appears as a whole
word wins. Otherwise categories are tried in ``SpendingCategory`` declaration
order and the first category whose keyword starts a word wins.
"""

import logging
import re
from dataclasses import dataclass

from cardwise.domain.models import SpendingCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Merchant:
    name: str
    category: SpendingCategory
    aliases: tuple[str, ...]


@dataclass(frozen=True)
class CategoryMatch:
    category: SpendingCategory | None = None
    merchant: str | None = None


MERCHANTS: list[Merchant] = [
    Merchant("Whole Foods", SpendingCategory.GROCERIES, ("whole foods", "wholefoods")),
    Merchant("Trader Joe's", SpendingCategory.GROCERIES, ("trader joe's", "trader joes")),
    Merchant("Kroger", SpendingCategory.GROCERIES, ("kroger",)),
    Merchant("Safeway", SpendingCategory.GROCERIES, ("safeway",)),
    Merchant("Costco", SpendingCategory.WHOLESALE, ("costco",)),
    Merchant("Sam's Club", SpendingCategory.WHOLESALE, ("sam's club", "sams club")),
    Merchant("Amazon", SpendingCategory.ONLINE, ("amazon", "amzn")),
    Merchant("Target", SpendingCategory.GENERAL, ("target",)),
    Merchant("Walmart", SpendingCategory.GENERAL, ("walmart", "wal-mart")),
    Merchant("Starbucks", SpendingCategory.COFFEE, ("starbucks",)),
    Merchant("Dunkin'", SpendingCategory.COFFEE, ("dunkin",)),
    Merchant("McDonald's", SpendingCategory.DINING, ("mcdonald's", "mcdonalds")),
    Merchant("Chipotle", SpendingCategory.DINING, ("chipotle",)),
    Merchant("Uber", SpendingCategory.TRANSIT, ("uber",)),
    Merchant("Lyft", SpendingCategory.TRANSIT, ("lyft",)),
    Merchant("Netflix", SpendingCategory.STREAMING, ("netflix",)),
    Merchant("Spotify", SpendingCategory.STREAMING, ("spotify",)),
    Merchant("Hulu", SpendingCategory.STREAMING, ("hulu",)),
    Merchant("CVS", SpendingCategory.DRUGSTORES, ("cvs",)),
    Merchant("Walgreens", SpendingCategory.DRUGSTORES, ("walgreens",)),
    Merchant("Shell", SpendingCategory.GAS, ("shell",)),
    Merchant("Exxon", SpendingCategory.GAS, ("exxon",)),
    Merchant("Chevron", SpendingCategory.GAS, ("chevron",)),
    Merchant("BP", SpendingCategory.GAS, ("bp",)),
    Merchant("Mobil", SpendingCategory.GAS, ("mobil",)),
    Merchant("Staples", SpendingCategory.OFFICE, ("staples",)),
    Merchant("Delta", SpendingCategory.TRAVEL, ("delta air", "delta airlines", "delta flight")),
    Merchant("Airbnb", SpendingCategory.TRAVEL, ("airbnb",)),
]

CATEGORY_KEYWORDS: dict[SpendingCategory, tuple[str, ...]] = {
    SpendingCategory.GROCERIES: (
        "grocery", "groceries", "supermarket", "produce", "vegetables", "fruits",
    ),
    SpendingCategory.DINING: (
        "dining", "restaurant", "dinner", "lunch", "breakfast", "brunch",
        "eating out", "eat out", "takeout", "meal", "fast food", "drive thru",
    ),
    SpendingCategory.TRAVEL: (
        "travel", "flight", "hotel", "vacation", "trip", "airline", "airfare",
        "booking", "lodging", "cruise",
    ),
    SpendingCategory.GAS: (
        "gas", "fuel", "petrol", "filling up", "fill up",
    ),
    SpendingCategory.ONLINE: (
        "online", "internet purchase", "ecommerce", "e-commerce", "web purchase",
    ),
    SpendingCategory.DRUGSTORES: (
        "drugstore", "pharmacy", "medicine", "prescription", "rite aid",
    ),
    SpendingCategory.STREAMING: (
        "streaming", "subscription", "disney+", "apple tv", "youtube premium",
    ),
    SpendingCategory.TRANSIT: (
        "transit", "transportation", "taxi", "subway", "train", "bus fare",
        "public transport", "parking", "toll",
    ),
    SpendingCategory.OFFICE: (
        "office supplies", "office supply", "office depot", "printer", "work supplies",
    ),
    SpendingCategory.PHONE: (
        "phone bill", "cell phone", "wireless", "mobile plan", "telephone",
    ),
    SpendingCategory.COFFEE: (
        "coffee", "cafe", "latte", "espresso",
    ),
    SpendingCategory.WHOLESALE: (
        "wholesale", "warehouse club", "bulk",
    ),
    SpendingCategory.GENERAL: (
        "general purchase", "everyday purchase", "everything else",
    ),
}


def _phrase_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(r"(?<![a-z0-9])" + re.escape(phrase))


def _alias_pattern(alias: str) -> re.Pattern[str]:
    # Brand names must stand alone: "mobil" is not "mobile", "shell" is not "shellfish".
    return re.compile(r"(?<![a-z0-9])" + re.escape(alias) + r"(?![a-z0-9])")


_MERCHANT_PATTERNS: list[tuple[Merchant, list[re.Pattern[str]]]] = [
    (merchant, [_alias_pattern(alias) for alias in merchant.aliases]) for merchant in MERCHANTS
]

_CATEGORY_PATTERNS: list[tuple[SpendingCategory, list[re.Pattern[str]]]] = [
    (category, [_phrase_pattern(kw) for kw in CATEGORY_KEYWORDS.get(category, ())])
    for category in SpendingCategory
]


def normalize(text: str) -> str:
    return " ".join(text.lower().split())


def contains_phrase(text: str, phrase: str) -> bool:
    """True when ``phrase`` occurs in already normalized ``text`` starting at a word edge."""
    return _phrase_pattern(phrase).search(text) is not None


def match_merchant(text: str) -> Merchant | None:
    normalized = normalize(text)
    for merchant, patterns in _MERCHANT_PATTERNS:
        if any(pattern.search(normalized) for pattern in patterns):
            return merchant
    return None


def match_keyword_category(text: str) -> SpendingCategory | None:
    normalized = normalize(text)
    for category, patterns in _CATEGORY_PATTERNS:
        if any(pattern.search(normalized) for pattern in patterns):
            return category
    return None


def match_category(text: str) -> CategoryMatch:
    merchant = match_merchant(text)
    if merchant is not None:
        logger.debug("Matched merchant '%s' -> %s", merchant.name, merchant.category.value)
        return CategoryMatch(category=merchant.category, merchant=merchant.name)

    category = match_keyword_category(text)
    if category is not None:
        logger.debug("Matched keyword category %s", category.value)
    return CategoryMatch(category=category)
