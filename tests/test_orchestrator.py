import pytest

from cardwise.agents import orchestrator as orchestrator_module
from cardwise.agents.orchestrator import RecommendationOrchestrator
from cardwise.domain.errors import QueryValidationError
from cardwise.domain.models import PointType, QueryValidationStatus, SpendingCategory, UserPreferences


@pytest.fixture
def orchestrator() -> RecommendationOrchestrator:
    return RecommendationOrchestrator(max_query_length=500)


def test_groceries_at_whole_foods_prefers_amex(orchestrator, amex_gold, sapphire_reserve, preferences, as_of):
    response = orchestrator.recommend(
        "I'm buying groceries at Whole Foods", [amex_gold, sapphire_reserve], preferences, as_of
    )

    primary = response.primary_recommendation
    assert primary.card_name == "Amex Gold"
    assert primary.category == SpendingCategory.GROCERIES
    assert primary.multiplier == 4.0
    assert primary.rank == 1
    assert primary.reasoning == (
        "Amex Gold offers 4x MR points on groceries, and you have $17,000 remaining in your limit."
    )
    assert response.secondary_recommendation.card_name == "Chase Sapphire Reserve"
    assert response.secondary_recommendation.rank == 2
    assert response.confidence == 1.0
    assert response.warnings == []
    assert response.parsed_query.merchant == "Whole Foods"
    assert "As a backup option, Chase Sapphire Reserve offers 1x points." in response.reasoning


def test_flight_prefers_sapphire_reserve(orchestrator, amex_gold, sapphire_reserve, preferences, as_of):
    response = orchestrator.recommend(
        "booking a flight to Europe", [amex_gold, sapphire_reserve], preferences, as_of
    )

    assert response.primary_recommendation.card_name == "Chase Sapphire Reserve"
    assert response.primary_recommendation.category == SpendingCategory.TRAVEL
    assert response.primary_recommendation.point_type == PointType.ULTIMATE_REWARDS
    assert response.primary_recommendation.reasoning.endswith("on travel.")
    assert any("Membership Rewards" in item for item in response.suggestions)


def test_reached_limit_warns_and_offers_secondary(
    orchestrator, amex_gold_factory, sapphire_reserve, preferences, as_of
):
    capped = amex_gold_factory(grocery_spend=25000)

    response = orchestrator.recommend("groceries run", [capped, sapphire_reserve], preferences, as_of)

    primary = response.primary_recommendation
    assert primary.is_limit_reached is True
    assert primary.remaining_amount == 0
    assert response.warnings[0] == (
        "Amex Gold has reached its groceries limit. Use Chase Sapphire Reserve instead."
    )


def test_near_limit_is_soft_warning(orchestrator, amex_gold_factory, sapphire_reserve, preferences, as_of):
    nearly = amex_gold_factory(grocery_spend=24500)

    response = orchestrator.recommend("groceries run", [nearly, sapphire_reserve], preferences, as_of)

    primary = response.primary_recommendation
    assert primary.card_name == "Amex Gold"
    assert primary.is_limit_reached is False
    assert primary.is_warning_threshold is True
    assert response.warnings == ["Amex Gold is approaching its groceries limit (98% used)."]


def test_reached_limit_without_backup_still_warns(orchestrator, amex_gold_factory, preferences, as_of):
    response = orchestrator.recommend(
        "groceries", [amex_gold_factory(grocery_spend=30000)], preferences, as_of
    )

    assert response.secondary_recommendation is None
    assert response.warnings == ["Amex Gold has reached its groceries limit."]


def test_empty_query_short_circuits(orchestrator, amex_gold, preferences, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("cards must not be scored")

    monkeypatch.setattr(orchestrator_module, "rank_cards", fail)

    with pytest.raises(QueryValidationError) as excinfo:
        orchestrator.recommend("   ", [amex_gold], preferences)
    assert excinfo.value.status == QueryValidationStatus.EMPTY


def test_too_long_query_is_rejected(amex_gold, preferences):
    with pytest.raises(QueryValidationError) as excinfo:
        RecommendationOrchestrator(max_query_length=10).recommend("groceries at the market", [amex_gold], preferences)
    assert excinfo.value.status == QueryValidationStatus.TOO_LONG


def test_no_active_cards_suggests_adding_one(orchestrator, amex_gold, preferences):
    inactive = amex_gold.model_copy(update={"is_active": False})

    for cards in ([], [inactive]):
        response = orchestrator.recommend("groceries at whole foods", cards, preferences)
        assert response.primary_recommendation is None
        assert response.secondary_recommendation is None
        assert any("Add a credit card" in item for item in response.suggestions)


def test_unresolved_category_lowers_confidence(orchestrator, amex_gold, preferences, monkeypatch):
    monkeypatch.setattr(
        orchestrator_module,
        "rank_cards",
        lambda *args, **kwargs: pytest.fail("cards must not be scored"),
    )

    response = orchestrator.recommend("hello there", [amex_gold], preferences)

    assert response.primary_recommendation is None
    assert response.confidence < 1.0
    assert "Can you specify what you're purchasing?" in response.suggestions


def test_single_card_has_no_secondary(orchestrator, amex_gold, preferences, as_of):
    response = orchestrator.recommend("dinner tonight", [amex_gold], preferences, as_of)

    assert response.primary_recommendation.category == SpendingCategory.DINING
    assert response.secondary_recommendation is None
    assert "backup" not in response.reasoning


def test_low_scores_suggest_a_better_card(orchestrator, sapphire_reserve, as_of):
    response = orchestrator.recommend(
        "new phone bill", [sapphire_reserve], UserPreferences(preferred_point_system=PointType.ULTIMATE_REWARDS), as_of
    )

    assert response.suggestions == [
        "Consider adding a card that offers better rewards for phone services."
    ]


def test_recommend_is_deterministic(orchestrator, amex_gold, sapphire_reserve, preferences, as_of):
    cards = [sapphire_reserve, amex_gold]
    first = orchestrator.recommend("dinner with friends", cards, preferences, as_of)
    second = orchestrator.recommend("dinner with friends", list(reversed(cards)), preferences, as_of)

    assert first.model_dump() == second.model_dump()


def test_capped_backup_is_not_offered_as_replacement(orchestrator, amex_gold_factory, preferences, as_of):
    capped = amex_gold_factory(grocery_spend=25000)
    also_capped = capped.model_copy(update={"card_id": "amex_gold_business", "name": "Amex Gold Business"})

    response = orchestrator.recommend("groceries run", [also_capped, capped], preferences, as_of)

    assert response.secondary_recommendation.card_name == "Amex Gold Business"
    assert response.warnings == [
        "Amex Gold has reached its groceries limit.",
        "Amex Gold Business has reached its groceries limit.",
    ]


def test_orchestrator_has_no_storage_dependency() -> None:
    assert not hasattr(RecommendationOrchestrator, "recommend_from_store")
    assert not hasattr(orchestrator_module, "CardStore")
