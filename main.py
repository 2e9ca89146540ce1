import argparse
import logging

from cardwise.config import settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cardwise unified entrypoint")
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["api", "bot", "ask"],
        default="api",
        help="Run mode: api (default), bot, ask",
    )
    parser.add_argument("query", nargs="?", default="", help="Purchase description for ask mode")
    return parser


def run_ask(query: str) -> None:
    from cardwise.agents.orchestrator import RecommendationOrchestrator
    from cardwise.domain.errors import QueryValidationError
    from cardwise.integrations.telegram_bot import format_reply
    from cardwise.repository.card_store import CardStore

    store = CardStore(settings.card_file, settings.preferences_file)
    orchestrator = RecommendationOrchestrator(max_query_length=settings.max_query_length)
    try:
        result = orchestrator.recommend(query, store.fetch_active_cards(), store.fetch_preferences())
    except QueryValidationError as exc:
        print(f"Invalid query: {exc}")
        return
    print(format_reply(result))


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.mode == "api":
        from cardwise.api.app import run as run_api

        run_api()
        return

    if args.mode == "bot":
        from cardwise.integrations.telegram_bot import main as run_bot

        run_bot()
        return

    run_ask(args.query)


if __name__ == "__main__":
    main()
