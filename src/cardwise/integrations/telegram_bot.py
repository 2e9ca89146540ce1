import asyncio
import logging

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from cardwise.agents.orchestrator import RecommendationOrchestrator
from cardwise.config import settings
from cardwise.domain.errors import QueryValidationError
from cardwise.domain.models import RecommendationResponse
from cardwise.repository.card_store import CardStore

logger = logging.getLogger(__name__)

store = CardStore(settings.card_file, settings.preferences_file)
orchestrator = RecommendationOrchestrator(max_query_length=settings.max_query_length)


def format_reply(payload: RecommendationResponse) -> str:
    primary = payload.primary_recommendation
    if primary is None:
        lines = [payload.reasoning]
        lines.extend(f"- {item}" for item in payload.suggestions)
        return "\n".join(lines)

    lines = [f"Best card: {primary.card_name} ({primary.multiplier:g}x on {primary.category.value})"]
    secondary = payload.secondary_recommendation
    if secondary is not None:
        lines.append(f"Backup: {secondary.card_name} ({secondary.multiplier:g}x)")
    lines.append(primary.reasoning)

    if payload.warnings:
        lines.append("Warnings:")
        lines.extend(f"- {item}" for item in payload.warnings)
    if payload.suggestions:
        lines.append("Tips:")
        lines.extend(f"- {item}" for item in payload.suggestions)
    return "\n".join(lines)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(
        "Tell me what you're buying, e.g. 'I'm buying groceries at Whole Foods'."
    )


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text = update.message.text or ""
    try:
        result = orchestrator.recommend(text, store.fetch_active_cards(), store.fetch_preferences())
    except QueryValidationError as exc:
        await update.message.reply_text(str(exc))
        return
    except FileNotFoundError as exc:
        logger.error("Card data unavailable: %s", exc)
        await update.message.reply_text("Your card list is unavailable right now.")
        return
    await update.message.reply_text(format_reply(result))


def main() -> None:
    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is required.")

    app = Application.builder().token(settings.telegram_bot_token).build()
    app.add_handler(CommandHandler("start", start))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    app.run_polling()


if __name__ == "__main__":
    asyncio.run(asyncio.to_thread(main))
