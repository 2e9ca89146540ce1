import json
import logging
import threading
from datetime import date
from pathlib import Path

from cardwise.domain.errors import CategoryLimitNotFoundError
from cardwise.domain.models import Card, SpendingCategory, UserPreferences
from cardwise.engine.limits import record_spend_for

logger = logging.getLogger(__name__)


class CardStore:
    def __init__(self, card_file: str, preferences_file: str | None = None):
        self.card_file = Path(card_file)
        self.preferences_file = Path(preferences_file) if preferences_file else None
        self._lock = threading.Lock()

    def load_cards(self) -> list[Card]:
        if not self.card_file.exists():
            raise FileNotFoundError(f"Card file not found: {self.card_file}")

        with self.card_file.open("r", encoding="utf-8") as fh:
            data = json.load(fh)

        return [Card.model_validate(item) for item in data]

    def fetch_active_cards(self) -> list[Card]:
        return [card for card in self.load_cards() if card.is_active]

    def fetch_preferences(self) -> UserPreferences:
        if self.preferences_file is None or not self.preferences_file.exists():
            return UserPreferences()

        with self.preferences_file.open("r", encoding="utf-8") as fh:
            return UserPreferences.model_validate(json.load(fh))

    def save_cards(self, cards: list[Card]) -> None:
        self.card_file.parent.mkdir(parents=True, exist_ok=True)
        payload = [card.model_dump(mode="json") for card in cards]
        tmp_path = self.card_file.with_suffix(self.card_file.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp_path.replace(self.card_file)

    def record_spend(
        self,
        card_id: str,
        category: SpendingCategory,
        amount: float,
        as_of: date | None = None,
    ) -> Card:
        with self._lock:
            cards = self.load_cards()
            try:
                updated = record_spend_for(cards, card_id, category, amount, as_of)
            except CategoryLimitNotFoundError as exc:
                logger.warning("Spend not tracked: %s", exc)
                return next(card for card in cards if card.card_id == card_id)

            self.save_cards([updated if card.card_id == card_id else card for card in cards])
            return updated
