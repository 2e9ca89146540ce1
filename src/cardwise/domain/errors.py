from cardwise.domain.models import QueryValidationStatus, SpendingCategory, ValidationResult


class CardwiseError(Exception):
    pass


class CardNotFoundError(CardwiseError):
    def __init__(self, card_id: str):
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id


class CategoryLimitNotFoundError(CardwiseError):
    def __init__(self, card_id: str, category: SpendingCategory):
        super().__init__(f"No spending limit for '{category.value}' on card {card_id}")
        self.card_id = card_id
        self.category = category


class QueryValidationError(CardwiseError, ValueError):
    def __init__(self, result: ValidationResult):
        super().__init__(result.message or f"Invalid query: {result.status.value}")
        self.result = result

    @property
    def status(self) -> QueryValidationStatus:
        return self.result.status
