from pydantic import BaseModel

from cardwise.domain.models import Card, LimitAlert, ParsedQuery, ValidationResult


class ParseResponse(BaseModel):
    parsed_query: ParsedQuery
    validation: ValidationResult


class CardsResponse(BaseModel):
    cards: list[Card]


class AlertsResponse(BaseModel):
    alerts: list[LimitAlert]
