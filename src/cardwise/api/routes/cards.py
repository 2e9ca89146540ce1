from fastapi import APIRouter, Depends, HTTPException

from cardwise.api.deps import get_store
from cardwise.domain.errors import CardNotFoundError
from cardwise.domain.models import Card
from cardwise.engine.limits import collect_limit_alerts
from cardwise.repository.card_store import CardStore
from cardwise.schemas.requests import SpendRequest
from cardwise.schemas.responses import AlertsResponse, CardsResponse

router = APIRouter(tags=["cards"])


@router.get("/cards", response_model=CardsResponse)
def list_cards(store: CardStore = Depends(get_store)) -> CardsResponse:
    return CardsResponse(cards=store.load_cards())


@router.post("/cards/{card_id}/spend", response_model=Card)
def record_spend(card_id: str, request: SpendRequest, store: CardStore = Depends(get_store)) -> Card:
    try:
        return store.record_spend(card_id, request.category, request.amount, as_of=request.as_of)
    except CardNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/alerts", response_model=AlertsResponse)
def alerts(store: CardStore = Depends(get_store)) -> AlertsResponse:
    return AlertsResponse(
        alerts=collect_limit_alerts(store.fetch_active_cards(), store.fetch_preferences())
    )
