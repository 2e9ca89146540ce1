from fastapi import APIRouter, Depends, HTTPException

from cardwise.agents.orchestrator import RecommendationOrchestrator
from cardwise.api.deps import get_orchestrator, get_store
from cardwise.domain.errors import QueryValidationError
from cardwise.domain.models import RecommendationResponse, ValidationResult
from cardwise.nlp.parser import parse_query, validate_query
from cardwise.repository.card_store import CardStore
from cardwise.schemas.requests import QueryRequest
from cardwise.schemas.responses import ParseResponse

router = APIRouter(tags=["recommend"])


@router.post("/recommend", response_model=RecommendationResponse)
def recommend(
    request: QueryRequest,
    store: CardStore = Depends(get_store),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> RecommendationResponse:
    try:
        return orchestrator.recommend(
            request.message,
            store.fetch_active_cards(),
            store.fetch_preferences(),
            as_of=request.as_of,
        )
    except QueryValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/parse", response_model=ParseResponse)
def parse(request: QueryRequest) -> ParseResponse:
    return ParseResponse(
        parsed_query=parse_query(request.message),
        validation=validate_query(request.message),
    )


@router.post("/validate", response_model=ValidationResult)
def validate(request: QueryRequest) -> ValidationResult:
    return validate_query(request.message)
