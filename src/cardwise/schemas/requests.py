from datetime import date

from pydantic import BaseModel, Field

from cardwise.domain.models import SpendingCategory


class QueryRequest(BaseModel):
    message: str
    as_of: date | None = None


class SpendRequest(BaseModel):
    category: SpendingCategory
    amount: float = Field(gt=0)
    as_of: date | None = None
