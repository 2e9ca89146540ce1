import uvicorn
from fastapi import FastAPI

from cardwise.api.routes.cards import router as cards_router
from cardwise.api.routes.health import router as health_router
from cardwise.api.routes.recommend import router as recommend_router
from cardwise.config import settings

app = FastAPI(title="Cardwise API", version="0.1.0")
app.include_router(health_router)
app.include_router(recommend_router)
app.include_router(cards_router)


def run() -> None:
    uvicorn.run("cardwise.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
