"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse

from notes_app.api.schemas.health import HealthOut, PingOut
from notes_app.infrastructure.db.mongo import ping as mongo_ping


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable
root_router = APIRouter(tags=["Health"])


@root_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Hello"


@router.get("/ping", response_model=PingOut, summary="Ping básico")
async def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
async def health(request: Request) -> HealthOut:
    db = getattr(request.app.state, "db", None)
    db_ok = db is not None and await mongo_ping(db)
    return HealthOut(ok=True, db=db_ok)
