import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from sqlalchemy import text
from sqlalchemy.exc import ProgrammingError

from influencerflow.config import settings
from influencerflow.db.base import engine
from influencerflow.routers import (
    brands,
    campaigns,
    contracts,
    creators,
    dashboard,
    offers,
    payments,
    reports,
    seed,
    stripe_webhooks,
    users,
)

logger = logging.getLogger(__name__)


def _is_schema_mismatch_programming_error(exc: ProgrammingError) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) in {"42703", "42P01"}:
        return True
    message = str(orig or exc).lower()
    return any(
        marker in message
        for marker in (
            "undefined column",
            "undefined table",
            "does not exist",
            "no such column",
        )
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="InfluencerFlow API",
        default_response_class=ORJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(set(settings.BACKEND_CORS_ORIGINS)),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProgrammingError)
    async def programming_error_handler(_request: Request, exc: ProgrammingError) -> ORJSONResponse:
        logger.exception("Database programming error", exc_info=exc)
        if _is_schema_mismatch_programming_error(exc):
            return ORJSONResponse(
                status_code=503,
                content={
                    "detail": "Database schema is out of date. Run `alembic upgrade head` and redeploy."
                },
            )
        return ORJSONResponse(status_code=500, content={"detail": "Database query failed."})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_request: Request, exc: Exception) -> ORJSONResponse:
        logger.exception("Unhandled server exception", exc_info=exc)
        return ORJSONResponse(status_code=500, content={"detail": "Internal server error."})

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/health/db")
    def health_db() -> dict[str, str]:
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return {"db": "ok"}
        except Exception as exc:  # pragma: no cover - simple runtime check
            logger.warning("Database health check failed", exc_info=exc)
            return {"db": f"error: {exc}"}

    app.include_router(users.router)
    app.include_router(creators.router)
    app.include_router(brands.router)
    app.include_router(campaigns.router)
    app.include_router(offers.router)
    app.include_router(contracts.router)
    app.include_router(payments.router)
    app.include_router(stripe_webhooks.router)
    app.include_router(reports.router)
    app.include_router(dashboard.router)
    app.include_router(seed.router)

    return app


app = create_app()
