"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from spoon.api import auth, health, insights, spoons
from spoon.config import settings
from spoon.core.logging import setup_logging
from spoon.database.mongo import ensure_indexes, get_database
from spoon.middleware.error_codes import register_error_handlers
from spoon.services.cooldown import CooldownTracker

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        ensure_indexes(get_database())
    except PyMongoError as exc:  # pragma: no cover - best effort at startup
        logger.warning("Skipping index creation: %s", exc)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="AI-generated insights for public GitHub repositories",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # One tracker per process; shared by every insights request.
    app.state.cooldown = CooldownTracker(settings.INSIGHTS_COOLDOWN_SECONDS)

    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router)
    app.include_router(insights.router, prefix="/api")
    app.include_router(spoons.router, prefix="/api")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("spoon.main:app", host="0.0.0.0", port=5000, reload=settings.DEBUG)
