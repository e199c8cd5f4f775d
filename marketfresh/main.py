# marketfresh/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketfresh.api import api_router
from marketfresh.api.errors import register_error_handlers
from marketfresh.api.middleware import (
    BodySizeLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from marketfresh.api.routers import health
from marketfresh.data.database import Database
from marketfresh.utils.logging import get_logger
from marketfresh.utils.settings import CORS_ORIGIN, DATABASE_URL, HOST, PORT, SEED_DEMO_DATA

logger = get_logger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    database = database or Database(DATABASE_URL, seed=SEED_DEMO_DATA)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.initialize()
        logger.info("Market Fresh API started")
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title="Market Fresh API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.database = database

    # innermost first: the size check runs before routing, headers land on every response
    app.add_middleware(BodySizeLimitMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
