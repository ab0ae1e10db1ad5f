from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.core.config import settings
from taskboard.core.database import engine, Base
from taskboard.core.errors import register_exception_handlers
from taskboard.core.logging_config import setup_logging
from taskboard.routers import tasks
from taskboard.routers.client_bundle import build_client_router

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("database_ready")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title="Taskboard API", lifespan=lifespan)

    # Added first so CORSMiddleware ends up outermost.
    register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tasks.router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    # Registered last: its catch-all route must not shadow the API.
    if settings.CLIENT_DIST_DIR:
        app.include_router(build_client_router(settings.CLIENT_DIST_DIR))
        log.info("client_bundle_mounted", dist_dir=settings.CLIENT_DIST_DIR)

    return app


app = create_app()


def run():
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_config=None)


if __name__ == "__main__":
    run()
