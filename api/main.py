import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from coordinates import router as coordinates_router
from core import db
from core.context import AppContext
from core.errors import StorageError, storage_error_handler
from core.logs import configure_logging
from core.settings import Settings, load_settings
from core.static import ListingStaticFiles

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the pool once per process and hand it to handlers via the context.
    settings: Settings = app.state.settings
    pool = await db.create_pool(settings.pool)
    app.state.context = AppContext(settings=settings, pool=pool)
    try:
        yield
    finally:
        app.state.context = None
        await db.close_pool(pool)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application. Also usable as `uvicorn --factory main:create_app`.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.context = None

    app.add_exception_handler(StorageError, storage_error_handler)
    app.mount("/static", ListingStaticFiles(directory=settings.static_dir, check_dir=False), name="static")
    app.include_router(coordinates_router.router, tags=["coordinates"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    settings = load_settings()
    app = create_app(settings)
    logger.info("Server running at http://%s:%s/", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
