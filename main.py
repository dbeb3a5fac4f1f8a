import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings as default_settings
from db.session import create_engine, create_session_factory, create_tables
from handlers import setup_routers
from handlers.errors import setup_error_handlers
from handlers.middleware import request_id_middleware

module_logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    engine = create_engine(settings)
    app.state.session_factory = create_session_factory(engine)
    module_logger.info("Database engine created")

    if settings.DB_CREATE_TABLES:
        await create_tables(engine)
        module_logger.info("Database tables ready")

    try:
        yield
    finally:
        await engine.dispose()
        module_logger.info("Database engine disposed")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    settings.validate_jwt_secret()

    app = FastAPI(title="Blockchain Network Registry", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_id_middleware)

    setup_error_handlers(app)
    app.include_router(setup_routers())

    return app


def main() -> None:
    setup_logging(default_settings.LOG_LEVEL)
    app = create_app()

    module_logger.info(f"Server listening on {default_settings.HOST}:{default_settings.PORT}")
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    main()
