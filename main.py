import sys
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import ConfigurationError, Settings, load_settings
from database import ConnectionFailedError, Database, connect
from logging_setup import configure_logging
from routes import router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("api_starting", collection=app.state.database.collection.name)
    yield
    app.state.database.close()
    logger.info("api_stopping")


def create_app(database: Database, settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="Car Dealer API", lifespan=lifespan)
    app.state.database = database
    app.state.settings = settings or Settings(mongo_uri="")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"message": "Car Dealer API running"}

    @app.get("/health")
    def health():
        db = app.state.database
        if db.ping():
            return {"backend": "running", "database": "connected", "database_name": db.name}
        return JSONResponse(
            status_code=503,
            content={"backend": "running", "database": "unreachable", "database_name": db.name},
        )

    app.include_router(router)
    return app


def build_app() -> FastAPI:
    """Settings and connection from the environment; serve with `uvicorn --factory main:build_app`."""
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format)
    return create_app(connect(settings), settings)


def main() -> int:
    configure_logging()
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("invalid_configuration", error=str(e))
        return 1

    configure_logging(settings.log_level, settings.log_format)
    try:
        database = connect(settings)
    except ConnectionFailedError:
        return 1

    import uvicorn
    uvicorn.run(create_app(database, settings), host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
