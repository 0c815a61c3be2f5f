# main.py
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from account_service.auth.dependencies import AuthServices
from account_service.core.config import Settings, settings as default_settings
from account_service.core.errors import register_exception_handlers
from account_service.database import Base, build_engine, build_session_factory
from account_service.models import achievement, user, wallet  # noqa: F401  (register tables)
from account_service.routers import auth, user_routes

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    engine = engine or build_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create DB tables
        Base.metadata.create_all(bind=engine)
        logger.info("%s ready (%s)", settings.APP_NAME, engine.url.get_backend_name())
        yield

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.auth = AuthServices.from_settings(settings)

    # CORS with credentials (for cookie sessions)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS,
        allow_credentials=settings.ALLOW_CREDENTIALS,
        allow_methods=settings.ALLOW_METHODS,
        allow_headers=settings.ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        return {"message": f"{settings.APP_NAME} running"}

    # Routers
    app.include_router(auth.router)
    app.include_router(user_routes.router)

    return app


app = create_app()
