# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from career_guidance.config import build_sqlalchemy_db_url, settings
from career_guidance.database import Base, engine
from career_guidance.models import User  # noqa: F401  registers all ORM tables
from career_guidance.api.routes.chat import router as chat_router
from career_guidance.api.routes.health import router as health_router
from career_guidance.api.routes.intake import router as intake_router
from career_guidance.api.routes.matches import router as matches_router
from career_guidance.api.routes.profile import router as profile_router
from career_guidance.api.routes.roadmaps import router as roadmaps_router


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("career_guidance").setLevel(settings.log_level)


def create_app() -> FastAPI:
    _configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s %s starting environment=%s", settings.app_name, settings.version, settings.environment)
        yield

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(intake_router, prefix=settings.api_prefix)
    application.include_router(profile_router, prefix=settings.api_prefix)
    application.include_router(matches_router, prefix=settings.api_prefix)
    application.include_router(roadmaps_router, prefix=settings.api_prefix)
    application.include_router(chat_router, prefix=settings.api_prefix)

    # Avoid accidental schema changes in shared MySQL databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
