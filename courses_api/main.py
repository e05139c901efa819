import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware

from courses_api.config import Settings, settings as default_settings
from courses_api.core.database import Database
from courses_api.core.logging_config import configure_logging
from courses_api.utils.exceptions import register_exception_handlers
from courses_api.api.v1.endpoints import (
    courses,
    enrollments,
    users,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    database.create_all()
    logger.info(f"{app.title} {app.version} started ({app.state.settings.ENVIRONMENT})")
    yield
    database.dispose()


def get_application(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or default_settings
    configure_logging(settings)

    docs_enabled = settings.docs_enabled
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=settings.DATABASE_ECHO)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register health endpoint
    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        return {"status": "ok"}

    api_router = APIRouter(prefix=settings.API_PREFIX)

    api_router.include_router(courses.router, prefix="/courses", tags=["courses"])
    api_router.include_router(users.router, prefix="/users", tags=["users"])
    api_router.include_router(enrollments.router, prefix="/enrollments", tags=["enrollments"])

    app.include_router(api_router)

    return app


app = get_application()
