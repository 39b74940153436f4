"""
Users Service - Main Application
Serves the user records the orders service verifies against
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from shared.schemas.user import User
from shared.utils.errors import register_exception_handlers
from shared.utils.health import create_health_router
from shared.utils.logger import setup_logging, install_request_logging
from shared.utils.store import InMemoryRecordStore, RecordStore
from users_service.config import UsersSettings
from users_service.routes import users
from users_service.services.user_service import UserService

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[UsersSettings] = None,
    store: Optional[RecordStore[User]] = None
) -> FastAPI:
    """Build the users service application"""
    settings = settings or UsersSettings()
    user_service = UserService(store if store is not None else InMemoryRecordStore())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan events"""
        setup_logging(settings.logging_config_path, settings.log_level, settings.log_format)
        logger.info("Starting Users Service", port=settings.users_port)
        if settings.seed_sample_data:
            await user_service.seed()
        yield
        logger.info("Users Service shutdown complete")

    app = FastAPI(
        title="Bookstore - Users Service",
        description="Microservice for managing users in the bookstore",
        version=settings.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.user_service = user_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_logging(app)
    register_exception_handlers(app)

    app.include_router(create_health_router(settings, "/api/users"))
    app.include_router(users.router, prefix="/api/users", tags=["Users"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.users_port, log_config=None)
