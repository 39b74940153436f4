"""
Books Service - Main Application
Serves the book catalog, including the prices the orders service snapshots
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from shared.schemas.book import Book
from shared.utils.errors import register_exception_handlers
from shared.utils.health import create_health_router
from shared.utils.logger import setup_logging, install_request_logging
from shared.utils.store import InMemoryRecordStore, RecordStore
from books_service.config import BooksSettings
from books_service.routes import books
from books_service.services.book_service import BookService

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[BooksSettings] = None,
    store: Optional[RecordStore[Book]] = None
) -> FastAPI:
    """Build the books service application"""
    settings = settings or BooksSettings()
    book_service = BookService(store if store is not None else InMemoryRecordStore())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan events"""
        setup_logging(settings.logging_config_path, settings.log_level, settings.log_format)
        logger.info("Starting Books Service", port=settings.books_port)
        if settings.seed_sample_data:
            await book_service.seed()
        yield
        logger.info("Books Service shutdown complete")

    app = FastAPI(
        title="Bookstore - Books Service",
        description="Microservice for managing books in the bookstore",
        version=settings.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.book_service = book_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_logging(app)
    register_exception_handlers(app)

    app.include_router(create_health_router(settings, "/api/books"))
    app.include_router(books.router, prefix="/api/books", tags=["Books"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.books_port, log_config=None)
