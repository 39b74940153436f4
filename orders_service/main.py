"""
Orders Service - Main Application
Creates priced orders from the books and users services and tracks their status
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from shared.schemas.order import Order
from shared.utils.errors import register_exception_handlers
from shared.utils.health import create_health_router
from shared.utils.logger import setup_logging, install_request_logging
from shared.utils.store import InMemoryRecordStore, RecordStore
from orders_service.config import OrdersSettings
from orders_service.routes import orders
from orders_service.services.order_store import OrderStore
from orders_service.services.order_workflow import OrderWorkflow
from orders_service.utils.catalog_client import CatalogServiceClient
from orders_service.utils.identity_client import IdentityServiceClient

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[OrdersSettings] = None,
    records: Optional[RecordStore[Order]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the orders service application

    Args:
        settings: Service configuration, read from the environment when omitted
        records: Backing record store for orders
        transport: httpx transport for the books/users clients (tests)
    """
    settings = settings or OrdersSettings()
    store = OrderStore(records if records is not None else InMemoryRecordStore())
    catalog = CatalogServiceClient(settings.books_service_url, settings.dependency_timeout, transport)
    identity = IdentityServiceClient(settings.users_service_url, settings.dependency_timeout, transport)
    workflow = OrderWorkflow(store, catalog, identity, settings.default_book_price)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan events"""
        setup_logging(settings.logging_config_path, settings.log_level, settings.log_format)
        logger.info(
            "Starting Orders Service",
            port=settings.orders_port,
            books_service_url=settings.books_service_url,
            users_service_url=settings.users_service_url
        )
        await catalog.start()
        await identity.start()
        if settings.seed_sample_data:
            await store.seed()

        yield

        await catalog.stop()
        await identity.stop()
        logger.info("Orders Service shutdown complete")

    app = FastAPI(
        title="Bookstore - Orders Service",
        description="Microservice for managing orders in the bookstore",
        version=settings.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.order_store = store
    app.state.order_workflow = workflow

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_logging(app)
    register_exception_handlers(app)

    app.include_router(create_health_router(settings, "/api/orders"))
    app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.orders_port, log_config=None)
