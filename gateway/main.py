"""
API Gateway - Main Application
Single entry point: forwards /api/books, /api/users and /api/orders to their
services and reports the health of all of them.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import structlog

from shared.utils.errors import NotFound, register_exception_handlers
from shared.utils.logger import setup_logging, install_request_logging
from gateway.config import GatewaySettings
from gateway.health import HealthAggregator
from gateway.proxy import ServiceProxy
from gateway.routing import RoutingTable

logger = structlog.get_logger(__name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    settings: Optional[GatewaySettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the gateway application

    Args:
        settings: Gateway configuration, read from the environment when omitted
        transport: httpx transport used for backend calls (tests)
    """
    settings = settings or GatewaySettings()
    routing = RoutingTable.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan events"""
        setup_logging(settings.logging_config_path, settings.log_level, settings.log_format)
        logger.info("Starting API Gateway", port=settings.gateway_port, services=routing.service_map())

        client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.proxy_timeout),
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            transport=transport
        )
        app.state.proxy = ServiceProxy(client, settings.proxy_timeout)
        app.state.health = HealthAggregator(client, routing.backends, settings.health_probe_timeout)

        yield

        await client.aclose()
        logger.info("API Gateway shutdown complete")

    app = FastAPI(
        title="Bookstore API Gateway",
        description="Unified API Gateway for Book Store Microservices",
        version=settings.service_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.routing = routing

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_logging(app)
    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Gateway liveness plus the status of each backend"""
        return await request.app.state.health.check_all()

    @app.get("/", tags=["Info"])
    async def root():
        """Welcome endpoint"""
        return {
            "message": "Welcome to Book Store API Gateway",
            "version": settings.service_version,
            "documentation": "/docs",
            "services": routing.service_map()
        }

    @app.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(request: Request, path: str):
        backend = routing.match(request.url.path)
        if backend is None:
            raise NotFound("Route not found")
        return await request.app.state.proxy.forward(request, backend)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.gateway_port, log_config=None)
