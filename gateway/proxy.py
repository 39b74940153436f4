"""
Request forwarding to backend services

A single attempt per request; a backend that cannot be reached or does not
answer in time is reported as ServiceUnavailable.
"""

import httpx
import structlog
from fastapi import Request, Response

from shared.utils.errors import ServiceUnavailable
from gateway.routing import Backend

logger = structlog.get_logger(__name__)

# Not forwarded upstream
EXCLUDED_REQUEST_HEADERS = {"host", "content-length", "connection", "keep-alive", "transfer-encoding"}
# Recomputed by the gateway's own response
EXCLUDED_RESPONSE_HEADERS = {"content-length", "content-encoding", "transfer-encoding", "connection", "keep-alive"}


class ServiceProxy:
    """Forwards requests over a shared httpx.AsyncClient"""

    def __init__(self, client: httpx.AsyncClient, timeout: float):
        self.client = client
        self.timeout = timeout

    async def forward(self, request: Request, backend: Backend) -> Response:
        # The raw path keeps percent-escapes such as %2F that request.url.path decodes
        raw_path = (request.scope.get("raw_path") or request.url.path.encode()).split(b"?", 1)[0]
        query_string = request.scope.get("query_string", b"")
        if query_string:
            raw_path += b"?" + query_string
        url = httpx.URL(backend.base_url).copy_with(raw_path=raw_path)
        headers = {
            key: value for key, value in request.headers.items()
            if key.lower() not in EXCLUDED_REQUEST_HEADERS
        }
        body = await request.body()

        try:
            upstream = await self.client.request(
                request.method,
                url,
                headers=headers,
                content=body,
                timeout=self.timeout
            )
        except httpx.RequestError as e:
            logger.error(
                "Proxy error",
                backend=backend.name,
                method=request.method,
                path=request.url.path,
                error=str(e) or e.__class__.__name__
            )
            raise ServiceUnavailable("Service temporarily unavailable") from e

        response_headers = {
            key: value for key, value in upstream.headers.items()
            if key.lower() not in EXCLUDED_RESPONSE_HEADERS
        }
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=response_headers
        )
