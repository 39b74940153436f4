"""
Base HTTP client for service-to-service calls

Connection pooling follows the httpx recommendations:
- Single shared AsyncClient opened at app startup, closed at shutdown
- Explicit limits to prevent connection exhaustion
- One bounded timeout for every phase of a call, so a slow dependency
  fails the same way an unreachable one does
"""

from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


class ServiceClientError(Exception):
    """A dependency call failed: transport error, timeout, error status or bad body"""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class BaseServiceClient:
    """
    HTTP client for one downstream service.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
        - If not started, each call opens a short-lived client
    """

    service_name = "service"

    MAX_CONNECTIONS = 100
    MAX_KEEPALIVE = 20
    KEEPALIVE_EXPIRY = 5.0

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _build_client(self) -> httpx.AsyncClient:
        limits = httpx.Limits(
            max_connections=self.MAX_CONNECTIONS,
            max_keepalive_connections=self.MAX_KEEPALIVE,
            keepalive_expiry=self.KEEPALIVE_EXPIRY
        )
        return httpx.AsyncClient(
            base_url=self.base_url,
            limits=limits,
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport
        )

    async def start(self):
        """Initialize the shared HTTP client"""
        if self._client is not None:
            logger.warning("Client already started", service=self.service_name)
            return
        self._client = self._build_client()
        logger.info("Client started", service=self.service_name, base_url=self.base_url, timeout=self.timeout)

    async def stop(self):
        """Close the HTTP client and release resources"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Client stopped", service=self.service_name)

    async def _make_request(self, method: str, endpoint: str, **kwargs) -> Optional[Dict[str, Any]]:
        """Issue a single request (no retries) and decode the JSON body"""
        try:
            if self._client:
                response = await self._client.request(method, endpoint, **kwargs)
            else:
                async with self._build_client() as client:
                    response = await client.request(method, endpoint, **kwargs)

            response.raise_for_status()

            if response.status_code == 204 or not response.content:
                return None

            return response.json()

        except httpx.TimeoutException as e:
            raise ServiceClientError(self.service_name, f"timed out calling {endpoint}") from e
        except httpx.HTTPStatusError as e:
            raise ServiceClientError(
                self.service_name,
                f"{endpoint} returned {e.response.status_code}",
                status_code=e.response.status_code
            ) from e
        except httpx.RequestError as e:
            raise ServiceClientError(self.service_name, f"failed to connect: {e}") from e
        except ValueError as e:
            raise ServiceClientError(self.service_name, f"invalid JSON from {endpoint}") from e
