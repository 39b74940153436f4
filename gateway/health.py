"""
Backend health aggregation

Every call re-probes every backend concurrently; nothing is cached.
"""

import asyncio
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

import httpx
import structlog

from gateway.routing import Backend

logger = structlog.get_logger(__name__)


class BackendStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


class HealthAggregator:
    """Quick probes of each backend's /health endpoint"""

    def __init__(self, client: httpx.AsyncClient, backends: List[Backend], timeout: float = 2.0):
        self.client = client
        self.backends = backends
        self.timeout = timeout

    async def probe(self, backend: Backend) -> BackendStatus:
        """One bounded request; transport failures and timeouts count as unhealthy"""
        try:
            response = await self.client.get(backend.health_url, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.warning("Health probe failed", backend=backend.name, error=str(e) or e.__class__.__name__)
            return BackendStatus.UNHEALTHY

        if response.is_success:
            return BackendStatus.HEALTHY
        logger.warning("Health probe returned error status", backend=backend.name, status_code=response.status_code)
        return BackendStatus.UNHEALTHY

    async def check_backends(self) -> Dict[str, BackendStatus]:
        results = await asyncio.gather(
            *(self.probe(backend) for backend in self.backends),
            return_exceptions=True
        )

        statuses = {}
        for backend, result in zip(self.backends, results):
            if isinstance(result, BackendStatus):
                statuses[backend.name] = result
            else:
                logger.error("Health probe did not complete", backend=backend.name, error=repr(result))
                statuses[backend.name] = BackendStatus.UNKNOWN
        return statuses

    async def check_all(self) -> Dict[str, Any]:
        """The gateway reports itself healthy whenever it can answer"""
        statuses = await self.check_backends()
        return {
            "gateway": BackendStatus.HEALTHY.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {name: status.value for name, status in statuses.items()}
        }
