"""
API gateway configuration
"""

from pydantic import field_validator

from shared.utils.config import ServiceSettings


class GatewaySettings(ServiceSettings):
    """Gateway settings: one base URL per backend plus timeouts"""

    service_name: str = "api-gateway"
    gateway_port: int = 3000

    books_service_url: str = "http://localhost:3001"
    users_service_url: str = "http://localhost:3002"
    orders_service_url: str = "http://localhost:3003"

    # Forwarded requests
    proxy_timeout: float = 30.0
    # Quick probes behind GET /health
    health_probe_timeout: float = 2.0

    @field_validator('proxy_timeout', 'health_probe_timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('timeouts must be positive')
        return v
