"""
Static routing table: path prefix -> backend
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from gateway.config import GatewaySettings


@dataclass(frozen=True)
class Backend:
    """A backend service addressed by a fixed base URL"""
    name: str
    prefix: str
    base_url: str

    @property
    def health_url(self) -> str:
        return f"{self.base_url}/health"


class RoutingTable:
    """Read-only after construction"""

    def __init__(self, backends: List[Backend]):
        self._backends = tuple(backends)
        # Longest prefix first so nested prefixes win
        self._by_prefix = sorted(self._backends, key=lambda b: len(b.prefix), reverse=True)

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> "RoutingTable":
        return cls([
            Backend("books", "/api/books", settings.books_service_url.rstrip('/')),
            Backend("users", "/api/users", settings.users_service_url.rstrip('/')),
            Backend("orders", "/api/orders", settings.orders_service_url.rstrip('/')),
        ])

    @property
    def backends(self) -> List[Backend]:
        return list(self._backends)

    def service_map(self) -> Dict[str, str]:
        return {b.name: f"{b.base_url}{b.prefix}" for b in self._backends}

    def match(self, path: str) -> Optional[Backend]:
        """Backend whose prefix matches path on a segment boundary"""
        for backend in self._by_prefix:
            if path == backend.prefix or path.startswith(backend.prefix + "/"):
                return backend
        return None
