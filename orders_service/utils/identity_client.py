"""
Users Service HTTP Client
"""

from typing import Any, Dict, Optional
from urllib.parse import quote

from shared.utils.service_client import BaseServiceClient


class IdentityServiceClient(BaseServiceClient):
    """HTTP client for the users service"""

    service_name = "users-service"

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self._make_request("GET", f"/api/users/{quote(user_id, safe='')}")
