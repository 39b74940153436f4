"""
Users service configuration
"""

from shared.utils.config import ServiceSettings


class UsersSettings(ServiceSettings):
    """Identity service settings"""

    service_name: str = "users-service"
    users_port: int = 3002
