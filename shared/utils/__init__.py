"""
Shared utilities for the Bookstore services

This package contains common utilities used across all microservices.
"""

from .logger import setup_logging, install_request_logging
from .errors import (
    ServiceError,
    InvalidRequest,
    NotFound,
    ServiceUnavailable,
    InternalError,
    register_exception_handlers,
)
from .store import RecordStore, InMemoryRecordStore
from .service_client import BaseServiceClient, ServiceClientError

__all__ = [
    "setup_logging",
    "install_request_logging",
    "ServiceError",
    "InvalidRequest",
    "NotFound",
    "ServiceUnavailable",
    "InternalError",
    "register_exception_handlers",
    "RecordStore",
    "InMemoryRecordStore",
    "BaseServiceClient",
    "ServiceClientError",
]

__version__ = "1.0.0"
