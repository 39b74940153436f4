"""
Logging utilities for the Bookstore services

Provides centralized logging configuration and the request logging middleware
shared by every service.
"""

import os
import sys
import time
import logging
import logging.config
from typing import Optional, Dict, Any

import structlog
import yaml
from fastapi import FastAPI, Request

# Default logging configuration
DEFAULT_LOGGING_CONFIG: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'plain',
            'stream': 'ext://sys.stdout'
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    },
    'loggers': {
        'uvicorn.access': {
            'level': 'WARNING',
            'handlers': ['console'],
            'propagate': False
        }
    }
}


def _load_config_file(config_path: str) -> Optional[Dict[str, Any]]:
    """Load a dictConfig mapping from a YAML file"""
    try:
        with open(config_path, 'r') as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        return None


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: str = "json"
) -> None:
    """
    Setup stdlib logging and structlog

    Args:
        config_path: Path to a YAML logging configuration file
        log_level: Override log level
        log_format: 'json' for machine-readable lines, 'console' for development
    """
    config = None
    if config_path and os.path.exists(config_path):
        config = _load_config_file(config_path)

    if not config:
        config = {
            **DEFAULT_LOGGING_CONFIG,
            'handlers': {k: dict(v) for k, v in DEFAULT_LOGGING_CONFIG['handlers'].items()},
            'root': dict(DEFAULT_LOGGING_CONFIG['root']),
            'loggers': {k: dict(v) for k, v in DEFAULT_LOGGING_CONFIG['loggers'].items()},
        }

    if log_level:
        log_level = log_level.upper()
        for name, logger_config in config.get('loggers', {}).items():
            if name != 'uvicorn.access':
                logger_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level

    logging.config.dictConfig(config)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def install_request_logging(app: FastAPI, skip_paths: tuple = ("/health",)) -> None:
    """Log every request except health probes"""
    request_logger = structlog.get_logger("bookstore.requests")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        if request.url.path in skip_paths:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        request_logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 3),
            client_ip=request.client.host if request.client else "unknown"
        )
        return response
