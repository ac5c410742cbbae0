from .errors import (
    CaseMatchError,
    NotFound,
    Forbidden,
    ValidationFailed,
    StoreError,
)
from .logging import setup_logging, JSONFormatter
from .redis import get_redis_client, close_redis

__all__ = [
    "CaseMatchError",
    "NotFound",
    "Forbidden",
    "ValidationFailed",
    "StoreError",
    "setup_logging",
    "JSONFormatter",
    "get_redis_client",
    "close_redis",
]
