from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import jwt
import logging

from casematch import InterestEventPublisher, get_redis_client
from app.config import settings

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_attorney_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Verify the bearer token and return the attorney's subject id.

    Tokens are issued by the identity service; only signature, expiry and
    (when configured) audience are checked here.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.PyJWTError as e:
        logger.info(f"[auth] Rejected bearer token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    attorney_id = payload.get("sub")
    if not attorney_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return str(attorney_id)


async def get_event_publisher() -> Optional[InterestEventPublisher]:
    """Publisher for interest events, or None when events are disabled."""
    if not settings.INTEREST_EVENTS_ENABLED:
        return None
    redis_client = await get_redis_client(settings.REDIS_URL)
    return InterestEventPublisher(redis_client)
