"""Case-interest lifecycle events via Redis Pub/Sub."""

import enum
import json
import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from .models import InterestStatus

logger = logging.getLogger(__name__)


class InterestEvent(str, enum.Enum):
    EXPRESSED = "interest_expressed"
    CONFLICT_CHECK_SUBMITTED = "conflict_check_submitted"
    STATUS_UPDATED = "status_updated"
    WITHDRAWN = "interest_withdrawn"


def interest_channel(attorney_id: str) -> str:
    return f"case_interests:{attorney_id}"


class InterestEventPublisher:
    """Publish an attorney's interest changes to their own channel.

    Events go out after the store write has committed, so a Redis outage
    costs a notification, never a state change.
    """

    def __init__(self, redis_client: Redis):
        self.redis_client = redis_client

    async def publish(
        self,
        attorney_id: str,
        case_id: str,
        event: InterestEvent,
        status: Optional[InterestStatus] = None,
    ) -> bool:
        """Publish one event; returns False if Redis rejected it."""
        payload = {
            "attorney_id": attorney_id,
            "case_id": case_id,
            "event": event.value,
            "status": status.value if status is not None else None,
        }

        try:
            await self.redis_client.publish(
                interest_channel(attorney_id),
                json.dumps(payload),
            )
        except RedisError as e:
            logger.warning(f"[events] Failed to publish {event.value} for case {case_id}: {e}")
            return False
        return True


__all__ = ["InterestEvent", "InterestEventPublisher", "interest_channel"]
