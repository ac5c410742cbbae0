from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated, List, Optional
import logging
import redis.asyncio as redis

from casematch import (
    CaseFilters,
    CaseMatchError,
    InterestEvent,
    InterestEventPublisher,
    InterestStatus,
    interest_channel,
)
from casematch.services import (
    express_interest,
    get_available_cases,
    get_case_details,
    get_interested_cases,
    submit_conflict_check,
    update_case_status,
)
from app.api.deps import get_current_attorney_id, get_event_publisher
from app.config import settings
from app.database import get_db
from app.schemas.case import (
    AvailableCaseResponse,
    CaseDetailResponse,
    InterestResponse,
    InterestedCaseResponse,
    StatusUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cases", tags=["cases"])


async def _publish(
    publisher: Optional[InterestEventPublisher],
    attorney_id: str,
    case_id: str,
    event: InterestEvent,
    interest_status: Optional[InterestStatus] = None,
):
    if publisher is not None:
        await publisher.publish(attorney_id, case_id, event, interest_status)


@router.get("/available", response_model=List[AvailableCaseResponse])
async def list_available_cases(
    filters: Annotated[CaseFilters, Query()],
    attorney_id: str = Depends(get_current_attorney_id),
    db: AsyncSession = Depends(get_db),
):
    """Cases the attorney can still express interest in"""
    try:
        return await get_available_cases(db, attorney_id, filters)
    except CaseMatchError:
        raise
    except Exception as e:
        logger.error(f"[cases] List available cases error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list available cases",
        )


@router.get(
    "/interested",
    response_model=List[InterestedCaseResponse],
    response_model_exclude_unset=True,
)
async def list_interested_cases(
    filters: Annotated[CaseFilters, Query()],
    attorney_id: str = Depends(get_current_attorney_id),
    db: AsyncSession = Depends(get_db),
):
    """Cases the attorney has expressed interest in"""
    try:
        return await get_interested_cases(db, attorney_id, filters)
    except CaseMatchError:
        raise
    except Exception as e:
        logger.error(f"[cases] List interested cases error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list interested cases",
        )


@router.get("/interest-events")
async def stream_interest_events(
    attorney_id: str = Depends(get_current_attorney_id),
):
    """Stream the attorney's interest lifecycle events via SSE."""
    async def event_generator():
        redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
        pubsub = redis_client.pubsub()
        try:
            await pubsub.subscribe(interest_channel(attorney_id))

            async for message in pubsub.listen():
                if message["type"] == "message":
                    yield f"data: {message['data']}\n\n"
        finally:
            await pubsub.aclose()
            await redis_client.aclose()

    return StreamingResponse(event_generator(), media_type="text/event-stream")


@router.post(
    "/{case_id}/interest",
    response_model=InterestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_interest(
    case_id: str,
    attorney_id: str = Depends(get_current_attorney_id),
    db: AsyncSession = Depends(get_db),
    publisher: Optional[InterestEventPublisher] = Depends(get_event_publisher),
):
    """Express interest in a case"""
    try:
        interest = await express_interest(db, attorney_id, case_id)
    except CaseMatchError:
        raise
    except Exception as e:
        logger.error(f"[cases] Express interest error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to express interest",
        )

    await _publish(publisher, attorney_id, case_id, InterestEvent.EXPRESSED, interest.status)
    return interest


@router.post("/{case_id}/conflict-check", response_model=Optional[InterestResponse])
async def complete_conflict_check(
    case_id: str,
    attorney_id: str = Depends(get_current_attorney_id),
    db: AsyncSession = Depends(get_db),
    publisher: Optional[InterestEventPublisher] = Depends(get_event_publisher),
):
    """Submit the attorney-side conflict check"""
    try:
        interest = await submit_conflict_check(db, attorney_id, case_id)
    except CaseMatchError:
        raise
    except Exception as e:
        logger.error(f"[cases] Conflict check error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit conflict check",
        )

    await _publish(
        publisher, attorney_id, case_id,
        InterestEvent.CONFLICT_CHECK_SUBMITTED,
        InterestStatus.CONFLICT_CHECK_COMPLETED,
    )
    return interest


@router.patch("/{case_id}/status", response_model=Optional[InterestResponse])
async def change_status(
    case_id: str,
    body: StatusUpdate,
    attorney_id: str = Depends(get_current_attorney_id),
    db: AsyncSession = Depends(get_db),
    publisher: Optional[InterestEventPublisher] = Depends(get_event_publisher),
):
    """Move the attorney's interest to a new status.

    Returns null when the interest was withdrawn (no_longer_interested).
    """
    try:
        interest = await update_case_status(db, attorney_id, case_id, body.status)
    except CaseMatchError:
        raise
    except Exception as e:
        logger.error(f"[cases] Update status error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update case status",
        )

    if interest is not None:
        await _publish(publisher, attorney_id, case_id, InterestEvent.STATUS_UPDATED, interest.status)
    elif body.status.strip().lower() == InterestStatus.NO_LONGER_INTERESTED.value:
        await _publish(
            publisher, attorney_id, case_id,
            InterestEvent.WITHDRAWN, InterestStatus.NO_LONGER_INTERESTED,
        )
    return interest


@router.get(
    "/{case_id}",
    response_model=CaseDetailResponse,
    response_model_exclude_unset=True,
)
async def get_case(
    case_id: str,
    attorney_id: str = Depends(get_current_attorney_id),
    db: AsyncSession = Depends(get_db),
):
    """Get case details, redacted to what the attorney may see"""
    try:
        return await get_case_details(db, attorney_id, case_id)
    except CaseMatchError:
        raise
    except Exception as e:
        logger.error(f"[cases] Get case error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get case",
        )
