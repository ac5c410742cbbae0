"""Case interest lifecycle.

An attorney's interest in a case moves through the conflict-check states
towards retention. Only one attorney may retain a case; the store enforces
that with a partial unique index, and the checks here turn the common cases
into readable errors before the write is attempted.
"""

from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Union
from uuid import uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, joinedload, selectinload

from ..models import Case, CaseInterest, InterestStatus
from ..schemas.filters import CaseFilters, SortOrder
from ..utils.errors import CaseMatchError, Forbidden, NotFound, StoreError, ValidationFailed
from ..utils.logging import setup_logging
from .lookups import get_interest, get_retained_interest
from .visibility import full_case_view, redact_client_details

logger = setup_logging(__name__)

VALID_TRANSITIONS: Dict[InterestStatus, FrozenSet[InterestStatus]] = {
    InterestStatus.INTEREST_EXPRESSED: frozenset({
        InterestStatus.AWAITING_ATTORNEY_CONFLICT_CHECK,
        InterestStatus.NO_LONGER_INTERESTED,
    }),
    InterestStatus.AWAITING_CLIENT_CONFLICT_CHECK: frozenset({
        InterestStatus.AWAITING_ATTORNEY_CONFLICT_CHECK,
        InterestStatus.NO_LONGER_INTERESTED,
    }),
    InterestStatus.AWAITING_ATTORNEY_CONFLICT_CHECK: frozenset({
        InterestStatus.CONFLICT_CHECK_COMPLETED,
        InterestStatus.NO_LONGER_INTERESTED,
    }),
    InterestStatus.CONFLICT_CHECK_COMPLETED: frozenset({
        InterestStatus.TERMS_SENT,
        InterestStatus.RETAINED,
        InterestStatus.NO_LONGER_INTERESTED,
    }),
    InterestStatus.TERMS_SENT: frozenset({
        InterestStatus.RETAINED,
        InterestStatus.NO_LONGER_INTERESTED,
    }),
    InterestStatus.RETAINED: frozenset({
        InterestStatus.NO_LONGER_INTERESTED,
    }),
}

RETAINABLE_FROM = frozenset({
    InterestStatus.CONFLICT_CHECK_COMPLETED,
    InterestStatus.TERMS_SENT,
})

SORTABLE_INTEREST_COLUMNS = {
    "interest_expressed_at": CaseInterest.interest_expressed_at,
    "updated_at": CaseInterest.updated_at,
    "status": CaseInterest.status,
}


def is_valid_transition(current: InterestStatus, new: InterestStatus) -> bool:
    return new in VALID_TRANSITIONS.get(current, frozenset())


def _coerce_status(value: Union[InterestStatus, str, None]) -> InterestStatus:
    if value is None or value == "":
        raise ValidationFailed("Status is required")
    if isinstance(value, InterestStatus):
        return value
    normalized = str(value).strip()
    for status in InterestStatus:
        if normalized.lower() == status.value or normalized.upper() == status.name:
            return status
    raise ValidationFailed(f"Invalid status: {value}")


def _now() -> datetime:
    return datetime.utcnow()


async def _insert_conflict(
    session: AsyncSession,
    attorney_id: str,
    case_id: str,
    error: IntegrityError,
) -> CaseMatchError:
    """Work out which constraint a concurrent insert lost against."""
    try:
        if await get_interest(session, attorney_id, case_id) is not None:
            return Forbidden("Interest already expressed")
        if await get_retained_interest(session, case_id) is not None:
            return Forbidden("Case has already been retained")
    except SQLAlchemyError as e:
        return StoreError(f"Error expressing interest: {e}")
    return StoreError(f"Error expressing interest: {error}")


async def express_interest(
    session: AsyncSession,
    attorney_id: str,
    case_id: str,
) -> CaseInterest:
    """Record an attorney's interest in a case.

    Cases with client conflict checks enabled start in
    AWAITING_CLIENT_CONFLICT_CHECK; all others go straight to
    AWAITING_ATTORNEY_CONFLICT_CHECK.

    Raises:
        Forbidden: If the case is retained or interest was already expressed
        NotFound: If the case does not exist
        StoreError: If the case store fails
    """
    try:
        if await get_retained_interest(session, case_id) is not None:
            logger.warning(
                f"[interests] Attorney {attorney_id} rejected on retained case {case_id}",
                extra={"attorney_id": attorney_id, "case_id": case_id},
            )
            raise Forbidden("Case has already been retained")

        if await get_interest(session, attorney_id, case_id) is not None:
            raise Forbidden("Interest already expressed")

        case = await session.get(Case, case_id)
        if case is None:
            raise NotFound("Case not found")

        if case.enable_conflict_checks:
            initial_status = InterestStatus.AWAITING_CLIENT_CONFLICT_CHECK
        else:
            initial_status = InterestStatus.AWAITING_ATTORNEY_CONFLICT_CHECK

        now = _now()
        interest = CaseInterest(
            id=str(uuid4()),
            attorney_id=attorney_id,
            case_id=case_id,
            status=initial_status,
            interest_expressed_at=now,
            updated_at=now,
        )
        session.add(interest)
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise await _insert_conflict(session, attorney_id, case_id, e) from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"[interests] Express interest failed for case {case_id}: {e}")
        raise StoreError(f"Error expressing interest: {e}") from e

    logger.info(
        f"[interests] Attorney {attorney_id} expressed interest in case {case_id}",
        extra={"attorney_id": attorney_id, "case_id": case_id, "status": initial_status.value},
    )
    return interest


async def submit_conflict_check(
    session: AsyncSession,
    attorney_id: str,
    case_id: str,
) -> Optional[CaseInterest]:
    """Mark the attorney's conflict check as completed.

    This is a direct jump to CONFLICT_CHECK_COMPLETED from whatever state the
    interest is in; it does not consult VALID_TRANSITIONS.

    Raises:
        NotFound: If the attorney has no interest in the case
        Forbidden: If another attorney has retained the case
        StoreError: If the case store fails
    """
    try:
        if await get_interest(session, attorney_id, case_id) is None:
            raise NotFound("Case interest not found")

        retained = await get_retained_interest(session, case_id)
        if retained is not None and retained.attorney_id != attorney_id:
            raise Forbidden("Case has been retained by another attorney")

        stmt = (
            update(CaseInterest)
            .where(CaseInterest.attorney_id == attorney_id, CaseInterest.case_id == case_id)
            .values(status=InterestStatus.CONFLICT_CHECK_COMPLETED, updated_at=_now())
            .returning(CaseInterest)
        )
        result = await session.execute(stmt)
        interest = result.scalar_one_or_none()
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"[interests] Conflict check submission failed for case {case_id}: {e}")
        raise StoreError(f"Error submitting conflict check: {e}") from e

    logger.info(
        f"[interests] Attorney {attorney_id} completed conflict check for case {case_id}",
        extra={"attorney_id": attorney_id, "case_id": case_id},
    )
    return interest


async def update_case_status(
    session: AsyncSession,
    attorney_id: str,
    case_id: str,
    new_status: Union[InterestStatus, str, None],
) -> Optional[CaseInterest]:
    """Move an interest to a new status.

    NO_LONGER_INTERESTED deletes the interest and returns None, also when the
    row is already gone. Any other status returns the updated row, or None if
    the row vanished between the check and the write.

    Raises:
        ValidationFailed: If ``new_status`` is missing or unknown
        NotFound: If the attorney has no interest in the case
        Forbidden: If the transition is not allowed, or the case is retained
        StoreError: If the case store fails
    """
    new_status = _coerce_status(new_status)

    try:
        current = await get_interest(session, attorney_id, case_id)
        if current is None:
            raise NotFound("Case interest not found")

        if not is_valid_transition(current.status, new_status):
            logger.warning(
                f"[interests] Rejected transition {current.status.value} -> {new_status.value} "
                f"for attorney {attorney_id} on case {case_id}"
            )
            raise Forbidden("Invalid status transition")

        if new_status == InterestStatus.RETAINED:
            if await get_retained_interest(session, case_id) is not None:
                raise Forbidden("Case has already been retained")
            if current.status not in RETAINABLE_FROM:
                raise Forbidden("Cannot retain case before completing conflict check")

        if new_status == InterestStatus.NO_LONGER_INTERESTED:
            stmt = delete(CaseInterest).where(
                CaseInterest.attorney_id == attorney_id,
                CaseInterest.case_id == case_id,
            )
            result = await session.execute(stmt)
            await session.commit()
            if result.rowcount == 0:
                logger.info(f"[interests] Interest of {attorney_id} in case {case_id} already removed")
            else:
                logger.info(
                    f"[interests] Attorney {attorney_id} withdrew from case {case_id}",
                    extra={"attorney_id": attorney_id, "case_id": case_id},
                )
            return None

        stmt = (
            update(CaseInterest)
            .where(CaseInterest.attorney_id == attorney_id, CaseInterest.case_id == case_id)
            .values(status=new_status, updated_at=_now())
            .returning(CaseInterest)
        )
        result = await session.execute(stmt)
        interest = result.scalar_one_or_none()
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if new_status == InterestStatus.RETAINED:
            # Lost the race against another attorney retaining the same case.
            logger.warning(f"[interests] Concurrent retention of case {case_id} rejected for {attorney_id}")
            raise Forbidden("Case has already been retained") from e
        raise StoreError(f"Error updating case status: {e}") from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"[interests] Status update failed for case {case_id}: {e}")
        raise StoreError(f"Error updating case status: {e}") from e

    logger.info(
        f"[interests] Attorney {attorney_id} moved case {case_id} to {new_status.value}",
        extra={"attorney_id": attorney_id, "case_id": case_id, "status": new_status.value},
    )
    return interest


def interest_view(interest: CaseInterest) -> Dict[str, Any]:
    """Interest row joined with its case, redacted while the client check is pending."""
    case = full_case_view(interest.case) if interest.case is not None else None
    if case is not None and interest.status == InterestStatus.AWAITING_CLIENT_CONFLICT_CHECK:
        case = redact_client_details(case)
    return {
        "id": interest.id,
        "attorney_id": interest.attorney_id,
        "case_id": interest.case_id,
        "status": interest.status,
        "interest_expressed_at": interest.interest_expressed_at,
        "updated_at": interest.updated_at,
        "case": case,
    }


async def get_interested_cases(
    session: AsyncSession,
    attorney_id: str,
    filters: Optional[CaseFilters] = None,
) -> List[Dict[str, Any]]:
    """All of an attorney's interests, minus cases another attorney retained."""
    filters = filters or CaseFilters()
    other = aliased(CaseInterest)

    retained_elsewhere = select(other.case_id).where(
        other.status == InterestStatus.RETAINED,
        other.attorney_id != attorney_id,
    )

    stmt = (
        select(CaseInterest)
        .options(selectinload(CaseInterest.case).joinedload(Case.client))
        .where(
            CaseInterest.attorney_id == attorney_id,
            CaseInterest.case_id.not_in(retained_elsewhere),
        )
    )

    sort_column = SORTABLE_INTEREST_COLUMNS.get(
        filters.sort_by or "interest_expressed_at", CaseInterest.interest_expressed_at
    )
    if filters.sort_order == SortOrder.ASC:
        stmt = stmt.order_by(sort_column.asc(), CaseInterest.id.asc())
    else:
        stmt = stmt.order_by(sort_column.desc(), CaseInterest.id.desc())

    if filters.skip:
        stmt = stmt.offset(filters.skip)
    if filters.limit:
        stmt = stmt.limit(filters.limit)

    try:
        result = await session.execute(stmt)
        interests = result.scalars().all()
    except SQLAlchemyError as e:
        logger.error(f"[interests] Interested case query failed for attorney {attorney_id}: {e}")
        raise StoreError(f"Error fetching interested cases: {e}") from e

    return [interest_view(interest) for interest in interests]


__all__ = [
    "VALID_TRANSITIONS",
    "is_valid_transition",
    "express_interest",
    "submit_conflict_check",
    "update_case_status",
    "get_interested_cases",
    "interest_view",
]
