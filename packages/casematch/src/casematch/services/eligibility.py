"""Available-case search for attorneys.

A case is available to an attorney when it falls inside the attorney's
practice areas and geographic coverage, nobody has retained it, and the
attorney has not already acted on it.
"""

import calendar
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..location import location_predicate
from ..models import Attorney, Case, CaseInterest, InterestStatus
from ..schemas.filters import CaseFilters, SortOrder, TimeFrame
from ..utils.errors import NotFound, StoreError

logger = logging.getLogger(__name__)

SORTABLE_CASE_COLUMNS = {
    "created_at": Case.created_at,
    "updated_at": Case.updated_at,
    "legal_category": Case.legal_category,
    "county": Case.county,
    "zip": Case.zip,
}


def _months_before(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def time_frame_start(time_frame: Optional[TimeFrame], now: Optional[datetime] = None) -> Optional[datetime]:
    """Earliest ``created_at`` admitted by a time frame, or None for no bound."""
    if time_frame is None:
        return None

    now = now or datetime.utcnow()
    if time_frame == TimeFrame.LAST_24_HOURS:
        return now - timedelta(hours=24)
    if time_frame == TimeFrame.LAST_7_DAYS:
        return now - timedelta(days=7)
    if time_frame == TimeFrame.LAST_30_DAYS:
        return now - timedelta(days=30)
    if time_frame == TimeFrame.LAST_3_MONTHS:
        return _months_before(now, 3)
    if time_frame == TimeFrame.LAST_6_MONTHS:
        return _months_before(now, 6)
    if time_frame == TimeFrame.YEAR_TO_DATE:
        return datetime(now.year, 1, 1)
    return None


def _page_size(limit: Optional[int]) -> Optional[int]:
    if not limit:
        return None
    return min(limit, settings.MAX_PAGE_SIZE)


async def get_available_cases(
    session: AsyncSession,
    attorney_id: str,
    filters: Optional[CaseFilters] = None,
    large_counties: Optional[Iterable[str]] = None,
) -> List[Case]:
    """List the cases an attorney may currently pick up.

    Args:
        session: AsyncSession for database operations
        attorney_id: Authenticated attorney subject id
        filters: Optional county/zip/practice-area/time-frame/sort options
        large_counties: Override for the large-population county list

    Returns:
        Cases ordered by the requested column (``created_at`` desc by default)

    Raises:
        NotFound: If the attorney has no profile
        StoreError: If the case store fails
    """
    filters = filters or CaseFilters()

    try:
        attorney = await session.get(Attorney, attorney_id)
        if attorney is None:
            raise NotFound("Attorney not found")

        # Retained by anyone, or already acted on by this attorney.
        excluded = select(CaseInterest.case_id).where(
            or_(
                CaseInterest.status == InterestStatus.RETAINED,
                CaseInterest.attorney_id == attorney_id,
            )
        )

        stmt = select(Case).where(
            Case.legal_category.in_(list(attorney.areas_of_practice or [])),
            Case.id.not_in(excluded),
            location_predicate(
                attorney,
                county=filters.county,
                zip_code=filters.zip_code,
                large_counties=large_counties,
            ),
        )

        start = time_frame_start(filters.time_frame)
        if start is not None:
            stmt = stmt.where(Case.created_at >= start)

        if filters.practice_area:
            stmt = stmt.where(Case.legal_category == filters.practice_area)

        sort_column = SORTABLE_CASE_COLUMNS.get(filters.sort_by or "created_at", Case.created_at)
        if filters.sort_order == SortOrder.ASC:
            stmt = stmt.order_by(sort_column.asc(), Case.id.asc())
        else:
            stmt = stmt.order_by(sort_column.desc(), Case.id.desc())

        if filters.skip:
            stmt = stmt.offset(filters.skip)
        page_size = _page_size(filters.limit)
        if page_size:
            stmt = stmt.limit(page_size)

        result = await session.execute(stmt)
        cases = list(result.scalars().all())
    except SQLAlchemyError as e:
        logger.error(f"[eligibility] Available case query failed for attorney {attorney_id}: {e}")
        raise StoreError(f"Error fetching cases: {e}") from e

    logger.info(
        f"[eligibility] {len(cases)} available cases for attorney {attorney_id}",
        extra={"attorney_id": attorney_id, "filters": filters.model_dump(exclude_none=True)},
    )
    return cases


__all__ = ["get_available_cases", "time_frame_start", "SORTABLE_CASE_COLUMNS"]
