"""Case-interest lookups shared by the interest and visibility services."""

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import CaseInterest, InterestStatus


async def get_interest(
    session: AsyncSession,
    attorney_id: str,
    case_id: str,
) -> Optional[CaseInterest]:
    """The attorney's interest row for a case, if any."""
    stmt = select(CaseInterest).where(
        CaseInterest.attorney_id == attorney_id,
        CaseInterest.case_id == case_id,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def get_retained_interest(
    session: AsyncSession,
    case_id: str,
) -> Optional[CaseInterest]:
    """The RETAINED interest row for a case, if any attorney holds one."""
    stmt = select(CaseInterest).where(
        CaseInterest.case_id == case_id,
        CaseInterest.status == InterestStatus.RETAINED,
    )
    result = await session.execute(stmt)
    return result.scalars().first()


__all__ = ["get_interest", "get_retained_interest"]
