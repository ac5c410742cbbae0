"""Progressive disclosure of case and client details.

While a client-side conflict check is pending, or before an attorney has
expressed interest at all, an attorney only sees an anonymous summary of a
conflict-check case. Client identity and the client's own account of the
matter open up once the case reaches the attorney-side conflict check.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Case, Client, InterestStatus
from ..utils.errors import Forbidden, NotFound, StoreError
from .lookups import get_interest, get_retained_interest

logger = logging.getLogger(__name__)

FULL_DETAIL_STATUSES = frozenset({
    InterestStatus.AWAITING_ATTORNEY_CONFLICT_CHECK,
    InterestStatus.CONFLICT_CHECK_COMPLETED,
    InterestStatus.TERMS_SENT,
    InterestStatus.RETAINED,
})

PRIVATE_CLIENT_FIELDS = ("first_name", "last_name", "zip_code")
PRIVATE_CASE_FIELDS = ("questionnaire_responses", "client_case_summary")


def client_view(client: Optional[Client]) -> Optional[Dict[str, Any]]:
    if client is None:
        return None
    return {
        "id": client.id,
        "first_name": client.first_name,
        "last_name": client.last_name,
        "zip_code": client.zip_code,
    }


def full_case_view(case: Case) -> Dict[str, Any]:
    """Every case field, client included."""
    return {
        "id": case.id,
        "created_at": case.created_at,
        "updated_at": case.updated_at,
        "legal_category": case.legal_category,
        "county": case.county,
        "zip": case.zip,
        "ai_generated_heading": case.ai_generated_heading,
        "ai_generated_summary": case.ai_generated_summary,
        "questionnaire_responses": case.questionnaire_responses,
        "client_case_summary": case.client_case_summary,
        "enable_conflict_checks": case.enable_conflict_checks,
        "client": client_view(case.client),
    }


def minimal_case_view(case: Case) -> Dict[str, Any]:
    """Anonymous summary: no heading, client name, questionnaire or case summary."""
    client = None
    if case.client is not None:
        client = {"id": case.client.id, "zip_code": case.client.zip_code}
    return {
        "id": case.id,
        "created_at": case.created_at,
        "legal_category": case.legal_category,
        "county": case.county,
        "zip": case.zip,
        "ai_generated_summary": case.ai_generated_summary,
        "enable_conflict_checks": case.enable_conflict_checks,
        "client": client,
    }


def redact_client_details(view: Dict[str, Any]) -> Dict[str, Any]:
    """Drop client PII and the client's narrative from a case view."""
    redacted = {k: v for k, v in view.items() if k not in PRIVATE_CASE_FIELDS}
    if redacted.get("client") is not None:
        redacted["client"] = {
            k: v for k, v in redacted["client"].items() if k not in PRIVATE_CLIENT_FIELDS
        }
    return redacted


def can_view_full_details(status: Optional[InterestStatus], enable_conflict_checks: bool) -> bool:
    if not enable_conflict_checks:
        return True
    return status in FULL_DETAIL_STATUSES


def filter_case_details(case: Case, status: Optional[InterestStatus]) -> Dict[str, Any]:
    if can_view_full_details(status, case.enable_conflict_checks):
        return full_case_view(case)
    return minimal_case_view(case)


async def get_case_details(
    session: AsyncSession,
    attorney_id: str,
    case_id: str,
) -> Dict[str, Any]:
    """Case view for an attorney, redacted according to their interest state.

    The result always carries ``status`` (the attorney's interest status or
    None) and ``enable_conflict_checks``.

    Raises:
        Forbidden: If another attorney has retained the case
        NotFound: If the case does not exist
        StoreError: If the case store fails
    """
    try:
        retained = await get_retained_interest(session, case_id)
        if retained is not None and retained.attorney_id != attorney_id:
            logger.warning(f"[visibility] Attorney {attorney_id} denied case {case_id}: retained by another attorney")
            raise Forbidden("Case has been retained by another attorney")

        case = await session.get(Case, case_id)
        if case is None:
            raise NotFound("Case not found")

        interest = await get_interest(session, attorney_id, case_id)
    except SQLAlchemyError as e:
        logger.error(f"[visibility] Case details lookup failed for {case_id}: {e}")
        raise StoreError(f"Error fetching case details: {e}") from e

    status = interest.status if interest is not None else None
    details = filter_case_details(case, status)
    details["status"] = status
    details["enable_conflict_checks"] = case.enable_conflict_checks
    return details


__all__ = [
    "FULL_DETAIL_STATUSES",
    "client_view",
    "full_case_view",
    "minimal_case_view",
    "redact_client_details",
    "can_view_full_details",
    "filter_case_details",
    "get_case_details",
]
