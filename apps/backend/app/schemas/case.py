from pydantic import BaseModel
from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from casematch.models import InterestStatus


class AvailableCaseResponse(BaseModel):
    """Listing entry; never carries client fields."""
    id: str
    created_at: datetime
    legal_category: str
    county: Optional[str] = None
    zip: Optional[str] = None
    ai_generated_heading: Optional[str] = None
    ai_generated_summary: Optional[str] = None
    enable_conflict_checks: bool

    class Config:
        from_attributes = True


class ClientView(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    zip_code: Optional[str] = None


class CaseView(BaseModel):
    """Case as shown to an attorney.

    Withheld fields are left unset and dropped from the response, so a
    redacted view differs from a full one by the keys it has.
    """
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    legal_category: Optional[str] = None
    county: Optional[str] = None
    zip: Optional[str] = None
    ai_generated_heading: Optional[str] = None
    ai_generated_summary: Optional[str] = None
    questionnaire_responses: Optional[Union[Dict[str, Any], List[Any]]] = None
    client_case_summary: Optional[str] = None
    enable_conflict_checks: bool = False
    client: Optional[ClientView] = None


class CaseDetailResponse(CaseView):
    status: Optional[InterestStatus] = None


class InterestResponse(BaseModel):
    id: str
    attorney_id: str
    case_id: str
    status: InterestStatus
    interest_expressed_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InterestedCaseResponse(InterestResponse):
    case: Optional[CaseView] = None


class StatusUpdate(BaseModel):
    status: Optional[str] = None

    class Config:
        json_schema_extra = {"example": {"status": "conflict_check_completed"}}
