from app.schemas.case import (
    AvailableCaseResponse,
    ClientView,
    CaseView,
    CaseDetailResponse,
    InterestResponse,
    InterestedCaseResponse,
    StatusUpdate,
)

__all__ = [
    "AvailableCaseResponse",
    "ClientView",
    "CaseView",
    "CaseDetailResponse",
    "InterestResponse",
    "InterestedCaseResponse",
    "StatusUpdate",
]
