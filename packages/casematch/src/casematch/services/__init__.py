"""Case-interest engine services."""

from .eligibility import get_available_cases, time_frame_start
from .interests import (
    VALID_TRANSITIONS,
    is_valid_transition,
    express_interest,
    submit_conflict_check,
    update_case_status,
    get_interested_cases,
)
from .visibility import get_case_details, filter_case_details

__all__ = [
    "get_available_cases",
    "time_frame_start",
    "VALID_TRANSITIONS",
    "is_valid_transition",
    "express_interest",
    "submit_conflict_check",
    "update_case_status",
    "get_interested_cases",
    "get_case_details",
    "filter_case_details",
]
