"""CaseMatch core package - models, filters, and the case-interest engine."""

from .database import async_session, engine, get_db, init_db
from .models import (
    Base,
    Case,
    Client,
    Attorney,
    CaseInterest,
    InterestStatus,
)
from .utils import (
    setup_logging,
    CaseMatchError,
    NotFound,
    Forbidden,
    ValidationFailed,
    StoreError,
    get_redis_client,
    close_redis,
)
from .schemas import CaseFilters, TimeFrame, SortOrder
from .location import normalize_county_name, is_large_population, location_predicate
from .events import InterestEvent, InterestEventPublisher, interest_channel
from .services import (
    get_available_cases,
    express_interest,
    submit_conflict_check,
    update_case_status,
    get_interested_cases,
    get_case_details,
    is_valid_transition,
)
from .config import Settings, settings

__version__ = "0.1.0"
__all__ = [
    "async_session",
    "engine",
    "get_db",
    "init_db",
    "Base",
    "Case",
    "Client",
    "Attorney",
    "CaseInterest",
    "InterestStatus",
    "setup_logging",
    "CaseMatchError",
    "NotFound",
    "Forbidden",
    "ValidationFailed",
    "StoreError",
    "get_redis_client",
    "close_redis",
    "CaseFilters",
    "TimeFrame",
    "SortOrder",
    "normalize_county_name",
    "is_large_population",
    "location_predicate",
    "InterestEvent",
    "InterestEventPublisher",
    "interest_channel",
    "get_available_cases",
    "express_interest",
    "submit_conflict_check",
    "update_case_status",
    "get_interested_cases",
    "get_case_details",
    "is_valid_transition",
    "Settings",
    "settings",
]
