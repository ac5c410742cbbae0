"""Filter options for case listings."""

import enum
import logging
from typing import Optional
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class TimeFrame(str, enum.Enum):
    LAST_24_HOURS = "24h"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_3_MONTHS = "3m"
    LAST_6_MONTHS = "6m"
    YEAR_TO_DATE = "ytd"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class CaseFilters(BaseModel):
    """Listing filters shared by available and interested case queries."""

    county: Optional[str] = None
    zip_code: Optional[str] = None
    practice_area: Optional[str] = None
    time_frame: Optional[TimeFrame] = None
    sort_by: Optional[str] = None
    sort_order: SortOrder = SortOrder.DESC
    skip: int = Field(default=0, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)

    @field_validator("time_frame", mode="before")
    @classmethod
    def ignore_unknown_time_frame(cls, v):
        # Unrecognized windows mean "no time filter", not a bad request.
        if v is None or isinstance(v, TimeFrame):
            return v
        try:
            return TimeFrame(str(v).strip().lower())
        except ValueError:
            logger.debug(f"[filters] Ignoring unrecognized time frame: {v!r}")
            return None

    @field_validator("county", "zip_code", "practice_area", "sort_by", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "county": "Orange County",
                "zip_code": "92618",
                "practice_area": "Family Law",
                "time_frame": "30d",
                "sort_by": "created_at",
                "sort_order": "desc",
                "skip": 0,
                "limit": 50,
            }
        }
