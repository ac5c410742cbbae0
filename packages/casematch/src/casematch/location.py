"""Geographic coverage filtering for attorney case searches.

An attorney subscribes to counties, and optionally to an allow-list of zip
codes inside a county. This module turns that profile (plus an optional
county/zip filter from the request) into a SQLAlchemy predicate over
``Case.county`` / ``Case.zip``.
"""

import re
import logging
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import and_, false, func, or_
from sqlalchemy.sql.elements import ColumnElement

from .models import Attorney, Case

logger = logging.getLogger(__name__)

_COUNTY_SUFFIX = re.compile(r"\s+county\s*$", re.IGNORECASE)


def normalize_county_name(county: Optional[str]) -> str:
    """Strip a trailing "County" suffix and surrounding whitespace.

    >>> normalize_county_name("Orange County ")
    'Orange'
    """
    if not county:
        return ""
    return _COUNTY_SUFFIX.sub("", county.strip()).strip()


def is_large_population(county: str, large_counties: Optional[Iterable[str]] = None) -> bool:
    """Check whether a county is on the large-population list."""
    if large_counties is None:
        from .config import settings
        large_counties = settings.LARGE_POPULATION_COUNTIES

    normalized = normalize_county_name(county).lower()
    return normalized in {normalize_county_name(c).lower() for c in large_counties}


def subscribed_counties(attorney: Attorney) -> List[str]:
    """Normalized names of the counties an attorney subscribes to."""
    names = []
    for county in attorney.counties_subscribed or []:
        name = county.get("name") if isinstance(county, dict) else county
        normalized = normalize_county_name(name)
        if normalized and normalized not in names:
            names.append(normalized)
    return names


def subscribed_zip_codes(attorney: Attorney) -> Dict[str, List[str]]:
    """Per-county zip allow-lists keyed by normalized county name."""
    return {
        normalize_county_name(county): list(zips or [])
        for county, zips in (attorney.zip_codes_subscribed or {}).items()
    }


def _county_spellings(county: str) -> List[str]:
    return [county.lower(), f"{county} county".lower()]


def _county_matches(names: Iterable[str]) -> ColumnElement:
    return func.lower(Case.county).in_(list(names))


def location_predicate(
    attorney: Attorney,
    county: Optional[str] = None,
    zip_code: Optional[str] = None,
    large_counties: Optional[Iterable[str]] = None,
) -> ColumnElement:
    """Build the location clause for an attorney's case search.

    With an explicit ``county`` the search is confined to that county, and
    only if the attorney covers it. Without one, every subscribed county and
    zip allow-list is OR-ed together. A profile that covers nothing yields a
    clause that matches no rows.
    """
    counties = subscribed_counties(attorney)
    covered = {name.lower() for name in counties}
    # County names compare case-insensitively, as the SQL match does.
    zip_map = {name.lower(): zips for name, zips in subscribed_zip_codes(attorney).items()}

    if county:
        target = normalize_county_name(county)
        county_zips = zip_map.get(target.lower())

        if county_zips:
            clause = Case.zip.in_(county_zips)
        elif county_zips is not None or target.lower() in covered:
            clause = _county_matches(_county_spellings(target))
        else:
            logger.debug(f"[location] County {target!r} not in attorney {attorney.id} subscription")
            return false()

        if zip_code and is_large_population(target, large_counties):
            clause = and_(clause, Case.zip == zip_code)
        return clause

    names: List[str] = []
    zips: Set[str] = set()
    for name in counties:
        county_zips = zip_map.get(name.lower())
        if county_zips:
            zips.update(county_zips)
        else:
            names.extend(_county_spellings(name))

    conditions = []
    if names:
        conditions.append(_county_matches(names))
    if zips:
        conditions.append(Case.zip.in_(sorted(zips)))

    if not conditions:
        logger.debug(f"[location] Attorney {attorney.id} has no geographic coverage")
        return false()

    return or_(*conditions)


__all__ = [
    "normalize_county_name",
    "is_large_population",
    "subscribed_counties",
    "subscribed_zip_codes",
    "location_predicate",
]
