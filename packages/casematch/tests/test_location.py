"""Tests for geographic coverage filtering."""

import pytest
from sqlalchemy import select

from casematch.location import (
    is_large_population,
    location_predicate,
    normalize_county_name,
    subscribed_counties,
    subscribed_zip_codes,
)
from casematch.models import Attorney, Case

LARGE = ["Orange", "Los Angeles"]


async def _matching_ids(session, predicate):
    result = await session.execute(select(Case.id).where(predicate))
    return set(result.scalars().all())


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Orange County", "Orange"),
        ("orange county ", "orange"),
        ("  Los Angeles  ", "Los Angeles"),
        ("Orange", "Orange"),
        (None, ""),
        ("", ""),
    ],
)
def test_normalize_county_name(raw, expected):
    assert normalize_county_name(raw) == expected


def test_is_large_population_ignores_suffix_and_case():
    assert is_large_population("orange county", LARGE)
    assert is_large_population("Los Angeles County", LARGE)
    assert not is_large_population("Mono", LARGE)


def test_is_large_population_uses_configured_list():
    # Default list ships with Harris; a custom list does not.
    assert is_large_population("Harris")
    assert not is_large_population("Harris", ["Orange"])


def test_subscription_keys_are_normalized():
    attorney = Attorney(
        id="atty",
        counties_subscribed=[{"name": "Orange County", "state": "CA"}, {"name": "Orange"}],
        zip_codes_subscribed={"Orange County": ["92618"]},
        areas_of_practice=[],
    )

    assert subscribed_counties(attorney) == ["Orange"]
    assert subscribed_zip_codes(attorney) == {"Orange": ["92618"]}


@pytest.mark.asyncio
async def test_county_filter_matches_both_spellings(db_session, make_attorney, make_case):
    """Subscribed "Orange" with an empty zip list, filtered by "Orange County"."""
    attorney = await make_attorney(counties=["Orange"], zip_codes={"Orange": []})
    plain = await make_case(county="Orange")
    suffixed = await make_case(county="Orange County")
    await make_case(county="Riverside")

    ids = await _matching_ids(
        db_session,
        location_predicate(attorney, county="Orange County", large_counties=LARGE),
    )

    assert ids == {plain.id, suffixed.id}


@pytest.mark.asyncio
async def test_county_filter_uses_zip_allow_list(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=["Orange"], zip_codes={"Orange": ["92618", "92620"]})
    irvine = await make_case(county="Orange", zip="92618")
    await make_case(county="Orange", zip="92801")

    ids = await _matching_ids(
        db_session,
        location_predicate(attorney, county="Orange", large_counties=LARGE),
    )

    assert ids == {irvine.id}


@pytest.mark.asyncio
async def test_unsubscribed_county_matches_nothing(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=["Orange"])
    await make_case(county="Riverside")
    await make_case(county="Orange")

    ids = await _matching_ids(
        db_session,
        location_predicate(attorney, county="Riverside", large_counties=LARGE),
    )

    assert ids == set()


@pytest.mark.asyncio
async def test_large_county_zip_narrows_within_subscription(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=["Orange"])
    target = await make_case(county="Orange", zip="92618")
    await make_case(county="Orange", zip="92801")
    await make_case(county="Riverside", zip="92618")

    ids = await _matching_ids(
        db_session,
        location_predicate(attorney, county="Orange", zip_code="92618", large_counties=LARGE),
    )

    assert ids == {target.id}


@pytest.mark.asyncio
async def test_zip_ignored_for_small_county(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=["Mono"])
    first = await make_case(county="Mono", zip="93546")
    second = await make_case(county="Mono", zip="93517")

    ids = await _matching_ids(
        db_session,
        location_predicate(attorney, county="Mono", zip_code="93546", large_counties=LARGE),
    )

    assert ids == {first.id, second.id}


@pytest.mark.asyncio
async def test_no_county_filter_unions_subscriptions(db_session, make_attorney, make_case):
    attorney = await make_attorney(
        counties=["Orange", "Riverside"],
        zip_codes={"Riverside": ["92501"]},
    )
    orange = await make_case(county="Orange County", zip="92801")
    riverside = await make_case(county="Riverside", zip="92501")
    await make_case(county="Riverside", zip="92503")
    await make_case(county="Kern", zip="93301")

    ids = await _matching_ids(db_session, location_predicate(attorney, large_counties=LARGE))

    assert ids == {orange.id, riverside.id}


@pytest.mark.asyncio
async def test_no_coverage_matches_nothing(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=[])
    await make_case(county="Orange")

    ids = await _matching_ids(db_session, location_predicate(attorney, large_counties=LARGE))

    assert ids == set()


@pytest.mark.asyncio
async def test_county_subscription_ignores_case(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=["orange"])
    target = await make_case(county="Orange County")

    ids = await _matching_ids(
        db_session,
        location_predicate(attorney, county="Orange", large_counties=LARGE),
    )

    assert ids == {target.id}


@pytest.mark.asyncio
async def test_zip_allow_list_key_ignores_case(db_session, make_attorney, make_case):
    attorney = await make_attorney(counties=["Orange"], zip_codes={"ORANGE COUNTY": ["92618"]})
    irvine = await make_case(county="Orange", zip="92618")
    await make_case(county="Orange", zip="92801")

    by_county = await _matching_ids(
        db_session,
        location_predicate(attorney, county="orange", large_counties=LARGE),
    )
    everywhere = await _matching_ids(db_session, location_predicate(attorney, large_counties=LARGE))

    assert by_county == {irvine.id}
    assert everywhere == {irvine.id}
