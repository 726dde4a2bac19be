# Nager.Date API utilities for public holiday data
import asyncio
import logging
import time
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import httpx

from calculator.dates import DateLike, parse_date, to_date
from calculator.errors import HolidayProviderError
from calculator.holiday_data import Holiday, HolidayType
from utils.client_registry import client_registry
from utils.environment import get_holiday_api_url, get_holiday_cache_ttl, get_holiday_country

logger = logging.getLogger(__name__)

_CACHE: Dict[tuple, Dict[str, Any]] = {}
_LOCK = asyncio.Lock()

MIN_HOLIDAY_YEAR = 1900
MAX_HOLIDAY_YEAR = 2200


async def fetch_public_holidays(
    year: int,
    country: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    strict: bool = False,
) -> List[Dict[str, Any]]:
    """
    Fetch the raw public holiday list for a year from Nager.Date.

    Args:
        year: Calendar year
        country: ISO country code, defaults to HOLIDAY_COUNTRY
        client: Optional shared AsyncClient, otherwise one from the registry
        strict: Raise instead of returning [] when the API call fails

    Returns:
        List of Nager.Date holiday dicts (empty on failure unless strict)

    Raises:
        HolidayProviderError: On HTTP or payload errors when strict is set
    """
    country = (country or get_holiday_country()).upper()
    base_url = get_holiday_api_url()
    if client is None:
        client = client_registry.get_client(base_url)

    url = f"/api/v3/PublicHolidays/{year}/{country}"
    logger.debug(f"[fetch_public_holidays] Request URL: {base_url}{url}")

    try:
        response = await client.get(url)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as e:
        logger.error("Nager.Date %s returned %s: %s", url, e.response.status_code, e.response.text[:200])
        if strict:
            raise HolidayProviderError(f"Holiday API returned {e.response.status_code}")
        return []
    except httpx.HTTPError as e:
        logger.error("HTTP error fetching holidays for %s/%s: %s", year, country, e)
        if strict:
            raise HolidayProviderError(f"Holiday API error: {e}")
        return []
    except ValueError as e:
        logger.error("Bad JSON from %s: %s", url, e)
        if strict:
            raise HolidayProviderError("Holiday API returned invalid JSON")
        return []

    if not isinstance(payload, list):
        logger.error("Unexpected holiday payload for %s/%s: %r", year, country, payload)
        if strict:
            raise HolidayProviderError("Unexpected holiday API payload")
        return []
    return payload


def is_bank_holiday(raw: Dict[str, Any]) -> bool:
    """National holidays and those typed "Public" are non-working days."""
    return bool(raw.get("global")) or "Public" in (raw.get("types") or [])


def _province_code(county: str) -> str:
    # Nager.Date uses ISO 3166-2 codes such as "CA-ON"
    return county.split("-")[-1].strip().upper()


def transform_nager_holidays(raw_holidays: Iterable[Dict[str, Any]]) -> List[Holiday]:
    """
    Convert Nager.Date entries into Holiday records.

    Global entries become one national record. Regional entries become one
    record per province. Regional entries with no province list are kept
    as national but informational. The result is unique by (date, province)
    and sorted by date.
    """
    holidays: Dict[tuple, Holiday] = {}
    for raw in raw_holidays:
        day = parse_date(raw.get("date"))
        name = raw.get("localName") or raw.get("name") or "Holiday"
        if day is None:
            logger.error(f"Invalid date for holiday: {name}")
            continue

        holiday_type = HolidayType.BANK if is_bank_holiday(raw) else HolidayType.PROVINCIAL
        counties = raw.get("counties") or []

        if raw.get("global"):
            entries = [Holiday(date=day, name=name, province=None, type=holiday_type)]
        elif counties:
            entries = [
                Holiday(date=day, name=name, province=_province_code(c), type=holiday_type)
                for c in counties
            ]
        else:
            entries = [Holiday(date=day, name=name, province=None, type=HolidayType.PROVINCIAL)]

        for h in entries:
            # First entry wins on duplicates
            holidays.setdefault(h.key, h)

    return sorted(holidays.values(), key=lambda h: (h.date, h.province or ""))


def filter_holidays_for_province(
    holidays: Iterable[Holiday],
    province: Optional[str],
    bank_only: bool = False,
) -> List[Holiday]:
    """National holidays plus those scoped to `province`."""
    code = province.strip().upper() if province else None
    out = []
    for h in holidays:
        if h.province is not None and h.province != code:
            continue
        if bank_only and not h.is_bank:
            continue
        out.append(h)
    return out


def holidays_in_range(holidays: Iterable[Holiday], start: DateLike, end: DateLike) -> List[Holiday]:
    start_day, end_day = to_date(start), to_date(end)
    return [h for h in holidays if start_day <= h.date <= end_day]


def find_holiday(holidays: Iterable[Holiday], day: DateLike, province: Optional[str] = None) -> Optional[Holiday]:
    """The holiday on `day` that applies to `province`, if any."""
    target = to_date(day)
    for h in filter_holidays_for_province(holidays, province):
        if h.date == target:
            return h
    return None


async def get_holidays_for_year(
    year: int,
    province: Optional[str] = None,
    country: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    strict: bool = False,
) -> List[Holiday]:
    """
    Holidays for a year, cached per (year, country) for HOLIDAY_CACHE_TTL
    seconds, filtered to `province` when given.

    Raises:
        HolidayProviderError: If the fetch fails and strict is set
    """
    country = (country or get_holiday_country()).upper()
    key = (year, country)
    now = time.time()
    async with _LOCK:
        entry = _CACHE.get(key)
        if entry is None or now - entry["ts"] > get_holiday_cache_ttl():
            raw = await fetch_public_holidays(year, country, client=client, strict=strict)
            holidays = transform_nager_holidays(raw)
            # Don't pin a failed fetch in the cache
            if holidays:
                _CACHE[key] = {"holidays": holidays, "ts": now}
            logger.info("Loaded %d holidays for %s/%s", len(holidays), year, country)
        else:
            holidays = entry["holidays"]

    if province:
        return filter_holidays_for_province(holidays, province)
    return list(holidays)


async def get_holidays_between(
    start: date,
    end: date,
    province: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
    strict: bool = False,
) -> List[Holiday]:
    """
    Holidays for every year touched by [start, end], limited to the range.

    Only years in MIN_HOLIDAY_YEAR..MAX_HOLIDAY_YEAR are fetched; days outside
    that window have no holidays.
    """
    first_year = max(start.year, MIN_HOLIDAY_YEAR)
    last_year = min(end.year, MAX_HOLIDAY_YEAR)
    if first_year > last_year:
        logger.debug("No holiday years between %s and %s", start, end)
        return []
    holidays: List[Holiday] = []
    for year in range(first_year, last_year + 1):
        holidays.extend(await get_holidays_for_year(year, province, client=client, strict=strict))
    return holidays_in_range(holidays, start, end)


def clear_holiday_cache() -> None:
    _CACHE.clear()
