"""Demographics service wrapping the U.S. Census Bureau ACS API.

Resolves an address to a state by string parsing (no geocoding), pulls
state-level ACS 5-year aggregates via async httpx and combines them with
a static unemployment table.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from tenant_research.domain.errors import PropertyValidationError, UpstreamError

logger = logging.getLogger(__name__)

CENSUS_ACS_URL = "https://api.census.gov/data/2023/acs/acs5"
ACS_DATA_YEAR = "2023"
ACS_DATA_SOURCE = "U.S. Census Bureau - American Community Survey"

# Order matters: parse_census_row reads the row positionally
ACS_VARIABLES = (
    "B01003_001E",  # total population
    "B19013_001E",  # median household income
    "B08303_001E",  # total commuters
    "B25003_001E",  # total households
    "B25003_002E",  # owner occupied
    "B01002_001E",  # median age
    "B08303_013E",  # 60+ minute commute
)

DEFAULT_UNEMPLOYMENT_RATE = 3.5

STATE_NAMES: dict[str, str] = {
    "Alabama": "AL", "Alaska": "AK", "Arizona": "AZ", "Arkansas": "AR",
    "California": "CA", "Colorado": "CO", "Connecticut": "CT", "Delaware": "DE",
    "Florida": "FL", "Georgia": "GA", "Hawaii": "HI", "Idaho": "ID",
    "Illinois": "IL", "Indiana": "IN", "Iowa": "IA", "Kansas": "KS",
    "Kentucky": "KY", "Louisiana": "LA", "Maine": "ME", "Maryland": "MD",
    "Massachusetts": "MA", "Michigan": "MI", "Minnesota": "MN", "Mississippi": "MS",
    "Missouri": "MO", "Montana": "MT", "Nebraska": "NE", "Nevada": "NV",
    "New Hampshire": "NH", "New Jersey": "NJ", "New Mexico": "NM", "New York": "NY",
    "North Carolina": "NC", "North Dakota": "ND", "Ohio": "OH", "Oklahoma": "OK",
    "Oregon": "OR", "Pennsylvania": "PA", "Rhode Island": "RI", "South Carolina": "SC",
    "South Dakota": "SD", "Tennessee": "TN", "Texas": "TX", "Utah": "UT",
    "Vermont": "VT", "Virginia": "VA", "Washington": "WA", "West Virginia": "WV",
    "Wisconsin": "WI", "Wyoming": "WY",
}

STATE_FIPS: dict[str, str] = {
    "AL": "01", "AK": "02", "AZ": "04", "AR": "05", "CA": "06", "CO": "08",
    "CT": "09", "DE": "10", "FL": "12", "GA": "13", "HI": "15", "ID": "16",
    "IL": "17", "IN": "18", "IA": "19", "KS": "20", "KY": "21", "LA": "22",
    "ME": "23", "MD": "24", "MA": "25", "MI": "26", "MN": "27", "MS": "28",
    "MO": "29", "MT": "30", "NE": "31", "NV": "32", "NH": "33", "NJ": "34",
    "NM": "35", "NY": "36", "NC": "37", "ND": "38", "OH": "39", "OK": "40",
    "OR": "41", "PA": "42", "RI": "44", "SC": "45", "SD": "46", "TN": "47",
    "TX": "48", "UT": "49", "VT": "50", "VA": "51", "WA": "53", "WV": "54",
    "WI": "55", "WY": "56",
}

UNEMPLOYMENT_RATES: dict[str, float] = {
    "AL": 2.8, "AK": 4.2, "AZ": 3.5, "AR": 3.1, "CA": 4.1, "CO": 3.2,
    "CT": 3.8, "DE": 4.0, "FL": 2.8, "GA": 3.1, "HI": 2.9, "ID": 2.3,
    "IL": 4.5, "IN": 2.8, "IA": 2.7, "KS": 2.8, "KY": 3.9, "LA": 3.8,
    "ME": 2.8, "MD": 3.5, "MA": 3.0, "MI": 3.8, "MN": 2.9, "MS": 3.8,
    "MO": 3.2, "MT": 2.5, "NE": 2.1, "NV": 4.1, "NH": 2.1, "NJ": 4.0,
    "NM": 4.8, "NY": 4.1, "NC": 3.4, "ND": 2.0, "OH": 3.5, "OK": 3.1,
    "OR": 3.8, "PA": 3.4, "RI": 3.2, "SC": 3.0, "SD": 2.1, "TN": 3.2,
    "TX": 3.8, "UT": 2.9, "VT": 2.2, "VA": 2.9, "WA": 4.0, "WV": 3.5,
    "WI": 2.8, "WY": 3.4,
}

_STATE_ZIP = re.compile(r"([A-Z]{2})\s+(\d{5})")
_STATE_ONLY = re.compile(r"^([A-Z]{2})$")


@dataclass(frozen=True)
class ParsedAddress:
    city: str
    state: str
    zip_code: Optional[str] = None


def parse_address(address: Optional[str]) -> ParsedAddress | None:
    """Extract city / state / zip from ``"City, ST 12345"``, ``"City, ST"``
    or ``"City, Statename"``. The city is the second-to-last comma part.
    """
    if not address:
        return None

    parts = [part.strip() for part in address.split(",")]
    if len(parts) < 2:
        return None

    last = parts[-1]
    city = parts[-2]

    match = _STATE_ZIP.search(last)
    if match:
        return ParsedAddress(city=city, state=match.group(1), zip_code=match.group(2))

    match = _STATE_ONLY.match(last)
    if match:
        return ParsedAddress(city=city, state=match.group(1))

    for name, code in STATE_NAMES.items():
        if last.lower() == name.lower():
            return ParsedAddress(city=city, state=code)

    return None


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_census_row(row: list) -> dict:
    return {
        "population": _to_int(row[0]),
        "median_income": _to_int(row[1]),
        "total_commuters": _to_int(row[2]),
        "total_households": _to_int(row[3]),
        "owner_occupied": _to_int(row[4]),
        "median_age": _to_float(row[5]),
        "long_commuters": _to_int(row[6]),
    }


def get_employment_data(state_code: str) -> dict:
    return {"unemployment_rate": UNEMPLOYMENT_RATES.get(state_code, DEFAULT_UNEMPLOYMENT_RATE)}


def calculate_derived_metrics(demographics: dict) -> dict:
    """Add home-ownership and long-commute rates (percent, one decimal)."""
    households = demographics.get("total_households") or 0
    commuters = demographics.get("total_commuters") or 0

    ownership_rate = (demographics.get("owner_occupied", 0) / households * 100) if households > 0 else 0
    long_commute_rate = (demographics.get("long_commuters", 0) / commuters * 100) if commuters > 0 else 0

    return {
        **demographics,
        "home_ownership_rate": round(ownership_rate, 1),
        "long_commute_rate": round(long_commute_rate, 1),
        "data_year": ACS_DATA_YEAR,
        "data_source": ACS_DATA_SOURCE,
    }


class DemographicsService:
    """Async client for state-level Census demographics."""

    def __init__(self, api_key: str = "", timeout: float = 15.0) -> None:
        self._api_key = api_key
        self._timeout = timeout

    async def get_state_demographics(self, state_code: str) -> dict | None:
        """Fetch ACS aggregates for a two-letter state code.

        Returns ``None`` for an unknown state or an empty Census answer.

        Raises:
            UpstreamError: the Census API could not be reached or answered non-2xx.
        """
        fips = STATE_FIPS.get(state_code)
        if fips is None:
            logger.warning("No FIPS code for state %s", state_code)
            return None

        params = {
            "get": ",".join(ACS_VARIABLES),
            "for": f"state:{fips}",
            "key": self._api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(CENSUS_ACS_URL, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Census API HTTP error: %s", exc)
            raise UpstreamError("census", str(exc), payload=exc.response.text) from exc
        except httpx.RequestError as exc:
            logger.warning("Census API request failed: %s", exc)
            raise UpstreamError("census", str(exc)) from exc
        except ValueError as exc:
            raise UpstreamError("census", f"invalid JSON response: {exc}") from exc

        # First row is the header
        if isinstance(data, list) and len(data) > 1:
            return parse_census_row(data[1])
        return None

    async def get_demographics_for_address(self, address: str) -> dict:
        """Demographics, employment and derived metrics for an address.

        Raises:
            PropertyValidationError: the address could not be parsed.
            UpstreamError: the Census API call failed.
        """
        logger.info("Getting demographics for address: %s", address)

        parsed = parse_address(address)
        if parsed is None:
            raise PropertyValidationError(["address"], f"Could not parse address: {address}")

        state_demographics = await self.get_state_demographics(parsed.state)
        combined = {
            **(state_demographics or {}),
            **get_employment_data(parsed.state),
            "location": {
                "city": parsed.city,
                "state": parsed.state,
                "zip_code": parsed.zip_code,
            },
        }

        logger.info("Retrieved demographics for %s, %s", parsed.city, parsed.state)
        return calculate_derived_metrics(combined)


def get_demographics_service() -> DemographicsService:
    from tenant_research.app.config import get_settings

    settings = get_settings()
    return DemographicsService(settings.census_api_key, settings.census_timeout_seconds)
