"""Industrial employment data from the Census CBP and LEHD QWI APIs.

County Business Patterns supplies state-level employment and payroll for
the transportation, manufacturing and warehousing NAICS sectors; the
Quarterly Workforce Indicators add total and stable employment. Both are
best effort: a failed call is logged and left out of the result.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from tenant_research.domain.errors import PropertyValidationError
from tenant_research.services.demographics_service import STATE_FIPS, parse_address

logger = logging.getLogger(__name__)

CENSUS_CBP_URL = "https://api.census.gov/data/2022/cbp"
CENSUS_QWI_URL = "https://api.census.gov/data/timeseries/qwi/sa"
QWI_QUARTER = "2024-Q1"

INDUSTRIAL_DATA_SOURCE = "U.S. Census Bureau - County Business Patterns & LEHD"
INDUSTRIAL_DATA_YEAR = "2022-2023"

# 48-49 transportation, 31-33 manufacturing, 493 warehousing and storage
INDUSTRIAL_NAICS = ("48", "49", "31", "32", "33", "493")

SECTOR_NAICS = {
    "transportation": ("48", "49"),
    "manufacturing": ("31", "32", "33"),
    "warehousing": ("493",),
}


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def aggregate_industrial_data(by_naics: dict[str, dict]) -> dict:
    """Roll per-NAICS CBP figures up into the three industrial sectors."""
    sectors = {}
    for sector, codes in SECTOR_NAICS.items():
        sectors[sector] = {
            "employees": sum(by_naics.get(code, {}).get("employees", 0) for code in codes),
            "annual_payroll": sum(by_naics.get(code, {}).get("annual_payroll", 0) for code in codes),
        }
    return sectors


def stability_rate(total: int, stable: int) -> float:
    """Percentage of jobs held a full quarter, one decimal."""
    if total <= 0:
        return 0.0
    return round(stable / total * 100, 1)


class IndustrialDataService:
    """Async client for state-level industrial employment figures."""

    def __init__(self, api_key: str = "", timeout: float = 15.0) -> None:
        self._api_key = api_key
        self._timeout = timeout

    async def _get_first_row(self, client: httpx.AsyncClient, url: str, params: dict) -> Optional[list]:
        try:
            resp = await client.get(url, params={**params, "key": self._api_key})
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Census API HTTP error for %s: %s", url, exc)
            return None
        except httpx.RequestError as exc:
            logger.warning("Census API request failed for %s: %s", url, exc)
            return None
        except ValueError as exc:
            logger.warning("Census API returned invalid JSON for %s: %s", url, exc)
            return None

        # First row is the header
        if isinstance(data, list) and len(data) > 1:
            return data[1]
        return None

    async def get_county_business_patterns(self, state_code: str) -> dict | None:
        """Sector employment and payroll for a state, or ``None`` when no NAICS code answered."""
        fips = STATE_FIPS.get(state_code)
        if fips is None:
            logger.warning("No FIPS code for state %s", state_code)
            return None

        by_naics: dict[str, dict] = {}
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            for naics in INDUSTRIAL_NAICS:
                row = await self._get_first_row(
                    client,
                    CENSUS_CBP_URL,
                    {"get": "EMP,PAYANN", "for": f"state:{fips}", "NAICS2017": f"{naics}*"},
                )
                if row is None:
                    logger.warning("No CBP data for NAICS %s in %s", naics, state_code)
                    continue
                by_naics[naics] = {
                    "employees": _to_int(row[0]),
                    "annual_payroll": _to_int(row[1]),
                }

        if not by_naics:
            return None
        return aggregate_industrial_data(by_naics)

    async def get_lehd_employment_data(self, state_code: str) -> dict | None:
        fips = STATE_FIPS.get(state_code)
        if fips is None:
            return None

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            row = await self._get_first_row(
                client,
                CENSUS_QWI_URL,
                {"get": "Emp,EmpS", "for": f"state:{fips}", "time": QWI_QUARTER},
            )
        if row is None:
            return None

        total = _to_int(row[0])
        stable = _to_int(row[1])
        return {
            "total_employment": total,
            "stable_employment": stable,
            "employment_stability_rate": stability_rate(total, stable),
            "quarter": QWI_QUARTER,
        }

    async def get_industrial_data_for_address(self, address: str) -> dict | None:
        """Combined CBP and LEHD figures for the address's state.

        Returns ``None`` when neither source produced data.

        Raises:
            PropertyValidationError: the address could not be parsed.
        """
        logger.info("Getting industrial data for address: %s", address)

        parsed = parse_address(address)
        if parsed is None:
            raise PropertyValidationError(["address"], f"Could not parse address: {address}")

        cbp = await self.get_county_business_patterns(parsed.state)
        lehd = await self.get_lehd_employment_data(parsed.state)
        if cbp is None and lehd is None:
            logger.warning("No industrial data available for %s", parsed.state)
            return None

        return {
            "location": {"state": parsed.state},
            "county_business_patterns": cbp,
            "employment_data": lehd,
            "data_source": INDUSTRIAL_DATA_SOURCE,
            "data_year": INDUSTRIAL_DATA_YEAR,
        }


def get_industrial_data_service() -> IndustrialDataService:
    from tenant_research.app.config import get_settings

    settings = get_settings()
    return IndustrialDataService(settings.census_api_key, settings.census_timeout_seconds)
