"""Tests for tenant_research.services.industrial_data_service.

All HTTP calls are mocked; no real Census API requests are made.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from tenant_research.domain.errors import PropertyValidationError
from tenant_research.services.industrial_data_service import (
    CENSUS_CBP_URL,
    CENSUS_QWI_URL,
    INDUSTRIAL_NAICS,
    IndustrialDataService,
    aggregate_industrial_data,
    stability_rate,
)

# ---------------------------------------------------------------------------
# Fixtures & helpers
# ---------------------------------------------------------------------------

CLIENT_PATH = "tenant_research.services.industrial_data_service.httpx.AsyncClient"

# EMP, PAYANN per NAICS prefix
CBP_ROWS = {
    "48": ["300000", "18000000"],
    "49": ["100000", "5000000"],
    "31": ["80000", "4000000"],
    "32": ["120000", "9000000"],
    "33": ["200000", "15000000"],
    "493": ["60000", "3000000"],
}


def _make_mock_response(json_data, status_code: int = 200) -> MagicMock:
    """Create a mock httpx.Response."""
    resp = MagicMock(spec=httpx.Response)
    resp.status_code = status_code
    resp.json.return_value = json_data
    if status_code >= 400:
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            message="error",
            request=MagicMock(),
            response=resp,
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


def _census_router(cbp_status: dict | None = None, qwi=None):
    """Answer ``client.get`` by URL and NAICS code.

    ``cbp_status`` maps NAICS codes to an HTTP status to fail with;
    ``qwi`` is the QWI data row, an Exception, or ``None`` for header only.
    """
    cbp_status = cbp_status or {}

    async def _get(url, params=None):
        if url == CENSUS_CBP_URL:
            naics = params["NAICS2017"].rstrip("*")
            if naics in cbp_status:
                return _make_mock_response({}, status_code=cbp_status[naics])
            return _make_mock_response([["EMP", "PAYANN", "state"], CBP_ROWS[naics] + ["48"]])
        if isinstance(qwi, Exception):
            raise qwi
        rows = [["Emp", "EmpS", "time", "state"]]
        if qwi is not None:
            rows.append(qwi)
        return _make_mock_response(rows)

    return _get


def _make_mock_client(get) -> AsyncMock:
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.side_effect = get
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture
def service() -> IndustrialDataService:
    return IndustrialDataService(api_key="census-key", timeout=5)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_aggregate_by_sector(self) -> None:
        sectors = aggregate_industrial_data({
            "48": {"employees": 10, "annual_payroll": 100},
            "49": {"employees": 5, "annual_payroll": 50},
            "33": {"employees": 7, "annual_payroll": 70},
        })
        assert sectors["transportation"] == {"employees": 15, "annual_payroll": 150}
        assert sectors["manufacturing"] == {"employees": 7, "annual_payroll": 70}
        assert sectors["warehousing"] == {"employees": 0, "annual_payroll": 0}

    def test_stability_rate(self) -> None:
        assert stability_rate(1000, 873) == 87.3
        assert stability_rate(0, 0) == 0.0


# ---------------------------------------------------------------------------
# County Business Patterns
# ---------------------------------------------------------------------------


class TestCountyBusinessPatterns:
    async def test_queries_every_naics_code(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(_census_router())

        with patch(CLIENT_PATH, return_value=mock_client):
            result = await service.get_county_business_patterns("TX")

        assert result["transportation"]["employees"] == 400000
        assert result["manufacturing"]["employees"] == 400000
        assert result["warehousing"] == {"employees": 60000, "annual_payroll": 3000000}

        params = [call.kwargs["params"] for call in mock_client.get.call_args_list]
        assert [p["NAICS2017"] for p in params] == [f"{code}*" for code in INDUSTRIAL_NAICS]
        assert all(p["for"] == "state:48" and p["key"] == "census-key" for p in params)

    async def test_failed_code_is_skipped(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(_census_router(cbp_status={"49": 500}))

        with patch(CLIENT_PATH, return_value=mock_client):
            result = await service.get_county_business_patterns("TX")

        assert result["transportation"]["employees"] == 300000

    async def test_all_codes_failing_returns_none(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(
            _census_router(cbp_status={code: 503 for code in INDUSTRIAL_NAICS})
        )

        with patch(CLIENT_PATH, return_value=mock_client):
            assert await service.get_county_business_patterns("TX") is None

    async def test_unknown_state_skips_http(self, service: IndustrialDataService) -> None:
        with patch(CLIENT_PATH) as client_cls:
            assert await service.get_county_business_patterns("ZZ") is None
        client_cls.assert_not_called()


# ---------------------------------------------------------------------------
# LEHD / QWI
# ---------------------------------------------------------------------------


class TestLehdEmployment:
    async def test_success(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(_census_router(qwi=["1000", "873", "2024-Q1", "48"]))

        with patch(CLIENT_PATH, return_value=mock_client):
            result = await service.get_lehd_employment_data("TX")

        assert result == {
            "total_employment": 1000,
            "stable_employment": 873,
            "employment_stability_rate": 87.3,
            "quarter": "2024-Q1",
        }
        assert mock_client.get.call_args.args[0] == CENSUS_QWI_URL
        assert mock_client.get.call_args.kwargs["params"]["time"] == "2024-Q1"

    async def test_network_error_returns_none(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(_census_router(qwi=httpx.ConnectError("connection refused")))

        with patch(CLIENT_PATH, return_value=mock_client):
            assert await service.get_lehd_employment_data("TX") is None


# ---------------------------------------------------------------------------
# Combined lookup
# ---------------------------------------------------------------------------


class TestIndustrialDataForAddress:
    async def test_combined_result(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(_census_router(qwi=["1000", "873", "2024-Q1", "48"]))

        with patch(CLIENT_PATH, return_value=mock_client):
            result = await service.get_industrial_data_for_address("Dallas, TX 75201")

        assert result["location"] == {"state": "TX"}
        assert result["county_business_patterns"]["warehousing"]["employees"] == 60000
        assert result["employment_data"]["total_employment"] == 1000
        assert result["data_year"] == "2022-2023"

    async def test_partial_data_is_kept(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(_census_router(qwi=None))

        with patch(CLIENT_PATH, return_value=mock_client):
            result = await service.get_industrial_data_for_address("Dallas, TX")

        assert result["employment_data"] is None
        assert result["county_business_patterns"] is not None

    async def test_no_data_returns_none(self, service: IndustrialDataService) -> None:
        mock_client = _make_mock_client(
            _census_router(cbp_status={code: 500 for code in INDUSTRIAL_NAICS}, qwi=None)
        )

        with patch(CLIENT_PATH, return_value=mock_client):
            assert await service.get_industrial_data_for_address("Dallas, TX") is None

    async def test_unparseable_address(self, service: IndustrialDataService) -> None:
        with pytest.raises(PropertyValidationError):
            await service.get_industrial_data_for_address("somewhere")
