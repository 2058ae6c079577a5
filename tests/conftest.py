"""Pytest fixtures for paycheck calculator tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dutch_paycheck.api.app import create_app
from dutch_paycheck.calculators.paycheck import PaycheckCalculator
from dutch_paycheck.calculators.types import Bracket
from dutch_paycheck.tables import TaxTables, load_tax_tables


def minimal_tables_data() -> dict[str, Any]:
    """Smallest valid tax tables document, for one year."""
    return {
        "currentYear": 2020,
        "years": [2020],
        "defaultWorkingHours": 40,
        "workingWeeks": 52,
        "workingDays": 255,
        "rulingThreshold": {"2020": {"normal": 38347, "young": 29149, "research": 0}},
        "lowWageThreshold": {"2020": 4628},
        "payrollTax": {
            "2020": [
                {"min": 0, "max": 100, "rate": 0.1},
                {"min": 100, "rate": 0.2},
            ]
        },
        "socialPercent": {
            "2020": [
                {"min": 0, "max": 100, "rate": 0.3, "social": 0.2, "older": 0.1},
                {"min": 100, "rate": 30, "social": 20, "older": 10},
            ]
        },
        "generalCredit": {"2020": [{"min": 0, "rate": 0}]},
        "labourCredit": {"2020": [{"min": 0, "rate": 0}]},
    }


@pytest.fixture(scope="session")
def tables() -> TaxTables:
    """Tax tables shipped with the package."""
    return load_tax_tables()


@pytest.fixture(scope="session")
def calculator(tables: TaxTables) -> PaycheckCalculator:
    return PaycheckCalculator(tables)


@pytest.fixture
def two_brackets() -> list[Bracket]:
    """10% up to 100, 20% above."""
    return [
        Bracket(min=Decimal("0"), max=Decimal("100"), rate=Decimal("0.1")),
        Bracket(min=Decimal("100"), max=None, rate=Decimal("0.2")),
    ]


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to a fresh application."""
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
