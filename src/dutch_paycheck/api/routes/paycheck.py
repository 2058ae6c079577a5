"""Paycheck calculation endpoints."""

from decimal import Decimal

from fastapi import APIRouter, HTTPException, status

from dutch_paycheck.api.dependencies import Calculator, Tables
from dutch_paycheck.api.schemas import PaycheckRequest, PaycheckResponse, YearsResponse
from dutch_paycheck.calculators.types import RulingInput, SalaryInput
from dutch_paycheck.tables import MissingConfigurationError

router = APIRouter(tags=["paycheck"])


@router.post(
    "/paycheck",
    response_model=PaycheckResponse,
    status_code=status.HTTP_200_OK,
)
def calculate_paycheck(request: PaycheckRequest, calculator: Calculator) -> PaycheckResponse:
    """Calculate the gross-to-net breakdown of a salary."""
    hours = request.hours
    if hours is None:
        hours = Decimal(calculator.tables.default_working_hours)

    salary_input = SalaryInput(
        income=request.income,
        allowance=request.allowance,
        social_security=request.social_security,
        older=request.older,
        hours=hours,
    )
    ruling = RulingInput(checked=request.ruling.checked, choice=request.ruling.choice)

    try:
        paycheck = calculator.compute(salary_input, request.start_from, request.year, ruling)
    except MissingConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": str(e), "code": "MISSING_CONFIGURATION"},
        )

    return PaycheckResponse.model_validate(paycheck)


@router.get(
    "/years",
    response_model=YearsResponse,
    status_code=status.HTTP_200_OK,
)
def list_years(tables: Tables) -> YearsResponse:
    """List the years the tax tables cover."""
    return YearsResponse(current_year=tables.current_year, years=tables.years)
