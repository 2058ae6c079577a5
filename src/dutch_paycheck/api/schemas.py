"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from dutch_paycheck.calculators.types import Period, RulingChoice


# ============================================================================
# Paycheck schemas
# ============================================================================


class RulingRequest(BaseModel):
    """30% ruling selection."""

    checked: bool = False
    choice: RulingChoice = RulingChoice.NORMAL


class PaycheckRequest(BaseModel):
    """Schema for calculating a paycheck."""

    income: Decimal
    start_from: Period = Period.YEAR
    year: int
    allowance: bool = False
    social_security: bool = True
    older: bool = False
    hours: Decimal | None = None  # Defaults to the tables' working hours
    ruling: RulingRequest = Field(default_factory=RulingRequest)


class PaycheckResponse(BaseModel):
    """Schema for paycheck response."""

    model_config = ConfigDict(from_attributes=True)

    gross_year: Decimal
    gross_month: Decimal
    gross_week: Decimal
    gross_day: Decimal
    gross_hour: Decimal
    gross_allowance: Decimal

    tax_free_year: Decimal
    taxable_year: Decimal
    tax_free: Decimal

    payroll_tax: Decimal
    payroll_tax_month: Decimal
    social_tax: Decimal
    social_tax_month: Decimal
    tax_without_credit: Decimal
    tax_without_credit_month: Decimal

    labour_credit: Decimal
    labour_credit_month: Decimal
    general_credit: Decimal
    general_credit_month: Decimal
    tax_credit: Decimal
    tax_credit_month: Decimal

    income_tax: Decimal
    income_tax_month: Decimal

    net_year: Decimal
    net_allowance: Decimal
    net_month: Decimal
    net_week: Decimal
    net_day: Decimal
    net_hour: Decimal


class YearsResponse(BaseModel):
    """Schema for listing the configured years."""

    current_year: int
    years: list[int]
