"""Type definitions for the paycheck calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Period(str, Enum):
    """Granularity of the income figure handed to the calculator."""

    YEAR = "Year"
    MONTH = "Month"
    WEEK = "Week"
    DAY = "Day"
    HOUR = "Hour"


class RateField(str, Enum):
    """Bracket field used when reading a rate."""

    RATE = "rate"
    SOCIAL = "social"
    OLDER = "older"


class RulingChoice(str, Enum):
    """30% ruling categories, each with its own minimum taxable income."""

    NORMAL = "normal"
    YOUNG = "young"  # Young professionals with a Master's degree
    RESEARCH = "research"  # Scientific research workers


@dataclass(frozen=True, kw_only=True)
class Bracket:
    """Income range with a rate or a fixed amount.

    A value in (-1, 1), excluding 0, is a percentage applied to the part
    of the income inside the range. Any other value is a fixed amount that
    replaces whatever was accumulated so far.
    """

    min: Decimal
    max: Decimal | None = None  # None = no upper limit
    rate: Decimal
    social: Decimal | None = None  # Social contributions (AOW + Anw + Wlz)
    older: Decimal | None = None  # Retirement age contributions (Anw + Wlz)

    @property
    def width(self) -> Decimal | None:
        if self.max is None:
            return None
        return self.max - self.min

    def value_for(self, field: RateField) -> Decimal:
        """Return the selected field, falling back to ``rate`` when unset."""
        if field is RateField.SOCIAL and self.social is not None:
            return self.social
        if field is RateField.OLDER and self.older is not None:
            return self.older
        return self.rate


@dataclass(frozen=True)
class SalaryInput:
    """Salary information supplied by the caller."""

    income: Decimal
    allowance: bool = False  # Holiday allowance included in income
    social_security: bool = True
    older: bool = False  # Past retirement age
    hours: Decimal = Decimal("40")  # Working hours per week


@dataclass(frozen=True)
class RulingInput:
    """30% ruling (30%-regeling) selection."""

    checked: bool = False
    choice: RulingChoice = RulingChoice.NORMAL


@dataclass(frozen=True)
class Paycheck:
    """All calculated fields of one salary paycheck.

    Taxes are negative, credits are positive. ``tax_free`` is the
    percentage of the gross salary exempted by the 30% ruling.
    """

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
