"""Gross-to-net paycheck calculation.

For calculation instructions:
https://www.belastingdienst.nl/wps/wcm/connect/nl/zoeken/zoeken?q=Rekenvoorschriften+voor+de+geautomatiseerde+loonadministratie
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from dutch_paycheck.calculators.bracket_engine import CENT, compute_bracket_amount
from dutch_paycheck.calculators.types import (
    Paycheck,
    Period,
    RateField,
    RulingChoice,
    RulingInput,
    SalaryInput,
)
from dutch_paycheck.config import get_settings
from dutch_paycheck.tables import BracketTable, TaxTables, load_tax_tables

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
HOLIDAY_ALLOWANCE_RATE = Decimal("0.08")
RULING_TAXABLE_SHARE = Decimal("0.7")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _whole(value: Decimal) -> Decimal:
    return value.quantize(ONE, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def holiday_allowance(amount_year: Decimal) -> Decimal:
    """Holiday allowance (vakantiegeld) contained in an annual amount.

    The 8% allowance is part of the amount, so it is taken on a 108 base.
    """
    return _cents(amount_year * HOLIDAY_ALLOWANCE_RATE / (ONE + HOLIDAY_ALLOWANCE_RATE))


def tax_free_percentage(tax_free_year: Decimal, gross_year: Decimal) -> Decimal:
    """Share of the gross salary exempted by the 30% ruling, in percent."""
    if gross_year == 0:
        return ZERO
    return _cents(tax_free_year / gross_year * 100)


def net_year(taxable_year: Decimal, income_tax: Decimal, tax_free_year: Decimal) -> Decimal:
    return taxable_year + income_tax + tax_free_year


class PaycheckCalculator:
    """Calculates a salary paycheck against year-keyed tax tables.

    Calculation pipeline (stable order):
    1) Annualize the income from its start period
    2) Split off the holiday allowance
    3) Apply the 30% ruling exemption
    4) Payroll tax and social security contributions
    5) Labour and general tax credits, with the general credit clawback
    6) Net amounts and period conversion

    The calculator holds no state besides the read-only tables, so one
    instance can serve any number of concurrent computations.
    """

    def __init__(self, tables: TaxTables):
        self.tables = tables

    def compute(
        self,
        salary_input: SalaryInput,
        start_from: Period | str,
        year: int,
        ruling: RulingInput | None = None,
    ) -> Paycheck:
        """Calculate all fields of the paycheck.

        Args:
            salary_input: Salary information
            start_from: Period the income figure refers to
            year: Year to perform the calculation for
            ruling: 30% ruling selection, not applied when omitted

        Returns:
            The complete paycheck

        Raises:
            MissingConfigurationError: If the year is not configured
        """
        start_from = Period(start_from)
        ruling = ruling or RulingInput()
        hours = self._normalize_hours(salary_input.hours)

        gross_year = self.annualize(salary_input.income, start_from, hours)
        gross_allowance = holiday_allowance(gross_year) if salary_input.allowance else ZERO

        tax_free_year = ZERO
        taxable_year = gross_year - gross_allowance
        if ruling.checked:
            ruling_income = self.ruling_income(year, ruling.choice)
            # The exemption may not bring the taxable wage under the ruling income
            effective_salary = max(taxable_year * RULING_TAXABLE_SHARE, ruling_income)
            reimbursement = taxable_year - effective_salary
            if reimbursement > 0:
                tax_free_year = reimbursement
                taxable_year = taxable_year - reimbursement

        taxable_year = _whole(taxable_year)
        tax_free_year = _whole(tax_free_year)

        payroll_tax = -self.payroll_tax(year, taxable_year)
        if salary_input.social_security:
            social_tax = -self.social_tax(year, taxable_year, salary_input.older)
        else:
            social_tax = ZERO

        social_credit = self.social_credit(year, salary_input.older, salary_input.social_security)
        below_low_wage = taxable_year < self.tables.low_wage(year) / social_credit

        labour_credit = self.labour_credit(year, taxable_year, social_credit)
        if below_low_wage:
            labour_credit = ZERO

        general_credit = self.general_credit(year, taxable_year, salary_input.older, social_credit)
        if (
            payroll_tax + social_tax + labour_credit + general_credit > 0
            or (salary_input.older and below_low_wage)
        ):
            general_credit = -(payroll_tax + social_tax + labour_credit)

        tax_without_credit = payroll_tax + social_tax
        tax_credit = labour_credit + general_credit
        income_tax = tax_without_credit + tax_credit
        net = net_year(taxable_year, income_tax, tax_free_year)

        paycheck = Paycheck(
            gross_year=gross_year,
            gross_month=self.amount_for_period(gross_year, Period.MONTH, hours),
            gross_week=self.amount_for_period(gross_year, Period.WEEK, hours),
            gross_day=self.amount_for_period(gross_year, Period.DAY, hours),
            gross_hour=self.amount_for_period(gross_year, Period.HOUR, hours),
            gross_allowance=gross_allowance,
            tax_free_year=tax_free_year,
            taxable_year=taxable_year,
            tax_free=tax_free_percentage(tax_free_year, gross_year),
            payroll_tax=payroll_tax,
            payroll_tax_month=self.amount_for_period(payroll_tax, Period.MONTH),
            social_tax=social_tax,
            social_tax_month=self.amount_for_period(social_tax, Period.MONTH),
            tax_without_credit=tax_without_credit,
            tax_without_credit_month=self.amount_for_period(tax_without_credit, Period.MONTH),
            labour_credit=labour_credit,
            labour_credit_month=self.amount_for_period(labour_credit, Period.MONTH),
            general_credit=general_credit,
            general_credit_month=self.amount_for_period(general_credit, Period.MONTH),
            tax_credit=tax_credit,
            tax_credit_month=self.amount_for_period(tax_credit, Period.MONTH),
            income_tax=income_tax,
            income_tax_month=self.amount_for_period(income_tax, Period.MONTH),
            net_year=net,
            net_allowance=holiday_allowance(net) if salary_input.allowance else ZERO,
            net_month=self.amount_for_period(net, Period.MONTH, hours),
            net_week=self.amount_for_period(net, Period.WEEK, hours),
            net_day=self.amount_for_period(net, Period.DAY, hours),
            net_hour=self.amount_for_period(net, Period.HOUR, hours),
        )

        logger.debug(
            "Computed paycheck for %s %s (year %d): gross_year=%s net_year=%s",
            salary_input.income,
            start_from.value,
            year,
            paycheck.gross_year,
            paycheck.net_year,
        )
        return paycheck

    def annualize(self, income: Any, start_from: Period, hours: Decimal) -> Decimal:
        """Convert an income figure to an annual gross amount.

        Negative and non-finite figures are treated as no income.
        """
        amount = _to_decimal(income)
        if not amount.is_finite():
            return ZERO

        factor = {
            Period.YEAR: ONE,
            Period.MONTH: Decimal("12"),
            Period.WEEK: Decimal(self.tables.working_weeks),
            Period.DAY: Decimal(self.tables.working_days),
            Period.HOUR: Decimal(self.tables.working_weeks) * hours,
        }[start_from]

        gross_year = _cents(amount * factor)
        return gross_year if gross_year > 0 else ZERO

    def amount_for_period(
        self,
        amount_year: Decimal,
        period: Period,
        hours: Decimal | None = None,
    ) -> Decimal:
        """Derive the amount for one period from an annual amount."""
        if period is Period.YEAR:
            return amount_year
        if period is Period.MONTH:
            divisor = Decimal("12")
        elif period is Period.WEEK:
            divisor = Decimal(self.tables.working_weeks)
        elif period is Period.DAY:
            divisor = Decimal(self.tables.working_days)
        else:
            if hours is None:
                hours = Decimal(self.tables.default_working_hours)
            divisor = Decimal(self.tables.working_weeks) * hours
        return _cents(amount_year / divisor)

    def ruling_income(self, year: int, choice: RulingChoice) -> Decimal:
        """30% Ruling (30%-regeling) minimum income.

        https://www.belastingdienst.nl/wps/wcm/connect/bldcontentnl/belastingdienst/prive/internationaal/werken_wonen/tijdelijk_in_een_ander_land_werken/u_komt_in_nederland_werken/30_procent_regeling/voorwaarden_30_procent_regeling/u-hebt-een-specifieke-deskundigheid
        """
        return self.tables.ruling_income(year, choice)

    def payroll_tax(self, year: int, salary: Decimal) -> Decimal:
        """Payroll tax (Loonbelasting) on the taxable wage."""
        return compute_bracket_amount(
            self.tables.brackets(BracketTable.PAYROLL_TAX, year), salary, RateField.RATE
        )

    def social_tax(self, year: int, salary: Decimal, older: bool = False) -> Decimal:
        """Social security contributions (Volksverzekeringen: AOW, Anw, Wlz).

        Past retirement age no AOW is due, so the ``older`` rates apply.
        """
        return compute_bracket_amount(
            self.tables.brackets(BracketTable.SOCIAL_PERCENT, year),
            salary,
            RateField.OLDER if older else RateField.SOCIAL,
        )

    def general_credit(
        self,
        year: int,
        salary: Decimal,
        older: bool = False,
        multiplier: Decimal = ONE,
    ) -> Decimal:
        """General tax credit (Algemene heffingskorting).

        Past retirement age the elder credit (Ouderenkorting) is added.
        """
        credit = compute_bracket_amount(
            self.tables.brackets(BracketTable.GENERAL_CREDIT, year),
            salary,
            RateField.RATE,
            multiplier,
        )
        if older and self.tables.has_brackets(BracketTable.ELDER_CREDIT, year):
            credit += compute_bracket_amount(
                self.tables.brackets(BracketTable.ELDER_CREDIT, year),
                salary,
                RateField.RATE,
            )
        return _cents(credit)

    def labour_credit(self, year: int, salary: Decimal, multiplier: Decimal = ONE) -> Decimal:
        """Labour tax credit (Arbeidskorting)."""
        credit = compute_bracket_amount(
            self.tables.brackets(BracketTable.LABOUR_CREDIT, year),
            salary,
            RateField.RATE,
            multiplier,
        )
        return _cents(credit)

    def social_credit(self, year: int, older: bool, social_security: bool) -> Decimal:
        """Share of the tax credits left once social contributions are removed.

        Credits are granted in proportion to the full rate including social
        contributions. Without social security only the tax part remains;
        past retirement age only the AOW part is removed.
        """
        bracket = self.tables.brackets(BracketTable.SOCIAL_PERCENT, year)[0]
        if not social_security:
            return (bracket.rate - bracket.social) / bracket.rate
        if older:
            return (bracket.rate + bracket.older - bracket.social) / bracket.rate
        return ONE

    def _normalize_hours(self, hours: Any) -> Decimal:
        value = _to_decimal(hours)
        if not value.is_finite() or value <= 0:
            return Decimal(self.tables.default_working_hours)
        return value


def compute_paycheck(
    salary_input: SalaryInput,
    start_from: Period | str,
    year: int,
    ruling: RulingInput | None = None,
    tables: TaxTables | None = None,
) -> Paycheck:
    """Calculate a paycheck, using the configured tax tables by default."""
    if tables is None:
        tables = load_tax_tables(get_settings().tax_tables_path)
    return PaycheckCalculator(tables).compute(salary_input, start_from, year, ruling)
