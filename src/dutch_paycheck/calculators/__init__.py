"""Paycheck calculation engine."""

from dutch_paycheck.calculators.bracket_engine import compute_bracket_amount
from dutch_paycheck.calculators.paycheck import PaycheckCalculator, compute_paycheck
from dutch_paycheck.calculators.types import (
    Bracket,
    Paycheck,
    Period,
    RateField,
    RulingChoice,
    RulingInput,
    SalaryInput,
)

__all__ = [
    "Bracket",
    "Paycheck",
    "PaycheckCalculator",
    "Period",
    "RateField",
    "RulingChoice",
    "RulingInput",
    "SalaryInput",
    "compute_bracket_amount",
    "compute_paycheck",
]
