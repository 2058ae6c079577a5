"""Dutch gross-to-net salary paycheck calculator."""

from dutch_paycheck.calculators import (
    Bracket,
    Paycheck,
    PaycheckCalculator,
    Period,
    RateField,
    RulingChoice,
    RulingInput,
    SalaryInput,
    compute_bracket_amount,
    compute_paycheck,
)
from dutch_paycheck.tables import (
    ConfigurationError,
    MissingConfigurationError,
    TaxTables,
    load_tax_tables,
)

__version__ = "1.0.0"

__all__ = [
    "Bracket",
    "ConfigurationError",
    "MissingConfigurationError",
    "Paycheck",
    "PaycheckCalculator",
    "Period",
    "RateField",
    "RulingChoice",
    "RulingInput",
    "SalaryInput",
    "TaxTables",
    "compute_bracket_amount",
    "compute_paycheck",
    "load_tax_tables",
]
