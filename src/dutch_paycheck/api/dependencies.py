"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from dutch_paycheck.calculators.paycheck import PaycheckCalculator
from dutch_paycheck.config import get_settings
from dutch_paycheck.tables import TaxTables, load_tax_tables


def get_tax_tables() -> TaxTables:
    """Get the tax tables configured for this process."""
    return load_tax_tables(get_settings().tax_tables_path)


def get_calculator(tables: Annotated[TaxTables, Depends(get_tax_tables)]) -> PaycheckCalculator:
    return PaycheckCalculator(tables)


# Type aliases for cleaner dependency injection
Tables = Annotated[TaxTables, Depends(get_tax_tables)]
Calculator = Annotated[PaycheckCalculator, Depends(get_calculator)]
