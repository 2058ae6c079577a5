"""Year-keyed tax tables and constants.

The tables are read from a JSON document with structure:
{
    "currentYear": 2022,
    "years": [2020, 2021, 2022],
    "defaultWorkingHours": 40,
    "workingWeeks": 52,
    "workingDays": 255,
    "rulingThreshold": {"2020": {"normal": 38347, "young": 29149, "research": 0}},
    "lowWageThreshold": {"2020": 4628},
    "payrollTax": {"2020": [{"min": 0, "max": 34712, "rate": 0.097}, ...]},
    "socialPercent": {"2020": [{"min": 0, "max": 34712, "rate": 0.3735,
                                "social": 0.2765, "older": 0.0975}, ...]},
    "generalCredit": {...},
    "labourCredit": {...},
    "elderCredit": {...}  // optional
}
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from dutch_paycheck.calculators.types import Bracket, RulingChoice
from dutch_paycheck.config import DEFAULT_TABLES_PATH

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the tax tables cannot be loaded or are malformed."""


class MissingConfigurationError(ConfigurationError):
    """Raised when a required year or key is absent from the tables."""

    def __init__(self, key: str, year: int):
        self.key = key
        self.year = year
        super().__init__(f"Tax table '{key}' has no entry for year {year}")


class BracketTable(str, Enum):
    """Bracket tables available per year."""

    PAYROLL_TAX = "payrollTax"
    SOCIAL_PERCENT = "socialPercent"
    GENERAL_CREDIT = "generalCredit"
    LABOUR_CREDIT = "labourCredit"
    ELDER_CREDIT = "elderCredit"


REQUIRED_TABLES = (
    BracketTable.PAYROLL_TAX,
    BracketTable.SOCIAL_PERCENT,
    BracketTable.GENERAL_CREDIT,
    BracketTable.LABOUR_CREDIT,
)


class TaxTables(BaseModel):
    """Read-only tax configuration for every supported year."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    current_year: int
    years: list[int]
    default_working_hours: int = Field(gt=0)
    working_weeks: int = Field(gt=0)
    working_days: int = Field(gt=0)

    ruling_threshold: dict[int, dict[RulingChoice, Decimal]]
    low_wage_threshold: dict[int, Decimal]

    payroll_tax: dict[int, list[Bracket]]
    social_percent: dict[int, list[Bracket]]
    general_credit: dict[int, list[Bracket]]
    labour_credit: dict[int, list[Bracket]]
    elder_credit: dict[int, list[Bracket]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_tables(self) -> TaxTables:
        for table in BracketTable:
            for year, brackets in self._table(table).items():
                _check_brackets(table.value, year, brackets)

        for year in self.years:
            for table in REQUIRED_TABLES:
                if year not in self._table(table):
                    raise ValueError(f"{table.value} is missing year {year}")
            if year not in self.ruling_threshold:
                raise ValueError(f"rulingThreshold is missing year {year}")
            if year not in self.low_wage_threshold:
                raise ValueError(f"lowWageThreshold is missing year {year}")

        for year, brackets in self.social_percent.items():
            first = brackets[0]
            if first.rate == 0 or first.social is None or first.older is None:
                raise ValueError(
                    f"socialPercent {year}: first bracket needs rate, social and older"
                )
            # Keeps the social credit multiplier in (0, 1]
            if not 0 <= first.older <= first.social < first.rate:
                raise ValueError(
                    f"socialPercent {year}: first bracket needs 0 <= older <= social < rate"
                )
        return self

    def _table(self, table: BracketTable) -> dict[int, list[Bracket]]:
        return {
            BracketTable.PAYROLL_TAX: self.payroll_tax,
            BracketTable.SOCIAL_PERCENT: self.social_percent,
            BracketTable.GENERAL_CREDIT: self.general_credit,
            BracketTable.LABOUR_CREDIT: self.labour_credit,
            BracketTable.ELDER_CREDIT: self.elder_credit,
        }[table]

    def brackets(self, table: BracketTable, year: int) -> list[Bracket]:
        """Get the brackets of a table for a year.

        Raises:
            MissingConfigurationError: If the year is not configured
        """
        try:
            return self._table(table)[year]
        except KeyError:
            raise MissingConfigurationError(table.value, year) from None

    def has_brackets(self, table: BracketTable, year: int) -> bool:
        return year in self._table(table)

    def ruling_income(self, year: int, choice: RulingChoice) -> Decimal:
        """Minimum taxable income under the 30% ruling."""
        try:
            return self.ruling_threshold[year][choice]
        except KeyError:
            raise MissingConfigurationError(f"rulingThreshold.{choice.value}", year) from None

    def low_wage(self, year: int) -> Decimal:
        try:
            return self.low_wage_threshold[year]
        except KeyError:
            raise MissingConfigurationError("lowWageThreshold", year) from None


def _check_brackets(name: str, year: int, brackets: list[Bracket]) -> None:
    """Brackets must be non-empty, ascending, contiguous and end unbounded."""
    if not brackets:
        raise ValueError(f"{name} {year}: no brackets")

    for current, following in zip(brackets, brackets[1:]):
        if current.max is None:
            raise ValueError(f"{name} {year}: only the last bracket may be unbounded")
        if current.max < current.min:
            raise ValueError(f"{name} {year}: bracket max below min")
        if following.min != current.max:
            raise ValueError(f"{name} {year}: brackets are not contiguous at {current.max}")

    if brackets[-1].max is not None:
        raise ValueError(f"{name} {year}: last bracket must be unbounded")


def parse_tax_tables(raw: str) -> TaxTables:
    """Validate a JSON document into tax tables.

    Raises:
        ConfigurationError: If the document is not valid JSON or fails validation
    """
    try:
        data = json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Tax tables are not valid JSON: {e}") from e

    try:
        return TaxTables.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tax tables: {e}") from e


@lru_cache(maxsize=8)
def load_tax_tables(path: str | Path = DEFAULT_TABLES_PATH) -> TaxTables:
    """Load and cache the tax tables stored at ``path``."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read tax tables from {path}: {e}") from e

    tables = parse_tax_tables(raw)
    logger.info("Loaded tax tables from %s for years %s", path, tables.years)
    return tables
