"""Unit tests for loading and validating tax tables."""

import json

import pytest
from decimal import Decimal

from dutch_paycheck.calculators.types import RulingChoice
from dutch_paycheck.tables import (
    BracketTable,
    ConfigurationError,
    MissingConfigurationError,
    TaxTables,
    load_tax_tables,
    parse_tax_tables,
)

from tests.conftest import minimal_tables_data


class TestShippedTables:
    """Test the tables distributed with the package."""

    def test_constants(self, tables):
        assert tables.current_year in tables.years
        assert tables.working_weeks == 52
        assert tables.working_days == 255
        assert tables.default_working_hours == 40

    @pytest.mark.parametrize("year", [2020, 2021, 2022])
    def test_every_year_has_required_tables(self, tables, year):
        for table in BracketTable:
            assert tables.brackets(table, year)
        for choice in RulingChoice:
            assert tables.ruling_income(year, choice) >= 0
        assert tables.low_wage(year) > 0

    def test_brackets_parsed_as_decimals(self, tables):
        first = tables.brackets(BracketTable.SOCIAL_PERCENT, 2020)[0]
        assert first.rate == Decimal("0.3735")
        assert first.social == Decimal("0.2765")
        assert first.older == Decimal("0.0975")
        assert first.max == Decimal("34712")

    def test_loading_is_cached(self):
        assert load_tax_tables() is load_tax_tables()


class TestValidation:
    """Malformed tables are rejected at load time."""

    def test_minimal_tables_are_valid(self):
        tables = parse_tax_tables(json.dumps(minimal_tables_data()))
        assert isinstance(tables, TaxTables)
        assert tables.years == [2020]

    def test_snake_case_keys_accepted(self):
        data = {
            "current_year": 2020,
            "years": [2020],
            "default_working_hours": 40,
            "working_weeks": 52,
            "working_days": 255,
        }
        camel = minimal_tables_data()
        for key in ("currentYear", "years", "defaultWorkingHours", "workingWeeks", "workingDays"):
            camel.pop(key)
        camel.update(data)
        assert parse_tax_tables(json.dumps(camel)).working_days == 255

    def test_invalid_json(self):
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            parse_tax_tables("{not json")

    def test_missing_required_table(self):
        data = minimal_tables_data()
        del data["payrollTax"]
        with pytest.raises(ConfigurationError):
            parse_tax_tables(json.dumps(data))

    def test_listed_year_without_brackets(self):
        data = minimal_tables_data()
        data["years"] = [2020, 2021]
        with pytest.raises(ConfigurationError, match="missing year 2021"):
            parse_tax_tables(json.dumps(data))

    def test_gap_between_brackets(self):
        data = minimal_tables_data()
        data["payrollTax"]["2020"][1]["min"] = 150
        with pytest.raises(ConfigurationError, match="not contiguous"):
            parse_tax_tables(json.dumps(data))

    def test_bounded_last_bracket(self):
        data = minimal_tables_data()
        data["payrollTax"]["2020"][1]["max"] = 1000
        with pytest.raises(ConfigurationError, match="last bracket must be unbounded"):
            parse_tax_tables(json.dumps(data))

    def test_unbounded_bracket_before_last(self):
        data = minimal_tables_data()
        del data["payrollTax"]["2020"][0]["max"]
        with pytest.raises(ConfigurationError, match="only the last bracket"):
            parse_tax_tables(json.dumps(data))

    def test_empty_bracket_list(self):
        data = minimal_tables_data()
        data["labourCredit"]["2020"] = []
        with pytest.raises(ConfigurationError, match="no brackets"):
            parse_tax_tables(json.dumps(data))

    def test_social_bracket_needs_older_rate(self):
        data = minimal_tables_data()
        del data["socialPercent"]["2020"][0]["older"]
        with pytest.raises(ConfigurationError, match="social and older"):
            parse_tax_tables(json.dumps(data))

    @pytest.mark.parametrize(
        "social,older",
        [
            (0.3, 0.1),  # social equal to rate
            (0.5, 0.1),  # social above rate
            (0.2, 0.25),  # older above social
            (0.2, -0.1),  # negative older
        ],
    )
    def test_social_bracket_rates_out_of_order(self, social, older):
        data = minimal_tables_data()
        data["socialPercent"]["2020"][0]["social"] = social
        data["socialPercent"]["2020"][0]["older"] = older
        with pytest.raises(ConfigurationError, match="older <= social < rate"):
            parse_tax_tables(json.dumps(data))

    def test_missing_rate(self):
        data = minimal_tables_data()
        del data["generalCredit"]["2020"][0]["rate"]
        with pytest.raises(ConfigurationError):
            parse_tax_tables(json.dumps(data))

    def test_working_weeks_must_be_positive(self):
        data = minimal_tables_data()
        data["workingWeeks"] = 0
        with pytest.raises(ConfigurationError):
            parse_tax_tables(json.dumps(data))

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_tax_tables(tmp_path / "missing.json")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps(minimal_tables_data()), encoding="utf-8")
        assert load_tax_tables(path).current_year == 2020


class TestLookups:
    """Lookups of absent years raise MissingConfigurationError."""

    @pytest.fixture
    def minimal(self):
        return parse_tax_tables(json.dumps(minimal_tables_data()))

    def test_missing_bracket_year(self, minimal):
        with pytest.raises(MissingConfigurationError) as exc_info:
            minimal.brackets(BracketTable.PAYROLL_TAX, 2021)
        assert exc_info.value.key == "payrollTax"
        assert exc_info.value.year == 2021

    def test_missing_ruling_year(self, minimal):
        with pytest.raises(MissingConfigurationError, match="rulingThreshold.young"):
            minimal.ruling_income(2021, RulingChoice.YOUNG)

    def test_missing_low_wage_year(self, minimal):
        with pytest.raises(MissingConfigurationError):
            minimal.low_wage(2021)

    def test_elder_credit_optional(self, minimal):
        assert not minimal.has_brackets(BracketTable.ELDER_CREDIT, 2020)
        assert minimal.has_brackets(BracketTable.PAYROLL_TAX, 2020)

    def test_missing_configuration_is_configuration_error(self):
        assert issubclass(MissingConfigurationError, ConfigurationError)
