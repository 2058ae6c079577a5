"""Progressive bracket accumulation shared by every tax and credit."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from dutch_paycheck.calculators.types import Bracket, RateField

CENT = Decimal("0.01")
RATE_PRECISION = Decimal("0.00001")


def is_percentage(rate: Decimal) -> bool:
    """Whether a bracket value is a percentage rather than a fixed amount."""
    return rate != 0 and Decimal("-1") < rate < Decimal("1")


def compute_bracket_amount(
    brackets: Sequence[Bracket],
    base_amount: Decimal,
    field: RateField = RateField.RATE,
    multiplier: Decimal = Decimal("1"),
) -> Decimal:
    """Accumulate the tax or credit amount over ordered brackets.

    Brackets are walked in order, consuming their width from
    ``base_amount``. Percentages add the rounded share of the consumed
    width; fixed amounts overwrite the accumulated total. Walking stops at
    the first bracket wide enough to hold the remaining amount.

    Args:
        brackets: Ascending, contiguous brackets
        base_amount: Taxable wage used for the calculation
        field: Bracket field to read the rate from
        multiplier: Scalar applied to every rate before use

    Returns:
        The accumulated amount, partial contributions rounded to cents
    """
    amount = Decimal("0")
    remaining = base_amount

    for bracket in brackets:
        width = bracket.width
        rate = (multiplier * bracket.value_for(field)).quantize(
            RATE_PRECISION, rounding=ROUND_HALF_UP
        )
        percent = is_percentage(rate)

        if width is None or remaining <= width:
            if percent:
                amount += (remaining * rate).quantize(CENT, rounding=ROUND_HALF_UP)
            else:
                amount = rate
            break

        if percent:
            amount += (width * rate).quantize(CENT, rounding=ROUND_HALF_UP)
        else:
            amount = rate
        remaining -= width

    return amount
