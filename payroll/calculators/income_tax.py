"""Income tax calculator with bracket-by-bracket breakdown."""

from collections.abc import Sequence
from decimal import Decimal
from functools import reduce

from payroll.calculators.rate_data import TaxBracket
from payroll.errors import ValidationError
from payroll.models import ProgressiveTaxResult, TaxBracketLine

_ZERO = Decimal("0")

# (income still to allocate, total tax so far, lines so far)
_Allocation = tuple[Decimal, Decimal, tuple[TaxBracketLine, ...]]


def _allocate(state: _Allocation, indexed: tuple[int, TaxBracket]) -> _Allocation:
    remaining, total_tax, lines = state
    if remaining <= 0:
        return state

    index, bracket = indexed
    if bracket.upper is None:
        income_in_bracket = remaining
    else:
        income_in_bracket = min(remaining, bracket.upper - bracket.lower)
    tax = income_in_bracket * bracket.rate

    line = TaxBracketLine(
        bracket=index,
        income_in_bracket=income_in_bracket,
        rate=bracket.rate,
        tax_amount=tax,
        description=bracket.label or f"Schijf {index}",
    )
    return remaining - income_in_bracket, total_tax + tax, lines + (line,)


def calculate_progressive_tax(
    annual_income: Decimal,
    brackets: Sequence[TaxBracket],
) -> ProgressiveTaxResult:
    """Calculate Dutch box 1 wage tax with per-bracket breakdown.

    Each bracket takes ``min(remaining income, bracket width)`` at its own
    marginal rate; the last bracket is unbounded. Brackets are expected
    non-overlapping and ascending, as enforced by ``rate_data``.

    Args:
        annual_income: Taxable annual income (must be >= 0).
        brackets: Ordered bracket list for the employee's pension-age category.

    Returns:
        ProgressiveTaxResult with total_tax and one line per non-empty bracket.
    """
    if annual_income < 0:
        raise ValidationError(
            "Annual income must be non-negative.", code="NEGATIVE_INCOME", field="annual_income"
        )

    _, total_tax, lines = reduce(
        _allocate,
        enumerate(brackets, start=1),
        (annual_income, _ZERO, ()),
    )
    return ProgressiveTaxResult(taxable_income=annual_income, total_tax=total_tax, breakdown=lines)
