"""Tax credit (heffingskorting) calculators."""

from decimal import Decimal

from payroll.calculators.rate_data import EmployedPersonCreditRates, GeneralCreditRates, RateSet
from payroll.errors import ValidationError
from payroll.models import TaxCredits

_ZERO = Decimal("0")


def calculate_general_tax_credit(income: Decimal, rates: GeneralCreditRates) -> Decimal:
    """Algemene heffingskorting.

    Full base amount up to the phase-out start, reduced linearly by
    ``(income - start) * rate`` up to the phase-out end, zero from there on.
    """
    if income <= rates.phase_out_start:
        return rates.base_amount
    if income >= rates.phase_out_end:
        return _ZERO
    reduction = (income - rates.phase_out_start) * rates.phase_out_rate
    return max(_ZERO, rates.base_amount - reduction)


def calculate_employed_person_tax_credit(income: Decimal, rates: EmployedPersonCreditRates) -> Decimal:
    """Arbeidskorting.

    Built up over three marginal segments, capped at ``max_credit``, then
    phased out above its own threshold. The phase-out never takes back
    more than was built up.
    """
    if income <= 0:
        return _ZERO

    credit = _ZERO
    segment_start = _ZERO
    for segment in rates.segments:
        in_segment = min(max(income - segment_start, _ZERO), segment.width)
        credit += in_segment * segment.rate
        segment_start += segment.width
    credit = min(credit, rates.max_credit)

    if income > rates.phase_out_start:
        reduction = (income - rates.phase_out_start) * rates.phase_out_rate
        credit -= min(reduction, credit)
    return credit


def calculate_young_disabled_tax_credit(is_young_disabled: bool, amount: Decimal) -> Decimal:
    """Jonggehandicaptenkorting: a flat amount for qualifying employees."""
    return amount if is_young_disabled else _ZERO


def calculate_tax_credits(
    income: Decimal,
    rate_set: RateSet,
    is_young_disabled: bool = False,
    additional_credit: Decimal = _ZERO,
) -> TaxCredits:
    """Calculate all four credits for an annual income.

    Args:
        income: Annual taxable income.
        rate_set: Rate set for the tax year.
        is_young_disabled: Whether the young-disabled credit applies.
        additional_credit: Fixed employee-specific credit addend.

    Returns:
        TaxCredits with each credit and their total.
    """
    if additional_credit < 0:
        raise ValidationError(
            "Additional tax credit must not be negative",
            code="NEGATIVE_TAX_CREDIT",
            field="tax_credit",
        )
    return TaxCredits(
        general=calculate_general_tax_credit(income, rate_set.general_credit),
        employed_person=calculate_employed_person_tax_credit(income, rate_set.employed_person_credit),
        young_disabled=calculate_young_disabled_tax_credit(
            is_young_disabled, rate_set.young_disabled_credit
        ),
        additional=additional_credit,
    )
