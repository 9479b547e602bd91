"""Employer levies: AWF, Aof, Wko and Ufo."""

from decimal import Decimal

from payroll.calculators.rate_data import RateSet, TieredRate
from payroll.errors import ValidationError
from payroll.models import EmployerContributions, RateTier


def _tier_rate(rates: TieredRate, tier: str, field: str) -> Decimal:
    try:
        selected = RateTier(tier)
    except ValueError as e:
        valid = ", ".join(t.value for t in RateTier)
        raise ValidationError(
            f"Invalid {field}: {tier}. Must be one of: {valid}",
            code="INVALID_RATE_TIER",
            field=field,
        ) from e
    return rates.high if selected is RateTier.HIGH else rates.low


def calculate_employer_contributions(
    annual_salary: Decimal,
    rate_set: RateSet,
    unemployment_fund_tier: str = RateTier.LOW.value,
    disability_fund_tier: str = RateTier.LOW.value,
) -> EmployerContributions:
    """Calculate employer-side levies on annual salary.

    These are employer costs only and never reduce the employee's net pay.

    Args:
        annual_salary: Gross annual salary.
        rate_set: Rate set for the tax year.
        unemployment_fund_tier: ``low`` for permanent contracts, ``high`` otherwise.
        disability_fund_tier: ``low`` for small employers, ``high`` for large ones.

    Returns:
        EmployerContributions with each levy, the applied tier rates and the total.
    """
    rates = rate_set.employer
    awf_rate = _tier_rate(rates.unemployment_fund, unemployment_fund_tier, "unemployment_fund_tier")
    aof_rate = _tier_rate(rates.disability_fund, disability_fund_tier, "disability_fund_tier")

    return EmployerContributions(
        unemployment_fund=annual_salary * awf_rate,
        disability_fund=annual_salary * aof_rate,
        childcare_surcharge=annual_salary * rates.childcare_surcharge,
        government_fund_premium=annual_salary * rates.government_fund_premium,
        unemployment_fund_rate=awf_rate,
        disability_fund_rate=aof_rate,
    )
