"""Employee social-insurance contributions (AOW, Wlz, Zvw)."""

import logging
from decimal import Decimal

from payroll.calculators.age import PensionAgeCategory
from payroll.calculators.rate_data import RateSet
from payroll.errors import ValidationError
from payroll.models import SocialInsuranceContributions, SocialInsuranceResult

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def calculate_social_insurance(
    annual_salary: Decimal,
    category: PensionAgeCategory,
    rate_set: RateSet,
) -> SocialInsuranceResult:
    """Calculate the contributions withheld from the employee.

    AOW funds the state pension, so it stops once the employee reaches
    pension age. Wlz and Zvw apply regardless of age. WW and WIA are
    employer-only and always zero here.

    Args:
        annual_salary: Gross annual salary (must be >= 0).
        category: Pension-age category of the employee.
        rate_set: Rate set for the tax year.

    Returns:
        SocialInsuranceResult with annual amounts and the monthly amounts
        actually withheld per pay period.
    """
    if annual_salary < 0:
        raise ValidationError(
            "Annual salary must be non-negative.", code="NEGATIVE_INCOME", field="annual_salary"
        )

    national = rate_set.national_insurance
    if category.is_pension_age:
        old_age_pension = Decimal("0")
    else:
        old_age_pension = annual_salary * national.old_age_pension

    annual = SocialInsuranceContributions(
        old_age_pension=old_age_pension,
        long_term_care=annual_salary * national.long_term_care,
        health_care=annual_salary * rate_set.health_care_rate,
    )
    monthly = SocialInsuranceContributions(
        old_age_pension=annual.old_age_pension / MONTHS_PER_YEAR,
        long_term_care=annual.long_term_care / MONTHS_PER_YEAR,
        health_care=annual.health_care / MONTHS_PER_YEAR,
    )
    logger.debug(
        "Social insurance for %s (%s): %s per year", annual_salary, category.value, annual.total
    )
    return SocialInsuranceResult(annual=annual, monthly=monthly)
