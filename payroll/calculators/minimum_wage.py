"""Statutory minimum wage (wettelijk minimumloon) compliance check."""

from datetime import date
from decimal import Decimal

from payroll.calculators.age import calculate_age
from payroll.calculators.gross_pay import annual_salary_from_hourly
from payroll.calculators.rate_data import RateSet
from payroll.errors import ValidationError
from payroll.formatting import round_money
from payroll.models import MinimumWageCheck

MINIMUM_WAGE_AGE = 15


def monthly_minimum_wage(hourly_rate: Decimal, weekly_hours: Decimal) -> Decimal:
    """Weekly hours x hourly rate x 52 weeks / 12 months."""
    return annual_salary_from_hourly(hourly_rate, weekly_hours) / 12


def check_minimum_wage(
    monthly_salary: Decimal,
    date_of_birth: date,
    rate_set: RateSet,
    contract_hours: Decimal = Decimal("40"),
    on_date: date | None = None,
) -> MinimumWageCheck:
    """Compare a monthly salary with the minimum wage for the employee's age.

    Adults get the full hourly rate; employees aged 15-20 get the youth
    percentage of it, rounded to cents. Below 15 no minimum applies.
    """
    if contract_hours <= 0:
        raise ValidationError("Contract hours must be positive", field="contract_hours")

    rates = rate_set.minimum_wage
    age = calculate_age(date_of_birth, on_date)
    youth = dict(rates.youth_percentages)

    if age >= rates.adult_age:
        hourly = rates.adult_hourly
        category = f"Volwassen ({rates.adult_age}+ jaar)"
    elif age >= MINIMUM_WAGE_AGE and age in youth:
        percentage = youth[age]
        hourly = round_money(rates.adult_hourly * percentage / 100)
        category = f"Jeugdloon {age} jaar ({percentage.normalize():f}%)"
    else:
        hourly = Decimal("0")
        category = f"Onder {MINIMUM_WAGE_AGE} jaar (geen minimumloon)"

    monthly_minimum = monthly_minimum_wage(hourly, contract_hours)
    return MinimumWageCheck(
        age=age,
        age_category=category,
        hourly_rate=hourly,
        weekly_hours=contract_hours,
        monthly_minimum=monthly_minimum,
        monthly_salary=monthly_salary,
        is_compliant=monthly_salary >= monthly_minimum,
    )
