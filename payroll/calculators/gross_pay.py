"""Gross pay for monthly and hourly employees, and hourly/annual conversion."""

from decimal import Decimal

from payroll.errors import ValidationError
from payroll.models import EmploymentType, GrossPay

WEEKS_PER_YEAR = 52
FULL_TIME_HOURS = Decimal("40")
DEFAULT_OVERTIME_RATE = Decimal("1.5")


def _require_positive(value: Decimal, field: str) -> None:
    if value <= 0:
        raise ValidationError(f"{field} must be positive", code="INVALID_INPUT", field=field)


def _require_non_negative(value: Decimal, field: str) -> None:
    if value < 0:
        raise ValidationError(f"{field} must not be negative", code="INVALID_INPUT", field=field)


def annual_salary_from_hourly(hourly_rate: Decimal, hours_per_week: Decimal = FULL_TIME_HOURS) -> Decimal:
    """Hourly rate x weekly hours x 52 weeks."""
    _require_positive(hours_per_week, "hours_per_week")
    return hourly_rate * hours_per_week * WEEKS_PER_YEAR


def hourly_rate_from_annual(annual_salary: Decimal, hours_per_week: Decimal = FULL_TIME_HOURS) -> Decimal:
    """Annual salary / (weekly hours x 52 weeks)."""
    _require_positive(hours_per_week, "hours_per_week")
    return annual_salary / (hours_per_week * WEEKS_PER_YEAR)


def calculate_gross_pay(
    salary: Decimal,
    employment_type: str = EmploymentType.MONTHLY.value,
    hours_worked: Decimal = Decimal("0"),
    overtime_hours: Decimal = Decimal("0"),
    overtime_rate: Decimal = DEFAULT_OVERTIME_RATE,
) -> GrossPay:
    """Gross pay for one pay period.

    Monthly employees receive their monthly salary and no overtime pay.
    Hourly employees are paid ``hours_worked x salary`` plus
    ``overtime_hours x salary x overtime_rate``.

    Args:
        salary: Monthly salary, or hourly rate for hourly employees.
        employment_type: ``monthly`` or ``hourly``.
        hours_worked: Regular hours in the period (hourly employees).
        overtime_hours: Overtime hours in the period (hourly employees).
        overtime_rate: Overtime multiplier, 1.5 by default.

    Returns:
        GrossPay with regular pay, overtime pay and their sum.
    """
    try:
        kind = EmploymentType(employment_type)
    except ValueError as e:
        valid = ", ".join(t.value for t in EmploymentType)
        raise ValidationError(
            f"Invalid employment type: {employment_type}. Must be one of: {valid}",
            code="INVALID_EMPLOYMENT_TYPE",
            field="employment_type",
        ) from e
    if salary <= 0:
        raise ValidationError("Salary must be positive", code="NON_POSITIVE_SALARY", field="salary")

    if kind is EmploymentType.MONTHLY:
        return GrossPay(employment_type=kind, regular_pay=salary, overtime_pay=Decimal("0"))

    _require_non_negative(hours_worked, "hours_worked")
    _require_non_negative(overtime_hours, "overtime_hours")
    _require_positive(overtime_rate, "overtime_rate")
    return GrossPay(
        employment_type=kind,
        regular_pay=hours_worked * salary,
        overtime_pay=overtime_hours * salary * overtime_rate,
    )
