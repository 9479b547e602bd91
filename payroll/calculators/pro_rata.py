"""Pro-rata salary for employees who start or leave during a pay period.

Convention: the employee's start date and end date both count as days
worked, so someone starting on the 11th of a 31-day month is paid for
21 days.
"""

import calendar
import logging
from collections.abc import Iterator
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from payroll.calculators.public_holidays import HolidayCalendar, load_holiday_calendar
from payroll.errors import ValidationError
from payroll.formatting import format_date, round_money
from payroll.models import CalculationMethod, ProRataParams, ProRataResult, coerce_model

logger = logging.getLogger(__name__)

DEFAULT_HOLIDAY_CALENDAR: HolidayCalendar = load_holiday_calendar()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _month_bounds(day: date) -> tuple[date, date]:
    return day.replace(day=1), day.replace(day=days_in_month(day.year, day.month))


def _each_day(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def count_calendar_days(start: date, end: date) -> int:
    """Calendar days from ``start`` to ``end`` inclusive."""
    return max(0, (end - start).days + 1)


def count_working_days(start: date, end: date, holiday_calendar: HolidayCalendar) -> int:
    """Weekdays that are not public holidays, from ``start`` to ``end`` inclusive."""
    holidays: dict[date, str] = {}
    for year in range(start.year, end.year + 1):
        holidays.update(holiday_calendar.holidays_for_year(year))
    return sum(1 for day in _each_day(start, end) if day.weekday() < 5 and day not in holidays)


def working_days_in_month(year: int, month: int, holiday_calendar: HolidayCalendar) -> int:
    first, last = _month_bounds(date(year, month, 1))
    return count_working_days(first, last, holiday_calendar)


def _violations(params: ProRataParams) -> list[tuple[str, str, str]]:
    """Every violated precondition as (code, field, message)."""
    found: list[tuple[str, str, str]] = []
    if params.monthly_salary <= 0:
        found.append(("NON_POSITIVE_SALARY", "monthly_salary", "Monthly salary must be positive"))
    if params.employee_end_date is not None and params.employee_start_date > params.employee_end_date:
        found.append((
            "EMPLOYEE_DATES_INVERTED",
            "employee_end_date",
            "Employee start date must be before or equal to end date",
        ))
    if params.pay_period_start > params.pay_period_end:
        found.append((
            "PAY_PERIOD_INVERTED",
            "pay_period_end",
            "Pay period start date must be before or equal to end date",
        ))
    elif _month_bounds(params.pay_period_start)[1] < params.pay_period_end:
        found.append((
            "PAY_PERIOD_SPANS_MONTHS",
            "pay_period_end",
            "Pay period must fall within a single calendar month",
        ))
    if params.calculation_method not in {m.value for m in CalculationMethod}:
        found.append((
            "UNSUPPORTED_CALCULATION_METHOD",
            "calculation_method",
            'Calculation method must be either "calendar" or "working"',
        ))
    return found


def validate_pro_rata_params(params: ProRataParams | dict[str, Any]) -> list[str]:
    """Return a message for every violated precondition, without raising."""
    try:
        params = coerce_model(ProRataParams, params)
    except ValidationError as e:
        return [str(e)]
    return [message for _, _, message in _violations(params)]


def should_apply_pro_rata(params: ProRataParams) -> bool:
    """Whether the employee was absent for part of the pay-period month."""
    month_start, month_end = _month_bounds(params.pay_period_start)
    end = params.employee_end_date
    started_mid_month = params.employee_start_date > month_start
    ended_mid_month = end is not None and end < month_end
    not_active_whole_period = params.employee_start_date > params.pay_period_start or (
        end is not None and end < params.pay_period_end
    )
    return started_mid_month or ended_mid_month or not_active_whole_period


def calculate_pro_rata(
    params: ProRataParams | dict[str, Any],
    holiday_calendar: HolidayCalendar | None = None,
) -> ProRataResult:
    """Adjust a monthly salary for partial employment in the pay period.

    Args:
        params: Salary, employment dates, pay period and day-counting method.
        holiday_calendar: Public holidays for the ``working`` method;
            defaults to the configured Dutch calendar.

    Returns:
        ProRataResult with the factor, adjusted salary and an explanation.

    Raises:
        ValidationError: if any precondition is violated, or the employment
            window contains no countable days.
    """
    params = coerce_model(ProRataParams, params)
    violations = _violations(params)
    if violations:
        code, field, message = violations[0]
        raise ValidationError(message, code=code, field=field)

    if holiday_calendar is None:
        holiday_calendar = DEFAULT_HOLIDAY_CALENDAR
    method = CalculationMethod(params.calculation_method)
    year, month = params.pay_period_start.year, params.pay_period_start.month
    total_days_in_month = days_in_month(year, month)
    month_working_days = (
        working_days_in_month(year, month, holiday_calendar)
        if method is CalculationMethod.WORKING
        else None
    )

    if not should_apply_pro_rata(params):
        full_salary = round_money(params.monthly_salary)
        return ProRataResult(
            is_pro_rata_applied=False,
            calculation_method=method.value,
            total_days_in_month=total_days_in_month,
            working_days_in_month=month_working_days,
            actual_days=month_working_days if month_working_days is not None else total_days_in_month,
            pro_rata_factor=Decimal("1"),
            full_monthly_salary=params.monthly_salary,
            pro_rata_salary=full_salary,
            adjustment=round_money(params.monthly_salary - full_salary),
            calculation_details="Employee worked full month - no pro-rata adjustment needed",
        )

    effective_start = max(params.employee_start_date, params.pay_period_start)
    effective_end = params.pay_period_end
    if params.employee_end_date is not None:
        effective_end = min(params.employee_end_date, params.pay_period_end)

    if method is CalculationMethod.WORKING:
        actual_days = count_working_days(effective_start, effective_end, holiday_calendar)
        total_days = month_working_days or 0
    else:
        actual_days = count_calendar_days(effective_start, effective_end)
        total_days = total_days_in_month

    if actual_days == 0:
        raise ValidationError(
            f"No {method.value} days of employment between "
            f"{params.pay_period_start.isoformat()} and {params.pay_period_end.isoformat()}",
            code="EMPTY_EMPLOYMENT_WINDOW",
            field="employee_start_date",
        )

    factor = Decimal(actual_days) / Decimal(total_days)
    pro_rata_salary = round_money(params.monthly_salary * actual_days / total_days)
    adjustment = round_money(params.monthly_salary - pro_rata_salary)

    details = (
        f"Pro-rata calculation applied: {actual_days} {method.value} days out of "
        f"{total_days} total {method.value} days in month. "
        f"Effective employment period: {format_date(effective_start)} to {format_date(effective_end)}. "
        f"Pro-rata factor: {factor:.6f} ({factor * 100:.2f}%)"
    )
    logger.debug("Pro-rata %s/%s %s days: %s", actual_days, total_days, method.value, pro_rata_salary)

    return ProRataResult(
        is_pro_rata_applied=True,
        calculation_method=method.value,
        total_days_in_month=total_days_in_month,
        working_days_in_month=month_working_days,
        actual_days=actual_days,
        pro_rata_factor=factor,
        full_monthly_salary=params.monthly_salary,
        pro_rata_salary=pro_rata_salary,
        adjustment=adjustment,
        effective_start=effective_start,
        effective_end=effective_end,
        calculation_details=details,
    )
