"""Shared test fixtures."""

from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from payroll.calculators.rate_data import RateSet, get_rate_set


def _make_employee(
    gross_monthly_salary: Decimal | str = Decimal("3500"),
    date_of_birth: date | str | None = date(1990, 5, 12),
    **overrides: Any,
) -> dict[str, Any]:
    return {
        "gross_monthly_salary": gross_monthly_salary,
        "date_of_birth": date_of_birth,
        **overrides,
    }


def _make_pro_rata(
    monthly_salary: Decimal | str = Decimal("3500"),
    employee_start_date: date | str = date(2025, 8, 11),
    pay_period: tuple[date, date] = (date(2025, 8, 1), date(2025, 8, 31)),
    **overrides: Any,
) -> dict[str, Any]:
    return {
        "monthly_salary": monthly_salary,
        "employee_start_date": employee_start_date,
        "pay_period_start": pay_period[0],
        "pay_period_end": pay_period[1],
        **overrides,
    }


@pytest.fixture
def rate_set_2025() -> RateSet:
    return get_rate_set(2025)


@pytest.fixture
def rate_set_2024() -> RateSet:
    return get_rate_set(2024)


@pytest.fixture
def make_employee():
    """Factory for employee fact mappings with sensible defaults."""
    return _make_employee


@pytest.fixture
def make_pro_rata():
    """Factory for pro-rata parameter mappings (defaults to August 2025)."""
    return _make_pro_rata


class FixedHolidayCalendar:
    """Holiday calendar with an explicit list of days off."""

    def __init__(self, *days: date) -> None:
        self._days = set(days)

    def holidays_for_year(self, year: int) -> dict[date, str]:
        return {day: "Vrije dag" for day in self._days if day.year == year}

    def is_holiday(self, day: date) -> bool:
        return day in self._days


@pytest.fixture
def no_holidays() -> FixedHolidayCalendar:
    return FixedHolidayCalendar()


@pytest.fixture
def fixed_holidays():
    """Factory for a calendar with the given days off."""
    return FixedHolidayCalendar
