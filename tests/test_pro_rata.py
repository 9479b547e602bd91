"""Tests for pro-rata salary calculation."""

from datetime import date
from decimal import Decimal

import pytest

from payroll.calculators.pro_rata import (
    calculate_pro_rata,
    count_calendar_days,
    count_working_days,
    days_in_month,
    should_apply_pro_rata,
    validate_pro_rata_params,
    working_days_in_month,
)
from payroll.errors import ValidationError
from payroll.models import ProRataParams


class TestDayCounting:
    def test_days_in_month(self) -> None:
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2025, 8) == 31

    def test_calendar_days_inclusive(self) -> None:
        assert count_calendar_days(date(2025, 8, 11), date(2025, 8, 31)) == 21
        assert count_calendar_days(date(2025, 8, 20), date(2025, 8, 20)) == 1

    def test_calendar_days_empty_window(self) -> None:
        assert count_calendar_days(date(2025, 9, 5), date(2025, 8, 31)) == 0

    def test_working_days_august(self, no_holidays) -> None:
        """1 August 2025 is a Friday: 1 + 4 full weeks of weekdays."""
        assert working_days_in_month(2025, 8, no_holidays) == 21

    def test_working_days_skip_holidays(self, fixed_holidays) -> None:
        calendar = fixed_holidays(date(2025, 8, 15))
        assert count_working_days(date(2025, 8, 11), date(2025, 8, 15), calendar) == 4


class TestCalendarMethod:
    def test_mid_month_start(self, make_pro_rata) -> None:
        """Starting 11 August: 21 of 31 days, 3,500 * 21 / 31 = 2,370.97."""
        result = calculate_pro_rata(make_pro_rata())
        assert result.is_pro_rata_applied
        assert result.actual_days == 21
        assert result.total_days_in_month == 31
        assert result.pro_rata_factor == Decimal(21) / Decimal(31)
        assert result.pro_rata_salary == Decimal("2370.97")
        assert result.adjustment == Decimal("1129.03")
        assert result.effective_start == date(2025, 8, 11)
        assert result.effective_end == date(2025, 8, 31)

    def test_leap_year_february(self, make_pro_rata) -> None:
        """15 of 29 days: 4,000 * 15 / 29 = 2,068.97."""
        result = calculate_pro_rata(make_pro_rata(
            monthly_salary=Decimal("4000"),
            employee_start_date=date(2024, 2, 15),
            pay_period=(date(2024, 2, 1), date(2024, 2, 29)),
        ))
        assert result.actual_days == 15
        assert result.total_days_in_month == 29
        assert result.pro_rata_salary == Decimal("2068.97")
        assert result.adjustment == Decimal("1931.03")

    def test_start_on_last_day(self, make_pro_rata) -> None:
        result = calculate_pro_rata(make_pro_rata(
            monthly_salary=Decimal("3000"),
            employee_start_date=date(2025, 12, 31),
            pay_period=(date(2025, 12, 1), date(2025, 12, 31)),
        ))
        assert result.actual_days == 1
        assert result.pro_rata_salary == Decimal("96.77")

    def test_mid_month_end(self, make_pro_rata) -> None:
        result = calculate_pro_rata(make_pro_rata(
            employee_start_date=date(2020, 1, 1),
            employee_end_date=date(2025, 8, 15),
        ))
        assert result.actual_days == 15
        assert result.pro_rata_salary == Decimal("1693.55")

    def test_start_and_end_same_day(self, make_pro_rata) -> None:
        result = calculate_pro_rata(make_pro_rata(
            employee_start_date=date(2025, 8, 20),
            employee_end_date=date(2025, 8, 20),
        ))
        assert result.actual_days == 1
        assert result.pro_rata_salary == Decimal("112.90")

    def test_full_month(self, make_pro_rata) -> None:
        result = calculate_pro_rata(make_pro_rata(employee_start_date=date(2025, 1, 15)))
        assert not result.is_pro_rata_applied
        assert result.pro_rata_factor == 1
        assert result.pro_rata_salary == Decimal("3500")
        assert result.adjustment == 0
        assert result.actual_days == 31
        assert "no pro-rata adjustment" in result.calculation_details

    def test_full_month_rounds_salary_to_cents(self, make_pro_rata) -> None:
        result = calculate_pro_rata(
            make_pro_rata(monthly_salary=Decimal("3500.005"), employee_start_date=date(2025, 1, 15))
        )
        assert not result.is_pro_rata_applied
        assert result.full_monthly_salary == Decimal("3500.005")
        assert result.pro_rata_salary == Decimal("3500.01")
        assert result.adjustment == Decimal("-0.01")

    def test_string_inputs(self) -> None:
        result = calculate_pro_rata({
            "monthly_salary": "3500",
            "employee_start_date": "2025-08-11",
            "pay_period_start": "2025-08-01",
            "pay_period_end": "2025-08-31",
        })
        assert result.pro_rata_salary == Decimal("2370.97")

    def test_details_explain_calculation(self, make_pro_rata) -> None:
        result = calculate_pro_rata(make_pro_rata())
        assert "21 calendar days out of 31" in result.calculation_details
        assert "11-8-2025 to 31-8-2025" in result.calculation_details

    @pytest.mark.parametrize("start_day", [2, 5, 11, 16, 28, 31])
    def test_factor_within_bounds(self, make_pro_rata, start_day: int) -> None:
        result = calculate_pro_rata(make_pro_rata(employee_start_date=date(2025, 8, start_day)))
        assert 0 < result.pro_rata_factor <= 1
        assert result.pro_rata_salary + result.adjustment == result.full_monthly_salary


class TestWorkingMethod:
    def test_mid_month_start(self, make_pro_rata, no_holidays) -> None:
        """Monday 11 August: 15 of 21 working days, 3,500 * 15 / 21 = 2,500."""
        result = calculate_pro_rata(make_pro_rata(calculation_method="working"), no_holidays)
        assert result.working_days_in_month == 21
        assert result.actual_days == 15
        assert result.pro_rata_salary == Decimal("2500.00")

    def test_christmas_excluded(self, make_pro_rata) -> None:
        """December 2025 has 23 weekdays, two of them Christmas days."""
        result = calculate_pro_rata(make_pro_rata(
            monthly_salary=Decimal("3000"),
            employee_start_date=date(2025, 12, 15),
            pay_period=(date(2025, 12, 1), date(2025, 12, 31)),
            calculation_method="working",
        ))
        assert result.working_days_in_month == 21
        assert result.actual_days == 11
        assert result.pro_rata_salary == Decimal("1571.43")

    def test_full_month_reports_working_days(self, make_pro_rata, no_holidays) -> None:
        result = calculate_pro_rata(
            make_pro_rata(employee_start_date=date(2025, 1, 1), calculation_method="working"),
            no_holidays,
        )
        assert not result.is_pro_rata_applied
        assert result.actual_days == 21

    def test_weekend_only_window(self, make_pro_rata, no_holidays) -> None:
        """Starting Saturday 30 August leaves no working days."""
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(
                make_pro_rata(employee_start_date=date(2025, 8, 30), calculation_method="working"),
                no_holidays,
            )
        assert exc.value.code == "EMPTY_EMPLOYMENT_WINDOW"


class TestValidation:
    @pytest.mark.parametrize("salary", ["-100", "0"])
    def test_non_positive_salary(self, make_pro_rata, salary: str) -> None:
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(make_pro_rata(monthly_salary=Decimal(salary)))
        assert exc.value.code == "NON_POSITIVE_SALARY"

    def test_employee_dates_inverted(self, make_pro_rata) -> None:
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(make_pro_rata(
                employee_start_date=date(2025, 8, 20),
                employee_end_date=date(2025, 8, 10),
            ))
        assert exc.value.code == "EMPLOYEE_DATES_INVERTED"

    def test_pay_period_inverted(self, make_pro_rata) -> None:
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(make_pro_rata(pay_period=(date(2025, 8, 31), date(2025, 8, 1))))
        assert exc.value.code == "PAY_PERIOD_INVERTED"

    def test_pay_period_spans_months(self, make_pro_rata) -> None:
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(make_pro_rata(pay_period=(date(2025, 8, 1), date(2025, 9, 15))))
        assert exc.value.code == "PAY_PERIOD_SPANS_MONTHS"

    def test_unsupported_method(self, make_pro_rata) -> None:
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(make_pro_rata(calculation_method="hourly"))
        assert exc.value.code == "UNSUPPORTED_CALCULATION_METHOD"

    def test_start_after_pay_period(self, make_pro_rata) -> None:
        with pytest.raises(ValidationError) as exc:
            calculate_pro_rata(make_pro_rata(employee_start_date=date(2025, 9, 5)))
        assert exc.value.code == "EMPTY_EMPLOYMENT_WINDOW"

    def test_unparseable_date(self, make_pro_rata) -> None:
        with pytest.raises(ValidationError):
            calculate_pro_rata(make_pro_rata(employee_start_date="not-a-date"))

    def test_validate_collects_all_messages(self, make_pro_rata) -> None:
        messages = validate_pro_rata_params(
            make_pro_rata(monthly_salary=Decimal("-1"), calculation_method="hourly")
        )
        assert len(messages) == 2

    def test_validate_valid_params(self, make_pro_rata) -> None:
        assert validate_pro_rata_params(make_pro_rata()) == []

    def test_should_apply(self, make_pro_rata) -> None:
        assert should_apply_pro_rata(ProRataParams(**make_pro_rata()))
        assert not should_apply_pro_rata(
            ProRataParams(**make_pro_rata(employee_start_date=date(2025, 1, 1)))
        )
