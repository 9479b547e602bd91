"""Tests for the minimum wage check."""

from datetime import date
from decimal import Decimal

import pytest

from payroll.calculators.minimum_wage import check_minimum_wage, monthly_minimum_wage
from payroll.errors import ValidationError

ON_DATE = date(2025, 9, 1)


class TestMinimumWage:
    def test_monthly_minimum(self) -> None:
        """40 hours * EUR 13.68 * 52 weeks / 12 months = 2,371.20."""
        assert monthly_minimum_wage(Decimal("13.68"), Decimal("40")) == Decimal("2371.20")

    def test_adult_compliant(self, rate_set_2025) -> None:
        result = check_minimum_wage(Decimal("2500"), date(1990, 1, 1), rate_set_2025, on_date=ON_DATE)
        assert result.age == 35
        assert result.hourly_rate == Decimal("12.83")
        assert result.is_compliant
        assert result.difference > 0

    def test_adult_below_minimum(self, rate_set_2025) -> None:
        result = check_minimum_wage(Decimal("2000"), date(1990, 1, 1), rate_set_2025, on_date=ON_DATE)
        assert not result.is_compliant
        assert result.difference < 0

    def test_part_time_contract(self, rate_set_2025) -> None:
        """32 hours * 12.83 * 52 / 12 = 1,779.09."""
        result = check_minimum_wage(
            Decimal("2000"),
            date(1990, 1, 1),
            rate_set_2025,
            contract_hours=Decimal("32"),
            on_date=ON_DATE,
        )
        assert abs(result.monthly_minimum - Decimal("1779.09")) < Decimal("0.01")
        assert result.is_compliant

    def test_youth_rate(self, rate_set_2025) -> None:
        """Age 18: 61.5% of 12.83 = 7.89 per hour."""
        result = check_minimum_wage(Decimal("1300"), date(2007, 3, 1), rate_set_2025, on_date=ON_DATE)
        assert result.age == 18
        assert result.hourly_rate == Decimal("7.89")
        assert result.monthly_minimum == Decimal("1367.60")
        assert result.age_category == "Jeugdloon 18 jaar (61.5%)"
        assert not result.is_compliant

    def test_youth_rate_2024(self, rate_set_2024) -> None:
        result = check_minimum_wage(
            Decimal("1300"), date(2006, 3, 1), rate_set_2024, on_date=date(2024, 9, 1)
        )
        assert result.hourly_rate == Decimal("6.84")

    def test_under_fifteen(self, rate_set_2025) -> None:
        result = check_minimum_wage(Decimal("200"), date(2012, 1, 1), rate_set_2025, on_date=ON_DATE)
        assert result.hourly_rate == 0
        assert result.is_compliant

    def test_invalid_contract_hours(self, rate_set_2025) -> None:
        with pytest.raises(ValidationError):
            check_minimum_wage(
                Decimal("2500"), date(1990, 1, 1), rate_set_2025, contract_hours=Decimal("0")
            )
