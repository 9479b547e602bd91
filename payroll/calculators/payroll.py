"""Payroll calculator: combines tax, credits, insurance, employer levies and holiday allowance."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from payroll.calculators.age import calculate_age, classify_pension_age
from payroll.calculators.employer import calculate_employer_contributions
from payroll.calculators.holiday_allowance import calculate_holiday_allowance
from payroll.calculators.income_tax import calculate_progressive_tax
from payroll.calculators.rate_data import RateSet
from payroll.calculators.social_insurance import MONTHS_PER_YEAR, calculate_social_insurance
from payroll.calculators.tax_credits import calculate_tax_credits
from payroll.errors import ValidationError
from payroll.models import (
    EmployeeFacts,
    EmployerFacts,
    PayrollResult,
    PeriodSummary,
    TaxTable,
    coerce_model,
)

logger = logging.getLogger(__name__)


def _validate_employee(employee: EmployeeFacts) -> date:
    if employee.gross_monthly_salary <= 0:
        raise ValidationError(
            "Gross monthly salary must be positive",
            code="NON_POSITIVE_SALARY",
            field="gross_monthly_salary",
        )
    if employee.tax_credit < 0:
        raise ValidationError(
            "Additional tax credit must not be negative",
            code="NEGATIVE_TAX_CREDIT",
            field="tax_credit",
        )
    if employee.date_of_birth is None:
        raise ValidationError(
            "Date of birth is required", code="MISSING_DATE_OF_BIRTH", field="date_of_birth"
        )
    if employee.tax_table not in {t.value for t in TaxTable}:
        valid = ", ".join(t.value for t in TaxTable)
        raise ValidationError(
            f"Invalid tax table: {employee.tax_table}. Must be one of: {valid}",
            code="INVALID_TAX_TABLE",
            field="tax_table",
        )
    return employee.date_of_birth


def calculate_payroll(
    employee: EmployeeFacts | dict[str, Any],
    employer: EmployerFacts | dict[str, Any],
    rate_set: RateSet,
    on_date: date | None = None,
    withhold_income_tax: bool = False,
) -> PayrollResult:
    """Calculate the full monthly and annual payroll breakdown.

    Income tax is settled annually outside payroll, so by default the
    bracket breakdown and credits are reported but nothing is withheld:
    net pay is gross minus the social-insurance contributions.

    Args:
        employee: Employee facts, as a model or a plain mapping.
        employer: Employer facts, as a model or a plain mapping.
        rate_set: Rate set for the tax year.
        on_date: Date on which age is evaluated (defaults to today).
        withhold_income_tax: Also withhold bracket tax minus credits.

    Returns:
        PayrollResult with every component and annual/monthly summaries.
    """
    employee = coerce_model(EmployeeFacts, employee)
    employer = coerce_model(EmployerFacts, employer)
    date_of_birth = _validate_employee(employee)

    age = calculate_age(date_of_birth, on_date)
    category = classify_pension_age(date_of_birth, on_date, rate_set.pension_age)
    logger.debug("Payroll for tax year %s, age %d (%s)", rate_set.year, age, category.value)

    annual_salary = employee.gross_monthly_salary * MONTHS_PER_YEAR
    taxable_income = annual_salary

    bracket_tax = calculate_progressive_tax(taxable_income, rate_set.brackets.for_category(category))
    credits = calculate_tax_credits(
        taxable_income,
        rate_set,
        is_young_disabled=employee.is_young_disabled,
        additional_credit=employee.tax_credit,
    )
    tax_before_credits = bracket_tax.total_tax if withhold_income_tax else Decimal("0")
    tax_after_credits = max(Decimal("0"), tax_before_credits - credits.total)

    insurance = calculate_social_insurance(annual_salary, category, rate_set)
    employer_contributions = calculate_employer_contributions(
        annual_salary,
        rate_set,
        unemployment_fund_tier=employer.unemployment_fund_tier,
        disability_fund_tier=employer.disability_fund_tier,
    )
    holiday = calculate_holiday_allowance(annual_salary, rate_set)

    annual_net = annual_salary - insurance.annual.total - tax_after_credits
    annual = PeriodSummary(
        gross_salary=annual_salary,
        income_tax=tax_after_credits,
        old_age_pension_contribution=insurance.annual.old_age_pension,
        long_term_care_contribution=insurance.annual.long_term_care,
        health_care_contribution=insurance.annual.health_care,
        total_employee_contributions=insurance.annual.total,
        net_salary=annual_net,
        holiday_allowance_gross=holiday.gross,
        holiday_allowance_net=holiday.net,
        total_employer_costs=employer_contributions.total,
    )
    monthly = PeriodSummary(
        gross_salary=employee.gross_monthly_salary,
        income_tax=tax_after_credits / MONTHS_PER_YEAR,
        old_age_pension_contribution=insurance.monthly.old_age_pension,
        long_term_care_contribution=insurance.monthly.long_term_care,
        health_care_contribution=insurance.monthly.health_care,
        total_employee_contributions=insurance.monthly.total,
        net_salary=annual_net / MONTHS_PER_YEAR,
        holiday_allowance_gross=holiday.gross / MONTHS_PER_YEAR,
        holiday_allowance_net=holiday.net / MONTHS_PER_YEAR,
        total_employer_costs=employer_contributions.total / MONTHS_PER_YEAR,
    )

    return PayrollResult(
        tax_year=rate_set.year,
        age=age,
        pension_age_category=category,
        gross_monthly_salary=employee.gross_monthly_salary,
        gross_annual_salary=annual_salary,
        taxable_income=taxable_income,
        income_tax_before_credits=tax_before_credits,
        tax_credits=credits,
        income_tax_after_credits=tax_after_credits,
        social_insurance=insurance,
        employer_contributions=employer_contributions,
        holiday_allowance=holiday,
        tax_bracket_breakdown=bracket_tax.breakdown,
        annual=annual,
        monthly=monthly,
    )
