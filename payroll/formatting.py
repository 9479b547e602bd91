"""Rounding and Dutch-locale display formatting.

This is the only place where amounts are rounded; calculators keep full
Decimal precision so rounding error does not compound.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from payroll.models import PayrollResult, ProRataResult

CENT = Decimal("0.01")


def round_money(amount: Decimal) -> Decimal:
    """Round to euro cents, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _dutch_number(amount: Decimal) -> str:
    # 1234567.89 -> 1.234.567,89
    return f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(amount: Decimal) -> str:
    """Format as nl-NL euro amount, e.g. ``€ 1.234,56`` or ``€ -12,50``."""
    return f"€ {_dutch_number(round_money(amount))}"


def format_percentage(rate: Decimal) -> str:
    """Format a fraction as nl-NL percentage, e.g. ``0.0833`` -> ``8,33%``."""
    return f"{_dutch_number(round_money(rate * 100))}%"


def format_date(day: date) -> str:
    """nl-NL short date, e.g. ``11-8-2025``."""
    return f"{day.day}-{day.month}-{day.year}"


def generate_payroll_breakdown(result: PayrollResult) -> str:
    """Plain-text breakdown of a payroll result for payslip previews."""
    lines = [
        "DUTCH PAYROLL CALCULATION BREAKDOWN",
        "=====================================",
        "",
        f"TAX YEAR: {result.tax_year} (age {result.age}, {result.pension_age_category.value})",
        "",
        "GROSS SALARY:",
        f"Monthly: {format_currency(result.gross_monthly_salary)}",
        f"Annual: {format_currency(result.gross_annual_salary)}",
        "",
        "TAX BRACKET BREAKDOWN:",
    ]
    for line in result.tax_bracket_breakdown:
        lines.append(
            f"Band {line.bracket}: {format_currency(line.income_in_bracket)} x "
            f"{format_percentage(line.rate)} = {format_currency(line.tax_amount)}"
        )
    lines += [
        f"Total Tax Before Credits: {format_currency(result.income_tax_before_credits)}",
        "",
        "TAX CREDITS:",
        f"General Tax Credit: {format_currency(result.tax_credits.general)}",
        f"Employed Person Tax Credit: {format_currency(result.tax_credits.employed_person)}",
    ]
    if result.tax_credits.young_disabled > 0:
        lines.append(f"Young Disabled Tax Credit: {format_currency(result.tax_credits.young_disabled)}")
    if result.tax_credits.additional > 0:
        lines.append(f"Additional Tax Credit: {format_currency(result.tax_credits.additional)}")

    monthly_insurance = result.social_insurance.monthly
    employer = result.employer_contributions
    lines += [
        f"Total Tax Credits: {format_currency(result.total_tax_credits)}",
        "",
        "SOCIAL INSURANCE (MONTHLY):",
        f"AOW: {format_currency(monthly_insurance.old_age_pension)}",
        f"Wlz: {format_currency(monthly_insurance.long_term_care)}",
        f"Zvw: {format_currency(monthly_insurance.health_care)}",
        f"Total Withheld: {format_currency(monthly_insurance.total)}",
        "",
        "FINAL CALCULATIONS:",
        f"Income Tax After Credits: {format_currency(result.income_tax_after_credits)}",
        f"Net Monthly Salary: {format_currency(result.net_monthly_salary)}",
        f"Net Annual Salary: {format_currency(result.net_annual_salary)}",
        "",
        "EMPLOYER COSTS:",
        f"AWF Contribution: {format_currency(employer.unemployment_fund)}",
        f"AOF Contribution: {format_currency(employer.disability_fund)}",
        f"WKO Surcharge: {format_currency(employer.childcare_surcharge)}",
        f"UFO Premium: {format_currency(employer.government_fund_premium)}",
        f"Total Employer Costs: {format_currency(result.total_employer_costs)}",
        "",
        f"HOLIDAY ALLOWANCE ({format_percentage(result.holiday_allowance.rate)}):",
        f"Gross: {format_currency(result.holiday_allowance.gross)}",
        f"Net: {format_currency(result.holiday_allowance.net)}",
    ]
    return "\n".join(lines)


def format_pro_rata_result(result: ProRataResult) -> str:
    if not result.is_pro_rata_applied:
        return "Full monthly salary applied - no pro-rata adjustment"

    total_days = (
        result.working_days_in_month
        if result.working_days_in_month is not None
        else result.total_days_in_month
    )
    return "\n".join([
        f"Pro-rata calculation ({result.calculation_method} method):",
        f"- Full monthly salary: {format_currency(result.full_monthly_salary)}",
        f"- Days: {result.actual_days} out of {total_days}",
        f"- Pro-rata factor: {format_percentage(result.pro_rata_factor)}",
        f"- Pro-rata salary: {format_currency(result.pro_rata_salary)}",
        f"- Adjustment: {format_currency(result.adjustment)}",
    ])
