"""Command-line payroll calculator.

Usage:
    python scripts/calculate.py payroll --salary 3500 --dob 1990-05-12
    python scripts/calculate.py pro-rata --salary 3500 --start 2025-08-11 --period 2025-08
    python scripts/calculate.py holidays --year 2025
"""

import argparse
import calendar
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings
from payroll.calculators.payroll import calculate_payroll
from payroll.calculators.pro_rata import DEFAULT_HOLIDAY_CALENDAR, calculate_pro_rata
from payroll.calculators.rate_data import get_rate_set
from payroll.errors import PayrollError
from payroll.formatting import format_pro_rata_result, generate_payroll_breakdown

logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def _period(value: str) -> tuple[date, date]:
    year, month = (int(part) for part in value.split("-"))
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def run_payroll(args: argparse.Namespace) -> None:
    logger.info("Payroll for tax year %s", args.year)
    rate_set = get_rate_set(args.year)
    result = calculate_payroll(
        {
            "gross_monthly_salary": args.salary,
            "date_of_birth": args.dob,
            "tax_table": args.tax_table,
            "is_young_disabled": args.young_disabled,
        },
        {
            "unemployment_fund_tier": args.awf_tier,
            "disability_fund_tier": args.aof_tier,
        },
        rate_set,
        withhold_income_tax=args.withhold_income_tax,
    )
    print(generate_payroll_breakdown(result))


def run_pro_rata(args: argparse.Namespace) -> None:
    logger.info("Pro-rata for pay period %s (%s method)", args.period, args.method)
    period_start, period_end = _period(args.period)
    result = calculate_pro_rata({
        "monthly_salary": args.salary,
        "employee_start_date": args.start,
        "employee_end_date": args.end,
        "pay_period_start": period_start,
        "pay_period_end": period_end,
        "calculation_method": args.method,
    })
    print(format_pro_rata_result(result))
    print(result.calculation_details)


def run_holidays(args: argparse.Namespace) -> None:
    for day, name in DEFAULT_HOLIDAY_CALENDAR.holidays_for_year(args.year).items():
        print(f"{day.isoformat()}  {name}")


def main() -> None:
    """Parse arguments and print the requested calculation."""
    parser = argparse.ArgumentParser(description="Dutch payroll calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    payroll = sub.add_parser("payroll", help="Full payroll breakdown")
    payroll.add_argument("--salary", type=Decimal, required=True, help="Gross monthly salary")
    payroll.add_argument("--dob", required=True, help="Date of birth (YYYY-MM-DD)")
    payroll.add_argument("--year", type=int, default=settings.default_tax_year)
    payroll.add_argument("--tax-table", default="wit", choices=["wit", "groen"])
    payroll.add_argument("--young-disabled", action="store_true")
    payroll.add_argument("--awf-tier", default="low", choices=["low", "high"])
    payroll.add_argument("--aof-tier", default="low", choices=["low", "high"])
    payroll.add_argument(
        "--withhold-income-tax",
        action="store_true",
        default=settings.withhold_income_tax,
    )
    payroll.set_defaults(func=run_payroll)

    pro_rata = sub.add_parser("pro-rata", help="Pro-rata salary for a partial month")
    pro_rata.add_argument("--salary", type=Decimal, required=True, help="Full monthly salary")
    pro_rata.add_argument("--start", required=True, help="Employee start date (YYYY-MM-DD)")
    pro_rata.add_argument("--end", default=None, help="Employee end date (YYYY-MM-DD)")
    pro_rata.add_argument("--period", required=True, help="Pay period month (YYYY-MM)")
    pro_rata.add_argument("--method", default="calendar", choices=["calendar", "working"])
    pro_rata.set_defaults(func=run_pro_rata)

    holidays = sub.add_parser("holidays", help="List public holidays for a year")
    holidays.add_argument("--year", type=int, default=date.today().year)
    holidays.set_defaults(func=run_holidays)

    args = parser.parse_args()
    try:
        args.func(args)
    except PayrollError as e:
        logger.error("%s (%s)", e, e.code)
        sys.exit(1)


if __name__ == "__main__":
    main()
