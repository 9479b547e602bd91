"""Holiday allowance (vakantiegeld) accrual, reserve and payout, and vacation days."""

from datetime import date
from decimal import Decimal

from payroll.calculators.gross_pay import FULL_TIME_HOURS
from payroll.calculators.rate_data import RateSet
from payroll.errors import ValidationError
from payroll.models import (
    HolidayAllowance,
    HolidayAllowanceReserve,
    HolidayPaymentSchedule,
    HolidayScheduleEntry,
    VacationDays,
)

PAYMENT_MONTH = 5  # May
PAYMENT_DAY = 25

# Four weeks of leave for a full-time week, scaled to contract hours.
STATUTORY_VACATION_DAYS = Decimal("20")

MONTH_NAMES = (
    "Januari", "Februari", "Maart", "April", "Mei", "Juni",
    "Juli", "Augustus", "September", "Oktober", "November", "December",
)


def calculate_holiday_allowance(annual_salary: Decimal, rate_set: RateSet) -> HolidayAllowance:
    """Accrued holiday allowance for a year of salary.

    Net equals gross: nothing is withheld at accrual time.
    """
    gross = annual_salary * rate_set.holiday_allowance_rate
    return HolidayAllowance(rate=rate_set.holiday_allowance_rate, gross=gross, net=gross)


def _applied_rate(rate_set: RateSet, contractual_rate: Decimal | None) -> tuple[Decimal, bool]:
    statutory = rate_set.holiday_allowance_rate
    if contractual_rate is None:
        return statutory, True
    return max(contractual_rate, statutory), contractual_rate >= statutory


def _holiday_year_start(year: int, month: int) -> date:
    # The holiday year runs June through May and is paid out in May.
    return date(year if month > PAYMENT_MONTH else year - 1, PAYMENT_MONTH + 1, 1)


def calculate_holiday_allowance_reserve(
    annual_salary: Decimal,
    rate_set: RateSet,
    year: int,
    month: int,
    contractual_rate: Decimal | None = None,
    start_date: date | None = None,
) -> HolidayAllowanceReserve:
    """Reserve position for the given month of the holiday year.

    A contractual rate below the statutory minimum is flagged as
    non-compliant and the statutory rate is applied instead. Employees who
    started during the holiday year accrue from their start month.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")

    applied_rate, is_compliant = _applied_rate(rate_set, contractual_rate)
    annual_amount = annual_salary * applied_rate
    monthly_reserve = annual_amount / 12

    first_month = _holiday_year_start(year, month)
    if start_date is not None and start_date > first_month:
        first_month = date(start_date.year, start_date.month, 1)
    months_accrued = max(0, (year - first_month.year) * 12 + month - first_month.month + 1)
    accumulated = monthly_reserve * months_accrued

    is_payment_month = month == PAYMENT_MONTH
    paid = accumulated if is_payment_month else Decimal("0")
    payment_year = year if month <= PAYMENT_MONTH else year + 1

    return HolidayAllowanceReserve(
        statutory_rate=rate_set.holiday_allowance_rate,
        applied_rate=applied_rate,
        is_compliant=is_compliant,
        annual_amount=annual_amount,
        monthly_reserve=monthly_reserve,
        months_accrued=months_accrued,
        accumulated=accumulated,
        paid=paid,
        balance=accumulated - paid,
        payment_date=date(payment_year, PAYMENT_MONTH, PAYMENT_DAY),
        is_payment_month=is_payment_month,
    )


def calculate_holiday_payment_schedule(
    annual_salary: Decimal,
    rate_set: RateSet,
    year: int,
    contractual_rate: Decimal | None = None,
) -> HolidayPaymentSchedule:
    """Month-by-month reserve for the holiday year paid out in May of ``year``."""
    applied_rate, _ = _applied_rate(rate_set, contractual_rate)
    total_amount = annual_salary * applied_rate
    monthly_reserve = total_amount / 12

    entries: list[HolidayScheduleEntry] = []
    cumulative = Decimal("0")
    for offset in range(12):
        month = (PAYMENT_MONTH + offset) % 12 + 1  # June .. May
        cumulative += monthly_reserve
        is_payout = month == PAYMENT_MONTH
        if is_payout:
            cumulative = Decimal("0")
        entries.append(
            HolidayScheduleEntry(
                month=month,
                month_name=MONTH_NAMES[month - 1],
                reserve=monthly_reserve,
                cumulative=cumulative,
                is_payout=is_payout,
            )
        )

    return HolidayPaymentSchedule(
        total_amount=total_amount,
        monthly_reserve=monthly_reserve,
        payment_date=date(year, PAYMENT_MONTH, PAYMENT_DAY),
        payment_amount=total_amount,
        schedule=tuple(entries),
    )


def calculate_vacation_days(
    contract_hours_per_week: Decimal,
    year: int,
    month: int,
    contract_vacation_days: Decimal = Decimal("25"),
    start_date: date | None = None,
    days_used: Decimal = Decimal("0"),
) -> VacationDays:
    """Vacation-day entitlement, accrual and balance up to ``month`` of ``year``.

    The statutory minimum is 20 days for a 40-hour week, scaled to the
    contract hours; the contract figure applies when it is higher.
    Employees who start during the year get the months from their start
    month onwards, accruing one twelfth of the full entitlement per month.
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}", field="month")
    if contract_hours_per_week <= 0:
        raise ValidationError("Contract hours must be positive", field="contract_hours_per_week")
    if days_used < 0:
        raise ValidationError("Vacation days used must not be negative", field="days_used")

    statutory_days = STATUTORY_VACATION_DAYS * contract_hours_per_week / FULL_TIME_HOURS
    contract_days = max(contract_vacation_days, statutory_days)

    first_month = 1
    if start_date is not None and start_date.year == year:
        first_month = start_date.month
    elif start_date is not None and start_date.year > year:
        first_month = 13  # not employed this year
    months_in_year = 12 - first_month + 1
    months_accrued = max(0, month - first_month + 1)

    monthly_accrual = contract_days / 12
    return VacationDays(
        statutory_days=statutory_days,
        contract_days=contract_days,
        pro_rata_factor=Decimal(months_in_year) / 12,
        entitlement=monthly_accrual * months_in_year,
        monthly_accrual=monthly_accrual,
        months_accrued=months_accrued,
        earned=monthly_accrual * months_accrued,
        used=days_used,
    )
