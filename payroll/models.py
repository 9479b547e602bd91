"""Pydantic models for calculation inputs and results.

Results are frozen and keep full Decimal precision; rounding to cents is
left to ``payroll.formatting``.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from payroll.calculators.age import PensionAgeCategory
from payroll.errors import from_pydantic

_FROZEN = ConfigDict(frozen=True)

ZERO = Decimal("0")


class TaxTable(str, Enum):
    """Loonbelastingtabel variant."""

    WHITE = "wit"
    GREEN = "groen"


class RateTier(str, Enum):
    LOW = "low"
    HIGH = "high"


class CalculationMethod(str, Enum):
    """Day-counting convention for pro-rata salary."""

    CALENDAR = "calendar"
    WORKING = "working"


class CompanySize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class EmploymentType(str, Enum):
    """How the contractual salary figure is expressed."""

    MONTHLY = "monthly"
    HOURLY = "hourly"


# --- Inputs ---


class EmployeeFacts(BaseModel):
    """Employee data for one payroll calculation."""

    model_config = _FROZEN

    gross_monthly_salary: Decimal
    date_of_birth: date | None = None
    is_director: bool = False  # DGA
    tax_table: str = TaxTable.WHITE.value
    tax_credit: Decimal = ZERO  # fixed employee-specific credit addend
    is_young_disabled: bool = False
    has_multiple_jobs: bool = False


class EmployerFacts(BaseModel):
    """Company data relevant to employer levies."""

    model_config = _FROZEN

    size: CompanySize = CompanySize.MEDIUM  # informational
    sector: str | None = None
    unemployment_fund_tier: str = RateTier.LOW.value
    disability_fund_tier: str = RateTier.LOW.value


class ProRataParams(BaseModel):
    """Inputs for a partial-period salary adjustment."""

    model_config = _FROZEN

    monthly_salary: Decimal
    employee_start_date: date
    employee_end_date: date | None = None
    pay_period_start: date
    pay_period_end: date
    calculation_method: str = CalculationMethod.CALENDAR.value


# --- Calculator results ---


class TaxBracketLine(BaseModel):
    """Income and tax falling in one bracket."""

    model_config = _FROZEN

    bracket: int
    income_in_bracket: Decimal
    rate: Decimal
    tax_amount: Decimal
    description: str


class ProgressiveTaxResult(BaseModel):
    model_config = _FROZEN

    taxable_income: Decimal
    total_tax: Decimal
    breakdown: tuple[TaxBracketLine, ...] = ()

    @property
    def effective_rate(self) -> Decimal:
        if self.taxable_income <= 0:
            return ZERO
        return self.total_tax / self.taxable_income


class TaxCredits(BaseModel):
    model_config = _FROZEN

    general: Decimal
    employed_person: Decimal
    young_disabled: Decimal
    additional: Decimal

    @property
    def total(self) -> Decimal:
        return self.general + self.employed_person + self.young_disabled + self.additional


class SocialInsuranceContributions(BaseModel):
    """Employee-side contributions for one period (annual or monthly)."""

    model_config = _FROZEN

    old_age_pension: Decimal  # AOW
    long_term_care: Decimal  # Wlz
    health_care: Decimal  # Zvw
    unemployment: Decimal = ZERO  # WW, employer-only
    disability: Decimal = ZERO  # WIA, employer-only

    @property
    def total(self) -> Decimal:
        return (
            self.old_age_pension
            + self.long_term_care
            + self.health_care
            + self.unemployment
            + self.disability
        )


class SocialInsuranceResult(BaseModel):
    model_config = _FROZEN

    annual: SocialInsuranceContributions
    monthly: SocialInsuranceContributions


class EmployerContributions(BaseModel):
    """Employer levies on annual salary."""

    model_config = _FROZEN

    unemployment_fund: Decimal  # AWF
    disability_fund: Decimal  # Aof
    childcare_surcharge: Decimal  # Wko
    government_fund_premium: Decimal  # Ufo
    unemployment_fund_rate: Decimal
    disability_fund_rate: Decimal

    @property
    def total(self) -> Decimal:
        return (
            self.unemployment_fund
            + self.disability_fund
            + self.childcare_surcharge
            + self.government_fund_premium
        )


class HolidayAllowance(BaseModel):
    model_config = _FROZEN

    rate: Decimal
    gross: Decimal
    net: Decimal


class HolidayAllowanceReserve(BaseModel):
    """Holiday allowance reserve position in a given month."""

    model_config = _FROZEN

    statutory_rate: Decimal
    applied_rate: Decimal
    is_compliant: bool
    annual_amount: Decimal
    monthly_reserve: Decimal
    months_accrued: int
    accumulated: Decimal
    paid: Decimal
    balance: Decimal
    payment_date: date
    is_payment_month: bool


class HolidayScheduleEntry(BaseModel):
    model_config = _FROZEN

    month: int
    month_name: str
    reserve: Decimal
    cumulative: Decimal
    is_payout: bool


class HolidayPaymentSchedule(BaseModel):
    model_config = _FROZEN

    total_amount: Decimal
    monthly_reserve: Decimal
    payment_date: date
    payment_amount: Decimal
    schedule: tuple[HolidayScheduleEntry, ...]


class VacationDays(BaseModel):
    """Vacation-day entitlement and balance for a calendar year."""

    model_config = _FROZEN

    statutory_days: Decimal
    contract_days: Decimal
    pro_rata_factor: Decimal
    entitlement: Decimal
    monthly_accrual: Decimal
    months_accrued: int
    earned: Decimal
    used: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.earned - self.used


class GrossPay(BaseModel):
    model_config = _FROZEN

    employment_type: EmploymentType
    regular_pay: Decimal
    overtime_pay: Decimal

    @property
    def gross_pay(self) -> Decimal:
        return self.regular_pay + self.overtime_pay


class MinimumWageCheck(BaseModel):
    model_config = _FROZEN

    age: int
    age_category: str
    hourly_rate: Decimal
    weekly_hours: Decimal
    monthly_minimum: Decimal
    monthly_salary: Decimal
    is_compliant: bool

    @property
    def difference(self) -> Decimal:
        return self.monthly_salary - self.monthly_minimum


class ProRataResult(BaseModel):
    model_config = _FROZEN

    is_pro_rata_applied: bool
    calculation_method: str
    total_days_in_month: int
    working_days_in_month: int | None = None
    actual_days: int
    pro_rata_factor: Decimal
    full_monthly_salary: Decimal
    pro_rata_salary: Decimal
    adjustment: Decimal
    effective_start: date | None = None
    effective_end: date | None = None
    calculation_details: str


# --- Assembled payroll ---


class PeriodSummary(BaseModel):
    """Annual or monthly view of one payroll result."""

    model_config = _FROZEN

    gross_salary: Decimal
    income_tax: Decimal
    old_age_pension_contribution: Decimal
    long_term_care_contribution: Decimal
    health_care_contribution: Decimal
    total_employee_contributions: Decimal
    net_salary: Decimal
    holiday_allowance_gross: Decimal
    holiday_allowance_net: Decimal
    total_employer_costs: Decimal


class PayrollResult(BaseModel):
    """Fully itemised payroll breakdown for one employee and period."""

    model_config = _FROZEN

    tax_year: int
    age: int
    pension_age_category: PensionAgeCategory
    gross_monthly_salary: Decimal
    gross_annual_salary: Decimal
    taxable_income: Decimal
    income_tax_before_credits: Decimal
    tax_credits: TaxCredits
    income_tax_after_credits: Decimal
    social_insurance: SocialInsuranceResult
    employer_contributions: EmployerContributions
    holiday_allowance: HolidayAllowance
    tax_bracket_breakdown: tuple[TaxBracketLine, ...]
    annual: PeriodSummary
    monthly: PeriodSummary

    @property
    def total_tax_credits(self) -> Decimal:
        return self.tax_credits.total

    @property
    def total_employer_costs(self) -> Decimal:
        return self.employer_contributions.total

    @property
    def net_monthly_salary(self) -> Decimal:
        return self.monthly.net_salary

    @property
    def net_annual_salary(self) -> Decimal:
        return self.annual.net_salary


ModelT = TypeVar("ModelT", bound=BaseModel)


def coerce_model(model_cls: type[ModelT], data: ModelT | dict[str, Any]) -> ModelT:
    """Accept a model instance or a plain mapping, raising our ValidationError."""
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        raise from_pydantic(e) from e
