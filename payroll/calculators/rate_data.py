"""Dutch payroll rate sets: tax brackets, credits, insurance and employer rates.

Rates live in ``config/rates.yaml`` keyed by effective year, so a new tax
year is a data change. Each year is parsed into an immutable ``RateSet``
once, at import; ``load_rate_sets()`` builds a fresh mapping for reloads.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType
from typing import Any, NamedTuple

from config import load_yaml_config
from config.settings import settings
from payroll.calculators.age import PensionAgeCategory
from payroll.errors import RateSetNotFoundError, RateTableError

logger = logging.getLogger(__name__)


class TaxBracket(NamedTuple):
    """A single income tax bracket."""

    lower: Decimal  # inclusive
    upper: Decimal | None  # None = no cap
    rate: Decimal
    label: str


class BracketTable(NamedTuple):
    """The three bracket lists, one per pension-age category."""

    below_pension_age: tuple[TaxBracket, ...]
    pension_age_1946_plus: tuple[TaxBracket, ...]
    pension_age_1945_earlier: tuple[TaxBracket, ...]

    def for_category(self, category: PensionAgeCategory) -> tuple[TaxBracket, ...]:
        return getattr(self, category.value)


class GeneralCreditRates(NamedTuple):
    """Algemene heffingskorting parameters."""

    base_amount: Decimal
    phase_out_start: Decimal
    phase_out_end: Decimal
    phase_out_rate: Decimal


class CreditSegment(NamedTuple):
    width: Decimal
    rate: Decimal


class EmployedPersonCreditRates(NamedTuple):
    """Arbeidskorting parameters: three build-up segments, a cap and a phase-out."""

    segments: tuple[CreditSegment, ...]
    max_credit: Decimal
    phase_out_start: Decimal
    phase_out_rate: Decimal


class NationalInsuranceRates(NamedTuple):
    old_age_pension: Decimal  # AOW
    long_term_care: Decimal  # Wlz


class TieredRate(NamedTuple):
    low: Decimal
    high: Decimal


class EmployerRates(NamedTuple):
    """Employer-only levies, proportional to annual salary."""

    unemployment_fund: TieredRate  # AWF
    disability_fund: TieredRate  # Aof
    childcare_surcharge: Decimal  # Wko
    government_fund_premium: Decimal  # Ufo


class MinimumWageRates(NamedTuple):
    adult_hourly: Decimal
    adult_age: int
    youth_percentages: tuple[tuple[int, Decimal], ...]  # (age, percentage of adult rate)


class RateSet(NamedTuple):
    """All payroll parameters for a single effective year."""

    year: int
    pension_age: int
    brackets: BracketTable
    general_credit: GeneralCreditRates
    employed_person_credit: EmployedPersonCreditRates
    young_disabled_credit: Decimal
    national_insurance: NationalInsuranceRates
    health_care_rate: Decimal
    employer: EmployerRates
    holiday_allowance_rate: Decimal
    minimum_wage: MinimumWageRates


def _dec(value: Any) -> Decimal:
    # str() first so YAML floats keep their written digits
    return Decimal(str(value))


def _parse_brackets(year: int, name: str, raw: list[dict[str, Any]]) -> tuple[TaxBracket, ...]:
    brackets = tuple(
        TaxBracket(
            lower=_dec(b["lower"]),
            upper=_dec(b["upper"]) if b.get("upper") is not None else None,
            rate=_dec(b["rate"]),
            label=str(b.get("label", "")),
        )
        for b in raw
    )
    if not brackets:
        raise RateTableError(f"{year} {name}: no brackets configured")
    if brackets[0].lower != 0:
        raise RateTableError(f"{year} {name}: first bracket must start at 0")
    if brackets[-1].upper is not None:
        raise RateTableError(f"{year} {name}: last bracket must be unbounded")
    for current, following in zip(brackets, brackets[1:]):
        if current.upper is None or current.upper <= current.lower:
            raise RateTableError(f"{year} {name}: only the last bracket may be unbounded")
        if following.lower != current.upper:
            raise RateTableError(
                f"{year} {name}: brackets must be contiguous "
                f"({current.upper} followed by {following.lower})"
            )
    return brackets


def parse_rate_set(year: int, raw: dict[str, Any]) -> RateSet:
    """Build an immutable RateSet from one year's YAML mapping."""
    try:
        brackets = raw["brackets"]
        general = raw["general_credit"]
        employed = raw["employed_person_credit"]
        national = raw["national_insurance"]
        employer = raw["employer"]
        minimum_wage = raw["minimum_wage"]

        rate_set = RateSet(
            year=year,
            pension_age=int(raw.get("pension_age", 67)),
            brackets=BracketTable(
                **{
                    category.value: _parse_brackets(year, category.value, brackets[category.value])
                    for category in PensionAgeCategory
                }
            ),
            general_credit=GeneralCreditRates(
                base_amount=_dec(general["base_amount"]),
                phase_out_start=_dec(general["phase_out_start"]),
                phase_out_end=_dec(general["phase_out_end"]),
                phase_out_rate=_dec(general["phase_out_rate"]),
            ),
            employed_person_credit=EmployedPersonCreditRates(
                segments=tuple(
                    CreditSegment(width=_dec(s["width"]), rate=_dec(s["rate"]))
                    for s in employed["segments"]
                ),
                max_credit=_dec(employed["max_credit"]),
                phase_out_start=_dec(employed["phase_out_start"]),
                phase_out_rate=_dec(employed["phase_out_rate"]),
            ),
            young_disabled_credit=_dec(raw["young_disabled_credit"]),
            national_insurance=NationalInsuranceRates(
                old_age_pension=_dec(national["old_age_pension"]),
                long_term_care=_dec(national["long_term_care"]),
            ),
            health_care_rate=_dec(raw["health_care_rate"]),
            employer=EmployerRates(
                unemployment_fund=TieredRate(
                    low=_dec(employer["unemployment_fund"]["low"]),
                    high=_dec(employer["unemployment_fund"]["high"]),
                ),
                disability_fund=TieredRate(
                    low=_dec(employer["disability_fund"]["low"]),
                    high=_dec(employer["disability_fund"]["high"]),
                ),
                childcare_surcharge=_dec(employer["childcare_surcharge"]),
                government_fund_premium=_dec(employer["government_fund_premium"]),
            ),
            holiday_allowance_rate=_dec(raw["holiday_allowance_rate"]),
            minimum_wage=MinimumWageRates(
                adult_hourly=_dec(minimum_wage["adult_hourly"]),
                adult_age=int(minimum_wage.get("adult_age", 21)),
                youth_percentages=tuple(
                    sorted(
                        (int(age), _dec(pct))
                        for age, pct in minimum_wage["youth_percentages"].items()
                    )
                ),
            ),
        )
    except KeyError as e:
        raise RateTableError(f"{year}: missing rate setting {e}") from e

    if len(rate_set.employed_person_credit.segments) != 3:
        raise RateTableError(f"{year}: employed-person credit needs exactly three segments")
    return rate_set


def load_rate_sets(filename: str | None = None) -> dict[int, RateSet]:
    """Parse every configured year into a new year -> RateSet mapping."""
    config = load_yaml_config(filename or settings.rates_file)
    years = config.get("years") or {}
    rate_sets = {int(year): parse_rate_set(int(year), raw) for year, raw in years.items()}
    logger.info("Loaded payroll rate sets for %s", ", ".join(str(y) for y in sorted(rate_sets)))
    return rate_sets


# Read-only; reloads publish a new mapping instead of editing this one.
RATE_SETS: Mapping[int, RateSet] = MappingProxyType(load_rate_sets())

DEFAULT_TAX_YEAR = settings.default_tax_year


def get_rate_set(year: int = DEFAULT_TAX_YEAR, rate_sets: Mapping[int, RateSet] | None = None) -> RateSet:
    """Return the rate set effective for ``year``."""
    available = RATE_SETS if rate_sets is None else rate_sets
    if year not in available:
        raise RateSetNotFoundError(year, sorted(available))
    return available[year]
