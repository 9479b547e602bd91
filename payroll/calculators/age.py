"""Employee age and pension-age classification."""

from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from payroll.errors import ValidationError

STATUTORY_PENSION_AGE = 67

# Pensioners born before 1946 keep a wider first bracket.
LAST_PRE_1946_BIRTH_YEAR = 1945


class PensionAgeCategory(str, Enum):
    """Which bracket set and levies apply, relative to the AOW age."""

    BELOW_PENSION_AGE = "below_pension_age"
    PENSION_AGE_1946_PLUS = "pension_age_1946_plus"
    PENSION_AGE_1945_EARLIER = "pension_age_1945_earlier"

    @property
    def is_pension_age(self) -> bool:
        return self is not PensionAgeCategory.BELOW_PENSION_AGE


def calculate_age(date_of_birth: date, on_date: date | None = None) -> int:
    """Age in completed years on ``on_date`` (today by default).

    In common years someone born on 29 February turns a year older on
    28 February.
    """
    on_date = on_date or date.today()
    if date_of_birth > on_date:
        raise ValidationError(
            f"Date of birth {date_of_birth.isoformat()} is after {on_date.isoformat()}",
            code="INVALID_DATE_OF_BIRTH",
            field="date_of_birth",
        )
    return relativedelta(on_date, date_of_birth).years


def classify_pension_age(
    date_of_birth: date,
    on_date: date | None = None,
    pension_age: int = STATUTORY_PENSION_AGE,
) -> PensionAgeCategory:
    """Classify an employee into one of the three pension-age categories."""
    if calculate_age(date_of_birth, on_date) < pension_age:
        return PensionAgeCategory.BELOW_PENSION_AGE
    if date_of_birth.year <= LAST_PRE_1946_BIRTH_YEAR:
        return PensionAgeCategory.PENSION_AGE_1945_EARLIER
    return PensionAgeCategory.PENSION_AGE_1946_PLUS
