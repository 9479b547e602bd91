"""Dutch public holiday calendar.

Movable feasts are derived from Easter, so any year can be answered
without a hardcoded list. Company-specific days off are added from
``config/holidays.yaml``.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Any, Protocol

from dateutil.easter import easter

from config import load_yaml_config
from config.settings import settings

logger = logging.getLogger(__name__)


class HolidayCalendar(Protocol):
    """Answers whether a date is a public holiday."""

    def holidays_for_year(self, year: int) -> dict[date, str]: ...

    def is_holiday(self, day: date) -> bool: ...


def kings_day(year: int) -> date:
    """Koningsdag: 27 April, moved to the 26th when the 27th is a Sunday."""
    day = date(year, 4, 27)
    return day - timedelta(days=1) if day.weekday() == 6 else day


class DutchHolidayCalendar:
    """Statutory Dutch public holidays plus configured extra days."""

    def __init__(
        self,
        extra_holidays: Mapping[date, str] | None = None,
        include_liberation_day: bool = True,
    ) -> None:
        self._extra = dict(extra_holidays or {})
        self._include_liberation_day = include_liberation_day

    def holidays_for_year(self, year: int) -> dict[date, str]:
        easter_sunday = easter(year)
        holidays = {
            date(year, 1, 1): "Nieuwjaarsdag",
            easter_sunday: "Eerste Paasdag",
            easter_sunday + timedelta(days=1): "Tweede Paasdag",
            kings_day(year): "Koningsdag",
            easter_sunday + timedelta(days=39): "Hemelvaartsdag",
            easter_sunday + timedelta(days=49): "Eerste Pinksterdag",
            easter_sunday + timedelta(days=50): "Tweede Pinksterdag",
            date(year, 12, 25): "Eerste Kerstdag",
            date(year, 12, 26): "Tweede Kerstdag",
        }
        if self._include_liberation_day:
            holidays[date(year, 5, 5)] = "Bevrijdingsdag"
        holidays.update({day: name for day, name in self._extra.items() if day.year == year})
        return dict(sorted(holidays.items()))

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays_for_year(day.year)


def _parse_extra_holidays(raw: Mapping[Any, Iterable[Any]]) -> dict[date, str]:
    extra: dict[date, str] = {}
    for year, entries in raw.items():
        for entry in entries or ():
            if isinstance(entry, Mapping):
                value, name = entry["date"], str(entry.get("name", "Extra vrije dag"))
            else:
                value, name = entry, "Extra vrije dag"
            day = value if isinstance(value, date) else date.fromisoformat(str(value))
            if day.year != int(year):
                logger.warning("Holiday %s listed under year %s", day.isoformat(), year)
            extra[day] = name
    return extra


def load_holiday_calendar(filename: str | None = None) -> DutchHolidayCalendar:
    """Build the holiday calendar from the YAML holiday configuration."""
    config = load_yaml_config(filename or settings.holidays_file)
    extra = _parse_extra_holidays(config.get("extra_holidays") or {})
    logger.info("Loaded holiday calendar with %d extra day(s)", len(extra))
    return DutchHolidayCalendar(
        extra_holidays=extra,
        include_liberation_day=bool(config.get("include_liberation_day", True)),
    )
