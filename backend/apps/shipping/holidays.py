from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import FrozenSet, Iterable, Protocol, Union

from apps.common import get_logger

logger = get_logger(__name__).bind(component="shipping", layer="holidays")


class HolidayCalendarProtocol(Protocol):
    def is_holiday(self, day: date) -> bool:
        ...

    def covers(self, year: int) -> bool:
        ...


class StaticHolidayCalendar:
    """Holiday set built from ISO dates; knows which years it has data for."""

    def __init__(self, dates: Iterable[Union[str, date]], years: Iterable[int] = ()):
        parsed = set()
        for value in dates:
            parsed.add(value if isinstance(value, date) else date.fromisoformat(value))
        self._dates: FrozenSet[date] = frozenset(parsed)
        self._years = frozenset(years) | {d.year for d in self._dates}

    def is_holiday(self, day: date) -> bool:
        return day in self._dates

    def covers(self, year: int) -> bool:
        return year in self._years

    @property
    def years(self) -> FrozenSet[int]:
        return self._years

    def __len__(self) -> int:
        return len(self._dates)


def load_holiday_calendar(path: Union[str, Path]) -> StaticHolidayCalendar:
    """Read ``{"years": {"2025": ["2025-01-01", ...]}}``.

    A missing or broken file yields an empty calendar (every weekday is a
    business day) and an error in the log.
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        years = payload.get("years") or {}
        dates = [d for year_dates in years.values() for d in year_dates]
        calendar = StaticHolidayCalendar(dates, years=(int(y) for y in years))
    except (OSError, ValueError, AttributeError, TypeError) as exc:
        logger.error("Holiday calendar unavailable", path=str(path), error=str(exc))
        return StaticHolidayCalendar(())
    logger.debug(
        "Holiday calendar loaded",
        path=str(path),
        holidays=len(calendar),
        years=",".join(str(y) for y in sorted(calendar.years)),
    )
    return calendar
