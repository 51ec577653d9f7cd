from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional, Set

from django.utils import timezone, translation
from django.utils.formats import date_format

from apps.common import get_logger

from .dtos import DeliveryWindow
from .holidays import HolidayCalendarProtocol

logger = get_logger(__name__).bind(component="shipping", layer="delivery")

# "martes, 12 de noviembre de 2024"
LONG_DATE_FORMAT = r"l, j \d\e F \d\e Y"
WEEKEND = (5, 6)


def format_long_date(day: date, language: str = "es") -> str:
    with translation.override(language):
        return date_format(day, LONG_DATE_FORMAT)


class DeliveryEstimator:
    """Counts business days forward from today, skipping weekends and holidays."""

    def __init__(
        self,
        calendar: HolidayCalendarProtocol,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.calendar = calendar
        self.clock = clock or timezone.localdate
        self._warned_years: Set[int] = set()

    def is_business_day(self, day: date) -> bool:
        if day.weekday() in WEEKEND:
            return False
        if not self.calendar.covers(day.year) and day.year not in self._warned_years:
            self._warned_years.add(day.year)
            logger.warning(
                "No holiday data for year; counting every weekday", year=day.year
            )
        return not self.calendar.is_holiday(day)

    def estimate(self, business_days: int, today: Optional[date] = None) -> date:
        current = today or self.clock()
        counted = 0
        while counted < business_days:
            current += timedelta(days=1)
            if self.is_business_day(current):
                counted += 1
        return current

    def estimate_window(
        self, window: DeliveryWindow, today: Optional[date] = None
    ) -> date:
        """The promise uses the slow end of the window."""
        return self.estimate(window.max, today=today)
