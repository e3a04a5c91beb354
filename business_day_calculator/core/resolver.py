"""
Next business day resolution.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Set

from business_day_calculator.core.holiday_calendar import build_holidays
from business_day_calculator.core.special_rules import (
    SpecialRulesProvider,
    cutoff_time_from_records,
    special_dates_for_year,
    special_weekdays_from_names,
)
from business_day_calculator.data.schemas import (
    BusinessDayResult,
    SkippedDate,
    SkipReason,
    Weekday,
)
from business_day_calculator.exceptions import DateOutOfRange, NonTerminatingConfiguration

logger = logging.getLogger(__name__)


class _YearRules:
    """Holiday and special date sets loaded for a single year."""

    def __init__(self, year: int, holidays: Set[date], special_dates: Set[date]):
        self.year = year
        self.holidays = holidays
        self.special_dates = special_dates


class BusinessDayResolver:
    """Resolves the next business day for a submitted timestamp."""

    def __init__(self, rules_provider: SpecialRulesProvider):
        """
        Initialize the resolver.

        Args:
            rules_provider: Source of special dates, special weekdays and the cutoff time.
        """
        self.rules_provider = rules_provider

    def compute_holiday_set(self, year: int) -> Set[date]:
        """Return the rule-based holidays of a year."""
        return build_holidays(year)

    def _load_year(self, year: int) -> _YearRules:
        holidays = build_holidays(year)
        special_dates = special_dates_for_year(
            self.rules_provider.list_special_dates(year), year
        )
        logger.info(f"Holidays for the year {year}: {sorted(holidays)}")
        logger.info(f"Special dates for the year {year}: {sorted(special_dates)}")
        return _YearRules(year, holidays, special_dates)

    def _load_special_weekdays(self) -> Set[Weekday]:
        weekdays = special_weekdays_from_names(
            self.rules_provider.list_special_weekday_names()
        )
        logger.info(f"Special days of the week: {[w.name for w in sorted(weekdays)]}")
        if len(weekdays) == len(Weekday):
            raise NonTerminatingConfiguration(
                "All seven weekdays are configured as special days, no business day exists"
            )
        return weekdays

    def _load_cutoff_time(self) -> time:
        cutoff = cutoff_time_from_records(self.rules_provider.get_cutoff_time_records())
        logger.info(f"Hour limit for business day calculation: {cutoff}")
        return cutoff

    def resolve(self, submitted_at: datetime) -> BusinessDayResult:
        """
        Resolve the next business day and explain which dates were skipped.

        A submission at or after the cutoff time counts for the next day.
        From there, holidays, special dates and special weekdays are skipped
        until a business day is found.

        Args:
            submitted_at: Timestamp the request was submitted at.

        Returns:
            BusinessDayResult with the next business day at midnight.

        Raises:
            ConfigurationError: If the special rules are missing or malformed.
            DateOutOfRange: If the search runs past the last supported date.
        """
        rules = self._load_year(submitted_at.year)
        special_weekdays = self._load_special_weekdays()
        cutoff = self._load_cutoff_time()

        skipped: List[SkippedDate] = []
        current = submitted_at

        after_cutoff = submitted_at.time() >= cutoff
        if after_cutoff:
            skipped.append(
                SkippedDate(skipped_date=current.date(), reason=SkipReason.AFTER_CUTOFF)
            )
            current = self._next_day(current)
            if current.year != rules.year:
                rules = self._load_year(current.year)

        current = current.replace(hour=0, minute=0, second=0, microsecond=0)

        while True:
            reason = self._exclusion_reason(current.date(), rules, special_weekdays)
            if reason is None:
                break
            skipped.append(SkippedDate(skipped_date=current.date(), reason=reason))
            current = self._next_day(current).replace(
                hour=0, minute=0, second=0, microsecond=0
            )
            if current.year != rules.year:
                rules = self._load_year(current.year)

        return BusinessDayResult(
            submitted_at=submitted_at,
            next_business_day=current,
            cutoff_time=cutoff,
            after_cutoff=after_cutoff,
            skipped_dates=skipped,
        )

    def resolve_next_business_day(self, submitted_at: datetime) -> datetime:
        """
        Get the next business day for a submitted timestamp.

        Args:
            submitted_at: Timestamp the request was submitted at.

        Returns:
            The next business day with the time set to midnight.
        """
        return self.resolve(submitted_at).next_business_day

    @staticmethod
    def _next_day(current: datetime) -> datetime:
        try:
            return current + timedelta(days=1)
        except OverflowError:
            raise DateOutOfRange(
                f"No business day can be resolved after {current.date().isoformat()}"
            )

    @staticmethod
    def _exclusion_reason(
        day: date, rules: _YearRules, special_weekdays: Set[Weekday]
    ) -> Optional[SkipReason]:
        if day in rules.holidays:
            return SkipReason.HOLIDAY
        if day in rules.special_dates:
            return SkipReason.SPECIAL_DATE
        if day.weekday() in special_weekdays:
            return SkipReason.SPECIAL_WEEKDAY
        return None
