"""
Tests for the next business day resolver.
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from business_day_calculator.core.holiday_calendar import build_holidays
from business_day_calculator.core.resolver import BusinessDayResolver
from business_day_calculator.core.special_rules import (
    CatalogRulesProvider,
    StaticRulesProvider,
)
from business_day_calculator.data.schemas import SkipReason
from business_day_calculator.exceptions import (
    DateOutOfRange,
    MalformedCutoffTime,
    MalformedSpecialDate,
    MissingCutoffConfiguration,
    NonTerminatingConfiguration,
)


class RecordingProvider(StaticRulesProvider):
    """Static provider that records which years special dates were requested for."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.requested_years = []

    def list_special_dates(self, year):
        self.requested_years.append(year)
        return super().list_special_dates(year)


class TestResolverScenarios:
    """Reference scenarios with a 14:00 cutoff and weekends excluded."""

    def test_new_year_holiday(self, resolver):
        """2024-01-01 is a holiday, the next business day is Tuesday January 2."""
        result = resolver.resolve_next_business_day(datetime(2024, 1, 1, 8, 0))
        assert result == datetime(2024, 1, 2, 0, 0)

    def test_holy_week(self, resolver):
        """Holy Thursday, Good Friday and the weekend are skipped."""
        result = resolver.resolve_next_business_day(datetime(2024, 3, 28, 9, 0))
        assert result == datetime(2024, 4, 1, 0, 0)

    def test_year_boundary_after_cutoff(self, resolver):
        """A late submission on December 31 rolls into the next year's holidays."""
        result = resolver.resolve_next_business_day(datetime(2024, 12, 31, 23, 59))
        assert result == datetime(2025, 1, 2, 0, 0)

    def test_regular_day_before_cutoff(self, resolver):
        """Before the cutoff on a business day the same date is returned."""
        result = resolver.resolve_next_business_day(datetime(2024, 6, 17, 13, 59))
        assert result == datetime(2024, 6, 17, 0, 0)

    def test_exactly_at_cutoff_counts_as_late(self, resolver):
        """A submission exactly at the cutoff moves to the next day."""
        result = resolver.resolve_next_business_day(datetime(2024, 6, 17, 14, 0))
        assert result == datetime(2024, 6, 18, 0, 0)

    def test_sacred_heart_monday(self, resolver):
        """June 10, 2024 is Sagrado Corazón, so a 14:00 submission lands on June 11."""
        assert resolver.resolve_next_business_day(datetime(2024, 6, 10, 14, 0)) == datetime(
            2024, 6, 11, 0, 0
        )
        assert resolver.resolve_next_business_day(datetime(2024, 6, 10, 13, 59)) == datetime(
            2024, 6, 11, 0, 0
        )

    def test_just_before_cutoff_with_microseconds(self, resolver):
        """Sub-second precision is compared against the cutoff."""
        result = resolver.resolve_next_business_day(datetime(2024, 6, 17, 13, 59, 59, 999999))
        assert result == datetime(2024, 6, 17, 0, 0)


class TestResolverRules:
    """Tests for special dates, weekdays and configuration errors."""

    def test_special_date_skipped(self):
        """A configured special date is not a business day."""
        provider = StaticRulesProvider(
            special_dates=[date(2000, 6, 18)],
            special_weekdays=["SATURDAY", "SUNDAY"],
            cutoff=time(14, 0),
        )
        resolver = BusinessDayResolver(provider)

        result = resolver.resolve(datetime(2024, 6, 17, 15, 0))

        assert result.next_business_day == datetime(2024, 6, 19, 0, 0)
        assert [s.reason for s in result.skipped_dates] == [
            SkipReason.AFTER_CUTOFF,
            SkipReason.SPECIAL_DATE,
        ]

    def test_no_special_weekdays_allows_weekends(self):
        """Without special weekdays a Saturday is a business day."""
        resolver = BusinessDayResolver(StaticRulesProvider(cutoff=time(14, 0)))
        result = resolver.resolve_next_business_day(datetime(2024, 3, 29, 9, 0))
        assert result == datetime(2024, 3, 30, 0, 0)

    def test_special_dates_reloaded_for_new_year(self):
        """Special dates are re-read for the year the search moves into."""
        provider = RecordingProvider(
            special_dates=[date(2000, 1, 2)],
            special_weekdays=["SATURDAY", "SUNDAY"],
            cutoff=time(14, 0),
        )
        resolver = BusinessDayResolver(provider)

        result = resolver.resolve_next_business_day(datetime(2024, 12, 31, 15, 0))

        assert result == datetime(2025, 1, 3, 0, 0)
        assert provider.requested_years == [2024, 2025]

    def test_skip_trail(self, resolver):
        """The result lists every skipped date with its reason."""
        result = resolver.resolve(datetime(2024, 3, 27, 16, 0))

        assert result.after_cutoff is True
        assert result.cutoff_time == time(14, 0)
        assert [(s.skipped_date, s.reason) for s in result.skipped_dates] == [
            (date(2024, 3, 27), SkipReason.AFTER_CUTOFF),
            (date(2024, 3, 28), SkipReason.HOLIDAY),
            (date(2024, 3, 29), SkipReason.HOLIDAY),
            (date(2024, 3, 30), SkipReason.SPECIAL_WEEKDAY),
            (date(2024, 3, 31), SkipReason.SPECIAL_WEEKDAY),
        ]
        assert result.next_business_day == datetime(2024, 4, 1, 0, 0)

    def test_all_weekdays_special(self):
        """Marking every weekday special is rejected instead of looping forever."""
        provider = StaticRulesProvider(
            special_weekdays=[
                "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY",
            ],
            cutoff=time(14, 0),
        )
        with pytest.raises(NonTerminatingConfiguration):
            BusinessDayResolver(provider).resolve_next_business_day(datetime(2024, 6, 17, 9, 0))

    def test_six_weekdays_special(self):
        """Six special weekdays still leave one business day per week."""
        provider = StaticRulesProvider(
            special_weekdays=["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "SATURDAY", "SUNDAY"],
            cutoff=time(14, 0),
        )
        result = BusinessDayResolver(provider).resolve_next_business_day(datetime(2024, 6, 17, 9, 0))
        assert result == datetime(2024, 6, 21, 0, 0)

    def test_missing_cutoff(self):
        """No cutoff configured is surfaced as a configuration error."""
        resolver = BusinessDayResolver(StaticRulesProvider(special_weekdays=["SUNDAY"]))
        with pytest.raises(MissingCutoffConfiguration):
            resolver.resolve_next_business_day(datetime(2024, 6, 17, 9, 0))

    def test_malformed_cutoff(self):
        """A malformed cutoff record is surfaced as a configuration error."""
        resolver = BusinessDayResolver(CatalogRulesProvider({"HORA_LIMITE": [{"Hora": "mediodia"}]}))
        with pytest.raises(MalformedCutoffTime):
            resolver.resolve_next_business_day(datetime(2024, 6, 17, 9, 0))

    def test_malformed_special_date(self):
        """A malformed special date record is surfaced as a configuration error."""
        provider = CatalogRulesProvider({
            "FECHAS_ESPECIALES": [{"Mes": "2", "Dia": "30"}],
            "HORA_LIMITE": [{"Hora": "14:00"}],
        })
        with pytest.raises(MalformedSpecialDate):
            BusinessDayResolver(provider).resolve_next_business_day(datetime(2024, 6, 17, 9, 0))

    def test_cutoff_record_not_a_mapping(self):
        """A bare cutoff string in the catalog is a configuration error."""
        resolver = BusinessDayResolver(CatalogRulesProvider({"HORA_LIMITE": ["14:00"]}))
        with pytest.raises(MalformedCutoffTime):
            resolver.resolve_next_business_day(datetime(2024, 6, 17, 9, 0))

    def test_past_last_representable_date(self, resolver):
        """Rolling past December 31, 9999 raises instead of overflowing."""
        with pytest.raises(DateOutOfRange, match="9999-12-31"):
            resolver.resolve_next_business_day(datetime(9999, 12, 31, 15, 0))

    def test_unknown_weekday_name_is_skipped(self):
        """An unknown weekday name does not fail the resolution."""
        provider = CatalogRulesProvider({
            "DIAS_ESPECIALES": [{"Dia": "SABADO"}, {"Dia": "SUNDAY"}],
            "HORA_LIMITE": [{"Hora": "14:00"}],
        })
        result = BusinessDayResolver(provider).resolve_next_business_day(datetime(2024, 6, 15, 9, 0))
        assert result == datetime(2024, 6, 15, 0, 0)


class TestResolverProperties:
    """Properties that hold over a whole year."""

    def test_result_is_never_excluded(self, resolver):
        """The resolved day is never a holiday or a weekend, and never earlier."""
        holidays = build_holidays(2024) | build_holidays(2025)
        day = datetime(2024, 1, 1, 10, 0)
        while day.year == 2024:
            for hour in (0, 13, 14, 23):
                submitted = day.replace(hour=hour)
                result = resolver.resolve_next_business_day(submitted)
                assert result.time() == time(0, 0)
                assert result.date() >= submitted.date()
                assert result.date() not in holidays
                assert result.weekday() < 5
            day += timedelta(days=1)

    def test_business_day_before_cutoff_is_stable(self, resolver):
        """Feeding a result back in before the cutoff returns the same day."""
        day = datetime(2024, 1, 1, 15, 0)
        while day.year == 2024:
            result = resolver.resolve_next_business_day(day)
            assert resolver.resolve_next_business_day(result) == result
            assert resolver.resolve_next_business_day(result + timedelta(hours=9)) == result
            day += timedelta(days=1)

    def test_timezone_is_carried_through(self, resolver):
        """Timestamps keep their tzinfo and are not converted."""
        tz = timezone(timedelta(hours=-5))
        result = resolver.resolve_next_business_day(datetime(2024, 6, 17, 9, 0, tzinfo=tz))
        assert result == datetime(2024, 6, 17, 0, 0, tzinfo=tz)
        assert result.tzinfo == tz

    def test_compute_holiday_set(self, resolver):
        """The resolver exposes the raw holiday set."""
        assert resolver.compute_holiday_set(2025) == build_holidays(2025)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
