"""
Data models and schemas for the business day calculator.
"""

from business_day_calculator.data.schemas import (
    BusinessDayResult,
    Config,
    Holiday,
    SkippedDate,
    SkipReason,
    Weekday,
)

__all__ = [
    "BusinessDayResult",
    "Config",
    "Holiday",
    "SkippedDate",
    "SkipReason",
    "Weekday",
]
