"""
Core business logic for holiday and business day calculation.
"""

from business_day_calculator.core.holiday_calendar import (
    adjust_to_next_monday,
    build_holidays,
    compute_easter,
    list_holidays,
)
from business_day_calculator.core.resolver import BusinessDayResolver
from business_day_calculator.core.special_rules import (
    CatalogRulesProvider,
    SpecialRulesProvider,
    StaticRulesProvider,
)

__all__ = [
    "BusinessDayResolver",
    "CatalogRulesProvider",
    "SpecialRulesProvider",
    "StaticRulesProvider",
    "adjust_to_next_monday",
    "build_holidays",
    "compute_easter",
    "list_holidays",
]
