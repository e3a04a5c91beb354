"""
Shared fixtures for the business day calculator tests.
"""

from datetime import time

import pytest

from business_day_calculator.core.resolver import BusinessDayResolver
from business_day_calculator.core.special_rules import StaticRulesProvider


@pytest.fixture
def weekend_provider():
    """Rules with Saturday and Sunday as special weekdays and a 14:00 cutoff."""
    return StaticRulesProvider(
        special_weekdays=["SATURDAY", "SUNDAY"],
        cutoff=time(14, 0),
    )


@pytest.fixture
def resolver(weekend_provider):
    """Create a BusinessDayResolver with the weekend rules."""
    return BusinessDayResolver(weekend_provider)


@pytest.fixture
def catalog_file(tmp_path):
    """Write a catalog file in the treasury catalog layout."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        "FECHAS_ESPECIALES:\n"
        "  - Mes: \"12\"\n"
        "    Dia: \"24\"\n"
        "DIAS_ESPECIALES:\n"
        "  - Dia: SATURDAY\n"
        "  - Dia: SUNDAY\n"
        "HORA_LIMITE:\n"
        "  - Hora: \"14:00\"\n",
        encoding="utf-8",
    )
    return str(path)
