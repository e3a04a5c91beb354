"""
Colombian holiday calendar: Easter, the Emiliani law and the yearly holiday set.
"""

from datetime import date, timedelta
from typing import Dict, Iterator, List, Set, Tuple

from business_day_calculator.data.schemas import Holiday, Weekday

# First year of the Gregorian calendar the Easter algorithm is defined for
GREGORIAN_START_YEAR = 1583

# (month, day, Spanish name, English name)
FIXED_HOLIDAYS: List[Tuple[int, int, str, str]] = [
    (1, 1, "Año Nuevo", "New Year's Day"),
    (5, 1, "Día del Trabajo", "Labor Day"),
    (7, 20, "Día de la Independencia", "Independence Day"),
    (8, 7, "Batalla de Boyacá", "Battle of Boyacá"),
    (12, 8, "Inmaculada Concepción", "Immaculate Conception"),
    (12, 25, "Navidad", "Christmas Day"),
]

# Observed on the following Monday (Ley Emiliani)
EMILIANI_HOLIDAYS: List[Tuple[int, int, str, str]] = [
    (1, 6, "Reyes Magos", "Epiphany"),
    (3, 19, "San José", "Saint Joseph's Day"),
    (6, 29, "San Pedro y San Pablo", "Saint Peter and Saint Paul"),
    (8, 15, "Asunción de la Virgen", "Assumption of Mary"),
    (10, 12, "Día de la Raza", "Columbus Day"),
    (11, 1, "Todos los Santos", "All Saints' Day"),
    (11, 11, "Independencia de Cartagena", "Independence of Cartagena"),
]

# (days from Easter Sunday, Emiliani-adjusted, Spanish name, English name)
EASTER_RELATIVE_HOLIDAYS: List[Tuple[int, bool, str, str]] = [
    (-3, False, "Jueves Santo", "Maundy Thursday"),
    (-2, False, "Viernes Santo", "Good Friday"),
    (40, True, "Ascensión del Señor", "Ascension Day"),
    (60, True, "Corpus Christi", "Corpus Christi"),
    (68, True, "Sagrado Corazón", "Sacred Heart"),
]


def compute_easter(year: int) -> date:
    """
    Calculate Easter Sunday using the Meeus/Jones/Butcher algorithm.

    Args:
        year: Gregorian year, 1583 or later.

    Returns:
        Date of Easter Sunday.

    Raises:
        ValueError: If the year predates the Gregorian calendar.
    """
    if year < GREGORIAN_START_YEAR:
        raise ValueError(
            f"Easter can only be computed for Gregorian years >= {GREGORIAN_START_YEAR}, got {year}"
        )

    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def adjust_to_next_monday(day: date) -> date:
    """
    Move a date to the following Monday unless it already is one.

    Args:
        day: Date to adjust.

    Returns:
        The same date if it is a Monday, otherwise the next Monday.
    """
    days_ahead = (Weekday.MONDAY - day.weekday()) % 7
    return day + timedelta(days=days_ahead)


def _observed_holidays(year: int) -> Iterator[Tuple[date, str, str, bool]]:
    """Yield (observed date, Spanish name, English name, movable) for every rule."""
    for month, day, name, name_english in FIXED_HOLIDAYS:
        yield date(year, month, day), name, name_english, False

    for month, day, name, name_english in EMILIANI_HOLIDAYS:
        yield adjust_to_next_monday(date(year, month, day)), name, name_english, True

    easter = compute_easter(year)
    for offset, emiliani, name, name_english in EASTER_RELATIVE_HOLIDAYS:
        observed = easter + timedelta(days=offset)
        if emiliani:
            observed = adjust_to_next_monday(observed)
        yield observed, name, name_english, True


def build_holidays(year: int) -> Set[date]:
    """
    Build the set of Colombian holidays observed in a year.

    Args:
        year: Year to build the holiday set for.

    Returns:
        Set of holiday dates, all within the given year.
    """
    return {observed for observed, _, _, _ in _observed_holidays(year)}


def list_holidays(year: int) -> List[Holiday]:
    """
    List the holidays of a year with their names, sorted by date.

    When two rules fall on the same date, the first rule's name is kept.

    Args:
        year: Year to list holidays for.

    Returns:
        List of Holiday objects.
    """
    by_date: Dict[date, Holiday] = {}
    for observed, name, name_english, movable in _observed_holidays(year):
        if observed not in by_date:
            by_date[observed] = Holiday(
                holiday_date=observed,
                name=name,
                name_english=name_english,
                movable=movable,
            )
    return [by_date[d] for d in sorted(by_date)]
