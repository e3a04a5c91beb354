"""
Special rules: configured special dates, special weekdays and the daily cutoff.

Rules come from a catalog keyed by FECHAS_ESPECIALES, DIAS_ESPECIALES and
HORA_LIMITE, the same keys and field names the treasury catalog store uses.
"""

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Set

import yaml

from business_day_calculator.data.schemas import Weekday
from business_day_calculator.exceptions import (
    ConfigurationError,
    InvalidWeekdayName,
    MalformedCutoffTime,
    MalformedSpecialDate,
    MissingCutoffConfiguration,
)

logger = logging.getLogger(__name__)

SPECIAL_DATES_KEY = "FECHAS_ESPECIALES"
SPECIAL_WEEKDAYS_KEY = "DIAS_ESPECIALES"
CUTOFF_TIME_KEY = "HORA_LIMITE"

MONTH_FIELD = "Mes"
DAY_FIELD = "Dia"
HOUR_FIELD = "Hora"

CUTOFF_TIME_FORMATS = ["%H:%M:%S", "%H:%M"]


class SpecialRulesProvider(Protocol):
    """Read access to the configured special rules."""

    def list_special_dates(self, year: int) -> Sequence[Mapping[str, str]]:
        """Return special date records with Mes and Dia fields."""
        ...

    def list_special_weekday_names(self) -> Sequence[str]:
        """Return the configured special weekday names."""
        ...

    def get_cutoff_time_records(self) -> Sequence[Mapping[str, str]]:
        """Return cutoff time records with an Hora field."""
        ...


class CatalogRulesProvider:
    """Provides special rules from a catalog of named record lists."""

    def __init__(self, catalog: Mapping[str, Sequence[Mapping[str, Any]]]):
        """
        Initialize the provider.

        Args:
            catalog: Mapping of catalog key to its list of records.
        """
        self.catalog = catalog

    @classmethod
    def from_yaml(cls, path: str) -> "CatalogRulesProvider":
        """
        Load a catalog from a YAML file.

        Args:
            path: Path to the catalog file.

        Returns:
            CatalogRulesProvider backed by the file contents.

        Raises:
            ConfigurationError: If the file is missing or not a valid catalog.
        """
        catalog_path = Path(path)
        if not catalog_path.exists():
            raise ConfigurationError(f"Catalog file not found: {catalog_path}")

        try:
            with open(catalog_path, "r", encoding="utf-8") as f:
                catalog = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing catalog file {catalog_path}: {e}")

        if not isinstance(catalog, dict):
            raise ConfigurationError(f"Catalog file {catalog_path} must contain a mapping")

        logger.debug(f"Loaded catalog from: {catalog_path}")
        return cls(catalog)

    def all(self, key: str) -> List[Mapping[str, Any]]:
        """Return every record stored under a catalog key."""
        return list(self.catalog.get(key) or [])

    def list_special_dates(self, year: int) -> List[Mapping[str, Any]]:
        # Catalog special dates repeat every year
        return self.all(SPECIAL_DATES_KEY)

    def list_special_weekday_names(self) -> List[str]:
        # Bare names are accepted alongside {Dia: NAME} records
        return [
            record.get(DAY_FIELD) if isinstance(record, Mapping) else record
            for record in self.all(SPECIAL_WEEKDAYS_KEY)
        ]

    def get_cutoff_time_records(self) -> List[Mapping[str, Any]]:
        return self.all(CUTOFF_TIME_KEY)


class StaticRulesProvider:
    """Provides special rules from plain Python values."""

    def __init__(
        self,
        special_dates: Optional[Iterable[date]] = None,
        special_weekdays: Optional[Iterable[str]] = None,
        cutoff: Optional[time] = None,
    ):
        """
        Initialize the provider.

        Args:
            special_dates: Special dates; only their month and day are used.
            special_weekdays: Weekday names such as "SATURDAY".
            cutoff: Daily cutoff time, or None for no cutoff record.
        """
        self.special_dates = list(special_dates or [])
        self.special_weekdays = list(special_weekdays or [])
        self.cutoff = cutoff

    def list_special_dates(self, year: int) -> List[Dict[str, str]]:
        return [
            {MONTH_FIELD: str(d.month), DAY_FIELD: str(d.day)}
            for d in self.special_dates
        ]

    def list_special_weekday_names(self) -> List[str]:
        return list(self.special_weekdays)

    def get_cutoff_time_records(self) -> List[Dict[str, str]]:
        if self.cutoff is None:
            return []
        return [{HOUR_FIELD: self.cutoff.strftime("%H:%M:%S")}]


def _parse_int_field(record: Mapping[str, Any], field: str) -> int:
    if not isinstance(record, Mapping):
        raise MalformedSpecialDate(
            f"Special date record must have {MONTH_FIELD} and {DAY_FIELD} fields: {record!r}"
        )
    value = record.get(field)
    if isinstance(value, bool) or value is None:
        raise MalformedSpecialDate(f"Special date field {field!r} is missing or invalid: {record}")
    try:
        return int(str(value).strip())
    except ValueError:
        raise MalformedSpecialDate(f"Special date field {field!r} is not a number: {record}")


def special_dates_for_year(records: Iterable[Mapping[str, Any]], year: int) -> Set[date]:
    """
    Convert special date records into dates of a year.

    Args:
        records: Records with 1-based Mes and Dia fields.
        year: Year the dates belong to.

    Returns:
        Set of special dates within the year.

    Raises:
        MalformedSpecialDate: If a record does not form a valid date.
    """
    special_dates = set()
    for record in records:
        month = _parse_int_field(record, MONTH_FIELD)
        day = _parse_int_field(record, DAY_FIELD)
        try:
            special_dates.add(date(year, month, day))
        except ValueError as e:
            raise MalformedSpecialDate(
                f"Special date {month}/{day} is not valid in {year}: {e}"
            )
    return special_dates


def parse_weekday(name: Optional[str]) -> Weekday:
    """
    Parse a weekday name such as "SATURDAY" (case-insensitive).

    Raises:
        InvalidWeekdayName: If the name is not a weekday.
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidWeekdayName(f"Invalid weekday: {name!r}")
    try:
        return Weekday[name.strip().upper()]
    except KeyError:
        raise InvalidWeekdayName(f"Invalid weekday: {name!r}")


def special_weekdays_from_names(names: Iterable[Optional[str]]) -> Set[Weekday]:
    """
    Convert weekday names into a set of weekdays, skipping unknown names.

    Args:
        names: Configured weekday names.

    Returns:
        Set of recognized weekdays.
    """
    weekdays = set()
    for name in names:
        try:
            weekdays.add(parse_weekday(name))
        except InvalidWeekdayName as e:
            logger.warning(f"{e}, skipping")
    return weekdays


def parse_cutoff_time(value: Any) -> time:
    """
    Parse a cutoff time in HH:MM or HH:MM:SS form.

    Raises:
        MalformedCutoffTime: If the value is not a valid time.
    """
    if isinstance(value, str):
        for fmt in CUTOFF_TIME_FORMATS:
            try:
                return datetime.strptime(value.strip(), fmt).time()
            except ValueError:
                continue
    raise MalformedCutoffTime(f"Invalid cutoff time: {value!r}. Use HH:MM or HH:MM:SS")


def cutoff_time_from_records(records: Sequence[Mapping[str, Any]]) -> time:
    """
    Get the daily cutoff time from its configuration records.

    The first record is used.

    Args:
        records: Records with an Hora field.

    Returns:
        The cutoff time.

    Raises:
        MissingCutoffConfiguration: If there are no records.
        MalformedCutoffTime: If the first record does not hold a valid time.
    """
    if not records:
        raise MissingCutoffConfiguration(
            f"No cutoff time configured under {CUTOFF_TIME_KEY}"
        )
    if len(records) > 1:
        logger.warning(
            f"{len(records)} cutoff time records configured, using the first one"
        )
    first = records[0]
    if not isinstance(first, Mapping):
        raise MalformedCutoffTime(
            f"Cutoff time record must have an {HOUR_FIELD} field: {first!r}"
        )
    return parse_cutoff_time(first.get(HOUR_FIELD))
