"""
Configuration errors raised while resolving business days.
"""


class ConfigurationError(ValueError):
    """Base class for invalid or missing calendar configuration."""


class InvalidWeekdayName(ConfigurationError):
    """A configured special weekday is not a known weekday name."""


class MissingCutoffConfiguration(ConfigurationError):
    """No cutoff time record is configured."""


class MalformedCutoffTime(ConfigurationError):
    """A cutoff time record does not parse as HH:MM or HH:MM:SS."""


class MalformedSpecialDate(ConfigurationError):
    """A special date record does not hold a valid month and day."""


class NonTerminatingConfiguration(ConfigurationError):
    """Every weekday is marked special, so no business day can exist."""


class DateOutOfRange(ValueError):
    """The next business day would fall past the last representable date."""
