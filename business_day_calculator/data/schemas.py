"""
Data models for the business day calculator using Pydantic.
"""

from datetime import date, datetime, time
from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Weekday(IntEnum):
    """Days of the week, numbered like date.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class SkipReason(str, Enum):
    """Why a date was passed over while resolving a business day."""

    AFTER_CUTOFF = "after_cutoff"
    HOLIDAY = "holiday"
    SPECIAL_DATE = "special_date"
    SPECIAL_WEEKDAY = "special_weekday"


class Holiday(BaseModel):
    """Represents a Colombian public holiday."""

    holiday_date: date = Field(..., description="Date the holiday is observed")
    name: str = Field(..., description="Name of the holiday in Spanish")
    name_english: Optional[str] = Field(default=None, description="Name in English")
    movable: bool = Field(
        default=False, description="Whether the date moves with Easter or the Emiliani law"
    )


class SkippedDate(BaseModel):
    """A date that did not qualify as a business day."""

    skipped_date: date = Field(..., description="The date that was skipped")
    reason: SkipReason = Field(..., description="Why the date was skipped")


class BusinessDayResult(BaseModel):
    """Complete result of a next business day resolution."""

    submitted_at: datetime = Field(..., description="Timestamp that was submitted")
    next_business_day: datetime = Field(..., description="Next business day at midnight")
    cutoff_time: time = Field(..., description="Daily cutoff time in effect")
    after_cutoff: bool = Field(..., description="Whether the submission was at or after the cutoff")
    skipped_dates: List[SkippedDate] = Field(
        default_factory=list, description="Dates passed over, in order"
    )
    calculation_timestamp: datetime = Field(
        default_factory=datetime.now, description="When the calculation was performed"
    )


class Config(BaseModel):
    """Configuration for the business day calculator."""

    catalog_path: str = Field(
        default="catalog.yaml", description="YAML catalog with special dates, weekdays and cutoff"
    )
    output_format: str = Field(default="json", description="Default output format: json or csv")
    output_directory: str = Field(default="results", description="Directory for output files")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server port")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Ensure the output format is supported."""
        if v not in ("json", "csv"):
            raise ValueError("output_format must be json or csv")
        return v
