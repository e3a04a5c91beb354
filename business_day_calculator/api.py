"""
FastAPI REST API for the business day calculator.
"""

import logging
import os
from datetime import date, datetime, time
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from business_day_calculator import __version__
from business_day_calculator.config.manager import ConfigManager
from business_day_calculator.core.holiday_calendar import (
    GREGORIAN_START_YEAR,
    compute_easter,
    list_holidays,
)
from business_day_calculator.core.resolver import BusinessDayResolver
from business_day_calculator.core.special_rules import CatalogRulesProvider
from business_day_calculator.exceptions import ConfigurationError, DateOutOfRange

logger = logging.getLogger(__name__)

MAX_YEAR = 9999

# Load configuration
config_manager = ConfigManager(os.environ.get("BUSINESS_DAY_CONFIG"))
config = config_manager.load_config()


def get_resolver() -> BusinessDayResolver:
    """Create a resolver reading the catalog file as it is now."""
    catalog_path = config_manager.resolve_catalog_path(config)
    try:
        return BusinessDayResolver(CatalogRulesProvider.from_yaml(catalog_path))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(status_code=422, detail=str(e))


# API Models
class NextBusinessDayRequest(BaseModel):
    """Request model for next business day resolution."""

    submitted_at: datetime = Field(..., description="Submission timestamp")


class SkippedDateResponse(BaseModel):
    """A date passed over during resolution."""

    skipped_date: date
    reason: str


class NextBusinessDayResponse(BaseModel):
    """Response model for next business day resolution."""

    submitted_at: datetime
    next_business_day: datetime
    cutoff_time: time
    after_cutoff: bool
    skipped_dates: List[SkippedDateResponse]


class HolidayResponse(BaseModel):
    """Response model for a single holiday."""

    holiday_date: date
    name: str
    name_english: Optional[str]
    movable: bool


class EasterResponse(BaseModel):
    """Response model for the Easter date."""

    year: int
    easter_sunday: date


# FastAPI app
app = FastAPI(
    title="Business Day Calculator API",
    description="Colombian holidays and next business day resolution",
    version=__version__,
)


def _validate_year(year: int) -> None:
    if year < GREGORIAN_START_YEAR or year > MAX_YEAR:
        raise HTTPException(
            status_code=400,
            detail=f"Year must be between {GREGORIAN_START_YEAR} and {MAX_YEAR}",
        )


@app.get("/")
async def root():
    """API root endpoint with basic info."""
    return {
        "name": "Business Day Calculator API",
        "version": __version__,
        "endpoints": {
            "POST /next-business-day": "Resolve the next business day",
            "GET /holidays/{year}": "Get holidays for a year",
            "GET /easter/{year}": "Get Easter Sunday for a year",
        },
    }


@app.post("/next-business-day", response_model=NextBusinessDayResponse)
def next_business_day(
    request: NextBusinessDayRequest,
    resolver: BusinessDayResolver = Depends(get_resolver),
):
    """
    Resolve the next business day for a submission timestamp.

    Submissions at or after the configured cutoff time count for the next day.
    """
    _validate_year(request.submitted_at.year)

    try:
        result = resolver.resolve(request.submitted_at)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except DateOutOfRange as e:
        raise HTTPException(status_code=400, detail=str(e))

    return NextBusinessDayResponse(
        submitted_at=result.submitted_at,
        next_business_day=result.next_business_day,
        cutoff_time=result.cutoff_time,
        after_cutoff=result.after_cutoff,
        skipped_dates=[
            SkippedDateResponse(skipped_date=s.skipped_date, reason=s.reason.value)
            for s in result.skipped_dates
        ],
    )


@app.get("/holidays/{year}", response_model=List[HolidayResponse])
async def get_holidays(year: int):
    """
    Get all Colombian holidays for a year.

    Args:
        year: Year (e.g., 2024, 2025)
    """
    _validate_year(year)

    return [
        HolidayResponse(
            holiday_date=h.holiday_date,
            name=h.name,
            name_english=h.name_english,
            movable=h.movable,
        )
        for h in list_holidays(year)
    ]


@app.get("/easter/{year}", response_model=EasterResponse)
async def get_easter(year: int):
    """Get the date of Easter Sunday for a year."""
    _validate_year(year)
    return EasterResponse(year=year, easter_sunday=compute_easter(year))


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
