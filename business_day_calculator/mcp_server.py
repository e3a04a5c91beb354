"""
MCP Server for the Business Day Calculator.

This module provides an MCP (Model Context Protocol) server that exposes
holiday and next business day resolution to MCP clients.

Supports two transport modes:
- stdio: For local desktop client integration
- sse: For HTTP-based integration (Docker, remote servers)
"""

import argparse
import os
from datetime import datetime
from typing import Optional

from mcp.server.fastmcp import FastMCP

from business_day_calculator.config.manager import ConfigManager
from business_day_calculator.core.holiday_calendar import (
    GREGORIAN_START_YEAR,
    compute_easter,
    list_holidays,
)
from business_day_calculator.core.resolver import BusinessDayResolver
from business_day_calculator.core.special_rules import CatalogRulesProvider
from business_day_calculator.output.exporter import ResultExporter

# Load configuration
config_manager = ConfigManager(os.environ.get("BUSINESS_DAY_CONFIG"))
config = config_manager.load_config()

MAX_YEAR = 9999


def get_resolver() -> BusinessDayResolver:
    """Create a resolver reading the catalog file as it is now."""
    catalog_path = config_manager.resolve_catalog_path(config)
    return BusinessDayResolver(CatalogRulesProvider.from_yaml(catalog_path))


def _year_error(year: int) -> Optional[dict]:
    if year < GREGORIAN_START_YEAR or year > MAX_YEAR:
        return {"error": f"Year must be between {GREGORIAN_START_YEAR} and {MAX_YEAR}"}
    return None


def next_business_day(submitted_at: str) -> dict:
    """
    Resolve the next Colombian business day for a submission timestamp.

    Submissions at or after the configured daily cutoff count for the next
    day. Colombian holidays, configured special dates and configured special
    weekdays (usually Saturday and Sunday) are skipped.

    Args:
        submitted_at: Timestamp in ISO format (e.g., "2024-12-31T15:30:00")

    Returns:
        Dictionary with:
        - next_business_day: The business day at midnight, ISO format
        - cutoff_time: The cutoff time in effect
        - after_cutoff: Whether the submission was at or after the cutoff
        - skipped_dates: Dates passed over with the reason for each

    Examples:
        >>> next_business_day("2024-03-28T09:00:00")
    """
    try:
        timestamp = datetime.fromisoformat(submitted_at)
    except ValueError as e:
        return {"error": f"Invalid timestamp. Use YYYY-MM-DDTHH:MM:SS. Details: {str(e)}"}

    year_error = _year_error(timestamp.year)
    if year_error:
        return year_error

    try:
        result = get_resolver().resolve(timestamp)
        return ResultExporter.result_to_dict(result)
    except ValueError as e:
        return {"error": str(e)}
    except Exception as e:
        return {"error": f"Calculation error: {str(e)}"}


def get_holidays(year: int) -> dict:
    """
    Get all Colombian public holidays for a year.

    Movable holidays are listed on the Monday they are observed.

    Args:
        year: Year to get holidays for (e.g., 2024)

    Returns:
        Dictionary with the year, the holiday count and the holidays
        with date, Spanish name, English name and movable flag.
    """
    year_error = _year_error(year)
    if year_error:
        return year_error

    holidays = list_holidays(year)
    return {
        "year": year,
        "holiday_count": len(holidays),
        "holidays": ResultExporter.holidays_to_list(holidays),
    }


def get_easter(year: int) -> dict:
    """
    Get the date of Easter Sunday for a year.

    Args:
        year: Year (e.g., 2024)

    Returns:
        Dictionary with the year and the Easter Sunday date.
    """
    year_error = _year_error(year)
    if year_error:
        return year_error
    return {"year": year, "easter_sunday": compute_easter(year).isoformat()}


def create_mcp_server(host: str = "127.0.0.1", port: int = 8000) -> FastMCP:
    """Create and configure the MCP server with tools."""
    mcp = FastMCP("Business Day Calculator", host=host, port=port)

    mcp.tool()(next_business_day)
    mcp.tool()(get_holidays)
    mcp.tool()(get_easter)

    return mcp


def main():
    """Run the MCP server with configurable transport.

    Transport can be set via:
    - Command line: --transport sse --port 8080
    - Environment: MCP_TRANSPORT=sse MCP_PORT=8080 MCP_HOST=0.0.0.0
    """
    parser = argparse.ArgumentParser(description="Business Day Calculator MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=os.environ.get("MCP_TRANSPORT", "stdio"),
        help="Transport mode: stdio (default) or sse for HTTP",
    )
    parser.add_argument(
        "--host",
        default=os.environ.get("MCP_HOST", "0.0.0.0"),
        help="Host to bind to (SSE mode only, default: 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("MCP_PORT", "8080")),
        help="Port to listen on (SSE mode only, default: 8080)",
    )

    args = parser.parse_args()

    mcp = create_mcp_server(host=args.host, port=args.port)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
