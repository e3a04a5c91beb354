"""
CLI interface for the business day calculator.
"""

import logging
import os
import sys
from datetime import date, datetime
from typing import Optional

import click

from business_day_calculator import __version__
from business_day_calculator.config.manager import ConfigManager
from business_day_calculator.core.holiday_calendar import compute_easter, list_holidays
from business_day_calculator.core.resolver import BusinessDayResolver
from business_day_calculator.core.special_rules import CatalogRulesProvider
from business_day_calculator.data.schemas import Config
from business_day_calculator.output.exporter import ResultExporter
from business_day_calculator.output.formatter import ConsoleFormatter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

TIMESTAMP_FORMATS = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%d.%m.%Y %H:%M:%S",
    "%d.%m.%Y %H:%M",
    "%Y-%m-%d",
]


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp string in various formats."""
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    raise ValueError(
        f"Invalid timestamp: {value}. Use YYYY-MM-DD HH:MM[:SS] or DD.MM.YYYY HH:MM[:SS]"
    )


def load_config(config_path: Optional[str]) -> tuple:
    """Load configuration and apply its logging level."""
    config_manager = ConfigManager(config_path)
    cfg = config_manager.load_config()
    logging.getLogger().setLevel(cfg.log_level)
    return config_manager, cfg


def build_resolver(
    config_manager: ConfigManager, cfg: Config, catalog: Optional[str] = None
) -> BusinessDayResolver:
    """Create a resolver backed by the configured catalog file."""
    catalog_path = catalog or config_manager.resolve_catalog_path(cfg)
    return BusinessDayResolver(CatalogRulesProvider.from_yaml(catalog_path))


@click.group()
@click.version_option(version=__version__, prog_name="business-day")
def main():
    """Business Day Calculator - Colombian holidays and next business day."""
    pass


@main.command(name="next")
@click.option(
    "--at", "-t", "submitted_at",
    default=None,
    help="Submission timestamp (YYYY-MM-DD HH:MM[:SS]); default: now",
)
@click.option(
    "--catalog",
    type=click.Path(exists=True),
    help="Path to the special rules catalog (overrides config)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output file path (optional)",
)
@click.option(
    "--format", "-f",
    type=click.Choice(["json", "csv", "both", "console"]),
    default=None,
    help="Output format (default: configured output format with --output, else console)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def next_business_day(submitted_at, catalog, output, format, config, verbose):
    """Resolve the next business day for a submission timestamp."""
    formatter = ConsoleFormatter()

    try:
        config_manager, cfg = load_config(config)
        if verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        timestamp = parse_timestamp(submitted_at) if submitted_at else datetime.now()
        resolver = build_resolver(config_manager, cfg, catalog)
        result = resolver.resolve(timestamp)

        if format is None:
            format = cfg.output_format if output else "console"

        if format in ("console", "both"):
            formatter.print_result(result)

        if format in ("json", "csv", "both"):
            exporter = ResultExporter(output_directory=cfg.output_directory)

            if format == "json":
                path = exporter.export_json(result, output)
                formatter.print_success(f"Result saved to {path}")
            elif format == "csv":
                path = exporter.export_csv(result, output)
                formatter.print_success(f"Result saved to {path}")
            else:
                json_path, csv_path = exporter.export_both(result)
                formatter.print_success(f"Results saved to:\n  - {json_path}\n  - {csv_path}")

    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error while resolving business day")
        formatter.print_error(f"Unexpected error: {e}")
        sys.exit(1)


@main.command()
@click.option(
    "--year", "-y",
    type=int,
    default=None,
    help="Year to show holidays for (default: current year)",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Output CSV file path (optional)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def holidays(year, output, config):
    """List Colombian holidays for a year."""
    formatter = ConsoleFormatter()

    try:
        if year is None:
            year = date.today().year

        _, cfg = load_config(config)
        holiday_list = list_holidays(year)

        formatter.print_holidays_for_year(year, holiday_list)

        if output:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            path = exporter.export_holidays_csv(holiday_list, output)
            formatter.print_success(f"Holidays saved to {path}")

    except Exception as e:
        formatter.print_error(f"Error: {e}")
        sys.exit(1)


@main.command()
@click.option(
    "--year", "-y",
    type=int,
    default=None,
    help="Year to compute Easter for (default: current year)",
)
def easter(year):
    """Show the date of Easter Sunday."""
    formatter = ConsoleFormatter()

    try:
        if year is None:
            year = date.today().year
        formatter.print_easter(year, compute_easter(year))
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option(
    "--host", "-h",
    default=None,
    help="Host to bind to (default: from config or 0.0.0.0)",
)
@click.option(
    "--port", "-p",
    type=int,
    default=None,
    help="Port to bind to (default: from config or 8000)",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
def serve(host, port, config):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn

        _, cfg = load_config(config)
        if config:
            os.environ["BUSINESS_DAY_CONFIG"] = config

        api_host = host or cfg.api_host
        api_port = port or cfg.api_port

        formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
        formatter.console.print("Press Ctrl+C to stop")
        formatter.console.print()

        uvicorn.run(
            "business_day_calculator.api:app",
            host=api_host,
            port=api_port,
            reload=False,
        )

    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)
    except Exception as e:
        formatter.print_error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
