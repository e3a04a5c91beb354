"""
Console output formatting using Rich.
"""

from datetime import date
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from business_day_calculator.data.schemas import BusinessDayResult, Holiday, SkipReason

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

SKIP_REASON_LABELS = {
    SkipReason.AFTER_CUTOFF: "After cutoff time",
    SkipReason.HOLIDAY: "Holiday",
    SkipReason.SPECIAL_DATE: "Special date",
    SkipReason.SPECIAL_WEEKDAY: "Special weekday",
}


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Console = None):
        """Initialize the console formatter."""
        self.console = console or Console()

    def print_result(self, result: BusinessDayResult) -> None:
        """
        Print a next business day resolution.

        Args:
            result: BusinessDayResult to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Next Business Day[/bold blue]")
        self.console.print()

        summary_table = Table(show_header=False, box=None)
        summary_table.add_column("Label", style="cyan", width=20)
        summary_table.add_column("Value", style="white")

        summary_table.add_row(
            "Submitted:",
            result.submitted_at.strftime("%d.%m.%Y %H:%M:%S"),
        )
        summary_table.add_row("Cutoff Time:", result.cutoff_time.strftime("%H:%M:%S"))
        summary_table.add_row("After Cutoff:", "yes" if result.after_cutoff else "no")
        summary_table.add_row(
            Text("Business Day:", style="bold green"),
            Text(
                f"{result.next_business_day.strftime('%d.%m.%Y %H:%M')} "
                f"({WEEKDAY_NAMES[result.next_business_day.weekday()]})",
                style="bold green",
            ),
        )

        self.console.print(Panel(summary_table, title="[bold]Resolution[/bold]"))

        if result.skipped_dates:
            skipped_table = Table(title="[bold]Skipped Dates[/bold]")
            skipped_table.add_column("Date", style="cyan", width=12)
            skipped_table.add_column("Day", style="dim", width=12)
            skipped_table.add_column("Reason", style="white")

            for skipped in result.skipped_dates:
                skipped_table.add_row(
                    skipped.skipped_date.strftime("%d.%m.%Y"),
                    WEEKDAY_NAMES[skipped.skipped_date.weekday()],
                    SKIP_REASON_LABELS[skipped.reason],
                )

            self.console.print(skipped_table)

        self.console.print()

    def print_holidays(self, holidays: List[Holiday]) -> None:
        """
        Print a table of holidays.

        Args:
            holidays: List of holidays to display.
        """
        holiday_table = Table(title="[bold]Holidays[/bold]")
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Day", style="dim", width=12)
        holiday_table.add_column("Name", style="white")
        holiday_table.add_column("English", style="dim")
        holiday_table.add_column("Movable", style="dim", justify="center")

        for holiday in holidays:
            holiday_table.add_row(
                holiday.holiday_date.strftime("%d.%m.%Y"),
                WEEKDAY_NAMES[holiday.holiday_date.weekday()],
                holiday.name,
                holiday.name_english or "",
                "x" if holiday.movable else "",
            )

        self.console.print(holiday_table)

    def print_holidays_for_year(self, year: int, holidays: List[Holiday]) -> None:
        """Print all holidays for a year."""
        self.console.print()
        self.console.rule(f"[bold blue]Colombian Holidays {year}[/bold blue]")
        self.console.print()

        if holidays:
            self.print_holidays(holidays)
        else:
            self.console.print("[dim]No holidays found for this year.[/dim]")

        self.console.print()

    def print_easter(self, year: int, easter: date) -> None:
        """Print the Easter Sunday date for a year."""
        self.console.print(
            f"Easter Sunday {year}: [bold cyan]{easter.strftime('%d.%m.%Y')}[/bold cyan] "
            f"({easter.isoformat()})"
        )

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_success(self, message: str) -> None:
        """
        Print a success message.

        Args:
            message: Success message to display.
        """
        self.console.print(f"[bold green]Success:[/bold green] {message}")
