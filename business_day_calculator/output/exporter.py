"""
Export functionality for business day results and holiday lists.
"""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from business_day_calculator.data.schemas import BusinessDayResult, Holiday


class ResultExporter:
    """Exports calculation results to JSON and CSV files."""

    def __init__(
        self,
        output_directory: str = "results",
        timestamp_format: str = "%Y%m%d_%H%M%S",
    ):
        """
        Initialize the result exporter.

        Args:
            output_directory: Directory for output files.
            timestamp_format: Format string for timestamps in filenames.
        """
        self.output_directory = output_directory
        self.timestamp_format = timestamp_format

    def _resolve_path(self, prefix: str, extension: str, output_path: Optional[str]) -> Path:
        """Use the given path, or a timestamped file in the output directory."""
        if output_path:
            file_path = Path(output_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            return file_path

        output_dir = Path(self.output_directory)
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime(self.timestamp_format)
        return output_dir / f"{prefix}_{timestamp}.{extension}"

    def export_json(
        self, result: BusinessDayResult, output_path: Optional[str] = None
    ) -> str:
        """
        Export result to JSON file.

        Args:
            result: BusinessDayResult to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("business_day", "json", output_path)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.result_to_dict(result), f, indent=2, ensure_ascii=False)

        return str(file_path)

    def export_csv(
        self, result: BusinessDayResult, output_path: Optional[str] = None
    ) -> str:
        """
        Export result to CSV file.

        Args:
            result: BusinessDayResult to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("business_day", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([
                "Submitted At",
                "Cutoff Time",
                "After Cutoff",
                "Next Business Day",
                "Skipped Days",
            ])
            writer.writerow([
                result.submitted_at.isoformat(),
                result.cutoff_time.isoformat(),
                result.after_cutoff,
                result.next_business_day.isoformat(),
                len(result.skipped_dates),
            ])

        return str(file_path)

    def export_both(self, result: BusinessDayResult) -> Tuple[str, str]:
        """
        Export result to both JSON and CSV.

        Returns:
            Tuple of (json_path, csv_path).
        """
        return self.export_json(result), self.export_csv(result)

    def export_holidays_csv(
        self, holidays: List[Holiday], output_path: Optional[str] = None
    ) -> str:
        """
        Export holidays list to CSV file.

        Args:
            holidays: List of holidays to export.
            output_path: Optional specific output path.

        Returns:
            Path to the exported file.
        """
        file_path = self._resolve_path("holidays", "csv", output_path)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Date", "Name", "Name English", "Movable"])
            for holiday in holidays:
                writer.writerow([
                    holiday.holiday_date.isoformat(),
                    holiday.name,
                    holiday.name_english or "",
                    holiday.movable,
                ])

        return str(file_path)

    @staticmethod
    def result_to_dict(result: BusinessDayResult) -> dict:
        """
        Convert BusinessDayResult to a JSON-serializable dictionary.

        Args:
            result: BusinessDayResult to convert.

        Returns:
            Dictionary representation.
        """
        return {
            "submitted_at": result.submitted_at.isoformat(),
            "next_business_day": result.next_business_day.isoformat(),
            "cutoff_time": result.cutoff_time.isoformat(),
            "after_cutoff": result.after_cutoff,
            "skipped_dates": [
                {"date": s.skipped_date.isoformat(), "reason": s.reason.value}
                for s in result.skipped_dates
            ],
            "metadata": {
                "calculation_timestamp": result.calculation_timestamp.isoformat(),
            },
        }

    @staticmethod
    def holidays_to_list(holidays: List[Holiday]) -> List[dict]:
        """Convert holidays to JSON-serializable dictionaries."""
        return [
            {
                "date": h.holiday_date.isoformat(),
                "name": h.name,
                "name_english": h.name_english,
                "movable": h.movable,
            }
            for h in holidays
        ]
