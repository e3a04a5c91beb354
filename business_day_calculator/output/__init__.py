"""
Output formatting and export functionality.
"""

from business_day_calculator.output.formatter import ConsoleFormatter
from business_day_calculator.output.exporter import ResultExporter

__all__ = ["ConsoleFormatter", "ResultExporter"]
