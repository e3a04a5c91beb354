"""
Configuration loading.
"""

from business_day_calculator.config.manager import ConfigManager

__all__ = ["ConfigManager"]
