"""
Business Day Calculator - Colombian holidays and next business day resolution.
"""

__version__ = "0.1.0"
