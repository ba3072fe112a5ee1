"""Utility modules for the capacity reservation handler."""

from .cloudwatch_logger import CloudWatchHandler, configure_logging
from .correlation import get_correlation_id, set_correlation_id
from .date_parser import parse_end_date, format_end_date

__all__ = [
    "CloudWatchHandler",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
    "parse_end_date",
    "format_end_date",
]
