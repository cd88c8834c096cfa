"""Utility modules."""

from .logging import setup_logging, get_logger
from .performance import PerformanceMonitor, format_timings
from .validation import (
    validate_url,
    validate_transition,
    validate_output_path,
    sanitize_filename,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
    "format_timings",
    "validate_url",
    "validate_transition",
    "validate_output_path",
    "sanitize_filename",
]
