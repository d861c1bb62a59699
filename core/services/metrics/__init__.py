"""
Structured logging for generation runs.
"""
from .logger import StructuredLogger, StructuredFormatter, get_logger, reset_logger

__all__ = [
    'StructuredLogger',
    'StructuredFormatter',
    'get_logger',
    'reset_logger'
]
