"""Utility modules for logging and debugging."""

from .logger import (
    setup_logger,
    get_logger,
    DEBUG_MODE,
    log_text_result,
    log_field_extraction,
    log_correction,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'DEBUG_MODE',
    'log_text_result',
    'log_field_extraction',
    'log_correction',
]
