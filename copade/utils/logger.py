"""Logging utilities for extraction and correction debugging."""

import os
import logging
from typing import Optional, Any

# Global debug mode flag
DEBUG_MODE = os.getenv("EXTRACTION_DEBUG", "false").lower() == "true"

LOGGER_NAME = "copade_extractor"

# Logger instance
_logger: Optional[logging.Logger] = None


def setup_logger(level: int = logging.INFO, debug_mode: bool = None) -> logging.Logger:
    """
    Set up logger for the extraction pipeline.

    Args:
        level: Logging level (default: INFO)
        debug_mode: Override debug mode (default: from env var)

    Returns:
        Configured logger instance
    """
    global _logger, DEBUG_MODE

    if debug_mode is not None:
        DEBUG_MODE = debug_mode

    if _logger is None:
        _logger = logging.getLogger(LOGGER_NAME)

        handler = logging.StreamHandler()

        if DEBUG_MODE:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
        else:
            formatter = logging.Formatter(
                '%(levelname)s - %(message)s'
            )

        handler.setFormatter(formatter)
        _logger.addHandler(handler)

        # Prevent duplicate logs
        _logger.propagate = False

    effective = logging.DEBUG if DEBUG_MODE else level
    _logger.setLevel(effective)
    for handler in _logger.handlers:
        handler.setLevel(effective)

    return _logger


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    if _logger is None:
        return setup_logger()
    return _logger


def log_text_result(logger: logging.Logger, text_result: Any, debug: bool = False):
    """
    Log PDF text extraction results.

    Args:
        logger: Logger instance
        text_result: PDFTextResult object
        debug: If True, log the start of the text
    """
    logger.info("=" * 60)
    logger.info("PDF TEXT EXTRACTION COMPLETE")
    logger.info("=" * 60)
    logger.info(f"Pages processed: {text_result.pages_processed} of {text_result.page_count}")
    logger.info(f"Text length: {len(text_result.full_text)} characters")

    if text_result.warnings:
        logger.warning(f"PDF warnings: {text_result.warnings}")

    if debug and DEBUG_MODE:
        logger.debug("=" * 60)
        logger.debug("RAW PDF TEXT:")
        logger.debug("=" * 60)
        logger.debug(text_result.full_text[:2000])
        if len(text_result.full_text) > 2000:
            logger.debug(f"... (truncated, total length: {len(text_result.full_text)})")


def log_field_extraction(logger: logging.Logger, field_name: str, value: Any, source: str = "deterministic"):
    """
    Log field extraction result.

    Args:
        logger: Logger instance
        field_name: Name of the field
        value: Extracted value
        source: Source of the value (deterministic/manual)
    """
    if value:
        logger.info(f"  ✓ {field_name:25s}: {value} ({source})")
    else:
        logger.warning(f"  ✗ {field_name:25s}: None ({source})")


def log_correction(logger: logging.Logger, key: str, old_value: Any, new_value: Any):
    """
    Log a manual correction committed from token selection.

    Args:
        logger: Logger instance
        key: Field key, ``descuento.<subkey>`` for discount values
        old_value: Value before the correction
        new_value: Committed value
    """
    logger.info(f"  ↻ {key:25s}: {old_value} → {new_value}")
