"""Field extraction logic over the linear text of a PDF."""

from .deterministic_extractor import (
    DeterministicExtractor,
    ExtractionRule,
    LinkedRule,
    extract,
)

__all__ = ['DeterministicExtractor', 'ExtractionRule', 'LinkedRule', 'extract']
