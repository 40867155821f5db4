"""Pipeline module for orchestrating the full extraction flow."""

from .extraction_pipeline import ExtractionPipeline, ExtractionResult

__all__ = ['ExtractionPipeline', 'ExtractionResult']
