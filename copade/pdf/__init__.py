"""PDF module for reading the text layer of the first pages of a document."""

from .text_client import PDFTextClient, PDFTextResult, NoExtractableTextError

__all__ = ['PDFTextClient', 'PDFTextResult', 'NoExtractableTextError']
