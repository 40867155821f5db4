"""Full extraction pipeline: PDF text, rule-based extraction, correction session."""

import time
from pathlib import Path
from typing import Any, Dict, Optional

from copade.correction import CorrectionSession, tokenize
from copade.extractors import DeterministicExtractor
from copade.pdf import PDFTextClient, PDFTextResult
from copade.schema import FieldRecord
from copade.utils import setup_logger, log_text_result


class ExtractionResult:
    """Result of the extraction pipeline."""

    def __init__(
        self,
        record: FieldRecord,
        text_result: PDFTextResult,
        processing_time: float
    ):
        """
        Initialize extraction result.

        Args:
            record: FieldRecord produced by the extractor
            text_result: Text the record was extracted from
            processing_time: Total processing time in seconds
        """
        self.record = record
        self.text_result = text_result
        self.processing_time = processing_time

    @property
    def full_text(self) -> str:
        return self.text_result.full_text

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'extracted_data': self.record.to_json_dict(),
            'metadata': {
                'page_count': self.text_result.page_count,
                'pages_processed': self.text_result.pages_processed,
                'text_length': len(self.text_result.full_text),
                'token_count': len(tokenize(self.text_result.full_text)),
                'fields_found': len(self.record.found_fields()),
                'has_discount': self.record.descuento is not None,
                'processing_time_seconds': self.processing_time,
                'warnings': self.text_result.warnings,
            }
        }


class ExtractionPipeline:
    """Full extraction pipeline orchestrating all steps."""

    def __init__(self, max_pages: Optional[int] = None):
        """
        Initialize extraction pipeline.

        Args:
            max_pages: Leading pages to read from each PDF. If None, uses
                       the PDF_MAX_PAGES env var, else 2.
        """
        self.text_client = PDFTextClient(max_pages=max_pages)

    def extract(self, pdf_path: str) -> ExtractionResult:
        """
        Run the full extraction pipeline on a PDF file.

        Pipeline steps:
        1. PDF text layer (first pages)
        2. Rule-based extraction
        3. Structured output, ready for manual correction

        Args:
            pdf_path: Path to the PDF file

        Returns:
            ExtractionResult with extracted data and metadata
        """
        start_time = time.time()
        logger = setup_logger()
        logger.info("=" * 60)
        logger.info(f"EXTRACTION PIPELINE: {Path(pdf_path).name}")
        logger.info("=" * 60)

        logger.info("Step 1: Reading PDF text...")
        text_result = self.text_client.extract_text(pdf_path)
        return self._run(text_result, start_time)

    def extract_from_bytes(self, pdf_bytes: bytes) -> ExtractionResult:
        """
        Extract from PDF bytes (for use with uploaded files).

        Args:
            pdf_bytes: PDF file bytes

        Returns:
            ExtractionResult with extracted data and metadata
        """
        start_time = time.time()
        logger = setup_logger()
        logger.info("=" * 60)
        logger.info("EXTRACTION PIPELINE: (from bytes)")
        logger.info("=" * 60)

        logger.info("Step 1: Reading PDF text...")
        text_result = self.text_client.extract_text_from_bytes(pdf_bytes)
        return self._run(text_result, start_time)

    def extract_from_text(self, text: str) -> ExtractionResult:
        """
        Extract from text produced by another text-layer extractor.

        Args:
            text: Concatenated page text

        Returns:
            ExtractionResult with extracted data and metadata
        """
        start_time = time.time()
        text_result = PDFTextResult(
            full_text=text or "",
            page_count=0,
            pages_processed=0,
            warnings=[]
        )
        return self._run(text_result, start_time)

    def start_correction(self, result: ExtractionResult) -> CorrectionSession:
        """Open a manual correction session over an extraction result."""
        return CorrectionSession(result.record, result.full_text)

    def _run(self, text_result: PDFTextResult, start_time: float) -> ExtractionResult:
        logger = setup_logger()
        log_text_result(logger, text_result, debug=True)

        logger.info("Step 2: Rule-based extraction...")
        record = DeterministicExtractor(text_result.full_text).extract_all_fields()

        processing_time = time.time() - start_time

        logger.info("=" * 60)
        logger.info("EXTRACTION COMPLETE")
        logger.info("=" * 60)
        logger.info(f"Processing time: {processing_time:.2f}s")
        logger.info(f"Fields found: {len(record.found_fields())}")
        logger.info("=" * 60)

        return ExtractionResult(
            record=record,
            text_result=text_result,
            processing_time=processing_time
        )
