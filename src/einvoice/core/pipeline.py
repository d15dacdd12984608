"""Invoice processing pipeline: load, detect, extract, parse, recalculate, validate."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..config import Settings, get_settings
from ..extractors import extract_invoice_xml
from ..parsers import parse_reader
from ..rules import Severity
from ..utils.file_handlers import FileHandler, FileType, detect_file_type
from ..validators import InvoiceValidator
from .errors import EInvoiceError, ParseError, SemanticError
from .models import Invoice

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Result of running one file through the pipeline."""

    invoice: Invoice
    file_type: FileType
    violations: list[SemanticError] = field(default_factory=list)
    processing_time_ms: int = 0

    @property
    def errors(self) -> list[SemanticError]:
        return [v for v in self.violations if v.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[SemanticError]:
        return [v for v in self.violations if v.severity is Severity.WARNING]

    @property
    def is_valid(self) -> bool:
        """True when no rule with error severity failed; warnings are allowed."""
        return not self.errors


def read_source(source: str | Path | bytes) -> tuple[bytes, str | None]:
    """Return the content and, for paths, the file name of an input."""
    if isinstance(source, bytes):
        return source, None
    path = Path(source)
    try:
        return path.read_bytes(), path.name
    except OSError as e:
        raise ParseError(f"cannot read file {path}: {e}") from e


def extract_xml(content: bytes, file_type: FileType) -> bytes:
    """Return the invoice XML of an input, taking it out of a PDF container where needed."""
    if file_type is FileType.PDF:
        return extract_invoice_xml(content)
    return content


def load_invoice(source: str | Path | bytes) -> Invoice:
    """
    Read an invoice from an XML file, a hybrid PDF or raw bytes of either.

    Raises:
        ParseError: If the invoice XML cannot be read
        ExtractionError: If a PDF carries no invoice XML
    """
    content, filename = read_source(source)
    file_type = detect_file_type(content, filename)
    return parse_reader(extract_xml(content, file_type))


class InvoicePipeline:
    """
    Invoice processing pipeline.

    Orchestrates: Detection -> Extraction -> Parsing -> Recalculation -> Validation -> Result
    """

    def __init__(
        self,
        settings: Settings | None = None,
        validator: InvoiceValidator | None = None,
    ):
        self.settings = settings or get_settings()
        self.validator = validator or InvoiceValidator(self.settings)
        self.file_handler = FileHandler(self.settings.max_file_size_bytes)

    def process(
        self,
        content: bytes,
        filename: str | None = None,
        file_type: FileType | None = None,
        recalculate: bool = False,
    ) -> PipelineResult:
        """
        Process an invoice through the full pipeline.

        Args:
            content: Raw file bytes (XML or PDF)
            filename: Original filename, used as a detection hint
            file_type: Detected file type (if known)
            recalculate: Rebuild the VAT breakdown and totals before validating

        Returns:
            PipelineResult with the parsed invoice and its violations

        Raises:
            ValueError: If the content exceeds the configured size limit
            EInvoiceError: If no invoice can be read from the content
        """
        start_time = time.time()
        self.file_handler.check_size(content)

        if file_type is None:
            file_type = detect_file_type(content, filename)
        logger.info(f"Processing {filename or '<bytes>'} as {file_type.value}")

        invoice = parse_reader(extract_xml(content, file_type))
        logger.info(f"Invoice {invoice.invoice_number} uses profile {invoice.profile.label}")

        if recalculate:
            invoice.update_applicable_trade_tax()
            invoice.update_totals()

        self.validator.validate(invoice)
        processing_time_ms = int((time.time() - start_time) * 1000)

        return PipelineResult(
            invoice=invoice,
            file_type=file_type,
            violations=invoice.violations,
            processing_time_ms=processing_time_ms,
        )

    def process_file(self, path: str | Path, recalculate: bool = False) -> PipelineResult:
        content, filename = read_source(path)
        return self.process(content, filename, recalculate=recalculate)


__all__ = [
    "EInvoiceError",
    "InvoicePipeline",
    "PipelineResult",
    "extract_xml",
    "load_invoice",
    "read_source",
]
