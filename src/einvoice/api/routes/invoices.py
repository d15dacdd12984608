"""Invoice validation, summary and conversion endpoints."""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from ...config import get_settings
from ...core.errors import EInvoiceError
from ...core.models import Invoice
from ...core.pipeline import InvoicePipeline, extract_xml
from ...parsers import parse_reader
from ...reports import invoice_summary, validation_report
from ...utils.file_handlers import FileHandler, FileType
from ...writers import get_writer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/invoices", tags=["invoices"])


async def _read_invoice_upload(file: UploadFile) -> tuple[bytes, FileType]:
    """
    Read an upload and reject what cannot be an invoice.

    Raises:
        HTTPException: 413 when the upload is too large, 415 when it is
            neither XML nor PDF
    """
    file_handler = FileHandler(get_settings().max_file_size_bytes)
    try:
        content, file_type = await file_handler.read_upload(file)
    except ValueError as e:
        raise HTTPException(status_code=413, detail=str(e))

    if file_type is FileType.UNKNOWN:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported file type for {file.filename or 'upload'}; expected XML or PDF",
        )
    logger.info(f"Received {file.filename or 'upload'} ({file_type.value}, {len(content)} bytes)")
    return content, file_type


def _load(content: bytes, file_type: FileType) -> Invoice:
    return parse_reader(extract_xml(content, file_type))


@router.post("/validate")
async def validate_invoice(
    file: Annotated[UploadFile, File(description="Invoice XML or hybrid PDF")],
    recalculate: Annotated[bool, Query(description="Recalculate totals before validating")] = False,
) -> dict:
    """
    Validate an invoice against the EN 16931 business rules.

    Rule violations are part of a successful response; only unreadable
    input is answered with an error status.
    """
    content, file_type = await _read_invoice_upload(file)
    pipeline = InvoicePipeline()
    try:
        result = await run_in_threadpool(
            pipeline.process, content, file.filename, file_type, recalculate
        )
    except EInvoiceError as e:
        logger.warning(f"Cannot read {file.filename}: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    report = validation_report(file.filename or "", result.invoice, result.violations)
    report["processing_time_ms"] = result.processing_time_ms
    return report


@router.post("/info")
async def invoice_info(
    file: Annotated[UploadFile, File(description="Invoice XML or hybrid PDF")],
) -> dict:
    """Summarise an invoice: header, parties, lines, totals and payment details."""
    content, file_type = await _read_invoice_upload(file)
    try:
        invoice = await run_in_threadpool(_load, content, file_type)
    except EInvoiceError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return invoice_summary(invoice)


@router.post("/convert")
async def convert_invoice(
    file: Annotated[UploadFile, File(description="Invoice XML or hybrid PDF")],
) -> Response:
    """Convert an invoice (CII, UBL or hybrid PDF) into ZUGFeRD/Factur-X CII XML."""
    content, file_type = await _read_invoice_upload(file)
    writer = get_writer()
    try:
        invoice = await run_in_threadpool(_load, content, file_type)
        xml = await run_in_threadpool(writer.to_bytes, invoice)
    except EInvoiceError as e:
        raise HTTPException(status_code=422, detail=str(e))

    stem = Path(file.filename).stem if file.filename else invoice.invoice_number or "invoice"
    return Response(
        content=xml,
        media_type=writer.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{stem}.{writer.file_extension}"'},
    )
