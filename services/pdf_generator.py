"""Generate the underwriting PDF report using fpdf2."""

import io
import logging
from datetime import date

from config import REPORT_MARGIN, REPORT_STREAM_CHUNK_SIZE
from models.property_record import ReportRecord
from services.report_assembler import REPORT_TITLE, to_blocks
from services.report_layout.composer import DocumentComposer
from services.report_layout.geometry import PageGeometry
from services.report_layout.sink import PdfCanvasSink

logger = logging.getLogger(__name__)

PAGE = PageGeometry.with_margin(REPORT_MARGIN)


def generate_pdf(record: ReportRecord, generated_on: date = None) -> bytes:
    """Render the full report into memory.

    Raises LayoutError or SinkWriteError; in that case nothing usable was
    produced and the caller must not send any bytes.
    """
    blocks = to_blocks(record, generated_on)
    buffer = io.BytesIO()
    sink = PdfCanvasSink(PAGE, title=REPORT_TITLE, author="PropIntel AI")
    with sink.open(buffer):
        DocumentComposer(PAGE).compose(blocks, sink)
    data = buffer.getvalue()
    logger.info(f"PDF report generated for '{record.address}': {len(data)} bytes")
    return data


def iter_chunks(data: bytes, chunk_size: int = REPORT_STREAM_CHUNK_SIZE):
    """Yield ``data`` in fixed-size chunks for a streaming response."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    view = memoryview(data)
    for start in range(0, len(view), chunk_size):
        yield bytes(view[start:start + chunk_size])
