"""Canvas sinks: ordered consumers of drawing operations.

A sink is opened once on an output target, receives operations through
``emit`` and is closed exactly once. Use it as a context manager so ``close``
runs on every exit path; if the body raises, the document is discarded.

    sink = PdfCanvasSink(page)
    with sink.open(buffer):
        composer.compose(blocks, sink)
"""

import logging
from collections import deque

from fpdf import FPDF

from services.report_layout.errors import SinkClosedError, SinkStateError, SinkWriteError
from services.report_layout.fonts import pdf_text
from services.report_layout.geometry import PageGeometry
from services.report_layout.operations import DrawingOp, serialize

logger = logging.getLogger(__name__)

NEW, OPEN, CLOSED = "new", "open", "closed"


class CanvasSink:
    """Buffers operations in FIFO order and replays them through ``_apply``."""

    flush_threshold = 64

    def __init__(self):
        self._state = NEW
        self._target = None
        self._pending = deque()
        self.emitted = 0
        self.completed = False

    @property
    def closed(self) -> bool:
        return self._state == CLOSED

    def open(self, target) -> "CanvasSink":
        if self._state != NEW:
            raise SinkStateError(f"Sink can only be opened once (state: {self._state})")
        self._target = target
        self._state = OPEN
        return self

    def emit(self, op: DrawingOp):
        if self._state == CLOSED:
            raise SinkClosedError(f"emit({op.kind}) after close")
        if self._state != OPEN:
            raise SinkStateError(f"emit({op.kind}) before open")
        self._pending.append(op)
        self.emitted += 1
        if len(self._pending) >= self.flush_threshold:
            self.flush()

    def flush(self):
        if self._state != OPEN:
            raise SinkStateError(f"flush on a sink that is not open (state: {self._state})")
        while self._pending:
            op = self._pending.popleft()
            try:
                self._apply(op)
            except OSError as e:
                raise SinkWriteError(f"Failed writing {op.kind} to output") from e

    def close(self, discard: bool = False):
        """Flush and finalize the document, or drop it when ``discard`` is set."""
        if self._state == CLOSED:
            return
        if self._state == NEW:
            self._state = CLOSED
            return
        try:
            if discard:
                self._pending.clear()
            else:
                self.flush()
                try:
                    self._finalize(self._target)
                except OSError as e:
                    raise SinkWriteError("Failed writing document to output") from e
                self.completed = True
        finally:
            self._state = CLOSED
            self._target = None

    def __enter__(self):
        if self._state != OPEN:
            raise SinkStateError("Sink must be opened before entering its context")
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.warning(f"Discarding partial document after {exc_type.__name__}")
            self.close(discard=True)
        else:
            self.close()
        return False

    def _apply(self, op: DrawingOp):
        raise NotImplementedError

    def _finalize(self, target):
        pass


class OperationLogSink(CanvasSink):
    """Writes each operation to the target as one canonical JSON line."""

    def _apply(self, op: DrawingOp):
        self._target.write(serialize(op))


class PdfCanvasSink(CanvasSink):
    """Replays operations onto an fpdf2 document.

    The PDF bytes are written to the target only when the sink closes
    normally, so a discarded render leaves the target untouched.
    """

    def __init__(self, page: PageGeometry = None, title: str = "", author: str = ""):
        super().__init__()
        self.page = page or PageGeometry()
        self._pdf = FPDF(unit="pt", format=(self.page.width, self.page.height))
        self._pdf.set_auto_page_break(False)
        self._pdf.set_margins(self.page.margin_left, self.page.margin_top, self.page.margin_right)
        self._pdf.c_margin = 0
        if title:
            self._pdf.set_title(pdf_text(title))
        if author:
            self._pdf.set_author(pdf_text(author))
        self._handlers = {
            "add_page": self._add_page,
            "set_font": self._set_font,
            "set_color": self._set_color,
            "rect": self._rect,
            "text": self._text,
        }

    @property
    def pages(self) -> int:
        return self._pdf.page_no()

    def _apply(self, op: DrawingOp):
        self._handlers[op.kind](op)

    def _add_page(self, op):
        self._pdf.add_page()

    def _set_font(self, op):
        self._pdf.set_font(op.family, op.style, op.size)

    def _set_color(self, op):
        if op.target == "text":
            self._pdf.set_text_color(*op.rgb)
        elif op.target == "fill":
            self._pdf.set_fill_color(*op.rgb)
        else:
            self._pdf.set_draw_color(*op.rgb)

    def _rect(self, op):
        self._pdf.rect(op.x, op.y, op.w, op.h, style=op.style)

    def _text(self, op):
        self._pdf.set_xy(op.x, op.y)
        self._pdf.cell(op.w, op.h, pdf_text(op.text), align=op.align)

    def _finalize(self, target):
        data = bytes(self._pdf.output())
        target.write(data)
        logger.info(f"PDF finalized: {self.pages} page(s), {len(data)} bytes")
