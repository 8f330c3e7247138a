"""Sequences title, table and footer blocks into one document."""

import logging
from typing import Iterable

from services.report_layout.blocks import Block, FooterText, Table, TitleText
from services.report_layout.errors import MisplacedFooter
from services.report_layout.fonts import FontMetrics
from services.report_layout.geometry import EPSILON, GeometryTracker, PageGeometry
from services.report_layout.operations import AddPage, DrawText, SetColor, SetFont
from services.report_layout.table_renderer import TableRenderer, validate_table
from services.report_layout.theme import TableTheme

logger = logging.getLogger(__name__)


class DocumentComposer:
    """Lays out a block sequence onto a canvas sink.

    Each ``compose`` call gets its own GeometryTracker, so a composer can be
    reused for many documents as long as calls don't overlap.
    """

    def __init__(self, page: PageGeometry = None, theme: TableTheme = None,
                 metrics: FontMetrics = None):
        self.page = page or PageGeometry()
        self.metrics = metrics or FontMetrics()
        self.renderer = TableRenderer(theme, self.metrics)

    def compose(self, blocks: Iterable[Block], sink) -> None:
        blocks = list(blocks)
        self._check(blocks)

        tracker = GeometryTracker(self.page, on_page_break=lambda _: sink.emit(AddPage()))
        sink.emit(AddPage())
        for block in blocks:
            if isinstance(block, TitleText):
                self._draw_title(block, tracker, sink)
            elif isinstance(block, Table):
                self.renderer.draw_table(block.title, block.grid, block.columns, tracker, sink)
            elif isinstance(block, FooterText):
                self._draw_footer(block, tracker, sink)
            else:
                raise TypeError(f"Unsupported block: {type(block).__name__}")

        logger.info(f"Composed {len(blocks)} block(s) across {tracker.page_index + 1} page(s)")

    def _check(self, blocks):
        """Fail before any drawing if the sequence can't produce a document."""
        for i, block in enumerate(blocks):
            if isinstance(block, FooterText) and i != len(blocks) - 1:
                raise MisplacedFooter(f"Footer at position {i} of {len(blocks)} must be the last block")
            if isinstance(block, FooterText):
                for line in block.lines:
                    if line.offset > self.page.height:
                        raise ValueError(f"Footer offset {line.offset} is outside the page")
            elif isinstance(block, Table):
                validate_table(block.grid, block.columns, self.page, self.renderer.theme)

    def _draw_title(self, block: TitleText, tracker: GeometryTracker, sink):
        y = tracker.reserve(block.height)
        width = self.page.usable_width
        sink.emit(SetFont(block.font.family, block.font.style, block.font.size))
        sink.emit(SetColor("text", block.color))
        sink.emit(DrawText(self.page.margin_left, y, width, block.font.line_height,
                           self.metrics.clip(block.text, width, block.font), block.align))

    def _draw_footer(self, block: FooterText, tracker: GeometryTracker, sink):
        # Pinned to the bottom of the last page. Content reaching into the
        # footer band pushes the footer onto a fresh page.
        if block.lines:
            band_top = self.page.height - max(line.offset for line in block.lines)
            if tracker.filled_to > band_top + EPSILON:
                tracker.page_break()
        width = self.page.usable_width
        for line in block.lines:
            sink.emit(SetFont(line.font.family, line.font.style, line.font.size))
            sink.emit(SetColor("text", line.color))
            sink.emit(DrawText(self.page.margin_left, self.page.height - line.offset, width,
                               line.font.line_height,
                               self.metrics.clip(line.text, width, line.font), "C"))
