"""Draws titled tables with a filled header row and bordered data rows."""

import logging

from services.report_layout.blocks import CellGrid, ColumnSpec
from services.report_layout.errors import BlockTooLarge, ColumnMismatch, TableTooWide
from services.report_layout.fonts import FontMetrics
from services.report_layout.geometry import GeometryTracker, PageGeometry
from services.report_layout.operations import DrawRect, DrawText, SetColor, SetFont
from services.report_layout.theme import DEFAULT_THEME, FontSpec, TableTheme

logger = logging.getLogger(__name__)


def validate_table(grid: CellGrid, columns: ColumnSpec, page: PageGeometry,
                   theme: TableTheme = None):
    """Raise before anything is drawn if the table cannot be laid out.

    With a theme, also check that every reservation the renderer will make
    fits on one page: heading plus header row, and a repeated header together
    with the data row that follows it.
    """
    if columns.total_width > page.usable_width + 1e-9:
        raise TableTooWide(columns.total_width, page.usable_width)
    for i, row in enumerate(grid.rows):
        if len(row) != len(columns):
            raise ColumnMismatch(i, len(row), len(columns))
    if theme is None:
        return
    opening = theme.title_height + columns.row_height
    if opening > page.usable_height + 1e-9:
        raise BlockTooLarge(opening, page.usable_height)
    if theme.repeat_header and grid.body and 2 * columns.row_height > page.usable_height + 1e-9:
        raise BlockTooLarge(2 * columns.row_height, page.usable_height)


def _set_font(sink, font: FontSpec):
    sink.emit(SetFont(font.family, font.style, font.size))


class TableRenderer:
    def __init__(self, theme: TableTheme = None, metrics: FontMetrics = None):
        self.theme = theme or DEFAULT_THEME
        self.metrics = metrics or FontMetrics()

    def draw_table(self, title: str, grid: CellGrid, columns: ColumnSpec,
                   tracker: GeometryTracker, sink) -> float:
        """Draw one table and return the y where the next block may start.

        The heading and header row are reserved together so a heading never
        ends up alone at the bottom of a page. Data rows that start a new page
        get the header row repeated above them.
        """
        validate_table(grid, columns, tracker.page, self.theme)
        theme = self.theme
        x = tracker.page.margin_left

        top = tracker.reserve(theme.title_height + columns.row_height)
        self._draw_title(title, x, top, tracker.page.usable_width, sink)
        self._draw_header(grid.header, x, top + theme.title_height, columns, sink)

        body_started = False
        for i, row in enumerate(grid.body):
            if theme.repeat_header and not tracker.fits(columns.row_height):
                tracker.page_break()
                self._draw_header(grid.header, x, tracker.reserve(columns.row_height), columns, sink)
                body_started = False
            y = tracker.reserve(columns.row_height)
            if not body_started:
                self._start_body(sink)
                body_started = True
            striped = theme.stripe_fill is not None and i % 2 == 1
            if striped:
                sink.emit(SetColor("fill", theme.stripe_fill))
            self._draw_row(row, x, y, columns, sink, filled=striped)

        logger.debug(f"Table '{title}': {len(grid.body)} data row(s), ends at y={tracker.y:.1f}")
        return tracker.skip(theme.table_gap)

    def _draw_title(self, title, x, y, width, sink):
        theme = self.theme
        _set_font(sink, theme.title_font)
        sink.emit(SetColor("text", theme.title_color))
        sink.emit(DrawText(x, y, width, theme.title_font.line_height,
                           self.metrics.clip(title, width, theme.title_font), "L"))

    def _draw_header(self, header, x, y, columns, sink):
        theme = self.theme
        sink.emit(SetColor("fill", theme.header_fill))
        sink.emit(DrawRect(x, y, columns.total_width, columns.row_height, "F"))
        _set_font(sink, theme.header_font)
        sink.emit(SetColor("text", theme.header_text))
        self._draw_cells(header, x, y, columns, theme.header_font, sink)

    def _start_body(self, sink):
        theme = self.theme
        sink.emit(SetColor("draw", theme.border))
        _set_font(sink, theme.body_font)
        sink.emit(SetColor("text", theme.body_text))

    def _draw_row(self, row, x, y, columns, sink, filled=False):
        style = "DF" if filled else "D"
        col_x = x
        for width in columns.widths:
            sink.emit(DrawRect(col_x, y, width, columns.row_height, style))
            col_x += width
        self._draw_cells(row, x, y, columns, self.theme.body_font, sink)

    def _draw_cells(self, cells, x, y, columns, font, sink):
        pad = self.theme.cell_padding
        col_x = x
        for text, width in zip(cells, columns.widths):
            box = max(width - 2 * pad, 0)
            sink.emit(DrawText(col_x + pad, y, box, columns.row_height,
                               self.metrics.clip(text, box, font), "L"))
            col_x += width
