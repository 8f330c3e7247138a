"""Exception hierarchy for the report layout engine."""


class LayoutError(Exception):
    """A block cannot be placed. The document being composed is unusable."""


class BlockTooLarge(LayoutError):
    """Raised when a block is taller than one page's usable height."""

    def __init__(self, height: float, usable_height: float):
        super().__init__(
            f"Block of height {height:.1f}pt exceeds usable page height {usable_height:.1f}pt"
        )
        self.height = height
        self.usable_height = usable_height


class ColumnMismatch(LayoutError):
    """Raised when a grid row does not have one cell per declared column."""

    def __init__(self, row_index: int, cells: int, columns: int):
        super().__init__(
            f"Row {row_index} has {cells} cells but the table declares {columns} columns"
        )
        self.row_index = row_index
        self.cells = cells
        self.columns = columns


class TableTooWide(LayoutError):
    """Raised when the declared column widths exceed the usable page width."""

    def __init__(self, width: float, usable_width: float):
        super().__init__(
            f"Table width {width:.1f}pt exceeds usable page width {usable_width:.1f}pt"
        )
        self.width = width
        self.usable_width = usable_width


class MisplacedFooter(LayoutError):
    """Raised when a footer block is not the final block of a document."""


class SinkError(Exception):
    """Base exception for canvas sink failures."""


class SinkStateError(SinkError):
    """Raised when a sink is used out of order (emit before open, double open)."""


class SinkClosedError(SinkStateError):
    """Raised on emit after the sink was closed."""


class SinkWriteError(SinkError):
    """Raised when the output target fails while the sink flushes."""
