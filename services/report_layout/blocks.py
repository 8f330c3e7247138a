"""Structural blocks of a report: titles, tables and footers."""

from dataclasses import dataclass, field
from typing import Iterable, Union

from services.report_layout.theme import BLACK, NAVY, FontSpec


@dataclass(frozen=True)
class CellGrid:
    """Rows of cell text. Row 0 is the header row."""
    rows: tuple

    def __post_init__(self):
        if not self.rows:
            raise ValueError("A cell grid needs at least a header row")

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable]) -> "CellGrid":
        return cls(tuple(tuple(str(cell) for cell in row) for row in rows))

    @property
    def header(self) -> tuple:
        return self.rows[0]

    @property
    def body(self) -> tuple:
        return self.rows[1:]

    def __len__(self):
        return len(self.rows)


@dataclass(frozen=True)
class ColumnSpec:
    widths: tuple
    row_height: float

    def __post_init__(self):
        if not self.widths:
            raise ValueError("A column spec needs at least one column")
        if any(w <= 0 for w in self.widths):
            raise ValueError(f"Column widths must be positive: {self.widths}")
        if self.row_height <= 0:
            raise ValueError(f"Row height must be positive: {self.row_height}")

    @property
    def total_width(self) -> float:
        return sum(self.widths)

    def __len__(self):
        return len(self.widths)


@dataclass(frozen=True)
class TitleText:
    text: str
    font: FontSpec = FontSpec(style="U", size=24)
    color: tuple = NAVY
    align: str = "C"
    space_after: float = 12.0

    @property
    def height(self) -> float:
        return self.font.line_height + self.space_after


@dataclass(frozen=True)
class Table:
    title: str
    grid: CellGrid
    columns: ColumnSpec


@dataclass(frozen=True)
class FooterLine:
    """One line drawn at ``page.height - offset``.

    The offset is measured to the top of the line, so it must leave room for
    the line itself above the bottom edge.
    """
    text: str
    offset: float
    font: FontSpec = FontSpec(size=10)
    color: tuple = BLACK

    def __post_init__(self):
        if self.offset <= 0:
            raise ValueError(f"Footer offset must be positive: {self.offset}")
        if self.offset < self.font.line_height:
            raise ValueError(
                f"Footer offset {self.offset} is less than its line height {self.font.line_height}"
            )


@dataclass(frozen=True)
class FooterText:
    lines: tuple = field(default_factory=tuple)


Block = Union[TitleText, Table, FooterText]
