"""Fonts, colors and spacing shared by the layout engine."""

from dataclasses import dataclass
from typing import Optional

# Colors
NAVY = (30, 58, 138)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GRAY = (128, 128, 128)
LIGHT_GRAY = (242, 242, 242)


@dataclass(frozen=True)
class FontSpec:
    family: str = "Helvetica"
    style: str = ""
    size: float = 12.0

    @property
    def line_height(self) -> float:
        return self.size * 1.25


@dataclass(frozen=True)
class TableTheme:
    """Styling for titled tables.

    ``title_height`` covers the section heading plus the gap below it, so a
    table's heading and header row are reserved together as
    ``title_height + row_height``.
    """
    title_font: FontSpec = FontSpec(size=16)
    title_color: tuple = NAVY
    title_height: float = 28.0
    header_font: FontSpec = FontSpec(style="B", size=12)
    header_fill: tuple = NAVY
    header_text: tuple = WHITE
    body_font: FontSpec = FontSpec(size=12)
    body_text: tuple = BLACK
    border: tuple = BLACK
    stripe_fill: Optional[tuple] = None
    cell_padding: float = 8.0
    table_gap: float = 10.0
    repeat_header: bool = True


DEFAULT_THEME = TableTheme()
