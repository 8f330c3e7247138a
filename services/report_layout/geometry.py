"""Page geometry and the vertical cursor used while laying out a document.

The tracker only allocates vertical space. It never draws; whoever owns the
sink is told about page breaks through the ``on_page_break`` callback.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from services.report_layout.errors import BlockTooLarge

logger = logging.getLogger(__name__)

EPSILON = 1e-9


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margins in points (US Letter by default)."""
    width: float = 612.0
    height: float = 792.0
    margin_top: float = 40.0
    margin_bottom: float = 40.0
    margin_left: float = 40.0
    margin_right: float = 40.0

    def __post_init__(self):
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise ValueError("Page margins leave no usable area")

    @classmethod
    def with_margin(cls, margin: float, width: float = 612.0, height: float = 792.0) -> "PageGeometry":
        return cls(width, height, margin, margin, margin, margin)

    @property
    def usable_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def usable_height(self) -> float:
        return self.height - self.margin_top - self.margin_bottom

    @property
    def bottom(self) -> float:
        return self.height - self.margin_bottom


@dataclass
class Cursor:
    x: float
    y: float
    page_index: int = 0


class GeometryTracker:
    """Owns the cursor for one document render."""

    def __init__(self, page: PageGeometry,
                 on_page_break: Optional[Callable[[int], None]] = None):
        self.page = page
        self._on_page_break = on_page_break
        self._cursor = Cursor(page.margin_left, page.margin_top, 0)
        self._filled_to = page.margin_top

    @property
    def cursor(self) -> Cursor:
        """Snapshot of the cursor; mutating it does not move the tracker."""
        return replace(self._cursor)

    @property
    def y(self) -> float:
        return self._cursor.y

    @property
    def page_index(self) -> int:
        return self._cursor.page_index

    @property
    def filled_to(self) -> float:
        """Bottom of the last reserved block on the current page, ignoring gaps."""
        return self._filled_to

    @property
    def remaining(self) -> float:
        return self.page.bottom - self._cursor.y

    def fits(self, height: float) -> bool:
        return height <= self.remaining + EPSILON

    def page_break(self):
        self._cursor.page_index += 1
        self._cursor.y = self.page.margin_top
        self._filled_to = self.page.margin_top
        logger.debug(f"Page break -> page {self._cursor.page_index + 1}")
        if self._on_page_break is not None:
            self._on_page_break(self._cursor.page_index)

    def reserve(self, height: float) -> float:
        """Allocate ``height`` points and return the top y to draw at."""
        if height <= 0:
            raise ValueError(f"Reserved height must be positive, got {height}")
        if height > self.page.usable_height + EPSILON:
            raise BlockTooLarge(height, self.page.usable_height)
        if not self.fits(height):
            self.page_break()
        top = self._cursor.y
        self._cursor.y = top + height
        self._filled_to = self._cursor.y
        return top

    def skip(self, gap: float) -> float:
        """Advance by trailing whitespace; the gap collapses at the page bottom."""
        if gap < 0:
            raise ValueError(f"Gap must not be negative, got {gap}")
        self._cursor.y = min(self._cursor.y + gap, self.page.bottom)
        return self._cursor.y
