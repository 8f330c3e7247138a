"""Drawing operations emitted by the layout engine to a canvas sink.

Operations are immutable values. The engine never touches a PDF library
directly; it emits these in drawing order and the sink replays them.
"""

import json
from dataclasses import asdict, dataclass
from typing import ClassVar, Union

RGB = tuple[int, int, int]

COLOR_TARGETS = ("text", "fill", "draw")
RECT_STYLES = ("F", "D", "DF")


@dataclass(frozen=True)
class AddPage:
    kind: ClassVar[str] = "add_page"


@dataclass(frozen=True)
class SetFont:
    family: str
    style: str
    size: float
    kind: ClassVar[str] = "set_font"


@dataclass(frozen=True)
class SetColor:
    target: str  # text | fill | draw
    rgb: RGB
    kind: ClassVar[str] = "set_color"

    def __post_init__(self):
        if self.target not in COLOR_TARGETS:
            raise ValueError(f"Unknown color target: {self.target!r}")


@dataclass(frozen=True)
class DrawRect:
    x: float
    y: float
    w: float
    h: float
    style: str = "D"  # F = fill, D = stroke, DF = both
    kind: ClassVar[str] = "rect"

    def __post_init__(self):
        if self.style not in RECT_STYLES:
            raise ValueError(f"Unknown rectangle style: {self.style!r}")


@dataclass(frozen=True)
class DrawText:
    """Single line of text placed in the box (x, y, w, h)."""
    x: float
    y: float
    w: float
    h: float
    text: str
    align: str = "L"
    kind: ClassVar[str] = "text"


DrawingOp = Union[AddPage, SetFont, SetColor, DrawRect, DrawText]


def serialize(op: DrawingOp) -> bytes:
    """Canonical one-line JSON encoding of an operation."""
    payload = {"op": op.kind, **asdict(op)}
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8") + b"\n"
