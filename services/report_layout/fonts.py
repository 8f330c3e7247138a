"""Text measurement and clipping against the PDF core fonts."""

from fpdf import FPDF

from services.report_layout.theme import FontSpec


def pdf_text(text: str) -> str:
    """Core fonts only cover latin-1; anything else is replaced with '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


class FontMetrics:
    """Measures string widths in points using fpdf2's core font tables."""

    def __init__(self):
        self._pdf = FPDF(unit="pt")
        self._font = None

    def string_width(self, text: str, font: FontSpec) -> float:
        if font != self._font:
            self._pdf.set_font(font.family, font.style.replace("U", ""), font.size)
            self._font = font
        return self._pdf.get_string_width(pdf_text(text))

    def clip(self, text: str, max_width: float, font: FontSpec) -> str:
        """Longest prefix of ``text`` that fits ``max_width``. No wrapping."""
        text = pdf_text(text)
        if max_width <= 0:
            return ""
        if self.string_width(text, font) <= max_width:
            return text
        lo, hi = 0, len(text)
        while lo < hi:
            mid = (lo + hi + 1) // 2
            if self.string_width(text[:mid], font) <= max_width:
                lo = mid
            else:
                hi = mid - 1
        return text[:lo]
