"""Maps a ReportRecord onto the generic blocks the layout engine draws."""

from datetime import date

from models.property_record import ReportRecord
from services.report_layout.blocks import (
    Block, CellGrid, ColumnSpec, FooterLine, FooterText, Table, TitleText,
)
from services.report_layout.theme import GRAY, NAVY, FontSpec

REPORT_TITLE = "PropIntel AI - Underwriting Report"
TAGLINE = "PropIntel AI - Intelligent Real Estate Underwriting Platform"

COLUMNS = ColumnSpec(widths=(170, 230), row_height=24)
HEADER = ("Field", "Value")


def _plain(val) -> str:
    """Number without a trailing '.0'; at most two decimals."""
    if float(val).is_integer():
        return str(int(val))
    return f"{val:.2f}".rstrip("0").rstrip(".")


def _cur(val) -> str:
    if float(val).is_integer():
        return f"${val:,.0f}"
    return f"${val:,.2f}"


def _pct(val) -> str:
    return f"{_plain(val)}%"


def _table(title: str, rows: list) -> Table:
    return Table(title, CellGrid.from_rows([HEADER, *rows]), COLUMNS)


def property_details(record: ReportRecord) -> Table:
    return _table("Property Details", [
        ("Address", record.address),
        ("Type", record.property_type.value),
        ("Year Built", record.year_built),
        ("Sq. Ft.", record.sq_ft),
        ("Units", record.units),
        ("Estimated Value", _cur(record.value)),
    ])


def financial_estimates(record: ReportRecord) -> Table:
    return _table("Financial Estimates", [
        ("Gross Rent", _cur(record.gross_rent)),
        ("Vacancy", _pct(record.vacancy)),
        ("Operating Expenses", _cur(record.expenses)),
        ("NOI", _cur(record.noi)),
        ("Cap Rate", _pct(record.cap_rate)),
        ("DSCR", _plain(record.dscr)),
    ])


def demographics_and_risk(record: ReportRecord) -> Table:
    return _table("Demographics & Risk", [
        ("Crime Score", f"{_plain(record.crime_score)}/10"),
        ("Walk Score", f"{_plain(record.walk_score)}/100"),
        ("Median Income", _cur(record.median_income)),
        ("Population Density", f"{record.population_density} /sq mi"),
        ("School Rating", f"{_plain(record.school_rating)}/10"),
    ])


def to_blocks(record: ReportRecord, generated_on: date = None) -> list[Block]:
    """Title, the three report tables, and the footer. No I/O."""
    generated_on = generated_on or date.today()
    footer = FooterText((
        FooterLine(f"Risk Assessment: {record.risk_label}", 52, FontSpec(style="B", size=10), NAVY),
        FooterLine(TAGLINE, 40, FontSpec(size=10), NAVY),
        FooterLine(f"Generated: {generated_on.strftime('%m/%d/%Y')}", 28, FontSpec(size=9), GRAY),
    ))
    return [
        TitleText(REPORT_TITLE),
        property_details(record),
        financial_estimates(record),
        demographics_and_risk(record),
        footer,
    ]
