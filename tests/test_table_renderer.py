"""Tests for titled table drawing."""

import pytest

from services.report_layout.blocks import CellGrid, ColumnSpec
from services.report_layout.errors import BlockTooLarge, ColumnMismatch, TableTooWide
from services.report_layout.geometry import GeometryTracker, PageGeometry
from services.report_layout.operations import AddPage, DrawRect, DrawText, SetColor
from services.report_layout.table_renderer import TableRenderer
from services.report_layout.theme import DEFAULT_THEME, LIGHT_GRAY, NAVY, TableTheme

COLUMNS = ColumnSpec((170, 230), 24)


@pytest.fixture
def renderer(metrics):
    return TableRenderer(metrics=metrics)


def _grid(*rows):
    return CellGrid.from_rows([("Field", "Value"), *rows])


def test_column_mismatch_draws_nothing(renderer, tracker, recorder):
    grid = _grid(("Address", "123 Main St"), ("Units",))

    with pytest.raises(ColumnMismatch) as exc_info:
        renderer.draw_table("Details", grid, COLUMNS, tracker, recorder)

    assert exc_info.value.row_index == 2
    assert recorder.ops == []
    assert tracker.y == 40.0
    assert tracker.page_index == 0


def test_header_mismatch_is_caught_too(renderer, tracker, recorder):
    grid = CellGrid.from_rows([("Field", "Value", "Extra"), ("a", "b", "c")])
    with pytest.raises(ColumnMismatch):
        renderer.draw_table("Details", grid, COLUMNS, tracker, recorder)
    assert recorder.ops == []


def test_table_wider_than_page_is_rejected(renderer, tracker, recorder):
    with pytest.raises(TableTooWide):
        renderer.draw_table("Wide", _grid(("a", "b")), ColumnSpec((300, 300), 24), tracker, recorder)
    assert recorder.ops == []


def test_header_only_grid_consumes_title_and_one_row(renderer, tracker, recorder):
    start = tracker.y
    new_y = renderer.draw_table("Empty", _grid(), COLUMNS, tracker, recorder)

    assert new_y == start + DEFAULT_THEME.title_height + 24 + DEFAULT_THEME.table_gap
    rects = recorder.of_type(DrawRect)
    assert rects == [DrawRect(40.0, start + DEFAULT_THEME.title_height, 400, 24, "F")]
    assert [op.text for op in recorder.of_type(DrawText)] == ["Empty", "Field", "Value"]


def test_header_only_without_gap(metrics, tracker, recorder):
    renderer = TableRenderer(TableTheme(table_gap=0), metrics)
    start = tracker.y
    assert renderer.draw_table("Empty", _grid(), COLUMNS, tracker, recorder) == start + 28 + 24


def test_header_row_is_filled_high_contrast(renderer, tracker, recorder):
    renderer.draw_table("Details", _grid(("Units", "4")), COLUMNS, tracker, recorder)

    fill_index = recorder.ops.index(SetColor("fill", NAVY))
    assert recorder.ops[fill_index + 1] == DrawRect(40.0, 68.0, 400, 24, "F")
    assert SetColor("text", DEFAULT_THEME.header_text) in recorder.ops


def test_data_rows_are_bordered_per_column(renderer, tracker, recorder):
    new_y = renderer.draw_table(
        "Details", _grid(("Units", "4"), ("Year Built", "1995")), COLUMNS, tracker, recorder,
    )

    borders = [op for op in recorder.of_type(DrawRect) if op.style == "D"]
    assert borders == [
        DrawRect(40.0, 92.0, 170, 24, "D"),
        DrawRect(210.0, 92.0, 230, 24, "D"),
        DrawRect(40.0, 116.0, 170, 24, "D"),
        DrawRect(210.0, 116.0, 230, 24, "D"),
    ]
    assert new_y == 140.0 + DEFAULT_THEME.table_gap


def test_cell_text_is_inset_by_padding(renderer, tracker, recorder):
    renderer.draw_table("Details", _grid(("Units", "4")), COLUMNS, tracker, recorder)

    units = next(op for op in recorder.of_type(DrawText) if op.text == "Units")
    value = next(op for op in recorder.of_type(DrawText) if op.text == "4")
    assert (units.x, units.w) == (48.0, 154.0)
    assert (value.x, value.w) == (218.0, 214.0)
    assert units.align == value.align == "L"


def test_long_cell_text_is_clipped(renderer, tracker, recorder, metrics):
    long_value = "Unit " * 80
    renderer.draw_table("Details", _grid(("Notes", long_value)), COLUMNS, tracker, recorder)

    cell = recorder.of_type(DrawText)[-1]
    assert long_value.startswith(cell.text)
    assert len(cell.text) < len(long_value)
    assert metrics.string_width(cell.text, DEFAULT_THEME.body_font) <= 214.0


def test_rows_spill_to_next_page_with_repeated_header(renderer, tracker, recorder):
    tracker.reserve(660)  # y = 700, 52pt left: room for heading + header only

    renderer.draw_table("Details", _grid(("Units", "4")), COLUMNS, tracker, recorder)

    assert tracker.page_index == 1
    headers = [op for op in recorder.of_type(DrawRect) if op.style == "F"]
    assert [op.y for op in headers] == [728.0, 40.0]
    borders = [op for op in recorder.of_type(DrawRect) if op.style == "D"]
    assert {op.y for op in borders} == {64.0}


def test_without_header_repeat_rows_start_at_top_margin(metrics, tracker, recorder):
    renderer = TableRenderer(TableTheme(repeat_header=False), metrics)
    tracker.reserve(660)

    renderer.draw_table("Details", _grid(("Units", "4")), COLUMNS, tracker, recorder)

    headers = [op for op in recorder.of_type(DrawRect) if op.style == "F"]
    assert len(headers) == 1
    borders = [op for op in recorder.of_type(DrawRect) if op.style == "D"]
    assert {op.y for op in borders} == {40.0}


def test_stripe_fill_alternates_data_rows(metrics, tracker, recorder):
    renderer = TableRenderer(TableTheme(stripe_fill=LIGHT_GRAY), metrics)
    grid = _grid(("a", "1"), ("b", "2"), ("c", "3"))

    renderer.draw_table("Striped", grid, COLUMNS, tracker, recorder)

    styles = [op.style for op in recorder.of_type(DrawRect)]
    assert styles == ["F", "D", "D", "DF", "DF", "D", "D"]
    assert SetColor("fill", LIGHT_GRAY) in recorder.ops


def test_repeated_header_must_fit_with_one_row(renderer, recorder):
    # 120pt usable: heading + header (98) fits, header + row (140) does not.
    tracker = GeometryTracker(PageGeometry(height=200), on_page_break=lambda _: recorder.emit(AddPage()))

    with pytest.raises(BlockTooLarge) as exc_info:
        renderer.draw_table("Tall rows", _grid(("a", "1")), ColumnSpec((170, 230), 70), tracker, recorder)

    assert exc_info.value.height == 140
    assert recorder.ops == []
    assert tracker.y == 40.0


def test_tall_rows_allowed_without_header_repeat(metrics, recorder):
    renderer = TableRenderer(TableTheme(repeat_header=False), metrics)
    tracker = GeometryTracker(PageGeometry(height=200), on_page_break=lambda _: recorder.emit(AddPage()))

    renderer.draw_table("Tall rows", _grid(("a", "1")), ColumnSpec((170, 230), 70), tracker, recorder)

    assert recorder.of_type(AddPage) == [AddPage()]
    borders = [op for op in recorder.of_type(DrawRect) if op.style == "D"]
    assert {op.y for op in borders} == {40.0}


def test_heading_and_header_taller_than_page_are_rejected(renderer, recorder):
    tracker = GeometryTracker(PageGeometry(height=200))

    with pytest.raises(BlockTooLarge):
        renderer.draw_table("Tall header", _grid(), ColumnSpec((170, 230), 100), tracker, recorder)
    assert recorder.ops == []
