"""
Shared fixtures for the layout engine and API tests.

The engine tests record drawing operations in memory instead of producing a
PDF, so assertions can look at exact coordinates. PDF output is covered by
the sink and generator tests.
"""

from datetime import date

import pytest

from models.property_record import ReportRecord
from services.property_data import mock_property_info
from services.report_layout.fonts import FontMetrics
from services.report_layout.geometry import GeometryTracker, PageGeometry
from services.report_layout.operations import AddPage


class OpRecorder:
    """Stand-in sink that keeps every emitted operation."""

    def __init__(self):
        self.ops = []

    def emit(self, op):
        self.ops.append(op)

    def of_type(self, kind):
        return [op for op in self.ops if isinstance(op, kind)]


@pytest.fixture
def recorder():
    return OpRecorder()


@pytest.fixture
def page():
    return PageGeometry()


@pytest.fixture
def tracker(page, recorder):
    """Tracker wired to the recorder the way the composer wires it."""
    return GeometryTracker(page, on_page_break=lambda _: recorder.emit(AddPage()))


@pytest.fixture(scope="session")
def metrics():
    return FontMetrics()


@pytest.fixture
def sample_date():
    return date(2026, 10, 19)


@pytest.fixture
def sample_record():
    data = mock_property_info()
    data["address"] = "123 Main St"
    return ReportRecord.from_dict(data)
