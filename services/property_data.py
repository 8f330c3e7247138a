"""Property metrics lookup.

There is no data provider behind this yet: every address gets the same mocked
underwriting metrics. Callers may override individual fields.
"""

import logging

from models.property_record import ReportRecord

logger = logging.getLogger(__name__)


def mock_property_info() -> dict:
    """Fresh copy of the mocked metrics (camelCase, as served by the API)."""
    return {
        "yearBuilt": 1995,
        "sqFt": 2500,
        "type": "Multifamily",
        "units": 4,
        "value": 750000,
        "grossRent": 60000,
        "vacancy": 5,
        "expenses": 20000,
        "noi": 37000,
        "capRate": 4.9,
        "dscr": 1.4,
        "crimeScore": 7,
        "walkScore": 82,
        "medianIncome": 85000,
        "populationDensity": 12000,
        "schoolRating": 8,
    }


def lookup_property(address: str, overrides: dict = None) -> ReportRecord:
    """Build the record for ``address``. Raises ValueError on invalid overrides."""
    data = mock_property_info()
    if overrides:
        data.update({k: v for k, v in overrides.items() if k in data})
    data["address"] = address
    logger.info(f"Property lookup for '{address}' ({len(overrides or {})} override(s))")
    return ReportRecord.from_dict(data)
