from dataclasses import dataclass, fields
from enum import Enum


class PropertyType(str, Enum):
    SINGLE_FAMILY = "Single Family"
    MULTIFAMILY = "Multifamily"
    OFFICE = "Office"
    RETAIL = "Retail"
    INDUSTRIAL = "Industrial"
    LAND = "Land"


def risk_label(dscr: float) -> str:
    """Risk bucket from debt service coverage. Used everywhere risk is shown."""
    if dscr > 1.25:
        return "Low risk"
    if dscr > 1.1:
        return "Medium risk"
    return "High risk"


# camelCase API key -> (field name, type, (min, max) or None)
_FIELDS = {
    "address": ("address", str, None),
    "type": ("property_type", PropertyType, None),
    "yearBuilt": ("year_built", int, None),
    "sqFt": ("sq_ft", int, (0, None)),
    "units": ("units", int, (0, None)),
    "value": ("value", float, (0, None)),
    "grossRent": ("gross_rent", float, (0, None)),
    "vacancy": ("vacancy", float, (0, 100)),
    "expenses": ("expenses", float, (0, None)),
    "noi": ("noi", float, None),
    "capRate": ("cap_rate", float, None),
    "dscr": ("dscr", float, None),
    "crimeScore": ("crime_score", float, (0, 10)),
    "walkScore": ("walk_score", float, (0, 100)),
    "medianIncome": ("median_income", float, (0, None)),
    "populationDensity": ("population_density", int, (0, None)),
    "schoolRating": ("school_rating", float, (0, 10)),
}


@dataclass(frozen=True)
class ReportRecord:
    """Underwriting metrics for one property, as shown on the report."""
    address: str
    property_type: PropertyType
    year_built: int
    sq_ft: int
    units: int
    value: float              # $
    gross_rent: float         # $/yr
    vacancy: float            # 0-100
    expenses: float           # $/yr
    noi: float                # $/yr
    cap_rate: float           # %
    dscr: float
    crime_score: float        # 0-10
    walk_score: float         # 0-100
    median_income: float      # $
    population_density: int   # people / sq mi
    school_rating: float      # 0-10

    @property
    def risk_label(self) -> str:
        return risk_label(self.dscr)

    @classmethod
    def from_dict(cls, data: dict) -> "ReportRecord":
        """Parse a camelCase payload. Raises ValueError naming the bad field."""
        kwargs = {}
        for key, (name, kind, bounds) in _FIELDS.items():
            if data.get(key) is None or data.get(key) == "":
                raise ValueError(f"{key} is required")
            kwargs[name] = _coerce(key, data[key], kind, bounds)
        if not kwargs["address"].strip():
            raise ValueError("address is required")
        return cls(**kwargs)

    def to_dict(self) -> dict:
        out = {}
        by_name = {name: key for key, (name, _, _) in _FIELDS.items()}
        for f in fields(self):
            val = getattr(self, f.name)
            out[by_name[f.name]] = val.value if isinstance(val, PropertyType) else val
        return out


def _coerce(key, raw, kind, bounds):
    if kind is PropertyType:
        try:
            return PropertyType(raw)
        except ValueError:
            allowed = ", ".join(t.value for t in PropertyType)
            raise ValueError(f"{key} must be one of: {allowed}") from None
    if kind is str:
        return str(raw)
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a number")
    try:
        val = float(raw)
    except (ValueError, TypeError):
        raise ValueError(f"{key} must be a number") from None
    if val != val or val in (float("inf"), float("-inf")):
        raise ValueError(f"{key} must be a finite number")
    if kind is int:
        if not val.is_integer():
            raise ValueError(f"{key} must be a whole number")
        val = int(val)
    if bounds:
        lo, hi = bounds
        if lo is not None and val < lo:
            raise ValueError(f"{key} must be at least {lo}")
        if hi is not None and val > hi:
            raise ValueError(f"{key} must be at most {hi}")
    return val
