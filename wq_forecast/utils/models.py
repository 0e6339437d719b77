"""
Data models for pipeline objects
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, List, Tuple

TIME = "time"
DISSOLVED_OXYGEN = "dissolved_oxygen"
TURBIDITY = "turbidity"
PH = "ph"

# Fields a variant may choose to track on top of time + dissolved oxygen
OPTIONAL_FIELDS = (TURBIDITY, PH)
MEASUREMENT_FIELDS = (TIME, DISSOLVED_OXYGEN) + OPTIONAL_FIELDS


@dataclass
class Measurement:
    """One (possibly consolidated) water-quality observation"""

    time: float
    dissolved_oxygen: float
    turbidity: Optional[float] = None
    ph: Optional[float] = None

    def get(self, name: str) -> Optional[float]:
        return getattr(self, name)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "time": self.time,
            "dissolved_oxygen": self.dissolved_oxygen,
            "turbidity": self.turbidity,
            "ph": self.ph,
        }


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary least-squares line y = slope * x + intercept"""

    slope: float
    intercept: float
    n: int = 0

    def evaluate(self, x: float) -> float:
        return self.slope * x + self.intercept

    def to_dict(self) -> dict:
        return {"slope": self.slope, "intercept": self.intercept, "n": self.n}


@dataclass(frozen=True)
class TrendSegment:
    """Two-point line handed to the rendering layer"""

    start: Tuple[float, float]
    end: Tuple[float, float]

    def xs(self) -> List[float]:
        return [self.start[0], self.end[0]]

    def ys(self) -> List[float]:
        return [self.start[1], self.end[1]]

    def to_dict(self) -> dict:
        return {
            "start": {"x": self.start[0], "y": self.start[1]},
            "end": {"x": self.end[0], "y": self.end[1]},
        }


@dataclass
class Prediction:
    """Dissolved-oxygen forecast at a target time"""

    target_time: float
    predicted_value: float
    base_value: float
    regression: RegressionResult
    segment: TrendSegment
    n_measurements: int

    # Seasonal adjustment (0.0 when disabled or bucket not populated)
    seasonal_applied: bool = False
    seasonal_offset: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "target_time": self.target_time,
            "predicted_value": self.predicted_value,
            "base_value": self.base_value,
            "seasonal_applied": self.seasonal_applied,
            "seasonal_offset": self.seasonal_offset,
            "regression": self.regression.to_dict(),
            "segment": self.segment.to_dict(),
            "n_measurements": self.n_measurements,
        }


@dataclass
class ImportReport:
    """Outcome of a bulk import"""

    source: str
    rows_read: int
    rows_accepted: int
    rows_skipped: int
    measurements_stored: int
    missing_columns: List[str] = field(default_factory=list)
    skipped_reasons: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "rows_read": self.rows_read,
            "rows_accepted": self.rows_accepted,
            "rows_skipped": self.rows_skipped,
            "measurements_stored": self.measurements_stored,
            "missing_columns": self.missing_columns,
            "skipped_reasons": self.skipped_reasons,
        }
