"""
MEASUREMENT STORE
The only mutable state of the pipeline: consolidated, time-ordered measurements
"""

from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .consolidation import consolidate
from .utils.data_io import measurements_to_frame
from .utils.models import Measurement, OPTIONAL_FIELDS


class MeasurementStore:
    """
    Ordered collection of consolidated measurements

    Every mutation re-applies consolidation and sorting, so time values are
    unique and ascending between calls.
    """

    def __init__(self, tracked_fields: Optional[Sequence[str]] = None):
        if tracked_fields is None:
            tracked_fields = OPTIONAL_FIELDS
        unknown = [f for f in tracked_fields if f not in OPTIONAL_FIELDS]
        if unknown:
            raise ValueError(f"Unknown tracked fields: {unknown}")

        self.tracked_fields = tuple(tracked_fields)
        self._measurements: List[Measurement] = []

    def __len__(self) -> int:
        return len(self._measurements)

    def __iter__(self):
        return iter(self.all())

    def _strip_untracked(self, entry: Measurement) -> Measurement:
        values = entry.to_dict()
        for name in OPTIONAL_FIELDS:
            if name not in self.tracked_fields:
                values[name] = None
        return Measurement(**values)

    def add(self, entry: Measurement) -> None:
        """Append a single measurement, then consolidate and sort"""
        self._measurements = consolidate(
            self._measurements + [self._strip_untracked(entry)]
        )

    def replace_all(self, entries: Iterable[Measurement]) -> None:
        """Replace the whole contents; an empty iterable clears the store"""
        self._measurements = consolidate(
            self._strip_untracked(e) for e in entries
        )

    def clear(self) -> None:
        self._measurements = []

    def all(self) -> List[Measurement]:
        """Measurements sorted ascending by time (copies, safe to modify)"""
        return [Measurement(**m.to_dict()) for m in self._measurements]

    def times(self) -> List[float]:
        return [m.time for m in self._measurements]

    def values(self, name: str) -> List[Optional[float]]:
        return [m.get(name) for m in self._measurements]

    def to_frame(self) -> pd.DataFrame:
        """Contents as a DataFrame, limited to time, DO and tracked fields"""
        df = measurements_to_frame(self._measurements)
        columns = ["time", "dissolved_oxygen"] + list(self.tracked_fields)
        return df[columns]
