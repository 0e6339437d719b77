"""
[2] VALIDATION MODULE
Checks that candidate measurements carry finite numbers for every required field
"""

import math
from typing import List, Mapping, Optional, Sequence

import pandas as pd

from .exceptions import InvalidInput
from .utils.models import Measurement, TIME, DISSOLVED_OXYGEN


def required_fields(tracked_fields: Sequence[str]) -> List[str]:
    """Fields every entry must carry: time, dissolved oxygen and tracked extras"""
    return [TIME, DISSOLVED_OXYGEN] + list(tracked_fields)


def coerce_number(value) -> Optional[float]:
    """
    Parse a value as a finite float

    Args:
        value: Number or numeric string

    Returns:
        The float, or None when missing, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def validate_entry(
    candidate: Mapping, tracked_fields: Sequence[str]
) -> Measurement:
    """
    Validate a manual entry; all required fields must be finite numbers

    Args:
        candidate: Mapping of field name to raw value
        tracked_fields: Optional fields the variant in use requires

    Returns:
        Measurement built from the candidate

    Raises:
        InvalidInput: listing every bad field; nothing is applied
    """
    fields = required_fields(tracked_fields)
    values = {name: coerce_number(candidate.get(name)) for name in fields}
    invalid = [name for name, value in values.items() if value is None]

    if invalid:
        raise InvalidInput(
            f"Please fill in all fields with valid numbers (invalid: {invalid})",
            fields=invalid,
        )

    return Measurement(**values)


def valid_row_mask(df: pd.DataFrame, fields: List[str]) -> pd.Series:
    """
    Boolean mask of rows whose required fields are all finite numbers

    Args:
        df: DataFrame with already-coerced numeric columns
        fields: Required column names

    Returns:
        Boolean Series aligned with df
    """
    mask = pd.Series(True, index=df.index)
    for name in fields:
        if name not in df.columns:
            return pd.Series(False, index=df.index)
        column = pd.to_numeric(df[name], errors="coerce").astype(float)
        mask &= column.notna() & ~column.isin([float("inf"), float("-inf")])
    return mask
