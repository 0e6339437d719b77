"""
[1] INGESTION MODULE
Bulk import of CSV measurement files and single manual entries
"""

import os
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .config import DEFAULT_CONFIG
from .utils.data_io import frame_to_measurements
from .exceptions import EmptyImport
from .utils.models import ImportReport, Measurement
from .utils.time_utils import get_time_range_info
from .validation import required_fields, valid_row_mask, validate_entry

logger = logging.getLogger(__name__)

DEFAULT_ALIASES = DEFAULT_CONFIG["ingestion"]["column_aliases"]


def load_csv(filepath: str) -> pd.DataFrame:
    """
    Load a CSV measurement file

    Args:
        filepath: Path to CSV file with a header row

    Returns:
        DataFrame with CSV contents (column names stripped)
    """
    if not os.path.exists(filepath):
        logger.error(f"CSV file not found: {filepath}")
        raise FileNotFoundError(f"CSV file not found: {filepath}")

    logger.info(f"Reading {os.path.basename(filepath)}...")

    try:
        df = pd.read_csv(filepath, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        raise EmptyImport(f"No data found in CSV file: {filepath}")

    # Normalize column names (strip whitespace)
    df.columns = df.columns.astype(str).str.strip()

    return df


def resolve_columns(
    df: pd.DataFrame,
    fields: List[str],
    aliases: Optional[Dict[str, List[str]]] = None,
) -> Tuple[pd.DataFrame, List[str]]:
    """
    Map aliased source columns onto canonical field names

    For each field the aliases are tried in order and the first one holding
    a value in a given row wins. Repeated column names keep their first
    occurrence. Boolean cells count as missing, as in manual entry.

    Args:
        df: Raw DataFrame
        fields: Canonical field names to resolve
        aliases: Ordered alias list per field

    Returns:
        Tuple of (DataFrame with one numeric column per field, fields with
        no matching column at all)
    """
    if aliases is None:
        aliases = DEFAULT_ALIASES

    duplicated = df.columns.duplicated()
    if duplicated.any():
        logger.warning(f"Ignoring repeated columns: {list(df.columns[duplicated])}")
        df = df.loc[:, ~duplicated]

    resolved = pd.DataFrame(index=df.index)
    missing = []

    for field in fields:
        present = [alias for alias in aliases.get(field, [field]) if alias in df.columns]
        if not present:
            missing.append(field)
            resolved[field] = np.nan
            continue

        series = df[present[0]]
        for alias in present[1:]:
            series = series.combine_first(df[alias])

        is_bool = series.map(lambda v: isinstance(v, (bool, np.bool_))).astype(bool)
        series = series.astype(object).where(~is_bool)
        resolved[field] = pd.to_numeric(series, errors="coerce")

    return resolved, missing


def import_frame(
    store,
    df: pd.DataFrame,
    aliases: Optional[Dict[str, List[str]]] = None,
    source: str = "<frame>",
) -> ImportReport:
    """
    Validate rows of a parsed table and bulk-replace the store with them

    Rows whose required fields are not finite numbers are skipped. If no
    row survives the store is left untouched.

    Args:
        store: MeasurementStore to replace
        df: Parsed rows (raw column names)
        aliases: Ordered alias list per field
        source: Label used in logs and the report

    Returns:
        ImportReport

    Raises:
        EmptyImport: no valid rows
    """
    fields = required_fields(store.tracked_fields)
    resolved, missing = resolve_columns(df, fields, aliases)

    if missing:
        logger.warning(f"No column found for: {missing}")

    mask = valid_row_mask(resolved, fields)
    skipped_reasons = {
        field: int(resolved[field].isna().sum() + np.isinf(resolved[field]).sum())
        for field in fields
    }
    skipped_reasons = {k: v for k, v in skipped_reasons.items() if v > 0}

    rows_read = len(resolved)
    rows_accepted = int(mask.sum())

    if rows_accepted == 0:
        logger.warning(f"No valid rows in {source} ({rows_read} read)")
        raise EmptyImport(f"No valid data found in {source}")

    store.replace_all(frame_to_measurements(resolved[mask]))

    report = ImportReport(
        source=source,
        rows_read=rows_read,
        rows_accepted=rows_accepted,
        rows_skipped=rows_read - rows_accepted,
        measurements_stored=len(store),
        missing_columns=missing,
        skipped_reasons=skipped_reasons,
    )

    logger.info(f"✓ Imported {rows_accepted}/{rows_read} rows from {source}")
    if report.rows_skipped:
        logger.info(f"  Skipped {report.rows_skipped} invalid rows: {skipped_reasons}")

    time_info = get_time_range_info(store.times())
    logger.info(
        f"  {time_info['num_points']} measurements after consolidation, "
        f"time {time_info['start']} to {time_info['end']}"
    )

    return report


def import_rows(
    store,
    rows: Iterable[Mapping],
    aliases: Optional[Dict[str, List[str]]] = None,
    source: str = "<rows>",
) -> ImportReport:
    """Import already-parsed row mappings (see import_frame)"""
    return import_frame(
        store, pd.DataFrame.from_records(list(rows)), aliases=aliases, source=source
    )


def import_csv(
    store, filepath: str, aliases: Optional[Dict[str, List[str]]] = None
) -> ImportReport:
    """
    Load a CSV file and bulk-replace the store with its valid rows

    Args:
        store: MeasurementStore to replace
        filepath: Path to CSV file
        aliases: Ordered alias list per field

    Returns:
        ImportReport
    """
    df = load_csv(filepath)
    logger.info(f"Raw data shape: {df.shape}")
    return import_frame(store, df, aliases=aliases, source=os.path.basename(filepath))


def add_manual_entry(store, candidate: Mapping) -> Measurement:
    """
    Validate one fully-specified entry and append it to the store

    Args:
        store: MeasurementStore
        candidate: Mapping with time, dissolved_oxygen and the tracked fields

    Returns:
        The validated Measurement
    """
    measurement = validate_entry(candidate, store.tracked_fields)
    store.add(measurement)
    logger.info(
        f"✓ Added measurement at time {measurement.time} "
        f"(DO {measurement.dissolved_oxygen:.2f} mg/L)"
    )
    return measurement
