"""
MAIN ORCHESTRATOR
Water-Quality Trend & Dissolved-Oxygen Forecast

Executes the pipeline stages in sequence:
1. Import (CSV / snapshot / manual entries) → 2. Trend → 3. Prediction → 4. Outputs

Usage:
    python main.py --csv data/measurements.csv
    python main.py --csv data/measurements.csv --predict 3 --unit days --plot
    python main.py --add 0 8.1 1.2 7.0 --add 60 7.9 1.3 7.1 --predict 2 --unit hours
    python main.py --watch data/  # Re-import CSV files dropped into data/
"""

import sys
import os
import io
import json
import logging
import argparse
import time
from datetime import datetime
from typing import List, Optional

from wq_forecast.config import load_config, forecast_settings
from wq_forecast.dashboard import (
    create_measurement_figure,
    format_measurement_table,
    format_prediction,
    write_dashboard,
)
from wq_forecast.exceptions import WaterQualityError
from wq_forecast.ingestion import add_manual_entry, import_csv
from wq_forecast.predictor import predict, trend_line
from wq_forecast.regression import fit_store, r_squared
from wq_forecast.store import MeasurementStore
from wq_forecast.utils.data_io import load_measurements, save_measurements
from wq_forecast.utils.time_utils import convert_to_native
from wq_forecast.watcher import CsvImportHandler, watch_folder

logger = logging.getLogger(__name__)


def setup_logging(log_file: str = None, verbose: bool = True):
    """Setup logging configuration"""
    log_level = logging.INFO if verbose else logging.WARNING

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers, force=True)


def print_banner():
    """Print pipeline banner"""
    banner = """
===============================================================

        WATER-QUALITY TREND & DO FORECAST

===============================================================
    """
    print(banner)


def print_stage_header(stage_num: int, stage_name: str):
    """Print stage header"""
    print(f"\n{'=' * 70}")
    print(f"  STAGE {stage_num}: {stage_name}")
    print(f"{'=' * 70}\n")


def entry_from_values(values: List[str], tracked_fields) -> dict:
    """Map positional --add values onto field names: time, DO, then tracked fields"""
    names = ["time", "dissolved_oxygen"] + list(tracked_fields)
    if len(values) != len(names):
        raise ValueError(
            f"--add expects {len(names)} values ({', '.join(names)}), got {len(values)}"
        )
    return dict(zip(names, values))


def run_pipeline(
    config: dict,
    csv_path: Optional[str] = None,
    snapshot_path: Optional[str] = None,
    entries: Optional[List[dict]] = None,
    predict_value: Optional[float] = None,
    predict_unit: str = "days",
    seasonal: Optional[bool] = None,
    plot: bool = False,
    save: bool = False,
) -> dict:
    """
    Execute the pipeline

    Args:
        config: Configuration dictionary
        csv_path: CSV file to bulk-import
        snapshot_path: Parquet snapshot to load instead of a CSV file
        entries: Manual entries appended after any import
        predict_value: Horizon to predict at (positive), None to skip
        predict_unit: Unit of predict_value
        seasonal: Override forecast.seasonal_adjustment
        plot: Write the HTML dashboard
        save: Write the parquet snapshot and prediction JSON

    Returns:
        Dictionary with the store, trend, prediction and written files
    """
    settings = forecast_settings(config)
    paths = config["paths"]
    if seasonal is None:
        seasonal = settings.seasonal_adjustment

    store = MeasurementStore(settings.tracked_fields)
    results = {"store": store, "trend": None, "prediction": None, "files": []}
    stage_times = {}

    # Stage 1: Import
    print_stage_header(1, "DATA IMPORT")
    stage_start = time.time()
    if csv_path:
        results["import_report"] = import_csv(
            store, csv_path, aliases=config["ingestion"]["column_aliases"]
        )
    elif snapshot_path:
        store.replace_all(load_measurements(snapshot_path))
        logger.info(f"✓ Restored {len(store)} measurements from snapshot")

    for entry in entries or []:
        add_manual_entry(store, entry)
    stage_times["import"] = time.time() - stage_start

    print(format_measurement_table(store.all(), settings.tracked_fields))

    # Stage 2: Trend
    if len(store) >= 2:
        print_stage_header(2, "TREND")
        stage_start = time.time()
        regression = fit_store(store)
        fit = r_squared(store.times(), store.values("dissolved_oxygen"), regression)
        results["trend"] = trend_line(store)
        logger.info(
            f"✓ Trend: slope {regression.slope:.6f} mg/L per {settings.time_unit[:-1]}, "
            f"intercept {regression.intercept:.4f}, R² = {fit:.4f}"
        )
        stage_times["trend"] = time.time() - stage_start

    # Stage 3: Prediction
    if predict_value is not None:
        print_stage_header(3, "PREDICTION")
        stage_start = time.time()
        target_time = convert_to_native(
            predict_value, predict_unit, native_unit=settings.time_unit
        )
        prediction = predict(
            store,
            target_time,
            seasonal=seasonal,
            relative_to_trend=settings.seasonal_relative_to_trend,
        )
        results["prediction"] = prediction
        print(format_prediction(prediction, float(predict_value), predict_unit))
        stage_times["prediction"] = time.time() - stage_start

    # Stage 4: Outputs
    if save or plot:
        print_stage_header(4, "OUTPUTS")
        stage_start = time.time()

        if save:
            save_measurements(store, paths["measurements_data"])
            results["files"].append(paths["measurements_data"])

            if results["prediction"] is not None:
                os.makedirs(os.path.dirname(paths["prediction_json"]) or ".", exist_ok=True)
                with open(paths["prediction_json"], "w") as f:
                    json.dump(results["prediction"].to_dict(), f, indent=2)
                logger.info(f"✓ Saved prediction: {paths['prediction_json']}")
                results["files"].append(paths["prediction_json"])

        if plot:
            fig = create_measurement_figure(
                store.all(),
                trend=results["trend"],
                prediction=results["prediction"],
                viz_config=config["visualization"],
                time_unit=settings.time_unit,
            )
            results["files"].append(write_dashboard(fig, paths["dashboard_html"]))

        stage_times["outputs"] = time.time() - stage_start

    print("\n" + "=" * 70)
    print("  PIPELINE EXECUTION SUMMARY")
    print("=" * 70)
    print(f"\n  Measurements: {len(store)}")
    for stage, duration in stage_times.items():
        print(f"    {stage:.<30} {duration:>8.3f}s")
    for path in results["files"]:
        print(f"  Output: {path}")
    print(f"\n  Completed at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 70 + "\n")

    return results


def run_watcher(config: dict, folder: str):
    """Re-import CSV files dropped into folder and refresh the dashboard"""
    settings = forecast_settings(config)
    store = MeasurementStore(settings.tracked_fields)

    def refresh(report):
        trend = trend_line(store) if len(store) >= 2 else None
        fig = create_measurement_figure(
            store.all(),
            trend=trend,
            viz_config=config["visualization"],
            time_unit=settings.time_unit,
        )
        write_dashboard(fig, config["paths"]["dashboard_html"])

    handler = CsvImportHandler(
        store,
        aliases=config["ingestion"]["column_aliases"],
        on_import=refresh,
        settle_seconds=2.0,
    )
    watch_folder(folder, handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Water-Quality Trend & Dissolved-Oxygen Forecast",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --csv data.csv                         # Import and show trend
  python main.py --csv data.csv --predict 3 --unit days # Forecast 3 days out
  python main.py --csv data.csv --seasonal --plot       # Seasonal forecast + chart
  python main.py --watch data/                          # Watch folder for CSV files
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument("--csv", type=str, help="CSV file to import")
    parser.add_argument("--snapshot", type=str, help="Parquet snapshot to load")
    parser.add_argument(
        "--add",
        nargs="+",
        action="append",
        metavar="VALUE",
        help="Manual entry: TIME DO [TURBIDITY PH] (repeatable)",
    )
    parser.add_argument("--predict", type=float, help="Prediction horizon value")
    parser.add_argument(
        "--unit",
        type=str,
        default="days",
        choices=["minutes", "hours", "days", "weeks", "months", "years"],
        help="Prediction horizon unit (default: days)",
    )
    parser.add_argument(
        "--seasonal", action="store_true", help="Apply hour-of-day seasonal offset"
    )
    parser.add_argument("--plot", action="store_true", help="Write HTML dashboard")
    parser.add_argument(
        "--save", action="store_true", help="Write parquet snapshot and prediction JSON"
    )
    parser.add_argument("--watch", type=str, help="Folder to watch for CSV files")
    parser.add_argument("--quiet", action="store_true", help="Reduce logging verbosity")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(log_file=config["paths"].get("log_file"), verbose=not args.quiet)

    print_banner()

    try:
        if args.watch:
            run_watcher(config, args.watch)
            return 0

        settings = forecast_settings(config)
        entries = [entry_from_values(v, settings.tracked_fields) for v in args.add or []]

        run_pipeline(
            config,
            csv_path=args.csv,
            snapshot_path=args.snapshot,
            entries=entries,
            predict_value=args.predict,
            predict_unit=args.unit,
            seasonal=True if args.seasonal else None,
            plot=args.plot,
            save=args.save,
        )
    except (WaterQualityError, FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        return 1

    return 0


if __name__ == "__main__":
    # Fix Windows console encoding for Unicode
    if sys.platform == "win32":
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
        sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding="utf-8", errors="replace")

    sys.exit(main())
