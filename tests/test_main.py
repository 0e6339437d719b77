import json
import os

import pytest

import main
from wq_forecast.config import load_config


@pytest.fixture
def config(tmp_path):
    config = load_config(None)
    for key, name in [
        ("measurements_data", "measurements.parquet"),
        ("dashboard_html", "dashboard.html"),
        ("prediction_json", "prediction.json"),
    ]:
        config["paths"][key] = str(tmp_path / "outputs" / name)
    return config


def test_entry_from_values():
    entry = main.entry_from_values(["5", "7.1", "1.0", "7.0"], ("turbidity", "ph"))
    assert entry == {"time": "5", "dissolved_oxygen": "7.1", "turbidity": "1.0", "ph": "7.0"}

    with pytest.raises(ValueError):
        main.entry_from_values(["5", "7.1"], ("turbidity", "ph"))


def test_run_pipeline_end_to_end(config, write_csv):
    path = write_csv("time,DO,turbidity,ph\n0,5.0,1.0,7.0\n10,7.0,1.0,7.0\n")
    results = main.run_pipeline(
        config,
        csv_path=path,
        predict_value=20,
        predict_unit="minutes",
        plot=True,
        save=True,
    )

    assert results["prediction"].predicted_value == pytest.approx(9.0)
    assert results["trend"] is not None
    assert len(results["files"]) == 3
    for file_path in results["files"]:
        assert os.path.exists(file_path)

    with open(config["paths"]["prediction_json"]) as f:
        saved = json.load(f)
    assert saved["predicted_value"] == pytest.approx(9.0)


def test_run_pipeline_manual_entries_hours(config):
    config["forecast"]["time_unit"] = "hours"
    config["forecast"]["tracked_fields"] = []
    results = main.run_pipeline(
        config,
        entries=[
            {"time": 0, "dissolved_oxygen": 8.0},
            {"time": 24, "dissolved_oxygen": 7.0},
        ],
        predict_value=2,
        predict_unit="days",
    )

    assert results["prediction"].target_time == pytest.approx(48.0)
    assert results["prediction"].predicted_value == pytest.approx(6.0)


def test_main_reports_insufficient_data(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths:\n  log_file: null\n")
    code = main.main(
        ["--config", str(config_path), "--add", "0", "8", "1", "7", "--predict", "1"]
    )
    assert code == 1


def test_main_success(tmp_path, write_csv):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths:\n  log_file: null\n")
    csv_path = write_csv("time,DO,turbidity,ph\n0,8.0,1.0,7.0\n60,7.5,1.0,7.0\n")

    assert main.main(["--config", str(config_path), "--csv", csv_path, "--quiet"]) == 0
