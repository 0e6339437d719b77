import pytest
from watchdog.events import DirCreatedEvent, FileCreatedEvent, FileModifiedEvent

from wq_forecast.utils.models import Measurement
from wq_forecast.watcher import CsvImportHandler, watch_folder


def test_created_csv_replaces_store(store, write_csv):
    store.add(Measurement(time=99.0, dissolved_oxygen=1.0, turbidity=1.0, ph=7.0))
    reports = []
    handler = CsvImportHandler(store, on_import=reports.append)

    path = write_csv("time,DO,turbidity,ph\n0,8.0,1.0,7.0\n5,7.5,1.1,7.0\n")
    handler.on_created(FileCreatedEvent(path))

    assert store.times() == [0.0, 5.0]
    assert len(reports) == 1
    assert handler.last_report.rows_accepted == 2


def test_modified_csv_is_reimported(store, write_csv):
    handler = CsvImportHandler(store)
    path = write_csv("time,DO,turbidity,ph\n0,8.0,1.0,7.0\n")
    handler.on_modified(FileModifiedEvent(path))
    assert len(store) == 1


def test_invalid_csv_keeps_previous_contents(store, write_csv):
    store.add(Measurement(time=1.0, dissolved_oxygen=7.0, turbidity=1.0, ph=7.0))
    handler = CsvImportHandler(store)

    path = write_csv("time,DO,turbidity,ph\nx,y,z,w\n", name="bad.csv")
    handler.on_created(FileCreatedEvent(path))

    assert store.times() == [1.0]
    assert handler.failures == [path]
    assert handler.processing is False


def test_ignores_directories_and_other_files(store, tmp_path, write_csv):
    handler = CsvImportHandler(store)
    handler.on_created(DirCreatedEvent(str(tmp_path)))
    handler.on_created(FileCreatedEvent(write_csv("time,DO\n1,2\n", name="notes.txt")))

    assert len(store) == 0
    assert handler.last_report is None


def test_watch_missing_folder(store, tmp_path):
    with pytest.raises(FileNotFoundError):
        watch_folder(str(tmp_path / "absent"), CsvImportHandler(store))
