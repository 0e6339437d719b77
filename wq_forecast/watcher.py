"""
[8] WATCHER MODULE
Monitors a folder for CSV files and re-imports them into the store

Each created or modified .csv file triggers a full replace of the store,
followed by an optional callback (e.g. regenerating the dashboard).
"""

import os
import time
import logging
from typing import Callable, Dict, List, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .exceptions import WaterQualityError
from .ingestion import import_csv
from .utils.models import ImportReport

logger = logging.getLogger(__name__)


class CsvImportHandler(FileSystemEventHandler):
    """Handles file system events in the watched folder"""

    def __init__(
        self,
        store,
        aliases: Optional[Dict[str, List[str]]] = None,
        on_import: Optional[Callable[[ImportReport], None]] = None,
        settle_seconds: float = 0.0,
    ):
        self.store = store
        self.aliases = aliases
        self.on_import = on_import
        self.settle_seconds = settle_seconds
        self.processing = False
        self.last_report: Optional[ImportReport] = None
        self.failures: List[str] = []

    def on_created(self, event):
        """Triggered when a new file is created"""
        self._handle(event)

    def on_modified(self, event):
        """Triggered when an existing file is rewritten"""
        self._handle(event)

    def _handle(self, event):
        if event.is_directory:
            return

        path = os.fsdecode(event.src_path)
        if not path.lower().endswith(".csv") or self.processing:
            return

        logger.info(f"📂 Data file detected: {os.path.basename(path)}")

        # Wait a moment to ensure file is fully written
        if self.settle_seconds:
            time.sleep(self.settle_seconds)

        self.processing = True
        try:
            report = import_csv(self.store, path, aliases=self.aliases)
        except (WaterQualityError, FileNotFoundError) as e:
            # Store keeps its previous contents
            logger.error(f"Import of {path} failed: {e}")
            self.failures.append(path)
            return
        finally:
            self.processing = False

        self.last_report = report
        if self.on_import is not None:
            self.on_import(report)


def watch_folder(
    folder: str,
    handler: CsvImportHandler,
    poll_seconds: float = 1.0,
) -> None:
    """
    Block and watch a folder until interrupted

    Args:
        folder: Directory to monitor (not recursive)
        handler: Event handler owning the store
        poll_seconds: Main-loop sleep interval
    """
    if not os.path.isdir(folder):
        raise FileNotFoundError(f"Watch folder not found: {folder}")

    observer = Observer()
    observer.schedule(handler, folder, recursive=False)
    observer.start()
    logger.info(f"👀 Watching {folder} for CSV files (Ctrl+C to stop)")

    try:
        while True:
            time.sleep(poll_seconds)
    except KeyboardInterrupt:
        logger.info("🛑 Stopping watcher...")
        observer.stop()

    observer.join()
