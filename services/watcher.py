"""
File System Watcher Service for Parity.

Uses watchdog to monitor a directory for new scan logs
and parse them as they arrive.
"""
import os
import time
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler, FileCreatedEvent, FileModifiedEvent

from core.sections import ParsedLog
from services.collection import LogCollection
from services.loader import is_log_filename, load_log_file
from config import settings

logger = logging.getLogger(__name__)


def log_name_for(path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> str:
    """Name a watched log by its path relative to the watch root (posix separators)."""
    path = Path(path)
    if root is not None:
        try:
            return path.resolve().relative_to(Path(root).resolve()).as_posix()
        except ValueError:
            pass
    return path.name


class ScanLogHandler(FileSystemEventHandler):
    """
    Handles file system events for scan log files.

    When a new log is detected, it is parsed and passed to the callback.
    """

    def __init__(
        self,
        on_log_parsed: Callable[[ParsedLog], None],
        settle_delay: float = 0.5,
        root: Optional[Union[str, Path]] = None
    ):
        """
        Initialize handler.

        Args:
            on_log_parsed: Callback invoked with each successfully parsed log
            settle_delay: Seconds to wait after creation before reading
            root: Watch root; logs are named by their path relative to it
        """
        self.on_log_parsed = on_log_parsed
        self.settle_delay = settle_delay
        self.root = root
        self._processed_files = set()  # path:mtime keys already handled

    def on_created(self, event: FileCreatedEvent):
        """Handle new file creation."""
        if event.is_directory:
            return

        if is_log_filename(event.src_path):
            # Give the writer a moment to finish
            if self.settle_delay:
                time.sleep(self.settle_delay)
            self.process_file(event.src_path)

    def on_modified(self, event: FileModifiedEvent):
        """Handle file modification (files that are created then written)."""
        if event.is_directory:
            return

        if is_log_filename(event.src_path):
            self.process_file(event.src_path)

    def process_file(self, file_path: str) -> bool:
        """
        Parse a log file and hand it to the callback.

        Returns True if the file was parsed and delivered.
        """
        abs_path = os.path.abspath(file_path)

        try:
            mtime = os.path.getmtime(abs_path)
        except OSError:
            return False
        file_key = f"{abs_path}:{mtime}"

        if file_key in self._processed_files:
            return False

        logger.info(f"Processing new log: {file_path}")

        parsed = load_log_file(abs_path, name=log_name_for(abs_path, self.root))
        if parsed is None:
            logger.warning(f"Failed to parse log: {file_path}")
            return False

        self._processed_files.add(file_key)

        if len(self._processed_files) > 1000:
            oldest = list(self._processed_files)[:500]
            for key in oldest:
                self._processed_files.discard(key)

        try:
            self.on_log_parsed(parsed)
        except Exception as e:
            logger.error(f"Error handling log {file_path}: {e}")
            return False

        return True


class DirectoryWatcher:
    """
    Watches a directory for new scan logs.

    Usage:
        watcher = DirectoryWatcher("/path/to/watch", callback)
        watcher.start()
        # ... later
        watcher.stop()
    """

    def __init__(
        self,
        watch_path: str,
        on_log_parsed: Callable[[ParsedLog], None],
        recursive: bool = True
    ):
        """
        Initialize the directory watcher.

        Args:
            watch_path: Directory path to monitor
            on_log_parsed: Callback when a log is parsed
            recursive: Whether to watch subdirectories
        """
        self.watch_path = Path(watch_path)
        self.recursive = recursive
        self.on_log_parsed = on_log_parsed

        self._observer: Optional[Observer] = None
        self._handler: Optional[ScanLogHandler] = None
        self._running = False

    def start(self):
        """Start watching the directory."""
        if self._running:
            logger.warning("Watcher already running")
            return

        if not self.watch_path.exists():
            logger.error(f"Watch path does not exist: {self.watch_path}")
            raise FileNotFoundError(f"Watch path not found: {self.watch_path}")

        logger.info(f"Starting directory watcher on: {self.watch_path}")

        self._handler = ScanLogHandler(self.on_log_parsed, root=self.watch_path)
        self._observer = Observer()
        self._observer.schedule(
            self._handler,
            str(self.watch_path),
            recursive=self.recursive
        )
        self._observer.start()
        self._running = True

        logger.info("Directory watcher started")

    def stop(self):
        """Stop watching the directory."""
        if not self._running:
            return

        logger.info("Stopping directory watcher")

        if self._observer:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

        self._handler = None
        self._running = False

        logger.info("Directory watcher stopped")

    def is_running(self) -> bool:
        return self._running

    def scan_existing(self) -> int:
        """
        Parse the logs already present in the watch directory.
        Useful at startup to pick up files that arrived while stopped.
        """
        logger.info(f"Scanning existing files in: {self.watch_path}")

        pattern = "**/*" if self.recursive else "*"
        count = 0

        for path in sorted(self.watch_path.glob(pattern)):
            if not path.is_file() or not is_log_filename(path.name):
                continue
            parsed = load_log_file(path, name=log_name_for(path, self.watch_path))
            if parsed:
                try:
                    self.on_log_parsed(parsed)
                    count += 1
                except Exception as e:
                    logger.error(f"Error processing {path}: {e}")

        logger.info(f"Processed {count} existing files")
        return count


class WatcherService:
    """
    High-level service that manages the directory watcher
    and keeps the logs it has parsed in a LogCollection.

    A re-parsed file replaces its earlier entry, and the collection is
    capped at MAX_COLLECTION_FILES (oldest dropped first).
    """

    def __init__(self, collection: Optional[LogCollection] = None):
        self.collection = collection if collection is not None else LogCollection(
            max_logs=settings.MAX_COLLECTION_FILES
        )
        self.watcher: Optional[DirectoryWatcher] = None
        self._stats = {
            "files_processed": 0,
            "last_file": None,
            "started_at": None
        }

    def _handle_log(self, parsed: ParsedLog):
        logger.info(f"Handling log: {parsed.name} ({parsed.section_count} sections)")
        self.collection.add_or_replace(parsed)
        self._stats["files_processed"] += 1
        self._stats["last_file"] = parsed.name

    def start(self, watch_path: str, recursive: bool = True):
        """Scan what is already there, then start watching."""
        if self.watcher and self.watcher.is_running():
            logger.warning("Watcher service already running")
            return

        self.watcher = DirectoryWatcher(watch_path, self._handle_log, recursive=recursive)
        self.watcher.scan_existing()
        self.watcher.start()
        self._stats["started_at"] = datetime.now(timezone.utc).isoformat()

    def stop(self):
        if self.watcher:
            self.watcher.stop()

    def is_running(self) -> bool:
        return bool(self.watcher and self.watcher.is_running())

    def get_stats(self) -> dict:
        return {
            **self._stats,
            "is_running": self.is_running(),
            "watch_path": str(self.watcher.watch_path) if self.watcher else None,
            "log_count": len(self.collection)
        }
