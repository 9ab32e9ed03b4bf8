# Parity v1.0.0
"""
Services package for Parity.
Contains log loading, multi-log collections, text reports and the
directory watcher.
"""
from services.loader import load_log_file, load_log_content, extract_text_from_html
from services.collection import LogCollection
from services.report import (
    generate_comparison_report,
    generate_document_diff_report,
    generate_result_report
)
from services.watcher import DirectoryWatcher, WatcherService, ScanLogHandler

__all__ = [
    "load_log_file",
    "load_log_content",
    "extract_text_from_html",
    "LogCollection",
    "generate_comparison_report",
    "generate_document_diff_report",
    "generate_result_report",
    "DirectoryWatcher",
    "WatcherService",
    "ScanLogHandler"
]
