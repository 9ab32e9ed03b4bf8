"""
Multi-log comparison for Parity.

Holds several parsed scan logs (for example the same host scanned on
different days) and compares any two of them.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from core.comparison import LogComparison, compare_logs
from core.sections import ParsedLog

logger = logging.getLogger(__name__)


@dataclass
class LogCollection:
    """
    Ordered set of parsed logs.

    When `max_logs` is set, adding past the limit evicts the oldest log,
    so indexes of the remaining logs shift down.

    Usage:
        collection = LogCollection()
        collection.add(parsed_before)
        collection.add(parsed_after)
        result = collection.compare(0, 1)
    """
    logs: list[ParsedLog] = field(default_factory=list)
    max_logs: Optional[int] = None

    def __len__(self) -> int:
        return len(self.logs)

    def add(self, log: ParsedLog) -> int:
        """Add a log and return its index."""
        self.logs.append(log)

        if self.max_logs is not None and len(self.logs) > self.max_logs:
            evicted = self.logs[:len(self.logs) - self.max_logs]
            del self.logs[:len(evicted)]
            logger.info(f"Collection full ({self.max_logs}); dropped {', '.join(old.name for old in evicted)}")

        logger.info(f"Added {log.name} to collection as #{len(self.logs) - 1}")
        return len(self.logs) - 1

    def add_or_replace(self, log: ParsedLog) -> int:
        """
        Replace the log with the same name in place, or add it if new.

        Returns the index the log ends up at.
        """
        index = self.index_of(log.name)
        if index is None:
            return self.add(log)

        self.logs[index] = log
        logger.info(f"Replaced {log.name} in collection at #{index}")
        return index

    def index_of(self, name: str) -> Optional[int]:
        for i, existing in enumerate(self.logs):
            if existing.name == name:
                return i
        return None

    def get(self, index: int) -> Optional[ParsedLog]:
        if 0 <= index < len(self.logs):
            return self.logs[index]
        return None

    def default_pair(self) -> tuple[int, int]:
        """The pair shown first: the first log against the second (or itself)."""
        return (0, 1) if len(self.logs) > 1 else (0, 0)

    def compare(self, index_a: int, index_b: int) -> Optional[LogComparison]:
        """
        Compare two logs by index.

        Returns None if either index is out of range.
        """
        log_a = self.get(index_a)
        log_b = self.get(index_b)

        if log_a is None or log_b is None:
            logger.warning(f"Invalid collection indexes: {index_a}, {index_b} (size {len(self.logs)})")
            return None

        return compare_logs(log_a, log_b)

    def to_dict(self) -> list[dict]:
        return [log.to_dict() for log in self.logs]
