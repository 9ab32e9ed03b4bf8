"""
Hardening result report parsing.

A hardening run writes a JSON summary alongside its logs:

    {
      "meta": {"hostname": "web01", "scan_time_final": "2025-01-15T10:30:00"},
      "results": {
        "TWGCB-01-008-0001.yml": {
          "description": "...", "before": "...", "after": "...",
          "expected": "...", "status": "FIXED"
        }
      }
    }

Each item is flagged with whether its before/after values differ.
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)


STATUS_FIXED = "FIXED"
STATUS_FAILED = "FAILED"


@dataclass(frozen=True)
class ResultItem:
    """One checked item of a hardening run."""
    item_id: str
    description: str = ""
    before: Any = None
    after: Any = None
    expected: Any = None
    status: str = ""

    @property
    def has_diff(self) -> bool:
        return str(self.before).strip() != str(self.after).strip()

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "description": self.description,
            "before": self.before,
            "after": self.after,
            "expected": self.expected,
            "status": self.status,
            "has_diff": self.has_diff
        }


@dataclass(frozen=True)
class ResultReport:
    """Parsed hardening result report."""
    items: tuple[ResultItem, ...] = field(default_factory=tuple)
    hostname: Optional[str] = None
    scan_time: Optional[datetime] = None

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def fixed_count(self) -> int:
        return sum(1 for i in self.items if i.status == STATUS_FIXED)

    @property
    def failed_count(self) -> int:
        return sum(1 for i in self.items if i.status == STATUS_FAILED)

    @property
    def diff_count(self) -> int:
        return sum(1 for i in self.items if i.has_diff)

    def filter(self, term: str = "", only_diff: bool = False) -> list[ResultItem]:
        """
        Items whose id or description contains `term` (case-insensitive),
        optionally restricted to items whose value changed.
        """
        term = (term or "").lower()
        matched = []
        for item in self.items:
            if term and term not in item.item_id.lower() and term not in item.description.lower():
                continue
            if only_diff and not item.has_diff:
                continue
            matched.append(item)
        return matched

    def to_dict(self, items: Optional[list[ResultItem]] = None) -> dict:
        selected = self.items if items is None else items
        return {
            "hostname": self.hostname,
            "scan_time": self.scan_time.isoformat() if self.scan_time else None,
            "total": self.total,
            "fixed_count": self.fixed_count,
            "failed_count": self.failed_count,
            "diff_count": self.diff_count,
            "items": [i.to_dict() for i in selected]
        }


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse various timestamp formats into datetime.

    Supports:
    - ISO format: 2024-01-15T10:30:00, with or without offset
    - Date only: 2024-01-15
    - US format: 01/15/2024
    - With time: 2024-01-15 10:30:00
    - Unix timestamp (int or float), returned in UTC
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str):
        return None

    value = value.strip()
    if not value:
        return None

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass

    formats = [
        "%Y-%m-%d %H:%M:%S",
        "%Y/%m/%d %H:%M:%S",
        "%m/%d/%Y %H:%M:%S",
        "%m/%d/%Y",
        "%Y%m%d%H%M%S",
        "%Y%m%d",
    ]

    for fmt in formats:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    return None


def _strip_extension(key: str) -> str:
    return key[:-len(".yml")] if key.endswith(".yml") else key


def parse_result_report(data: dict) -> ResultReport:
    """
    Build a ResultReport from an already-decoded JSON object.

    Missing "meta" or "results" blocks give an empty report rather than
    an error; individual non-object entries are skipped.
    """
    meta = data.get("meta") or {}
    results = data.get("results") or {}

    items = []
    for key, entry in results.items():
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed result entry: {key}")
            continue
        items.append(ResultItem(
            item_id=_strip_extension(str(key)),
            description=str(entry.get("description") or ""),
            before=entry.get("before"),
            after=entry.get("after"),
            expected=entry.get("expected"),
            status=str(entry.get("status") or "")
        ))

    hostname = meta.get("hostname")

    return ResultReport(
        items=tuple(items),
        hostname=str(hostname) if hostname else None,
        scan_time=parse_timestamp(meta.get("scan_time_final"))
    )


def parse_result_content(content: str) -> Optional[ResultReport]:
    """
    Parse raw result report JSON.

    Returns:
        ResultReport, or None if the content is not a JSON object
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Error parsing result report JSON: {e}")
        return None

    if not isinstance(data, dict):
        logger.error("Result report must be a JSON object")
        return None

    return parse_result_report(data)
