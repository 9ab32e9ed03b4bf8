"""
Parity Section Comparison Engine

Matches the sections of two scan logs by title, classifies each title as
added, removed, modified or unchanged, and attaches a line diff to every
modified pair.
"""
from typing import Optional
from dataclasses import dataclass, field
from enum import Enum
import hashlib
import logging

from core.diff import DiffOp, DiffTag, diff_lines, split_lines
from core.sections import ParsedLog, Section

logger = logging.getLogger(__name__)


class SectionStatus(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class AlignedEntry:
    """Comparison outcome for one section title."""
    title: str
    status: SectionStatus
    body_a: Optional[str] = None
    body_b: Optional[str] = None
    edit_script: Optional[tuple[DiffOp, ...]] = None

    @property
    def lines_added(self) -> int:
        if self.status == SectionStatus.ADDED:
            return len(split_lines(self.body_b or ""))
        if not self.edit_script:
            return 0
        return sum(1 for op in self.edit_script if op.tag == DiffTag.INSERT)

    @property
    def lines_removed(self) -> int:
        if self.status == SectionStatus.REMOVED:
            return len(split_lines(self.body_a or ""))
        if not self.edit_script:
            return 0
        return sum(1 for op in self.edit_script if op.tag == DiffTag.DELETE)

    def to_dict(self) -> dict:
        result = {
            "title": self.title,
            "status": self.status.value,
            "body_a": self.body_a,
            "body_b": self.body_b,
            "lines_added": self.lines_added,
            "lines_removed": self.lines_removed
        }
        if self.edit_script is not None:
            result["edit_script"] = [op.to_dict() for op in self.edit_script]
        return result


@dataclass(frozen=True)
class LogComparison:
    """Result of comparing two parsed scan logs."""
    entries: tuple[AlignedEntry, ...] = field(default_factory=tuple)
    name_a: str = "a"
    name_b: str = "b"
    old_hash: str = ""
    new_hash: str = ""
    duplicate_titles: tuple[str, ...] = field(default_factory=tuple)

    def count(self, status: SectionStatus) -> int:
        return sum(1 for e in self.entries if e.status == status)

    @property
    def change_count(self) -> int:
        return len(self.changes)

    @property
    def changes(self) -> list[AlignedEntry]:
        return [e for e in self.entries if e.status != SectionStatus.UNCHANGED]

    @property
    def is_identical(self) -> bool:
        return self.change_count == 0

    @property
    def summary(self) -> dict[str, int]:
        return {status.value: self.count(status) for status in SectionStatus}

    def to_dict(self) -> dict:
        return {
            "name_a": self.name_a,
            "name_b": self.name_b,
            "is_identical": self.is_identical,
            "change_count": self.change_count,
            "old_hash": self.old_hash,
            "new_hash": self.new_hash,
            "summary": self.summary,
            "duplicate_titles": list(self.duplicate_titles),
            "entries": [e.to_dict() for e in self.entries]
        }


def classify_section(body_a: Optional[str], body_b: Optional[str]) -> SectionStatus:
    """
    Classify one title from its bodies on each side.

    None means the title is absent from that side. Bodies are compared
    after trimming; position in the document plays no part.
    """
    if body_a is None and body_b is None:
        raise ValueError("A section title must be present on at least one side")
    if body_a is None:
        return SectionStatus.ADDED
    if body_b is None:
        return SectionStatus.REMOVED
    if body_a.strip() == body_b.strip():
        return SectionStatus.UNCHANGED
    return SectionStatus.MODIFIED


def find_duplicate_titles(sections: list[Section]) -> list[str]:
    """Titles that occur more than once, in first-seen order."""
    seen = set()
    duplicates = []
    for section in sections:
        if section.title in seen and section.title not in duplicates:
            duplicates.append(section.title)
        seen.add(section.title)
    return duplicates


def align_sections(sections_a: list[Section], sections_b: list[Section]) -> list[AlignedEntry]:
    """
    Align two section lists by title.

    Every title from either side appears exactly once, ordered by first
    appearance in A and then in B. A title repeated within one side keeps
    the body of its last occurrence.
    """
    bodies_a = {s.title: s.body for s in sections_a}
    bodies_b = {s.title: s.body for s in sections_b}

    # dict keys keep insertion order
    titles = dict.fromkeys([s.title for s in sections_a] + [s.title for s in sections_b])

    entries = []
    for title in titles:
        body_a = bodies_a.get(title)
        body_b = bodies_b.get(title)
        status = classify_section(body_a, body_b)

        edit_script = None
        if status == SectionStatus.MODIFIED:
            edit_script = tuple(diff_lines(split_lines(body_a), split_lines(body_b)))

        entries.append(AlignedEntry(
            title=title,
            status=status,
            body_a=body_a,
            body_b=body_b,
            edit_script=edit_script
        ))

    return entries


def compute_log_hash(sections: list[Section]) -> str:
    """
    SHA-256 over the title/body pairs of a section list.

    Logs with the same hash align as entirely unchanged.
    """
    digest = hashlib.sha256()
    for section in sections:
        digest.update(section.title.encode("utf-8"))
        digest.update(b"\x00")
        digest.update(section.body.strip().encode("utf-8"))
        digest.update(b"\x00")
    return digest.hexdigest()


def compare_logs(log_a: ParsedLog, log_b: ParsedLog) -> LogComparison:
    """
    Main entry point for comparing two parsed scan logs.

    Args:
        log_a: The baseline/before log
        log_b: The target/after log

    Returns:
        LogComparison with one entry per distinct section title
    """
    sections_a = list(log_a.sections)
    sections_b = list(log_b.sections)

    duplicates = find_duplicate_titles(sections_a) + find_duplicate_titles(sections_b)
    duplicates = list(dict.fromkeys(duplicates))
    if duplicates:
        logger.warning(
            f"Repeated section titles in {log_a.name} / {log_b.name}; "
            f"only the last occurrence is compared: {', '.join(duplicates)}"
        )

    entries = align_sections(sections_a, sections_b)

    return LogComparison(
        entries=tuple(entries),
        name_a=log_a.name,
        name_b=log_b.name,
        old_hash=compute_log_hash(sections_a),
        new_hash=compute_log_hash(sections_b),
        duplicate_titles=tuple(duplicates)
    )
