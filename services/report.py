"""
Plain-text comparison reports for Parity.
"""
from datetime import datetime, timezone
from typing import Optional

from core.comparison import LogComparison, SectionStatus
from core.diff import DiffOp, DiffTag, DocumentDiff
from core.results import ResultItem, ResultReport
from config import settings


_STATUS_MARKS = {
    SectionStatus.ADDED: "+",
    SectionStatus.REMOVED: "-",
    SectionStatus.MODIFIED: "~",
    SectionStatus.UNCHANGED: " ",
}

_OP_PREFIX = {
    DiffTag.EQUAL: " ",
    DiffTag.DELETE: "-",
    DiffTag.INSERT: "+",
}


def format_edit_script(operations, indent: str = "  ") -> list[str]:
    """Render an edit script as unified-style lines ("-", "+" or " " prefix)."""
    return [f"{indent}{_OP_PREFIX[op.tag]} {op.text}" for op in operations]


def format_line_numbers(op: DiffOp) -> str:
    """Old/new line number gutter for one operation."""
    left = str(op.index_a) if op.index_a is not None else ""
    right = str(op.index_b) if op.index_b is not None else ""
    return f"{left:>5} {right:>5}"


def generate_comparison_report(
    result: LogComparison,
    changes_only: bool = False,
    generated_at: Optional[datetime] = None
) -> str:
    """Generate a text report for a two-log comparison."""
    width = settings.REPORT_WIDTH
    generated_at = generated_at or datetime.now(timezone.utc)
    summary = result.summary

    lines = [
        "=" * width,
        "SCAN LOG COMPARISON REPORT",
        f"{settings.APP_NAME} v{settings.APP_VERSION}",
        "=" * width,
        "",
        f"Timestamp:        {generated_at.isoformat()}",
        f"Before:           {result.name_a}",
        f"After:            {result.name_b}",
        "",
        f"Sections:         {len(result.entries)}",
        f"  Modified:       {summary['modified']}",
        f"  Added:          {summary['added']}",
        f"  Removed:        {summary['removed']}",
        f"  Unchanged:      {summary['unchanged']}",
        "",
    ]

    if result.duplicate_titles:
        lines.append("Repeated titles (last occurrence compared):")
        lines.extend(f"  {title}" for title in result.duplicate_titles)
        lines.append("")

    if result.is_identical:
        lines.extend([
            "-" * 40,
            "RESULT: NO DIFFERENCES FOUND",
            "-" * 40,
            "",
        ])
    else:
        lines.extend([
            "-" * 40,
            f"RESULT: {result.change_count} SECTION(S) CHANGED",
            "-" * 40,
            "",
        ])

    for entry in result.entries:
        if changes_only and entry.status == SectionStatus.UNCHANGED:
            continue

        lines.append(f"[{_STATUS_MARKS[entry.status]}] {entry.title}  ({entry.status.value.upper()})")

        if entry.status == SectionStatus.MODIFIED:
            lines.append(f"    +{entry.lines_added} / -{entry.lines_removed} lines")
            lines.extend(format_edit_script(entry.edit_script, indent="    "))
        elif entry.status == SectionStatus.ADDED:
            lines.extend(f"    + {line}" for line in (entry.body_b or "").splitlines())
        elif entry.status == SectionStatus.REMOVED:
            lines.extend(f"    - {line}" for line in (entry.body_a or "").splitlines())

        lines.append("")

    lines.extend([
        "=" * width,
        "END OF REPORT",
        "=" * width,
    ])

    return "\n".join(lines)


def generate_document_diff_report(diff: DocumentDiff, name_a: str, name_b: str) -> str:
    """Full-document diff with line number gutters."""
    lines = [
        f"--- {name_a}",
        f"+++ {name_b}",
        f"@@ +{diff.insert_count} -{diff.delete_count} @@",
    ]
    for op in diff.operations:
        lines.append(f"{format_line_numbers(op)} {_OP_PREFIX[op.tag]} {op.text}")
    return "\n".join(lines)


def format_result_item(item: ResultItem) -> list[str]:
    mark = "*" if item.has_diff else " "
    lines = [
        f"{mark} {item.item_id}  [{item.status or '-'}]",
        f"    {item.description}",
        f"    Expected: {item.expected if item.expected is not None else ''}",
    ]
    if item.has_diff:
        lines.append(f"    - {item.before if item.before is not None else ''}")
        lines.append(f"    + {item.after if item.after is not None else ''}")
    else:
        lines.append(f"      {item.after if item.after is not None else ''}")
    return lines


def generate_result_report(report: ResultReport, items: Optional[list[ResultItem]] = None) -> str:
    """Text summary of a hardening result report."""
    width = settings.REPORT_WIDTH
    selected = list(report.items) if items is None else items

    lines = [
        "=" * width,
        "HARDENING RESULT SUMMARY",
        "=" * width,
        f"Hostname:         {report.hostname or '-'}",
        f"Scan time:        {report.scan_time.isoformat() if report.scan_time else '-'}",
        f"Total items:      {report.total}",
        f"Fixed:            {report.fixed_count}",
        f"Failed:           {report.failed_count}",
        f"Changed values:   {report.diff_count}",
        "-" * width,
    ]

    if not selected:
        lines.append("No matching items.")
    for item in selected:
        lines.extend(format_result_item(item))

    return "\n".join(lines)
