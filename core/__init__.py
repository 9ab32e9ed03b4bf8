# Parity v1.0.0
"""
Core package for the Parity scan log comparison engine.
Contains header grammars, the section tokenizer, the Myers line diff
and section alignment.
"""
from core.formats import (
    Grammar,
    HeaderMatch,
    HeaderPattern,
    detect_format,
    get_header_pattern
)
from core.sections import (
    tokenize,
    parse_log,
    compose_body,
    Section,
    ParsedLog
)
from core.diff import (
    diff_lines,
    diff_documents,
    split_lines,
    DiffOp,
    DiffTag,
    DocumentDiff
)
from core.comparison import (
    align_sections,
    classify_section,
    compare_logs,
    compute_log_hash,
    find_duplicate_titles,
    AlignedEntry,
    LogComparison,
    SectionStatus
)
from core.results import (
    parse_result_report,
    parse_result_content,
    parse_timestamp,
    ResultItem,
    ResultReport
)

__all__ = [
    "Grammar",
    "HeaderMatch",
    "HeaderPattern",
    "detect_format",
    "get_header_pattern",
    "tokenize",
    "parse_log",
    "compose_body",
    "Section",
    "ParsedLog",
    "diff_lines",
    "diff_documents",
    "split_lines",
    "DiffOp",
    "DiffTag",
    "DocumentDiff",
    "align_sections",
    "classify_section",
    "compare_logs",
    "compute_log_hash",
    "find_duplicate_titles",
    "AlignedEntry",
    "LogComparison",
    "SectionStatus",
    "parse_result_report",
    "parse_result_content",
    "parse_timestamp",
    "ResultItem",
    "ResultReport"
]
