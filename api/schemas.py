"""
Pydantic schemas for the Parity API.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


# ============================================================
# SECTION SCHEMAS
# ============================================================

class SectionParseRequest(BaseModel):
    text: str
    name: str = "log"


class SectionSchema(BaseModel):
    id: str
    title: str
    body: str
    side_metadata: Optional[str] = None
    ordinal: int


class ParsedLogResponse(BaseModel):
    name: str
    grammar: str
    section_count: int
    sections: list[SectionSchema]


# ============================================================
# COMPARISON SCHEMAS
# ============================================================

class ComparisonRequest(BaseModel):
    """Request to compare two scan logs."""
    text_a: str
    text_b: str
    name_a: str = "before"
    name_b: str = "after"


class DiffOpSchema(BaseModel):
    tag: str
    text: str
    index_a: Optional[int] = None
    index_b: Optional[int] = None


class AlignedEntrySchema(BaseModel):
    title: str
    status: str
    body_a: Optional[str] = None
    body_b: Optional[str] = None
    lines_added: int = 0
    lines_removed: int = 0
    edit_script: Optional[list[DiffOpSchema]] = None


class ComparisonResponse(BaseModel):
    name_a: str
    name_b: str
    is_identical: bool
    change_count: int
    old_hash: str
    new_hash: str
    summary: dict[str, int]
    duplicate_titles: list[str] = Field(default_factory=list)
    entries: list[AlignedEntrySchema]


class DocumentDiffRequest(BaseModel):
    text_a: str
    text_b: str


class DocumentDiffResponse(BaseModel):
    is_identical: bool
    insert_count: int
    delete_count: int
    operations: list[DiffOpSchema]


# ============================================================
# RESULT REPORT SCHEMAS
# ============================================================

class ResultItemSchema(BaseModel):
    id: str
    description: str
    before: Optional[Any] = None
    after: Optional[Any] = None
    expected: Optional[Any] = None
    status: str
    has_diff: bool


class ResultReportResponse(BaseModel):
    hostname: Optional[str] = None
    scan_time: Optional[str] = None
    total: int
    fixed_count: int
    failed_count: int
    diff_count: int
    items: list[ResultItemSchema]


# ============================================================
# SYSTEM SCHEMAS
# ============================================================

class WatcherStats(BaseModel):
    is_running: bool
    watch_path: Optional[str] = None
    files_processed: int = 0
    log_count: int = 0
    last_file: Optional[str] = None
    started_at: Optional[str] = None
