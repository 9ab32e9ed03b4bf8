"""
Hardening result report routes for Parity.
"""
from typing import Optional

from fastapi import APIRouter, UploadFile, File, HTTPException, Query

from core import parse_result_content
from api.schemas import ResultReportResponse
from services.loader import decode_content

router = APIRouter()


@router.post("", response_model=ResultReportResponse)
async def upload_result_report(
    file: UploadFile = File(...),
    search: Optional[str] = Query(None, description="Match against item id or description"),
    only_diff: bool = Query(False, description="Only items whose before/after values differ")
):
    """
    Parse a hardening result JSON and return its items with before/after flags.

    The summary counts always cover the whole report; `search` and
    `only_diff` only narrow the returned items.
    """
    filename = file.filename or "upload"
    if not filename.lower().endswith(".json"):
        raise HTTPException(status_code=400, detail="Result report must be JSON")

    content = decode_content(await file.read())
    if content is None:
        raise HTTPException(status_code=400, detail="Result report is not valid UTF-8")

    report = parse_result_content(content)
    if report is None:
        raise HTTPException(status_code=400, detail="Invalid JSON in result report")

    items = report.filter(search or "", only_diff)
    return ResultReportResponse(**report.to_dict(items))
