"""
Shared request helpers for Parity routes: turn posted text or uploaded
files into parsed logs, or fail with the matching HTTP error.
"""
from fastapi import UploadFile, HTTPException

from core import parse_log, ParsedLog
from services.loader import is_log_filename, load_log_content
from config import settings

UNRECOGNIZED_DETAIL = "No sections recognized in {name}: expected '[ SECTION ]' or '說明:/指令:' headers"


def parse_text_or_422(text: str, name: str) -> ParsedLog:
    parsed = parse_log(text, name=name)
    if not parsed.is_recognized:
        raise HTTPException(status_code=422, detail=UNRECOGNIZED_DETAIL.format(name=name))
    return parsed


async def read_log_upload(upload: UploadFile) -> ParsedLog:
    """Validate, read and parse one uploaded log."""
    filename = upload.filename or "upload"
    if not is_log_filename(filename):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {filename} (expected {', '.join(settings.LOG_FILE_EXTENSIONS)})"
        )

    content = await upload.read()
    parsed = load_log_content(content, filename)
    if parsed is None:
        raise HTTPException(status_code=422, detail=UNRECOGNIZED_DETAIL.format(name=filename))
    return parsed
