"""
Section routes for Parity.

Parses a single scan log into its sections.
"""
from fastapi import APIRouter, UploadFile, File

from api.uploads import parse_text_or_422, read_log_upload
from api.schemas import ParsedLogResponse, SectionParseRequest

router = APIRouter()


@router.post("", response_model=ParsedLogResponse)
async def parse_sections(request: SectionParseRequest):
    """Split posted log text into sections."""
    parsed = parse_text_or_422(request.text, request.name)
    return ParsedLogResponse(**parsed.to_dict())


@router.post("/file", response_model=ParsedLogResponse)
async def parse_section_file(file: UploadFile = File(...)):
    """Split an uploaded log (.txt, .log or HTML export) into sections."""
    parsed = await read_log_upload(file)
    return ParsedLogResponse(**parsed.to_dict())
