"""
Comparison routes for Parity.

Compares two scan logs section by section, whole documents line by line,
or any two logs out of a multi-file upload.
"""
from fastapi import APIRouter, UploadFile, File, Form, HTTPException

from core import compare_logs, diff_documents
from api.schemas import (
    ComparisonRequest,
    ComparisonResponse,
    DocumentDiffRequest,
    DocumentDiffResponse
)
from api.uploads import parse_text_or_422, read_log_upload
from services.collection import LogCollection
from services.report import generate_comparison_report
from config import settings

router = APIRouter()


@router.post("", response_model=ComparisonResponse)
async def compare_texts(request: ComparisonRequest):
    """
    Compare two scan logs and return per-section differences.
    """
    log_a = parse_text_or_422(request.text_a, request.name_a)
    log_b = parse_text_or_422(request.text_b, request.name_b)

    result = compare_logs(log_a, log_b)
    return ComparisonResponse(**result.to_dict())


@router.post("/files")
async def compare_files(
    before_file: UploadFile = File(...),
    after_file: UploadFile = File(...)
):
    """
    Compare two uploaded scan logs (.txt, .log or HTML export).
    """
    log_a = await read_log_upload(before_file)
    log_b = await read_log_upload(after_file)

    result = compare_logs(log_a, log_b)

    return {
        "before_file": log_a.name,
        "after_file": log_b.name,
        **result.to_dict(),
        "report": generate_comparison_report(result)
    }


@router.post("/documents", response_model=DocumentDiffResponse)
async def compare_documents(request: DocumentDiffRequest):
    """
    Line diff of two whole texts, without sectioning.
    """
    diff = diff_documents(request.text_a, request.text_b)
    return DocumentDiffResponse(**diff.to_dict())


@router.post("/collection")
async def compare_collection(
    files: list[UploadFile] = File(...),
    index_a: int = Form(0),
    index_b: int = Form(1)
):
    """
    Upload several logs and compare two of them by position.
    """
    if len(files) > settings.MAX_COLLECTION_FILES:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files: {len(files)} (max {settings.MAX_COLLECTION_FILES})"
        )

    collection = LogCollection()
    for upload in files:
        collection.add(await read_log_upload(upload))

    result = collection.compare(index_a, index_b)
    if result is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid log indexes {index_a}, {index_b} for {len(collection)} file(s)"
        )

    return {
        "logs": [
            {"index": i, "name": log.name, "grammar": log.grammar.value, "section_count": log.section_count}
            for i, log in enumerate(collection.logs)
        ],
        "index_a": index_a,
        "index_b": index_b,
        "comparison": result.to_dict()
    }
