"""
System routes for Parity: watcher status, watched logs and runtime config.
"""
from fastapi import APIRouter, HTTPException

from api.schemas import WatcherStats, ComparisonResponse
from config import settings

router = APIRouter()


def _require_watcher():
    from api.main import get_watcher_service

    watcher = get_watcher_service()
    if not watcher:
        raise HTTPException(status_code=404, detail="Directory watcher is not configured")
    return watcher


@router.get("/watcher/status", response_model=WatcherStats)
async def get_watcher_status():
    """Get file watcher status and statistics."""
    from api.main import get_watcher_service

    watcher = get_watcher_service()

    if not watcher:
        return WatcherStats(is_running=False)

    return WatcherStats(**watcher.get_stats())


@router.get("/watcher/logs")
async def list_watched_logs():
    """Logs parsed by the watcher, in arrival order."""
    watcher = _require_watcher()
    return [
        {"index": i, "name": log.name, "grammar": log.grammar.value, "section_count": log.section_count}
        for i, log in enumerate(watcher.collection.logs)
    ]


@router.get("/watcher/compare", response_model=ComparisonResponse)
async def compare_watched_logs(index_a: int, index_b: int):
    """Compare two watched logs by index."""
    watcher = _require_watcher()

    result = watcher.collection.compare(index_a, index_b)
    if result is None:
        raise HTTPException(status_code=400, detail=f"Invalid log indexes {index_a}, {index_b}")

    return ComparisonResponse(**result.to_dict())


@router.get("/config")
async def get_config():
    """Non-sensitive runtime configuration."""
    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "log_file_extensions": settings.LOG_FILE_EXTENSIONS,
        "max_collection_files": settings.MAX_COLLECTION_FILES,
        "watch_directory": settings.WATCH_DIRECTORY
    }
