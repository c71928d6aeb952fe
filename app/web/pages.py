"""Static pages served next to the API."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).parent / "static"

router = APIRouter()


@router.get("/", include_in_schema=False)
def home() -> FileResponse:
    """Welcome page of the monorepo."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")
