"""
FastAPI router for the ingestion trigger.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from core.context import AppContext, get_context

from . import service

router = APIRouter()


@router.get("/")
async def add_coordinates(ctx: AppContext = Depends(get_context)) -> FileResponse:
    """
    Generate one waveform, store every sample, then return the index page.

    Storage failures are rendered by the storage error handler (see `core/errors.py`).
    """
    await service.ingest_waveform(ctx)

    index_file = ctx.settings.index_file
    if not index_file.is_file():
        raise HTTPException(status_code=500, detail="Index page is missing.")
    return FileResponse(index_file, media_type="text/html")
