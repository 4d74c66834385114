"""
Route File Routes

Endpoints for parsing uploaded route files.
"""

from fastapi import APIRouter, UploadFile, File, HTTPException

from app.features.routes import (
    ParsedRoute,
    RouteParserService,
    RouteParseError,
)

router = APIRouter()

MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB


@router.post("/parse", response_model=ParsedRoute)
async def parse_route_file(file: UploadFile = File(...)):
    """
    Upload and parse a route file (GPX).

    Returns (lon, lat) coordinates, total distance and file elevations.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="File name is required")

    content = await file.read()

    if len(content) == 0:
        raise HTTPException(status_code=400, detail="File is empty")

    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large (max 20MB)")

    try:
        return RouteParserService.parse_file(file.filename, content)
    except RouteParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
