from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from app.services.uploads import resolve_upload

router = APIRouter()


@router.api_route("/uploads/{name}", methods=["GET", "HEAD"])
async def get_upload(name: str):
    path = resolve_upload(name)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path)
