import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from app.config import settings
from app.config.database import get_reports_collection
from app.models.report import Report, report_from_document
from app.schemas.report import ErrorOut, ReportCreated
from app.services.uploads import UploadTooLarge, public_path, store_upload

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


@router.post(
    "/reports",
    response_model=ReportCreated,
    responses={413: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def create_report(
    heading: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    concern: Optional[str] = Form(None),
    building: Optional[str] = Form(None),
    image_file: Optional[UploadFile] = File(None, alias="imageFile"),
    collection=Depends(get_reports_collection),
):
    # Sin validación en el servidor: los campos faltantes se guardan como null
    try:
        logger.info("Incoming report: heading=%r concern=%r building=%r", heading, concern, building)

        image = None
        if image_file is not None and image_file.filename:
            filename = await store_upload(image_file.file, image_file.filename)
            image = public_path(filename)
            logger.info("Incoming file: %s stored as %s", image_file.filename, filename)

        # MongoDB guarda fechas con precisión de milisegundos
        now = datetime.now(timezone.utc)
        created_at = now.replace(microsecond=now.microsecond // 1000 * 1000)

        report_dict = {
            "heading": heading,
            "description": description,
            "concern": concern,
            "building": building,
            "status": settings.DEFAULT_STATUS,
            "image": image,
            "created_at": created_at,
        }
        result = await collection.insert_one(report_dict)
        report_dict["_id"] = result.inserted_id
        logger.info("Report inserted with id %s", result.inserted_id)

        return ReportCreated(report=report_from_document(report_dict))
    except HTTPException:
        raise
    except UploadTooLarge as e:
        logger.warning("Rejected upload: %s", e)
        return _error(413, str(e))
    except Exception as e:
        logger.exception("Report submission error")
        return _error(500, str(e))


@router.get("/reports", response_model=List[Report], responses={500: {"model": ErrorOut}})
async def get_reports(collection=Depends(get_reports_collection)):
    try:
        reports = []
        async for document in collection.find({}, sort=[("created_at", -1), ("_id", -1)]):
            reports.append(report_from_document(document))
        logger.info("Returning %d reports", len(reports))
        return reports
    except Exception:
        logger.exception("Fetch reports error")
        return _error(500, "Error fetching reports")
