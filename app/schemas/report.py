from pydantic import BaseModel

from app.models.report import Report


class ReportCreated(BaseModel):
    success: bool = True
    report: Report


class ErrorOut(BaseModel):
    success: bool = False
    message: str
