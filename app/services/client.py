"""Cliente HTTP para la API de reportes (formulario y tablero)."""
import logging
import mimetypes
import os
from dataclasses import dataclass
from typing import List, Optional

import requests
from pydantic import ValidationError

from app.config import settings
from app.models.report import Report

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "default.jpg"

SUBMIT_OK = "Report submitted successfully!"
SUBMIT_FAILED = "Failed to submit report."
SERVER_ERROR = "Server error."


@dataclass
class SubmissionResult:
    success: bool
    message: str
    report: Optional[Report] = None


class ReportClient:
    def __init__(self, base_url=None, session=None, timeout=settings.CLIENT_TIMEOUT):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _options(self) -> dict:
        # timeout=None deja el tiempo de espera por defecto de la sesión
        return {} if self.timeout is None else {"timeout": self.timeout}

    def submit_report(self, heading, description, concern, building, image_path=None) -> SubmissionResult:
        data = {
            "heading": heading,
            "description": description,
            "concern": concern,
            "building": building,
        }
        image_file = None
        try:
            files = None
            if image_path:
                image_file = open(image_path, "rb")
                content_type = mimetypes.guess_type(image_path)[0] or "application/octet-stream"
                files = {"imageFile": (os.path.basename(image_path), image_file, content_type)}

            response = self.session.post(self._url("/api/reports"), data=data, files=files, **self._options())
            body = response.json()
        except (requests.RequestException, OSError, ValueError) as e:
            logger.error("Submit error: %s", e)
            return SubmissionResult(False, SERVER_ERROR)
        finally:
            if image_file:
                image_file.close()

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning("Report rejected (%s): %s", response.status_code, message)
            return SubmissionResult(False, SUBMIT_FAILED)

        try:
            report = Report.model_validate(body["report"])
        except (KeyError, ValidationError) as e:
            logger.error("Unexpected submit response: %s", e)
            return SubmissionResult(False, SERVER_ERROR)
        logger.info("Report %s submitted", report.id)
        return SubmissionResult(True, SUBMIT_OK, report)

    def fetch_reports(self) -> List[Report]:
        """Todos los reportes, del más reciente al más antiguo; [] si falla."""
        try:
            response = self.session.get(self._url("/api/reports"), **self._options())
            if response.status_code >= 400:
                logger.error("Error fetching reports: HTTP %s", response.status_code)
                return []
            return [Report.model_validate(item) for item in response.json()]
        except (requests.RequestException, ValueError) as e:
            logger.error("Error fetching reports: %s", e)
            return []

    def image_url(self, report: Report) -> str:
        """URL absoluta de la imagen, o el placeholder si no hay o no carga."""
        if not report.image:
            return PLACEHOLDER_IMAGE
        url = self._url(report.image)
        try:
            response = self.session.head(url, **self._options())
        except requests.RequestException as e:
            logger.warning("Image %s unavailable: %s", url, e)
            return PLACEHOLDER_IMAGE
        if response.status_code >= 400:
            logger.warning("Image %s unavailable: HTTP %s", url, response.status_code)
            return PLACEHOLDER_IMAGE
        return url
