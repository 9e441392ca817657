from datetime import datetime, timezone
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.config import settings


class GroupKey(NamedTuple):
    """Clave de agrupación de reportes similares: (edificio, categoría)."""

    building: Optional[str]
    concern: Optional[str]

    @property
    def label(self) -> str:
        # Forma legible "Edificio-Categoría", solo para mostrar
        return f"{self.building}-{self.concern}"

    def sort_key(self):
        return (self.building or "", self.concern or "")


class Report(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    heading: Optional[str] = None
    description: Optional[str] = None
    concern: Optional[str] = None  # "Electrical", "Plumbing", ... (no se valida)
    building: Optional[str] = None
    status: Optional[str] = settings.DEFAULT_STATUS
    image: Optional[str] = None  # Ruta pública "/uploads/<nombre>"
    created_at: datetime = Field(alias="createdAt")


def _as_utc(value: datetime) -> datetime:
    # BSON guarda fechas sin zona horaria (UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def report_from_document(document: dict) -> Report:
    """Convierte un documento de MongoDB en un Report."""
    return Report(
        id=str(document["_id"]),
        heading=document.get("heading"),
        description=document.get("description"),
        concern=document.get("concern"),
        building=document.get("building"),
        status=document.get("status", settings.DEFAULT_STATUS),
        image=document.get("image"),
        created_at=_as_utc(document["created_at"]),
    )
