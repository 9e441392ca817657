"""Almacenamiento de imágenes subidas en un directorio plano.

Los archivos se guardan como `<epoch-ms>-<nombre-original>` y se exponen
públicamente en `/uploads/<nombre>`, sin control de acceso.
"""
import asyncio
import logging
import time
from pathlib import Path
from typing import Optional

from app.config import settings

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024
# Límite de bytes del nombre original; el sistema de archivos admite 255 con el prefijo
_MAX_NAME_BYTES = 200


class UploadTooLarge(ValueError):
    pass


def upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def public_path(filename: str) -> str:
    return f"{settings.UPLOAD_URL_PREFIX}/{filename}"


def _clean_name(original_name: str) -> str:
    # Solo el nombre base; los navegadores a veces envían la ruta completa
    name = original_name.replace("\\", "/").rsplit("/", 1)[-1].strip() or "upload"
    if len(name.encode("utf-8")) <= _MAX_NAME_BYTES:
        return name
    # Recortar la base conservando la extensión
    stem, dot, ext = name.rpartition(".")
    if not stem or len(ext.encode("utf-8")) > 16:
        stem, dot, ext = name, "", ""
    suffix = dot + ext
    budget = _MAX_NAME_BYTES - len(suffix.encode("utf-8"))
    return stem.encode("utf-8")[:budget].decode("utf-8", "ignore") + suffix


def _open_unique(directory: Path, original_name: str):
    name = _clean_name(original_name)
    stamp = int(time.time() * 1000)
    while True:
        filename = f"{stamp}-{name}"
        try:
            return filename, open(directory / filename, "xb")
        except FileExistsError:
            stamp += 1


def _store_sync(source, original_name: str, max_size: int) -> str:
    directory = upload_dir()
    filename, target = _open_unique(directory, original_name)
    written = 0
    try:
        with target:
            while True:
                chunk = source.read(_CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_size:
                    raise UploadTooLarge(f"File exceeds the {max_size} byte limit")
                target.write(chunk)
    except Exception:
        (directory / filename).unlink(missing_ok=True)
        raise
    logger.info("Stored upload %s (%d bytes)", filename, written)
    return filename


async def store_upload(source, original_name: str, max_size: Optional[int] = None) -> str:
    """Copia `source` (objeto tipo archivo) al directorio de subidas.

    Devuelve el nombre generado. Lanza UploadTooLarge si supera `max_size`;
    en ese caso el archivo parcial se elimina.
    """
    if max_size is None:
        max_size = settings.MAX_UPLOAD_SIZE
    return await asyncio.to_thread(_store_sync, source, original_name, max_size)


def resolve_upload(name: str) -> Optional[Path]:
    """Ruta del archivo subido `name`, o None si no existe o sale del directorio."""
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        return None
    directory = upload_dir().resolve()
    path = (directory / name).resolve()
    if path.parent != directory or not path.is_file():
        return None
    return path
