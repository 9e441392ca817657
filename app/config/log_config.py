"""Configuración de logging para la API y los scripts de línea de comandos.

Escribe en stderr y, si LOG_PATH está definido, también en
`{LOG_PATH}/reports.log`.
"""
import logging
import os

from app.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level=None, logging_dir=None, filename="reports.log"):
    level = level or settings.LOG_LEVEL
    logging_dir = logging_dir or settings.LOG_PATH

    root = logging.getLogger()
    if getattr(root, "_reports_configured", False):
        return root

    root.setLevel(level)
    formatter = logging.Formatter(_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)

    if logging_dir:
        os.makedirs(logging_dir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(logging_dir, filename), mode="a", encoding="utf-8", delay=True)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root._reports_configured = True
    return root
