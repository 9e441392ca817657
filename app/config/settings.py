# app/config/settings.py
import os


def _split(value):
    return [item.strip() for item in value.split(",") if item.strip()]


# Base de datos
MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://127.0.0.1:27017")
REPORTS_DB_NAME = os.getenv("REPORTS_DB_NAME", "reportsystem")

# Archivos subidos
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
UPLOAD_URL_PREFIX = "/uploads"
MAX_UPLOAD_SIZE = int(os.getenv("MAX_UPLOAD_SIZE", 10 * 1024 * 1024))  # 10MB

# Servidor
CORS_ORIGINS = _split(os.getenv("CORS_ORIGINS", "*"))
PORT = int(os.getenv("PORT", 8000))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_PATH = os.getenv("LOG_PATH")

# Cliente
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
CLIENT_TIMEOUT = float(os.getenv("CLIENT_TIMEOUT", 10))

# Reportes
DEFAULT_STATUS = "Pending"
CONCERN_OPTIONS = _split(os.getenv("REPORT_CONCERNS", "Electrical,Plumbing,Structural,Safety,Other"))
BUILDING_OPTIONS = _split(os.getenv("REPORT_BUILDINGS", "Main Building,Library,Gymnasium,Science Hall,Canteen"))
