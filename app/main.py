import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.config.log_config import configure_logging
from app.routes import reports, uploads
from app.services.uploads import upload_dir

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Facilities Report System",
    description="API para registrar y listar reportes de incidencias en edificios.",
    version="1.0.0"
)

# Middleware para medir el tiempo de las solicitudes
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.debug("Processing time for %s: %.2f seconds", request.url, process_time)
    response.headers["X-Process-Time"] = str(process_time)
    return response

# Configurar CORS para permitir solicitudes desde el frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    directory = upload_dir()
    logger.info("Uploads directory: %s", directory.resolve())
    logger.info("Using MongoDB database %r", settings.REPORTS_DB_NAME)

# Incluir las rutas de los diferentes módulos
app.include_router(reports.router, prefix="/api", tags=["Reports"])
app.include_router(uploads.router, tags=["Uploads"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
