from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings

# Conexión a MongoDB con opciones de optimización
client = AsyncIOMotorClient(
    settings.MONGODB_URI,
    maxPoolSize=10,  # Tamaño máximo del pool de conexiones
    minPoolSize=1,   # Tamaño mínimo del pool de conexiones
    connectTimeoutMS=5000,  # Tiempo de espera para la conexión
)
db = client[settings.REPORTS_DB_NAME]

reports_collection = db.get_collection("reports")


def get_reports_collection():
    return reports_collection
