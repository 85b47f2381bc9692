import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import database, models  # noqa: F401  (registra los modelos en Base)
from app.routers import auth, projects, tasks, team, calendar

# Configuración de Logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("workhub-api")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Inicialización DB (solo dev; en prod se usan las migraciones de Alembic)
    if database.db_manager.debug:
        await database.db_manager.create_all()
    logger.info("🚀 Workhub API iniciada")
    yield
    await database.db_manager.dispose()
    logger.info("🛑 Pool de conexiones liberado")

app = FastAPI(
    title="Workhub API",
    description="Gestión de Proyectos, Tareas, Equipo y Calendario.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# --- MANEJO DE ERRORES ---

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Cuerpo de error uniforme: {"message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"❌ Error de base de datos en {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": f"Error de base de datos: {exc}"})

# Routers
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(team.router)
app.include_router(calendar.router)

@app.get("/health")
def health_check():
    """Health check para Kubernetes/Docker."""
    return {"status": "ok"}
