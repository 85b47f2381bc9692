import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from workhub_common.patching import NotFoundError
from app import crud, schemas
from app.database import get_db

logger = logging.getLogger("workhub-api")

router = APIRouter(prefix="/projects", tags=["Projects"])

@router.post("", response_model=schemas.ProjectResponse, status_code=201)
async def create_project(
    project: schemas.ProjectCreate,
    db: AsyncSession = Depends(get_db)
):
    """**Crear Nuevo Proyecto**"""
    return await crud.create_project(db, project)

@router.get("", response_model=List[schemas.ProjectResponse])
async def read_projects(db: AsyncSession = Depends(get_db)):
    """**Listar Proyectos** (los más recientes primero)."""
    return await crud.get_projects(db)

@router.get("/user/{user_id}", response_model=List[schemas.ProjectResponse])
async def read_user_projects(user_id: str, db: AsyncSession = Depends(get_db)):
    """Proyectos creados por un usuario."""
    return await crud.get_projects(db, created_by=user_id)

@router.get("/{project_id}", response_model=schemas.ProjectResponse)
async def read_project(project_id: str, db: AsyncSession = Depends(get_db)):
    project = await crud.get_project_by_id(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Proyecto no encontrado")
    return project

@router.put("/{project_id}", response_model=schemas.ProjectResponse)
async def update_project(
    project_id: str,
    project_update: schemas.ProjectUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    **Actualizar Proyecto**

    Actualización parcial: solo se modifican los campos presentes en el JSON.
    Un `description` vacío se guarda como null.
    """
    patch = project_update.model_dump(exclude_unset=True)
    try:
        return await crud.update_project(db, project_id, patch)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Proyecto no encontrado")
    except SQLAlchemyError as e:
        logger.error(f"❌ Error actualizando proyecto {project_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error actualizando proyecto: {e}")

@router.delete("/{project_id}", response_model=schemas.ProjectResponse)
async def delete_project(project_id: str, db: AsyncSession = Depends(get_db)):
    """Elimina el proyecto y devuelve la fila borrada."""
    project = await crud.delete_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Proyecto no encontrado")
    return project
