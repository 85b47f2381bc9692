import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from workhub_common.patching import NotFoundError
from app import crud, schemas
from app.database import get_db

logger = logging.getLogger("workhub-api")

router = APIRouter(prefix="/tasks", tags=["Tasks"])

@router.post("", response_model=schemas.TaskResponse, status_code=201)
async def create_task(task: schemas.TaskCreate, db: AsyncSession = Depends(get_db)):
    """**Crear Tarea**"""
    return await crud.create_task(db, task)

@router.get("", response_model=List[schemas.TaskResponse])
async def read_tasks(
    user_id: Optional[str] = None, # ?user_id= filtra por asignado
    db: AsyncSession = Depends(get_db)
):
    return await crud.get_tasks(db, assigned_to=user_id)

@router.get("/{task_id}", response_model=schemas.TaskResponse)
async def read_task(task_id: str, db: AsyncSession = Depends(get_db)):
    task = await crud.get_task_by_id(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Tarea no encontrada")
    return task

@router.put("/{task_id}", response_model=schemas.TaskResponse)
async def update_task(
    task_id: str,
    task_update: schemas.TaskUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    **Actualizar Tarea**

    Útil para tableros Kanban (mover de todo a done) y edición parcial.
    """
    patch = task_update.model_dump(exclude_unset=True)
    try:
        return await crud.update_task(db, task_id, patch)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Tarea no encontrada")
    except SQLAlchemyError as e:
        logger.error(f"❌ Error actualizando tarea {task_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error actualizando tarea: {e}")

@router.delete("/{task_id}", response_model=schemas.TaskResponse)
async def delete_task(task_id: str, db: AsyncSession = Depends(get_db)):
    task = await crud.delete_task(db, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Tarea no encontrada")
    return task
