import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from workhub_common.patching import NotFoundError
from app import crud, schemas
from app.database import get_db

logger = logging.getLogger("workhub-api")

router = APIRouter(prefix="/calendar", tags=["Calendar"])

@router.post("/events", response_model=schemas.CalendarEventResponse, status_code=201)
async def create_event(event: schemas.CalendarEventCreate, db: AsyncSession = Depends(get_db)):
    """**Crear Evento**"""
    return await crud.create_calendar_event(db, event)

@router.get("/events", response_model=List[schemas.CalendarEventResponse])
async def read_events(db: AsyncSession = Depends(get_db)):
    """Eventos ordenados por fecha de inicio."""
    return await crud.get_calendar_events(db)

@router.get("/events/user/{user_id}", response_model=List[schemas.CalendarEventResponse])
async def read_user_events(user_id: str, db: AsyncSession = Depends(get_db)):
    return await crud.get_calendar_events(db, created_by=user_id)

@router.get("/events/{event_id}", response_model=schemas.CalendarEventResponse)
async def read_event(event_id: str, db: AsyncSession = Depends(get_db)):
    event = await crud.get_calendar_event_by_id(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Evento no encontrado")
    return event

@router.put("/events/{event_id}", response_model=schemas.CalendarEventResponse)
async def update_event(
    event_id: str,
    event_update: schemas.CalendarEventUpdate,
    db: AsyncSession = Depends(get_db)
):
    """**Actualizar Evento** (parcial). `tags` y `reminders` se guardan como JSON."""
    patch = event_update.model_dump(exclude_unset=True, by_alias=True)
    try:
        return await crud.update_calendar_event(db, event_id, patch)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Evento no encontrado")
    except SQLAlchemyError as e:
        logger.error(f"❌ Error actualizando evento {event_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error actualizando evento: {e}")

@router.delete("/events/{event_id}", response_model=schemas.CalendarEventResponse)
async def delete_event(event_id: str, db: AsyncSession = Depends(get_db)):
    event = await crud.delete_calendar_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Evento no encontrado")
    return event
