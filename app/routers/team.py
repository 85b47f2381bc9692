import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from workhub_common.patching import NotFoundError
from app import crud, schemas
from app.database import get_db

logger = logging.getLogger("workhub-api")

router = APIRouter(prefix="/team", tags=["Team"])

@router.post("", response_model=schemas.TeamMemberResponse, status_code=201)
async def create_team_member(member: schemas.TeamMemberCreate, db: AsyncSession = Depends(get_db)):
    """
    **Registrar Miembro del Equipo**

    Acepta claves en camelCase (`firstName`, `phoneNumbers`...) o snake_case.
    """
    return await crud.create_team_member(db, member)

@router.get("", response_model=List[schemas.TeamMemberResponse])
async def read_team_members(db: AsyncSession = Depends(get_db)):
    return await crud.get_team_members(db)

@router.get("/user/{user_id}", response_model=List[schemas.TeamMemberResponse])
async def read_user_team_members(user_id: str, db: AsyncSession = Depends(get_db)):
    return await crud.get_team_members(db, created_by=user_id)

@router.get("/{member_id}", response_model=schemas.TeamMemberResponse)
async def read_team_member(member_id: str, db: AsyncSession = Depends(get_db)):
    member = await crud.get_team_member_by_id(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Miembro del equipo no encontrado")
    return member

@router.put("/{member_id}", response_model=schemas.TeamMemberResponse)
async def update_team_member(
    member_id: str,
    member_update: schemas.TeamMemberUpdate,
    db: AsyncSession = Depends(get_db)
):
    """**Actualizar Miembro del Equipo** (parcial)."""
    patch = member_update.model_dump(exclude_unset=True, by_alias=True)
    try:
        return await crud.update_team_member(db, member_id, patch)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Miembro del equipo no encontrado")
    except SQLAlchemyError as e:
        logger.error(f"❌ Error actualizando miembro del equipo {member_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error actualizando miembro del equipo: {e}")

@router.delete("/{member_id}", response_model=schemas.TeamMemberResponse)
async def delete_team_member(member_id: str, db: AsyncSession = Depends(get_db)):
    member = await crud.delete_team_member(db, member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Miembro del equipo no encontrado")
    return member
