import os
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from workhub_common.security import TokenUser, check_password, get_current_user, issue_access_token
from app import crud, schemas
from app.database import get_db

logger = logging.getLogger("workhub-api")

router = APIRouter(prefix="/api", tags=["Auth"])

# --- ENDPOINTS PÚBLICOS ---

@router.post("/register", response_model=schemas.UserResponse, status_code=201)
async def register(request: schemas.RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Registro de usuario con email y contraseña."""
    try:
        return await crud.create_user(db, request)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="El email ya está registrado")

@router.post("/login", response_model=schemas.LoginResponse)
async def login(request: schemas.LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login: devuelve el usuario (sin contraseña) y un access token."""
    user = await crud.get_user_by_email(db, request.email)
    if not user or not check_password(request.password, user.password):
        logger.info(f"🔒 Login fallido para {request.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales inválidas")

    token = issue_access_token(user.email, user.id, user.role)
    user_data = schemas.UserResponse.model_validate(user).model_dump()
    return schemas.LoginResponse(**user_data, access_token=token)

@router.get("/test")
async def test():
    """Verificación rápida de que la API responde."""
    return {
        "message": "API is working",
        "timestamp": datetime.now(timezone.utc),
        "dbUrl": "Set" if os.getenv("DATABASE_URL") else "Not set",
    }

# --- ENDPOINTS PROTEGIDOS ---

@router.get("/me", response_model=schemas.UserResponse)
async def read_me(
    db: AsyncSession = Depends(get_db),
    current_user: TokenUser = Depends(get_current_user)
):
    user = await crud.get_user_by_id(db, current_user.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    return user
