"""
Contraseñas (bcrypt) y tokens de acceso (JWT HS256) de Workhub.

El token lleva `sub` (email), `user_id` y `role`; no hay tokens de refresco.
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "workhub-dev-secret-cambiar")
JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

_passwords = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


# --- CONTRASEÑAS ---

def hash_password(password: str) -> str:
    return _passwords.hash(password)

def check_password(password: str, stored_hash: Optional[str]) -> bool:
    # Usuarios sin contraseña local nunca pasan el login
    if not stored_hash:
        return False
    return _passwords.verify(password, stored_hash)


# --- TOKENS ---

class TokenUser(BaseModel):
    """Identidad extraída de un access token válido."""
    email: str
    user_id: str
    role: str = "user"


def issue_access_token(email: str, user_id: str, role: Optional[str] = None,
                       lifetime: Optional[timedelta] = None) -> str:
    expires_at = datetime.now(timezone.utc) + (lifetime or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {
        "sub": email,
        "user_id": user_id,
        "role": role or "user",
        "type": "access",
        "exp": expires_at,
    }
    return jwt.encode(claims, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def read_access_token(token: str) -> Optional[TokenUser]:
    """None si la firma no es válida, expiró o faltan claims."""
    try:
        claims: Dict[str, Any] = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        return None

    if claims.get("type") != "access" or not claims.get("sub") or not claims.get("user_id"):
        return None
    return TokenUser(email=claims["sub"], user_id=claims["user_id"], role=claims.get("role") or "user")


# --- DEPENDENCIAS FASTAPI ---

def get_current_user(token: str = Depends(bearer_scheme)) -> TokenUser:
    user = read_access_token(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales inválidas o expiradas",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
