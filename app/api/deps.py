from fastapi import Depends, HTTPException, WebSocket, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.errors import AuthenticationMissingError
from app.core.security import decode_access_token
from app.models.doctor import Doctor
from app.models.profile import Profile
from app.schemas.auth import AuthUser


bearer = HTTPBearer(auto_error=False)


def _user_from_token(token: str) -> AuthUser:
    payload = decode_access_token(token)
    return AuthUser(
        id=payload["sub"],
        email=payload.get("email"),
        role=payload.get("role") or "authenticated",
    )


async def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthUser:
    if creds is None or not creds.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AuthenticationMissingError.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _user_from_token(creds.credentials)


async def get_optional_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> AuthUser | None:
    if creds is None or not creds.credentials:
        return None
    return _user_from_token(creds.credentials)


# --- doctor verificado (id del doctor == id del usuario) ---
async def require_doctor(
    current: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Doctor:
    res = await db.execute(select(Profile.is_doctor).where(Profile.id == current.id))
    if not res.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User does not have doctor access")

    res = await db.execute(select(Doctor).where(Doctor.id == current.id))
    doctor = res.scalar_one_or_none()
    if not doctor:
        raise HTTPException(status_code=404, detail="Doctor profile not found")
    if not doctor.verified:
        raise HTTPException(status_code=403, detail="Doctor profile is not verified")
    return doctor


# --- WebSocket ---
async def get_current_user_ws(ws: WebSocket) -> AuthUser | None:
    """
    Lee ?token=... del query string (o header Authorization).
    Si no hay token válido cierra con 1008 y devuelve None.
    """
    token = ws.query_params.get("token")
    if not token:
        auth = ws.headers.get("authorization")
        if auth and auth.lower().startswith("bearer "):
            token = auth.split(" ", 1)[1]
    if not token:
        await ws.close(code=1008)
        return None
    try:
        return _user_from_token(token)
    except HTTPException:
        await ws.close(code=1008)
        return None
