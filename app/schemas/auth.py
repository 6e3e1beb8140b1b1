from pydantic import BaseModel


class AuthUser(BaseModel):
    """Usuario autenticado tal como viene en el token (sin tabla local)."""
    id: str
    email: str | None = None
    role: str = "authenticated"
