from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """Schema de registro con email y contraseña"""

    email: EmailStr = Field(..., description="Email del usuario")
    password: str = Field(..., min_length=6, description="Contraseña")
    full_name: str = Field(..., min_length=1, max_length=200, description="Nombre completo")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ana@example.com",
                "password": "s3cret-pass",
                "full_name": "Ana Torres",
            }
        }
    )


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileResponse(BaseModel):
    id: int
    email: str
    full_name: str
    avatar_url: Optional[str] = None
    auth_provider: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SessionResponse(BaseModel):
    """Estado de la sesión vigente y del monitor de inactividad."""

    authenticated: bool
    user: Optional[ProfileResponse] = None
    expires_at: Optional[str] = None
    monitor_state: Optional[str] = None
    idle_timeout_ms: int
