import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from strategia.core.config import settings

# Mismo formato pbkdf2_sha256 que usa el login web
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenUtils:
    """Utilidades para contraseñas, tokens de sesión y estado OAuth."""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """Verifica que la contraseña plana coincida con su hash."""
        if not hashed_password:
            return False
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def get_password_hash(password: str) -> str:
        """Genera el hash de una contraseña."""
        return pwd_context.hash(password)

    @staticmethod
    def create_session_token(
        user_id: int,
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, datetime]:
        """Crea un token de sesión firmado y devuelve también su expiración."""
        issued_at = datetime.utcnow()
        expire = issued_at + (
            expires_delta or timedelta(hours=settings.SESSION_LIFETIME_HOURS)
        )
        to_encode = {
            "sub": str(user_id),
            "jti": secrets.token_hex(16),
            "exp": expire,
            "iat": issued_at,
            "type": "session",
        }
        token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        return token, expire

    @staticmethod
    def create_oauth_state(provider: str, expires_minutes: int = 10) -> str:
        to_encode = {
            "provider": provider,
            "nonce": secrets.token_urlsafe(16),
            "exp": datetime.utcnow() + timedelta(minutes=expires_minutes),
            "type": "oauth_state",
        }
        return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    @staticmethod
    def decode_token(token: str) -> Dict[str, Any]:
        """Decodifica y valida un token JWT."""
        try:
            return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        except JWTError as exc:
            raise ValueError(f"Invalid token: {str(exc)}") from exc

    @staticmethod
    def verify_oauth_state(state: str, provider: str) -> bool:
        try:
            payload = TokenUtils.decode_token(state)
        except ValueError:
            return False
        return payload.get("type") == "oauth_state" and payload.get("provider") == provider
