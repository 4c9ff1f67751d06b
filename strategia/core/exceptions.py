from fastapi import HTTPException, status


class AuthException(HTTPException):
    """Excepción base para errores de autenticación."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: dict | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers or {"WWW-Authenticate": "Bearer"},
        )


class CredentialsException(AuthException):
    """Credenciales inválidas."""

    def __init__(self, detail: str = "Invalid login credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class SessionMissingException(AuthException):
    """No hay sesión activa (revocada, expirada o ausente)."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class EmailAlreadyRegisteredException(AuthException):
    """El correo ya tiene una cuenta."""

    def __init__(self, detail: str = "User already registered"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class OAuthException(AuthException):
    """Fallo en el intercambio con el proveedor OAuth."""

    def __init__(self, detail: str = "OAuth sign-in failed"):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
        )


class InsufficientPermissionsException(AuthException):
    """El usuario no pertenece a la organización solicitada."""

    def __init__(self, detail: str = "Not a member of this organization"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class ResourceNotFoundException(HTTPException):
    """Referencia a un registro padre inexistente."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class MissingInformationException(HTTPException):
    """Campos obligatorios ausentes o vacíos."""

    def __init__(self, detail: str = "Missing information"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class BackendCallException(HTTPException):
    """Falla de una llamada al backend (DB o proveedor externo)."""

    def __init__(self, detail: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(status_code=status_code, detail=detail)
