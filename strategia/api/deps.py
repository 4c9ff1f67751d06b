from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from strategia.core.config import settings
from strategia.core.exceptions import SessionMissingException
from strategia.models.user import User
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.services.workspace import StrategyWorkspace

http_bearer = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_db(services: ServiceContainer = Depends(get_services)) -> Generator[Session, None, None]:
    db = services.session_factory()
    try:
        yield db
    finally:
        db.close()


def extract_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """Token de la cookie de sesión o, en su defecto, del header Bearer."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    scheme, _, value = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> Optional[str]:
    return extract_session_token(request, credentials)


def get_current_session(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    services: ServiceContainer = Depends(get_services),
) -> AuthState:
    state = getattr(request.state, "auth", None)
    if state is None:
        state = services.auth_service.get_session(token)
    if state is None:
        raise SessionMissingException()
    return state


def get_current_user(
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> User:
    user = services.auth_service.get_profile(db, state.user_id)
    if user is None:
        raise SessionMissingException()
    return user


def get_workspace(
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> StrategyWorkspace:
    return services.workspaces.get(state.session_token)
