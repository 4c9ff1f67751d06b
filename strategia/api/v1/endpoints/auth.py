from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_user, get_db, get_services, get_session_token
from strategia.core.config import settings
from strategia.models.user import User
from strategia.schemas.user import ProfileResponse, SessionResponse, UserLogin, UserRegister
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


def _set_session_cookie(response: Response, state: AuthState) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=state.session_token,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
        max_age=settings.SESSION_LIFETIME_HOURS * 3600,
    )


def _session_payload(state: AuthState) -> Dict:
    return {
        "user": {"id": state.user_id, "email": state.email, "full_name": state.full_name},
        "expires_at": state.expires_at.isoformat(),
        "idle_timeout_ms": settings.SESSION_IDLE_TIMEOUT_MS,
    }


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
async def sign_up(
    data: UserRegister,
    db: Session = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    user = services.auth_service.sign_up(db, data)
    return ApiResponseTemplate.success(
        data=ProfileResponse.model_validate(user.to_profile()).model_dump(),
        message="Account created",
    )


@router.post("/sign-in")
async def sign_in(
    data: UserLogin,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    state = services.auth_service.sign_in(
        db,
        data,
        user_agent=request.headers.get("user-agent"),
        ip_address=_client_ip(request),
    )
    _set_session_cookie(response, state)
    payload = _session_payload(state)
    payload["access_token"] = state.session_token
    payload["token_type"] = "bearer"
    return ApiResponseTemplate.success(data=payload, message="Welcome back!")


@router.get("/oauth/{provider}")
async def oauth_authorize(
    provider: str,
    services: ServiceContainer = Depends(get_services),
):
    """Redirige al proveedor OAuth con consentimiento forzado."""
    return RedirectResponse(
        services.auth_service.oauth_authorize_url(provider),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@router.get("/oauth/google/callback")
async def oauth_callback(
    code: str,
    state: str,
    request: Request,
    db: Session = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
):
    session_state = services.auth_service.complete_oauth(
        db,
        code=code,
        state=state,
        user_agent=request.headers.get("user-agent"),
        ip_address=_client_ip(request),
    )
    response = RedirectResponse(settings.HOME_ROUTE, status_code=status.HTTP_303_SEE_OTHER)
    _set_session_cookie(response, session_state)
    return response


@router.get("/session", response_model=SessionResponse)
async def current_session(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> SessionResponse:
    """Sesión vigente (si existe) y estado de su monitor de inactividad."""
    state = services.auth_service.get_session(token)
    if state is None:
        return SessionResponse(authenticated=False, idle_timeout_ms=settings.SESSION_IDLE_TIMEOUT_MS)
    user = services.auth_service.get_profile(db, state.user_id)
    return SessionResponse(
        authenticated=True,
        user=ProfileResponse.model_validate(user.to_profile()) if user else None,
        expires_at=state.expires_at.isoformat(),
        monitor_state=services.monitors.state_of(state.session_token).value,
        idle_timeout_ms=settings.SESSION_IDLE_TIMEOUT_MS,
    )


@router.post("/sign-out")
async def sign_out(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    state = services.auth_store.get(token) if token else None
    if state is None:
        record = services.auth_service.find_session_record(db, token)
        if record is not None:
            state = services.auth_service.state_for(record, record.user)
    if state is not None:
        services.monitors.sign_out(state)
    return ApiResponseTemplate.success(
        data={"redirect": settings.AUTH_ROUTE},
        message="Signed out",
    )


@router.get("/profile")
async def profile(current_user: User = Depends(get_current_user)) -> Dict:
    return ApiResponseTemplate.success(
        data=ProfileResponse.model_validate(current_user.to_profile()).model_dump(),
        message="Profile",
    )
