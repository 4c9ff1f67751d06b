from typing import Dict, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_session, get_db, get_services, get_session_token
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.services.notification_service import NotificationService
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/")
async def pending_notifications(
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
) -> Dict:
    """Avisos pendientes de esta sesión; quedan marcados como entregados."""
    notifications = NotificationService.pending_for_user(db, state.user_id, state.session_id)
    return ApiResponseTemplate.success(
        data=NotificationService.deliver(db, notifications),
        message="Notifications",
    )


@router.get("/session")
async def session_notifications(
    token: Optional[str] = Depends(get_session_token),
    db: Session = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    """Avisos dirigidos a la sesión de la cookie, aunque ya esté revocada."""
    record = services.auth_service.find_session_record(db, token)
    if record is None:
        return ApiResponseTemplate.success(data=[], message="Notifications")
    notifications = NotificationService.pending_for_session(db, record.id)
    return ApiResponseTemplate.success(
        data=NotificationService.deliver(db, notifications),
        message="Notifications",
    )
