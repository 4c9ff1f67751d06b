from typing import Dict

from fastapi import APIRouter, Depends

from strategia.api.deps import get_current_session, get_services
from strategia.core.config import settings
from strategia.schemas.session import ActivityReport
from strategia.services.activity import ActivityEvent
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.post("/activity")
async def report_activity(
    report: ActivityReport,
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    """Entrega los eventos de actividad al monitor de la sesión."""
    events = [event for event in map(ActivityEvent.parse, report.events) if event is not None]
    accepted = services.monitors.dispatch(state.session_token, events)
    if accepted:
        services.auth_service.record_activity(state.session_token)
    return ApiResponseTemplate.success(
        data={
            "accepted": accepted,
            "ignored": len(report.events) - accepted,
            "monitor_state": services.monitors.state_of(state.session_token).value,
        },
        message="Activity recorded",
    )


@router.get("/status")
async def monitor_status(
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    monitor = services.monitors.get(state.session_token)
    return ApiResponseTemplate.success(
        data={
            "monitor_state": services.monitors.state_of(state.session_token).value,
            "timer_pending": bool(monitor and monitor.has_pending_timer),
            "idle_timeout_ms": settings.SESSION_IDLE_TIMEOUT_MS,
            "listeners": services.monitors.activity_source(state.session_token).listener_count(),
        },
        message="Session monitor status",
    )
