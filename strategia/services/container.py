from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from sqlalchemy.orm import Session

from strategia.core.config import settings
from strategia.services.auth_service import AuthService
from strategia.services.auth_store import AuthStore
from strategia.services.monitor_registry import MonitorRegistry
from strategia.services.navigation import Navigator
from strategia.services.notification_service import NotificationService
from strategia.services.oauth_client import GoogleOAuthClient
from strategia.services.scheduler import Scheduler, ThreadingScheduler
from strategia.services.strategy_service import StrategyService
from strategia.services.suggestion_engine import SuggestionEngine
from strategia.services.workspace import WorkspaceStore


@dataclass
class ServiceContainer:
    session_factory: Callable[[], Session]
    auth_store: AuthStore
    navigator: Navigator
    notifier: NotificationService
    auth_service: AuthService
    monitors: MonitorRegistry
    workspaces: WorkspaceStore
    strategy: StrategyService
    suggestions: SuggestionEngine

    def shutdown(self) -> None:
        self.monitors.shutdown()


def build_services(
    session_factory: Callable[[], Session],
    scheduler: Optional[Scheduler] = None,
    oauth_transport: Optional[httpx.BaseTransport] = None,
) -> ServiceContainer:
    """Arma los servicios de la aplicación alrededor de un ``AuthStore`` común."""
    auth_store = AuthStore()
    navigator = Navigator()
    notifier = NotificationService(session_factory)
    auth_service = AuthService(
        session_factory=session_factory,
        auth_store=auth_store,
        notifier=notifier,
        oauth_client=GoogleOAuthClient(transport=oauth_transport),
    )
    monitors = MonitorRegistry(
        auth_store=auth_store,
        backend=auth_service,
        notifier=notifier,
        navigator=navigator,
        scheduler=scheduler or ThreadingScheduler(),
        idle_timeout_ms=settings.SESSION_IDLE_TIMEOUT_MS,
        auth_route=settings.AUTH_ROUTE,
    )
    return ServiceContainer(
        session_factory=session_factory,
        auth_store=auth_store,
        navigator=navigator,
        notifier=notifier,
        auth_service=auth_service,
        monitors=monitors,
        workspaces=WorkspaceStore(auth_store),
        strategy=StrategyService(notifier),
        suggestions=SuggestionEngine(notifier),
    )
