import logging
import threading
from typing import Dict, Iterable, List, Optional

from strategia.services.activity import ActivityEvent, ActivitySource
from strategia.services.auth_store import AuthEvent, AuthState, AuthStore
from strategia.services.navigation import Navigator
from strategia.services.notification_service import NotificationService
from strategia.services.scheduler import Scheduler
from strategia.services.session_monitor import (
    MonitorState,
    SessionActivityMonitor,
    SignOutBackend,
)

logger = logging.getLogger(__name__)


class MonitorRegistry:
    """Un ``SessionActivityMonitor`` por sesión autenticada.

    Escucha el ``AuthStore``: arranca el monitor con ``SIGNED_IN`` o
    ``INITIAL_SESSION`` y lo detiene y descarta con ``SIGNED_OUT``.
    """

    def __init__(
        self,
        *,
        auth_store: AuthStore,
        backend: SignOutBackend,
        notifier: NotificationService,
        navigator: Navigator,
        scheduler: Scheduler,
        idle_timeout_ms: Optional[int] = None,
        auth_route: Optional[str] = None,
    ) -> None:
        self.backend = backend
        self.notifier = notifier
        self.navigator = navigator
        self.scheduler = scheduler
        self.idle_timeout_ms = idle_timeout_ms
        self.auth_route = auth_route
        self._monitors: Dict[str, SessionActivityMonitor] = {}
        self._sources: Dict[str, ActivitySource] = {}
        self._lock = threading.RLock()
        self._unsubscribe = auth_store.subscribe(self._on_auth_event)

    def _on_auth_event(self, event: AuthEvent, state: AuthState) -> None:
        if event in (AuthEvent.SIGNED_IN, AuthEvent.INITIAL_SESSION):
            self._start(state)
        elif event == AuthEvent.SIGNED_OUT:
            self._discard(state.session_token)

    def _build(self, state: AuthState) -> SessionActivityMonitor:
        return SessionActivityMonitor(
            session_token=state.session_token,
            user_id=state.user_id,
            session_id=state.session_id,
            backend=self.backend,
            notifier=self.notifier,
            navigator=self.navigator,
            scheduler=self.scheduler,
            activity_source=self.activity_source(state.session_token),
            idle_timeout_ms=self.idle_timeout_ms,
            auth_route=self.auth_route,
        )

    def _start(self, state: AuthState) -> None:
        with self._lock:
            monitor = self._monitors.get(state.session_token)
            if monitor is None:
                monitor = self._build(state)
                self._monitors[state.session_token] = monitor
        monitor.start()

    def _discard(self, session_token: str) -> None:
        with self._lock:
            monitor = self._monitors.pop(session_token, None)
            self._sources.pop(session_token, None)
        if monitor is not None:
            monitor.stop()

    def activity_source(self, session_token: str) -> ActivitySource:
        with self._lock:
            source = self._sources.get(session_token)
            if source is None:
                source = ActivitySource()
                self._sources[session_token] = source
            return source

    def get(self, session_token: str) -> Optional[SessionActivityMonitor]:
        with self._lock:
            return self._monitors.get(session_token)

    def state_of(self, session_token: str) -> MonitorState:
        monitor = self.get(session_token)
        return monitor.state if monitor else MonitorState.UNAUTHENTICATED

    def active_count(self) -> int:
        with self._lock:
            return sum(1 for m in self._monitors.values() if m.state == MonitorState.ACTIVE)

    def dispatch(self, session_token: str, events: Iterable[ActivityEvent]) -> int:
        """Entrega los eventos al origen de la sesión; devuelve los aceptados."""
        with self._lock:
            source = self._sources.get(session_token)
        if source is None:
            return 0
        accepted = 0
        for event in events:
            if source.dispatch(event):
                accepted += 1
        return accepted

    def sign_out(self, state: AuthState) -> None:
        monitor = self.get(state.session_token)
        if monitor is not None:
            monitor.sign_out()
            return
        # Sesión ya expirada: el cierre explícito sigue siendo válido
        monitor = self._build(state)
        try:
            monitor.sign_out()
        finally:
            self._discard(state.session_token)

    def shutdown(self) -> List[str]:
        with self._lock:
            tokens = list(self._monitors)
            monitors = list(self._monitors.values())
            self._monitors.clear()
            self._sources.clear()
        for monitor in monitors:
            monitor.stop()
        self._unsubscribe()
        logger.info("Stopped %d session monitors", len(monitors))
        return tokens
