"""Monitor de actividad de sesión.

Cierra la sesión autenticada tras ``SESSION_IDLE_TIMEOUT_MS`` sin eventos
de entrada del usuario. Cada evento calificado reinicia el temporizador;
cuando éste vence se revoca la sesión en backend, se avisa al usuario y se
redirige a la ruta de autenticación.
"""
import logging
import threading
from enum import Enum
from typing import Optional, Protocol

from strategia.core.config import settings
from strategia.models.auth_session import RevokeReason
from strategia.models.notification import NotificationVariant
from strategia.services.activity import QUALIFYING_EVENTS, ActivityEvent, ActivitySource
from strategia.services.navigation import Navigator
from strategia.services.notification_service import NotificationService
from strategia.services.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class MonitorState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    ACTIVE = "active"
    LOGGED_OUT = "logged_out"


class SignOutBackend(Protocol):
    def sign_out(self, session_token: str, reason: RevokeReason) -> None:
        ...


class SessionActivityMonitor:
    """Temporizador de inactividad de una sesión autenticada."""

    def __init__(
        self,
        *,
        session_token: str,
        user_id: int,
        session_id: Optional[int],
        backend: SignOutBackend,
        notifier: NotificationService,
        navigator: Navigator,
        scheduler: Scheduler,
        activity_source: ActivitySource,
        idle_timeout_ms: Optional[int] = None,
        auth_route: Optional[str] = None,
    ) -> None:
        self.session_token = session_token
        self.user_id = user_id
        self.session_id = session_id
        self.backend = backend
        self.notifier = notifier
        self.navigator = navigator
        self.scheduler = scheduler
        self.activity_source = activity_source
        self.idle_timeout_ms = idle_timeout_ms or settings.SESSION_IDLE_TIMEOUT_MS
        self.auth_route = auth_route or settings.AUTH_ROUTE

        self.state = MonitorState.UNAUTHENTICATED
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._listening = False
        self._lock = threading.RLock()

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    # Ciclo de vida

    def start(self) -> None:
        """Pasa a ``active``: registra listeners y arma el temporizador."""
        with self._lock:
            if self.state == MonitorState.ACTIVE:
                return
            self.state = MonitorState.ACTIVE
            self._attach()
            self.arm()
        logger.info("Session monitor started for user %s", self.user_id)

    def stop(self) -> None:
        """Desregistra listeners y cancela el temporizador pendiente."""
        with self._lock:
            self._detach()
            self.cancel()

    def arm(self) -> None:
        with self._lock:
            self.cancel()
            self._generation += 1
            generation = self._generation
            self._timer = self.scheduler.call_later(
                self.idle_timeout_ms, lambda: self._on_idle_timeout(generation)
            )

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    # Eventos

    def handle_activity(self, event: ActivityEvent) -> bool:
        with self._lock:
            if self.state != MonitorState.ACTIVE:
                return False
            self.arm()
        logger.debug("Activity '%s' reset idle timer for user %s", event.value, self.user_id)
        return True

    def sign_out(self) -> None:
        """Cierre de sesión explícito del usuario."""
        with self._lock:
            self._detach()
            self.cancel()
            self.state = MonitorState.UNAUTHENTICATED
        try:
            self.backend.sign_out(self.session_token, RevokeReason.SIGNED_OUT)
        except Exception:
            logger.exception("Error signing out user %s", self.user_id)
            self.notifier.notify_error(
                user_id=self.user_id,
                title="Error signing out",
                session_id=self.session_id,
            )
            raise
        self.navigator.navigate(self.session_token, self.auth_route)
        self.notifier.notify(
            user_id=self.user_id,
            title="Signed out",
            description="You have been successfully signed out",
            session_id=self.session_id,
        )
        logger.info("User %s signed out", self.user_id)

    def _on_idle_timeout(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self.state != MonitorState.ACTIVE:
                return
            self.state = MonitorState.LOGGED_OUT
            self._timer = None
            self._detach()
        logger.info("Idle timeout reached for user %s", self.user_id)
        try:
            self.backend.sign_out(self.session_token, RevokeReason.IDLE_TIMEOUT)
        except Exception:
            # Corre en el hilo del temporizador: no hay a quién propagar
            logger.exception("Error signing out idle session of user %s", self.user_id)
            self.notifier.notify_error(
                user_id=self.user_id,
                title="Error signing out",
                session_id=self.session_id,
            )
            return
        self.notifier.notify(
            user_id=self.user_id,
            title="Session expired",
            description="You have been logged out due to inactivity",
            variant=NotificationVariant.DESTRUCTIVE,
            session_id=self.session_id,
        )
        self.navigator.navigate(self.session_token, self.auth_route)

    def _attach(self) -> None:
        if self._listening:
            return
        for event in QUALIFYING_EVENTS:
            self.activity_source.add_listener(event, self.handle_activity)
        self._listening = True

    def _detach(self) -> None:
        if not self._listening:
            return
        for event in QUALIFYING_EVENTS:
            self.activity_source.remove_listener(event, self.handle_activity)
        self._listening = False
