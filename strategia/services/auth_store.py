import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class AuthState:
    """Datos de sesión compartidos con los componentes que los necesitan."""
    session_token: str
    session_id: int
    user_id: int
    email: str
    full_name: str
    expires_at: datetime


AuthListener = Callable[[AuthEvent, AuthState], None]


class AuthStore:
    """Estado de autenticación por sesión con suscripción explícita.

    Los suscriptores reciben ``(evento, estado)`` en cada alta o baja de sesión.
    """

    def __init__(self) -> None:
        self._states: Dict[str, AuthState] = {}
        self._subscribers: List[AuthListener] = []
        self._lock = threading.RLock()

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._subscribers:
                    self._subscribers.remove(listener)

        return unsubscribe

    def get(self, session_token: str) -> Optional[AuthState]:
        with self._lock:
            return self._states.get(session_token)

    def sessions(self) -> List[AuthState]:
        with self._lock:
            return list(self._states.values())

    def set_session(self, state: AuthState, event: AuthEvent = AuthEvent.SIGNED_IN) -> None:
        with self._lock:
            self._states[state.session_token] = state
        self._notify(event, state)

    def clear_session(self, session_token: str) -> Optional[AuthState]:
        with self._lock:
            state = self._states.pop(session_token, None)
        if state is not None:
            self._notify(AuthEvent.SIGNED_OUT, state)
        return state

    def _notify(self, event: AuthEvent, state: AuthState) -> None:
        logger.info("Auth state changed: %s (user_id=%s)", event.value, state.user_id)
        with self._lock:
            subscribers = list(self._subscribers)
        for listener in subscribers:
            try:
                listener(event, state)
            except Exception:
                logger.exception("Auth listener failed on %s", event.value)
