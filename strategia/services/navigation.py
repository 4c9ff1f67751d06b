import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from strategia.core.config import settings

logger = logging.getLogger(__name__)


class Navigator:
    """Redirecciones pendientes por sesión; el middleware las aplica en la
    siguiente petición del cliente.

    Una sesión revocada cuyo cliente no vuelve deja su entrada hasta que
    supera ``ttl_seconds``; se purga en la siguiente ``navigate``.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds or settings.SESSION_LIFETIME_HOURS * 3600
        self.clock = clock
        self._pending: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def navigate(self, session_token: str, path: str) -> None:
        now = self.clock()
        with self._lock:
            self._prune(now)
            self._pending[session_token] = (path, now)
        logger.info("Navigation to %s queued", path)

    def pending(self, session_token: str) -> Optional[str]:
        with self._lock:
            entry = self._pending.get(session_token)
        return entry[0] if entry else None

    def consume(self, session_token: str) -> Optional[str]:
        with self._lock:
            entry = self._pending.pop(session_token, None)
        return entry[0] if entry else None

    def _prune(self, now: float) -> None:
        expired = [
            token for token, (_, queued_at) in self._pending.items()
            if now - queued_at >= self.ttl_seconds
        ]
        for token in expired:
            del self._pending[token]
        if expired:
            logger.debug("Dropped %d stale redirects", len(expired))
