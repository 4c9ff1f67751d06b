import threading
from collections import defaultdict
from enum import Enum
from typing import Callable, DefaultDict, List, Optional

ActivityListener = Callable[["ActivityEvent"], object]


class ActivityEvent(str, Enum):
    """Eventos de entrada del usuario que cuentan como actividad."""
    POINTER_DOWN = "pointerdown"
    KEY_PRESS = "keypress"
    SCROLL = "scroll"
    TOUCH_START = "touchstart"

    @classmethod
    def parse(cls, name: str) -> Optional["ActivityEvent"]:
        normalized = (name or "").strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            return None


_ALIASES = {"mousedown": ActivityEvent.POINTER_DOWN.value}

QUALIFYING_EVENTS = tuple(ActivityEvent)


class ActivitySource:
    """Despachador de eventos de actividad de una sesión (el "documento")."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[ActivityEvent, List[ActivityListener]] = defaultdict(list)
        self._lock = threading.Lock()

    def add_listener(self, event: ActivityEvent, listener: ActivityListener) -> None:
        with self._lock:
            if listener not in self._listeners[event]:
                self._listeners[event].append(listener)

    def remove_listener(self, event: ActivityEvent, listener: ActivityListener) -> None:
        with self._lock:
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

    def listener_count(self, event: Optional[ActivityEvent] = None) -> int:
        with self._lock:
            if event is not None:
                return len(self._listeners[event])
            return sum(len(items) for items in self._listeners.values())

    def dispatch(self, event: ActivityEvent) -> int:
        """Entrega el evento a sus listeners y devuelve cuántos lo recibieron."""
        with self._lock:
            listeners = list(self._listeners[event])
        for listener in listeners:
            listener(event)
        return len(listeners)
