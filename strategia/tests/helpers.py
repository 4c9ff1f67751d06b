from typing import Callable, List, Optional

from strategia.models.notification import Notification, NotificationVariant

API = "/api/v1"


class ManualTimer:
    def __init__(self, due: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Reloj manual en milisegundos para los temporizadores de inactividad."""

    def __init__(self) -> None:
        self.now = 0
        self.timers: List[ManualTimer] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now + delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while True:
            due = sorted((t for t in self.pending if t.due <= target), key=lambda t: t.due)
            if not due:
                break
            timer = due[0]
            self.now = timer.due
            timer.fired = True
            timer.callback()
        self.now = target


class RecordingNotifier:
    """Sustituto de ``NotificationService`` que solo registra los avisos."""

    def __init__(self) -> None:
        self.sent: List[dict] = []

    def notify(
        self,
        *,
        user_id: int,
        title: str,
        description: str = "",
        variant: NotificationVariant = NotificationVariant.DEFAULT,
        session_id: Optional[int] = None,
    ) -> dict:
        record = {
            "user_id": user_id,
            "title": title,
            "description": description,
            "variant": variant,
            "session_id": session_id,
        }
        self.sent.append(record)
        return record

    def notify_error(self, *, user_id: int, title: str, description: str = "", session_id=None) -> dict:
        return self.notify(
            user_id=user_id,
            title=title,
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
            session_id=session_id,
        )

    def titles(self) -> List[str]:
        return [n["title"] for n in self.sent]


def notification_titles(session, **filters) -> List[str]:
    query = session.query(Notification)
    for field, value in filters.items():
        query = query.filter(getattr(Notification, field) == value)
    return [n.title for n in query.order_by(Notification.id).all()]
