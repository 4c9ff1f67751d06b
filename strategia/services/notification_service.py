import logging
from typing import Callable, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from strategia.models.notification import Notification, NotificationVariant

logger = logging.getLogger(__name__)


class NotificationService:
    """Canal de avisos (toasts) para el usuario.

    ``notify`` abre su propia sesión de DB porque también se invoca desde el
    hilo del temporizador de inactividad.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory

    def notify(
        self,
        *,
        user_id: int,
        title: str,
        description: str = "",
        variant: NotificationVariant = NotificationVariant.DEFAULT,
        session_id: Optional[int] = None,
    ) -> Notification:
        db = self.session_factory()
        try:
            notification = Notification(
                user_id=user_id,
                session_id=session_id,
                title=title,
                description=description,
                variant=variant,
            )
            db.add(notification)
            db.commit()
            db.refresh(notification)
            db.expunge(notification)
        finally:
            db.close()
        logger.info("Notification '%s' queued for user %s", title, user_id)
        return notification

    def notify_error(
        self,
        *,
        user_id: int,
        title: str,
        description: str = "Please try again later",
        session_id: Optional[int] = None,
    ) -> Notification:
        return self.notify(
            user_id=user_id,
            title=title,
            description=description,
            variant=NotificationVariant.DESTRUCTIVE,
            session_id=session_id,
        )

    @staticmethod
    def pending_for_user(db: Session, user_id: int, session_id: Optional[int] = None) -> List[Notification]:
        """Avisos sin sesión o dirigidos a ``session_id``; los de otras sesiones
        del mismo usuario quedan para su propia página."""
        return (
            db.query(Notification)
            .filter(
                Notification.user_id == user_id,
                Notification.delivered == False,  # noqa: E712
                or_(Notification.session_id.is_(None), Notification.session_id == session_id),
            )
            .order_by(Notification.id)
            .all()
        )

    @staticmethod
    def pending_for_session(db: Session, session_id: int) -> List[Notification]:
        return (
            db.query(Notification)
            .filter(Notification.session_id == session_id, Notification.delivered == False)  # noqa: E712
            .order_by(Notification.id)
            .all()
        )

    @staticmethod
    def deliver(db: Session, notifications: List[Notification]) -> List[dict]:
        """Marca como entregadas y devuelve su representación."""
        payload = []
        for notification in notifications:
            notification.mark_delivered()
            db.add(notification)
            payload.append(notification.to_dict())
        db.commit()
        return payload
