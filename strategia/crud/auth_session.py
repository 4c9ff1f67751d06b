from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from strategia.core.security import TokenUtils
from strategia.crud.base import CRUDBase
from strategia.models.auth_session import AuthSession, RevokeReason


class CRUDAuthSession(CRUDBase[AuthSession, dict]):
    """CRUD operations for AuthSession model."""

    def get_by_token(self, db: Session, token: str) -> Optional[AuthSession]:
        return db.query(AuthSession).filter(AuthSession.token == token).first()

    def open_session(
        self,
        db: Session,
        *,
        user_id: int,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> AuthSession:
        token, expires_at = TokenUtils.create_session_token(user_id)
        db_obj = AuthSession(
            token=token,
            user_id=user_id,
            expires_at=expires_at,
            last_activity_at=datetime.utcnow(),
            user_agent=user_agent,
            ip_address=ip_address,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_valid(self, db: Session, *, token: str) -> Optional[AuthSession]:
        db_obj = self.get_by_token(db, token=token)
        if not db_obj or not db_obj.is_valid():
            return None
        return db_obj

    def get_all_valid(self, db: Session) -> list[AuthSession]:
        return (
            db.query(AuthSession)
            .filter(AuthSession.revoked == False, AuthSession.expires_at > datetime.utcnow())  # noqa: E712
            .all()
        )

    def revoke_session(self, db: Session, *, token: str, reason: RevokeReason) -> Optional[AuthSession]:
        db_obj = self.get_by_token(db, token=token)
        if not db_obj:
            return None
        if not db_obj.revoked:
            db_obj.revoke(reason)
            db.add(db_obj)
            db.commit()
        return db_obj

    def record_activity(self, db: Session, *, token: str) -> None:
        db_obj = self.get_by_token(db, token=token)
        if db_obj and not db_obj.revoked:
            db_obj.record_activity()
            db.add(db_obj)
            db.commit()


auth_session_crud = CRUDAuthSession(AuthSession)
