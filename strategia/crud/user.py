from typing import Optional

from sqlalchemy.orm import Session

from strategia.core.security import TokenUtils
from strategia.crud.base import CRUDBase
from strategia.models.user import AuthProvider, User
from strategia.schemas.user import UserRegister


class CRUDUser(CRUDBase[User, UserRegister]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    def create(self, db: Session, *, obj_in: UserRegister) -> User:
        db_obj = User(
            email=obj_in.email.strip().lower(),
            full_name=obj_in.full_name.strip(),
            hashed_password=TokenUtils.get_password_hash(obj_in.password),
            auth_provider=AuthProvider.EMAIL,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_or_create_oauth(
        self,
        db: Session,
        *,
        email: str,
        full_name: str,
        provider: AuthProvider,
        avatar_url: Optional[str] = None,
    ) -> User:
        user = self.get_by_email(db, email=email)
        if user:
            if avatar_url and not user.avatar_url:
                user.avatar_url = avatar_url
                db.add(user)
                db.commit()
            return user
        db_obj = User(
            email=email.strip().lower(),
            full_name=(full_name or email).strip(),
            auth_provider=provider,
            avatar_url=avatar_url,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email=email)
        if not user or not user.verify_password(password):
            return None
        return user


user = CRUDUser(User)
