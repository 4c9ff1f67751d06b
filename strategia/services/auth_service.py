import logging
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from strategia.core.exceptions import (
    BackendCallException,
    CredentialsException,
    EmailAlreadyRegisteredException,
    OAuthException,
)
from strategia.core.security import TokenUtils
from strategia.crud.auth_session import auth_session_crud
from strategia.crud.user import user as user_crud
from strategia.models.auth_session import AuthSession, RevokeReason
from strategia.models.notification import NotificationVariant
from strategia.models.user import AuthProvider, User
from strategia.schemas.user import UserLogin, UserRegister
from strategia.services.auth_store import AuthEvent, AuthState, AuthStore
from strategia.services.notification_service import NotificationService
from strategia.services.oauth_client import GOOGLE_PROVIDER, GoogleOAuthClient

logger = logging.getLogger(__name__)


class AuthService:
    """Backend de autenticación: registro, inicio y cierre de sesión.

    Cada alta o baja de sesión se publica en el ``AuthStore``; de ahí la
    recogen el registro de monitores y el workspace.
    """

    def __init__(
        self,
        *,
        session_factory: Callable[[], Session],
        auth_store: AuthStore,
        notifier: NotificationService,
        oauth_client: GoogleOAuthClient,
    ) -> None:
        self.session_factory = session_factory
        self.auth_store = auth_store
        self.notifier = notifier
        self.oauth_client = oauth_client

    @staticmethod
    def state_for(db_session: AuthSession, db_user: User) -> AuthState:
        return AuthState(
            session_token=db_session.token,
            session_id=db_session.id,
            user_id=db_user.id,
            email=db_user.email,
            full_name=db_user.full_name,
            expires_at=db_session.expires_at,
        )

    def sign_up(self, db: Session, data: UserRegister) -> User:
        if user_crud.get_by_email(db, email=data.email):
            raise EmailAlreadyRegisteredException()
        try:
            db_user = user_crud.create(db, obj_in=data)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Sign-up failed for %s", data.email)
            raise BackendCallException("Error signing up") from exc
        self.notifier.notify(
            user_id=db_user.id,
            title="Account created",
            description="You can now sign in with your email and password",
        )
        logger.info("User %s registered", db_user.id)
        return db_user

    def sign_in(
        self,
        db: Session,
        data: UserLogin,
        *,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> AuthState:
        db_user = user_crud.authenticate(db, email=data.email, password=data.password)
        if db_user is None:
            known = user_crud.get_by_email(db, email=data.email)
            if known is not None:
                self.notifier.notify(
                    user_id=known.id,
                    title="Error signing in",
                    description="Invalid login credentials",
                    variant=NotificationVariant.DESTRUCTIVE,
                )
            logger.info("Rejected sign-in for %s", data.email)
            raise CredentialsException()

        state = self._open(db, db_user, user_agent=user_agent, ip_address=ip_address)
        self.notifier.notify(
            user_id=db_user.id,
            title="Welcome back!",
            description="You have successfully signed in",
            session_id=state.session_id,
        )
        return state

    def oauth_authorize_url(self, provider: str = GOOGLE_PROVIDER) -> str:
        if provider != GOOGLE_PROVIDER:
            raise OAuthException(f"Unsupported OAuth provider: {provider}")
        return self.oauth_client.authorize_url()

    def complete_oauth(
        self,
        db: Session,
        *,
        code: str,
        state: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> AuthState:
        if not TokenUtils.verify_oauth_state(state, GOOGLE_PROVIDER):
            raise OAuthException("Invalid OAuth state")

        user_info = self.oauth_client.fetch_user_info(code)
        db_user = user_crud.get_or_create_oauth(
            db,
            email=user_info["email"],
            full_name=user_info.get("name") or "",
            provider=AuthProvider.GOOGLE,
            avatar_url=user_info.get("picture"),
        )
        session_state = self._open(db, db_user, user_agent=user_agent, ip_address=ip_address)
        self.notifier.notify(
            user_id=db_user.id,
            title="Welcome back!",
            description="You have successfully signed in",
            session_id=session_state.session_id,
        )
        return session_state

    def _open(
        self,
        db: Session,
        db_user: User,
        *,
        user_agent: Optional[str],
        ip_address: Optional[str],
    ) -> AuthState:
        try:
            db_session = auth_session_crud.open_session(
                db, user_id=db_user.id, user_agent=user_agent, ip_address=ip_address
            )
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Could not open session for user %s", db_user.id)
            raise BackendCallException("Error signing in") from exc
        state = self.state_for(db_session, db_user)
        self.auth_store.set_session(state, AuthEvent.SIGNED_IN)
        return state

    def get_session(self, session_token: Optional[str]) -> Optional[AuthState]:
        """Sesión vigente para el token, o ``None``.

        Una sesión válida que este proceso aún no conoce se publica como
        ``INITIAL_SESSION``.
        """
        if not session_token:
            return None
        db = self.session_factory()
        try:
            db_session = auth_session_crud.get_valid(db, token=session_token)
            if db_session is None:
                return None
            known = self.auth_store.get(session_token)
            if known is not None:
                return known
            state = self.state_for(db_session, db_session.user)
        finally:
            db.close()
        self.auth_store.set_session(state, AuthEvent.INITIAL_SESSION)
        return state

    def find_session_record(self, db: Session, session_token: Optional[str]) -> Optional[AuthSession]:
        """Registro de sesión aunque esté revocada (avisos tras la expiración)."""
        if not session_token:
            return None
        return auth_session_crud.get_by_token(db, token=session_token)

    def restore_sessions(self) -> int:
        """Publica las sesiones válidas persistidas al arrancar el servicio."""
        db = self.session_factory()
        try:
            states = [
                self.state_for(db_session, db_session.user)
                for db_session in auth_session_crud.get_all_valid(db)
            ]
        finally:
            db.close()
        for state in states:
            if self.auth_store.get(state.session_token) is None:
                self.auth_store.set_session(state, AuthEvent.INITIAL_SESSION)
        logger.info("Restored %d sessions", len(states))
        return len(states)

    def sign_out(self, session_token: str, reason: RevokeReason = RevokeReason.SIGNED_OUT) -> None:
        db = self.session_factory()
        try:
            auth_session_crud.revoke_session(db, token=session_token, reason=reason)
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Could not revoke session")
            raise BackendCallException("Error signing out") from exc
        finally:
            db.close()
        self.auth_store.clear_session(session_token)
        logger.info("Session revoked (%s)", reason.value)

    def record_activity(self, session_token: str) -> None:
        db = self.session_factory()
        try:
            auth_session_crud.record_activity(db, token=session_token)
        finally:
            db.close()

    @staticmethod
    def get_profile(db: Session, user_id: int) -> Optional[User]:
        return user_crud.get(db, id=user_id)
