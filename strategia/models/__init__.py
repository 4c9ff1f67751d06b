from .base import Base, BaseModel
from .auth_session import AuthSession, RevokeReason
from .notification import Notification, NotificationVariant
from .organization import MembershipRole, Organization, UserOrganization
from .strategic import StrategicArea, StrategicContribution
from .user import AuthProvider, User

__all__ = [
    "Base",
    "BaseModel",
    "AuthProvider",
    "AuthSession",
    "MembershipRole",
    "Notification",
    "NotificationVariant",
    "Organization",
    "RevokeReason",
    "StrategicArea",
    "StrategicContribution",
    "User",
    "UserOrganization",
]
