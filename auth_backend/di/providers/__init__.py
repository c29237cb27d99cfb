from .database_provider import DatabaseProvider
from .repository_provider import RepositoryProvider
from .notification_provider import NotificationProvider
from .auth_provider import AuthProvider


__all__ = [
    "DatabaseProvider",
    "RepositoryProvider",
    "NotificationProvider",
    "AuthProvider",
]
