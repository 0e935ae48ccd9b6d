# storefront/api/deps.py
from functools import lru_cache

from storefront.services.auth_client import AuthClient
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


@lru_cache
def get_auth_client() -> AuthClient:
    return AuthClient()


def get_notifier() -> NotificationService:
    return NotificationService()
