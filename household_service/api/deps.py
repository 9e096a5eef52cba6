from functools import lru_cache

from household_service.clients.user_directory import (
    HttpUserDirectoryClient,
    UserDirectoryClient,
)
from household_service.core.config import settings
from household_service.db import SessionLocal


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_user_directory() -> UserDirectoryClient:
    """The process-wide user directory client, built once from settings."""
    return HttpUserDirectoryClient(
        settings.user_service_url,
        timeout=settings.user_service_timeout_seconds,
    )
