"""
User directory clients.

The household service never owns user records; it asks the user service
whether a user exists before any membership change.
"""

import logging
from typing import Protocol
from urllib.parse import quote

import httpx

from household_service.errors import DirectoryUnavailableError
from household_service.schemas.user import User

logger = logging.getLogger(__name__)


class UserDirectoryClient(Protocol):
    def get_user(self, user_id: str) -> User | None:
        """Return the user, or None if the directory does not know it.

        Raises:
            DirectoryUnavailableError: If the directory cannot answer.
        """
        ...


class HttpUserDirectoryClient:
    """Sync HTTP client for the user service."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def get_user(self, user_id: str) -> User | None:
        # "." and ".." would be resolved away as path segments and never reach the user service.
        if user_id in ("", ".", ".."):
            return None
        url = f"/users/{quote(user_id, safe='')}"
        try:
            response = self.client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("User service timed out looking up user %s", user_id)
            raise DirectoryUnavailableError(
                f"User service timed out looking up user {user_id}", url
            ) from exc
        except httpx.TransportError as exc:
            logger.warning("User service unreachable: %s", exc)
            raise DirectoryUnavailableError(
                f"User service unreachable looking up user {user_id}", url
            ) from exc

        if response.status_code == 404:
            return None
        if response.status_code >= 500:
            logger.warning(
                "User service answered %s for user %s", response.status_code, user_id
            )
            raise DirectoryUnavailableError(
                f"User service failed with status {response.status_code}", url
            )
        # Any other non-2xx answer means the user service rejected the id itself.
        if response.status_code >= 400:
            return None

        try:
            user = User.model_validate(response.json())
        except ValueError as exc:
            logger.warning("User service returned a malformed user %s: %s", user_id, exc)
            raise DirectoryUnavailableError(
                f"User service returned a malformed record for user {user_id}", url
            ) from exc

        if user.id != user_id:
            logger.warning(
                "User service answered for user %s when asked for %s", user.id, user_id
            )
            return None
        return user

    def close(self) -> None:
        self.client.close()
