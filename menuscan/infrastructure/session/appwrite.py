"""Appwrite session provider - implements ISessionProvider port.

Uses the Account API of the signed-in user:

    GET   /account          current user (401 when signed out)
    GET   /account/prefs
    PATCH /account/prefs
    PATCH /account/name
"""

import logging
from typing import Optional

from menuscan.domain.catalog.models import UserPrefs, UserSession
from menuscan.domain.shared.errors import BackendError
from menuscan.infrastructure.backends.appwrite_http import AppwriteHttpClient

logger = logging.getLogger(__name__)


class AppwriteSessionProvider:
    """Appwrite implementation of ISessionProvider port."""

    def __init__(self, http: AppwriteHttpClient) -> None:
        self._http = http

    async def get_current_user(self) -> Optional[UserSession]:
        """
        Get the signed-in user.

        Returns:
            UserSession, or None when the session is missing or expired
        """
        try:
            account = await self._http.request("GET", "/account")
        except BackendError as e:
            if e.status_code in (401, 403):
                logger.debug("No active session", extra={"status": e.status_code})
                return None
            raise
        return UserSession.model_validate(account)

    async def get_prefs(self) -> UserPrefs:
        prefs = await self._http.request("GET", "/account/prefs")
        return UserPrefs.model_validate(prefs or {})

    async def update_prefs(self, prefs: UserPrefs) -> UserSession:
        account = await self._http.request(
            "PATCH", "/account/prefs", json={"prefs": prefs.to_document()}
        )
        return UserSession.model_validate(account)

    async def update_name(self, name: str) -> UserSession:
        account = await self._http.request("PATCH", "/account/name", json={"name": name})
        return UserSession.model_validate(account)
