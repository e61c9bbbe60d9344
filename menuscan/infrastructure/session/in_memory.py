"""In-memory session provider for tests and local development."""

from typing import Optional

from menuscan.domain.catalog.models import UserPrefs, UserSession
from menuscan.domain.shared.errors import NotFoundError


class InMemorySessionProvider:
    """
    ISessionProvider holding a single optional session.

    Example:
        >>> provider = InMemorySessionProvider(
        ...     UserSession(id="u1", name="Ada", prefs=UserPrefs(role="customer"))
        ... )
        >>> (await provider.get_current_user()).name
        'Ada'
    """

    def __init__(self, session: Optional[UserSession] = None) -> None:
        self._session = session

    def sign_in(self, session: UserSession) -> None:
        self._session = session

    def sign_out(self) -> None:
        self._session = None

    def _require(self) -> UserSession:
        if self._session is None:
            raise NotFoundError("No active session")
        return self._session

    async def get_current_user(self) -> Optional[UserSession]:
        return self._session

    async def get_prefs(self) -> UserPrefs:
        return self._require().prefs

    async def update_prefs(self, prefs: UserPrefs) -> UserSession:
        self._session = self._require().model_copy(update={"prefs": prefs})
        return self._session

    async def update_name(self, name: str) -> UserSession:
        self._session = self._require().model_copy(update={"name": name})
        return self._session
