"""Session provider port (interface).

Abstracts the authentication/session service. Sign-in and sign-up flows are
handled by the UI against the provider directly; the catalog only needs the
current user and their preferences.
"""

from typing import Optional, Protocol

from menuscan.domain.catalog.models import UserPrefs, UserSession


class ISessionProvider(Protocol):
    """Interface for the current user session."""

    async def get_current_user(self) -> Optional[UserSession]:
        """
        Get the signed-in user.

        Returns:
            UserSession, or None when nobody is signed in
        """
        ...

    async def get_prefs(self) -> UserPrefs:
        """Get the signed-in user's preferences."""
        ...

    async def update_prefs(self, prefs: UserPrefs) -> UserSession:
        """Replace the signed-in user's preferences."""
        ...

    async def update_name(self, name: str) -> UserSession:
        """Change the signed-in user's display name."""
        ...
