"""Identity and authorization interface."""

from typing import Protocol
from uuid import UUID

from meal_prep.domain.models import UserIdentity, UserRole


class IdentityProvider(Protocol):
    """Resolves callers and checks their roles."""

    def get_current_user(self, access_token: str | None) -> UserIdentity | None:
        """Return the user for an access token, or None when unauthenticated."""

    def has_role(self, user_id: UUID, role: UserRole) -> bool:
        """Return True when the user holds the role."""
