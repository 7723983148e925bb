"""Supabase Auth backed identity provider."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError, AuthRetryableError, Client

from meal_prep.adapters.supabase_errors import storage_errors
from meal_prep.domain.errors import StorageError
from meal_prep.domain.models import UserIdentity, UserRole
from meal_prep.services.identity import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Resolves access tokens with Supabase Auth and roles from ``user_roles``."""

    client: Client

    def get_current_user(self, access_token: str | None) -> UserIdentity | None:
        """Return the user owning the token, if the token is valid."""
        if not access_token:
            return None
        try:
            response = self.client.auth.get_user(access_token)
        except AuthRetryableError as exc:
            raise StorageError(exc.message) from exc
        except httpx.HTTPError as exc:
            raise StorageError(str(exc) or type(exc).__name__) from exc
        except AuthError as exc:
            logger.info("Rejected access token", extra={"reason": exc.message})
            return None
        if response is None or response.user is None:
            return None
        return UserIdentity(id=UUID(response.user.id), email=response.user.email)

    def has_role(self, user_id: UUID, role: UserRole) -> bool:
        """Return True when a ``user_roles`` row exists for the pair."""
        with storage_errors():
            response = (
                self.client.table("user_roles")
                .select("role")
                .eq("user_id", str(user_id))
                .eq("role", str(role))
                .limit(1)
                .execute()
            )
        return bool(response.data)
