"""Domain models for users and roles."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class UserRole(StrEnum):
    """Application roles stored in ``user_roles``."""

    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class UserIdentity:
    """Authenticated user resolved from an access token."""

    id: UUID
    email: str | None = None
