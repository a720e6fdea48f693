"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrisnap.domain.models import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_uid(self, uid: str) -> UserRecord | None:
        """Return the user for an auth provider uid, if present."""

    def create_user(self, uid: str, email: str) -> UserRecord:
        """Create and return a new user record."""

    def touch_last_active(self, user_id: UUID) -> None:
        """Update the last active timestamp for the user."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def ensure_user(self, uid: str, email: str) -> UserRecord:
        """Ensure a user exists for the uid and return it."""
        existing = self.repository.get_by_uid(uid)
        if existing:
            self.repository.touch_last_active(existing.id)
            return existing
        return self.repository.create_user(uid, email)

    def get_user(self, uid: str) -> UserRecord | None:
        """Return the user for a uid without creating it."""
        return self.repository.get_by_uid(uid)
