"""User-related business logic."""

import logging
import secrets
from dataclasses import dataclass
from typing import Protocol

from pantry_tracker.domain.models import UserRecord
from pantry_tracker.errors import StoreUnavailable, ValidationFailed

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def insert_if_missing(self, user: UserRecord, password_hash: str) -> None:
        """Insert the user unless a row with the same id already exists."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def ensure_shadow_user(self, user_id: str) -> None:
        """Make sure a user row exists before pantry rows reference it.

        Identities are managed by an external auth provider, so an unknown id
        gets a placeholder row instead of failing the caller's write.
        """
        user = UserRecord(id=user_id, email=shadow_email(user_id))
        try:
            self.repository.insert_if_missing(
                user, password_hash=f"external-{secrets.token_urlsafe(16)}"
            )
        except StoreUnavailable as exc:
            raise ValidationFailed(exc.message) from exc
        logger.info("Ensured user row", extra={"user_id": user_id})


def shadow_email(user_id: str) -> str:
    """Return the deterministic placeholder email for a user id."""
    return f"user_{user_id}@local.invalid"
