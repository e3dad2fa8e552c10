"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client

from pantry_tracker.adapters.supabase_errors import store_errors
from pantry_tracker.domain.models import UserRecord
from pantry_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def insert_if_missing(self, user: UserRecord, password_hash: str) -> None:
        """Insert the user row, leaving an existing row with that id untouched."""
        with store_errors("users.upsert"):
            self.client.table("users").upsert(
                {"id": user.id, "email": user.email, "password_hash": password_hash},
                on_conflict="id",
                ignore_duplicates=True,
            ).execute()
