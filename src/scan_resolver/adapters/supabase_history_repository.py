"""Supabase persistence slot for user history."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from scan_resolver.domain.errors import HistoryStorageError
from scan_resolver.services.preferences import HistoryRepository


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Stores the history blob in the ``user_history`` table, one row per slot."""

    client: Client
    slot: str

    def read(self) -> str | None:
        """Return the stored blob for the slot."""
        try:
            response = (
                self.client.table("user_history")
                .select("payload")
                .eq("slot", self.slot)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise HistoryStorageError(f"Failed to read user history: {exc}") from exc
        if not response.data:
            return None
        return response.data[0].get("payload")

    def write(self, blob: str) -> None:
        """Insert or replace the blob for the slot."""
        try:
            response = (
                self.client.table("user_history")
                .upsert(
                    {
                        "slot": self.slot,
                        "payload": blob,
                        "updated_at": datetime.now(tz=UTC).isoformat(),
                    },
                    on_conflict="slot",
                )
                .execute()
            )
        except Exception as exc:
            raise HistoryStorageError(f"Failed to save user history: {exc}") from exc
        if not response.data:
            raise HistoryStorageError("Failed to save user history in Supabase")

    def remove(self) -> None:
        """Delete the row for the slot."""
        try:
            self.client.table("user_history").delete().eq("slot", self.slot).execute()
        except Exception as exc:
            raise HistoryStorageError(f"Failed to clear user history: {exc}") from exc
