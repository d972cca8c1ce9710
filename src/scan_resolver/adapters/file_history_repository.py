"""JSON file persistence slot for user history."""

from dataclasses import dataclass
from pathlib import Path

from scan_resolver.domain.errors import HistoryStorageError
from scan_resolver.services.preferences import HistoryRepository


@dataclass
class FileHistoryRepository(HistoryRepository):
    """Stores the history blob in a single file."""

    path: Path

    def read(self) -> str | None:
        """Return the file contents, or None when it does not exist."""
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise HistoryStorageError(f"Cannot read {self.path}: {exc}") from exc

    def write(self, blob: str) -> None:
        """Atomically replace the file contents."""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(blob, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise HistoryStorageError(f"Cannot write {self.path}: {exc}") from exc

    def remove(self) -> None:
        """Delete the file if present."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            raise HistoryStorageError(f"Cannot remove {self.path}: {exc}") from exc
