"""
EmailRegistry - durable set of accepted (lowercased) email addresses.

Backs the optional "already registered" rule. The registry is read before
validation and written after a successful submit; the single-threaded
form model means there is only ever one writer.
"""

import json
from pathlib import Path

from regform.observability.logger import get_logger
from regform.observability.metrics import registered_emails, set_gauge

logger = get_logger(__name__)


class EmailRegistry:
    """
    Case-insensitive email set, optionally persisted as a JSON list.

    Without a path the registry lives in memory only.
    """

    def __init__(self, path: str | Path | None = None):
        """
        Initialize the registry, loading existing entries from disk.

        Args:
            path: JSON file holding a list of emails (None = in-memory)

        Raises:
            ValueError: If the file exists but does not hold a JSON list of strings
        """
        self.path = Path(path) if path is not None else None
        self._emails: set[str] = set()

        if self.path is not None and self.path.exists():
            self._emails = self._load()

        self._update_gauge()

    @staticmethod
    def normalize(email: str) -> str:
        return email.strip().lower()

    @property
    def store(self) -> str:
        return "file" if self.path is not None else "memory"

    def _load(self) -> set[str]:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Email registry at {self.path} is not valid JSON: {e}")

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise ValueError(f"Email registry at {self.path} must hold a JSON list of strings")

        logger.debug(f"Loaded {len(data)} registered emails from {self.path}")
        return {self.normalize(item) for item in data}

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(sorted(self._emails), f, indent=2)

    def _update_gauge(self) -> None:
        set_gauge(registered_emails, len(self._emails), store=self.store)

    def contains(self, email: str) -> bool:
        """Check membership, ignoring case and surrounding whitespace."""
        return self.normalize(email) in self._emails

    def add(self, email: str) -> bool:
        """
        Register an email.

        Returns:
            True if the email was new, False if it was already registered
        """
        normalized = self.normalize(email)
        if normalized in self._emails:
            return False

        self._emails.add(normalized)
        self._save()
        self._update_gauge()
        return True

    def emails(self) -> list[str]:
        """All registered emails, sorted."""
        return sorted(self._emails)

    def clear(self) -> None:
        """Remove every registered email."""
        self._emails.clear()
        self._save()
        self._update_gauge()

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and self.contains(email)

    def __len__(self) -> int:
        return len(self._emails)
