from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import ErrorCategory, ValidationError
from .records import Credential, Note, normalize_key

logger = logging.getLogger(__name__)


def _require(value: str, label: str) -> str:
    key = normalize_key(value)
    if not key:
        logger.debug(
            "validation_failed",
            extra={"field": label, "error_category": ErrorCategory.VALIDATION.value},
        )
        raise ValidationError(f"{label} cannot be empty.")
    return key


@dataclass
class Vault:
    """In-memory store of credentials and notes.

    Each mapping is keyed by the lowercased, trimmed service name or note
    title. Adding an entry under an existing key replaces it.
    """

    credentials: dict[str, Credential] = field(default_factory=dict)
    notes: dict[str, Note] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.credentials) + len(self.notes)

    @property
    def is_empty(self) -> bool:
        return not self.credentials and not self.notes

    # Credentials ------------------------------------------------------------

    def put_credential(
        self, service: str, username: str, password: str, note: str = ""
    ) -> Credential:
        key = _require(service, "Service")
        credential = Credential(service=service, username=username, password=password, note=note)
        self.credentials[key] = credential
        logger.info("credential_saved", extra={"event_type": "credential_saved", "key": key})
        return credential

    def get_credential(self, key: str) -> Credential | None:
        return self.credentials.get(normalize_key(key))

    def all_credentials(self) -> list[Credential]:
        return list(self.credentials.values())

    def remove_credential(self, key: str) -> bool:
        key = _require(key, "Service")
        removed = self.credentials.pop(key, None) is not None
        logger.info(
            "credential_removed",
            extra={"event_type": "credential_removed", "key": key, "found": removed},
        )
        return removed

    def find_credentials(self, keyword: str) -> list[Credential]:
        """Return credentials whose service contains ``keyword`` (any case)."""
        needle = _require(keyword, "Search keyword")
        return [c for c in self.credentials.values() if needle in c.service.lower()]

    # Notes ------------------------------------------------------------------

    def put_note(self, title: str, content: str = "") -> Note:
        key = _require(title, "Title")
        note = Note(title=title, content=content)
        self.notes[key] = note
        logger.info("note_saved", extra={"event_type": "note_saved", "key": key})
        return note

    def get_note(self, key: str) -> Note | None:
        return self.notes.get(normalize_key(key))

    def all_notes(self) -> list[Note]:
        return list(self.notes.values())

    def remove_note(self, key: str) -> bool:
        key = _require(key, "Title")
        removed = self.notes.pop(key, None) is not None
        logger.info(
            "note_removed",
            extra={"event_type": "note_removed", "key": key, "found": removed},
        )
        return removed

    def find_notes(self, keyword: str) -> list[Note]:
        """Return notes whose title contains ``keyword`` (any case)."""
        needle = _require(keyword, "Search keyword")
        return [n for n in self.notes.values() if needle in n.title.lower()]
