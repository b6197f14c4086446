"""Whole-vault persistence to a single JSON file.

The file holds a tagged, versioned document with two arrays of records::

    {"format": "notes-vault", "version": 1,
     "credentials": [{"service": ..., "username": ..., "password": ..., "note": ...}],
     "notes": [{"title": ..., "content": ...}]}

Keys are not stored; they are recomputed from each record on load.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Literal

import pydantic
from pydantic import BaseModel, ConfigDict
from pydantic_core import PydanticSerializationError

from ..errors import CorruptStateError, ErrorCategory, StorageError
from ..metrics import entries_total, save_ms
from ..state.records import Credential, Note, normalize_key
from ..state.vault import Vault

FORMAT_NAME = "notes-vault"
FORMAT_VERSION = 1

logger = logging.getLogger(__name__)


class CredentialRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    service: str
    username: str = ""
    password: str = ""
    note: str = ""


class NoteRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    content: str = ""


class VaultDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: Literal["notes-vault"] = FORMAT_NAME
    version: Literal[1] = FORMAT_VERSION
    credentials: list[CredentialRecord] = []
    notes: list[NoteRecord] = []

    @classmethod
    def from_vault(cls, vault: Vault) -> VaultDocument:
        return cls(
            credentials=[
                CredentialRecord(
                    service=c.service, username=c.username, password=c.password, note=c.note
                )
                for c in vault.all_credentials()
            ],
            notes=[NoteRecord(title=n.title, content=n.content) for n in vault.all_notes()],
        )

    def to_vault(self) -> Vault:
        """Rebuild a :class:`Vault`, rejecting empty or duplicate keys."""

        vault = Vault()
        for rec in self.credentials:
            key = normalize_key(rec.service)
            if not key or key in vault.credentials:
                raise CorruptStateError(f"invalid or duplicate credential key {key!r}")
            vault.credentials[key] = Credential(
                service=rec.service, username=rec.username, password=rec.password, note=rec.note
            )
        for rec in self.notes:
            key = normalize_key(rec.title)
            if not key or key in vault.notes:
                raise CorruptStateError(f"invalid or duplicate note key {key!r}")
            vault.notes[key] = Note(title=rec.title, content=rec.content)
        return vault


class VaultStorage:
    """Load and save a :class:`Vault` at a fixed path."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> Vault:
        """Read the vault file.

        A missing file yields an empty vault. Read failures raise
        :class:`StorageError`; undecodable content raises
        :class:`CorruptStateError`.
        """

        if not self.path.exists():
            logger.info("vault_missing", extra={"event_type": "vault_missing"})
            entries_total.set(0)
            return Vault()

        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            logger.error(
                "vault_read_failed",
                extra={"event_type": "vault_read_failed", "error_category": ErrorCategory.STORAGE.value},
            )
            raise StorageError(f"cannot read vault file {self.path}: {exc}") from exc

        try:
            document = VaultDocument.model_validate_json(raw)
            vault = document.to_vault()
        except (pydantic.ValidationError, CorruptStateError) as exc:
            logger.error(
                "vault_corrupt",
                extra={"event_type": "vault_corrupt", "error_category": ErrorCategory.CORRUPT.value},
            )
            raise CorruptStateError(f"vault file {self.path} is corrupt: {exc}") from exc

        entries_total.set(len(vault))
        logger.info("vault_loaded", extra={"event_type": "vault_loaded", "entries": len(vault)})
        return vault

    def save(self, vault: Vault) -> None:
        """Write the whole vault, replacing the previous file atomically."""

        tmp_name: str | None = None
        with save_ms.time():
            try:
                payload = VaultDocument.from_vault(vault).model_dump_json(indent=2)
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
                )
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self.path)
                tmp_name = None
            except (OSError, PydanticSerializationError, UnicodeEncodeError) as exc:
                logger.error(
                    "vault_write_failed",
                    extra={
                        "event_type": "vault_write_failed",
                        "error_category": ErrorCategory.STORAGE.value,
                    },
                )
                raise StorageError(f"cannot write vault file {self.path}: {exc}") from exc
            finally:
                if tmp_name is not None:
                    Path(tmp_name).unlink(missing_ok=True)

        entries_total.set(len(vault))
        logger.info("vault_saved", extra={"event_type": "vault_saved", "entries": len(vault)})
