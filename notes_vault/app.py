from __future__ import annotations

import logging
from collections.abc import Callable

import typer

from .config import Settings, get_settings
from .console import Console
from .handlers.commands import build_dispatcher
from .logging import configure_logging
from .metrics import snapshot
from .storage.file_store import VaultStorage


def run(
    settings: Settings | None = None,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = typer.echo,
) -> None:
    """Load the vault, run the menu session, save the vault.

    Load and save failures propagate to the caller; the session's changes
    are only written once the menu loop returns.
    """

    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    log = logging.getLogger(__name__)

    storage = VaultStorage(settings.vault_path)
    console = Console(build_dispatcher(), read=read, write=write)

    console.banner()
    vault = storage.load()
    log.info(
        "session_start",
        extra={"event_type": "session_start", "entries": len(vault)},
    )

    vault = console.run(vault)

    storage.save(vault)
    log.info("session_end", extra={"event_type": "session_end", **snapshot()})
    write("")
    write("✅ Vault saved. Goodbye!")
