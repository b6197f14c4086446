"""Menu command handlers.

Each handler takes the vault and a :class:`Command` and returns the lines to
print. None of them read input or write output themselves.
"""

from __future__ import annotations

from ..state.vault import Vault
from .dispatcher import Command, CommandKind, Dispatcher

PASSWORD_MASK = "********"
SEPARATOR = "-----------------------------------"

DELETE_PASSWORD = "1"
DELETE_NOTE = "2"


def add_password(vault: Vault, command: Command) -> list[str]:
    # Password is kept exactly as typed; leading/trailing spaces may matter.
    vault.put_credential(
        service=command.get("service").strip(),
        username=command.get("username").strip(),
        password=command.get("password"),
        note=command.get("note").strip(),
    )
    return ["✅ Password saved."]


def view_passwords(vault: Vault, command: Command) -> list[str]:
    credentials = vault.all_credentials()
    if not credentials:
        return ["(No passwords saved yet)"]

    lines = ["", "Saved Passwords", SEPARATOR]
    for cred in credentials:
        lines.append(f"Service:   {cred.service}")
        lines.append(f"Username:  {cred.username}")
        lines.append(f"Password:  {PASSWORD_MASK}")
        if cred.note:
            lines.append(f"Note:      {cred.note}")
        lines.append(SEPARATOR)
    return lines


def add_note(vault: Vault, command: Command) -> list[str]:
    vault.put_note(title=command.get("title").strip(), content=command.get("content"))
    return ["✅ Note saved."]


def view_notes(vault: Vault, command: Command) -> list[str]:
    notes = vault.all_notes()
    if not notes:
        return ["(No notes saved yet)"]

    lines = ["", "Saved Notes", SEPARATOR]
    for note in notes:
        lines.append(f"Title:   {note.title}")
        lines.append(f"Content: {note.content}")
        lines.append(SEPARATOR)
    return lines


def search(vault: Vault, command: Command) -> list[str]:
    keyword = command.get("keyword")
    credentials = vault.find_credentials(keyword)
    notes = vault.find_notes(keyword)

    lines = ["", "Matching Passwords:"]
    lines.extend(f"- {c.service} ({c.username})" for c in credentials)
    if not credentials:
        lines.append("(none)")

    lines.extend(["", "Matching Notes:"])
    lines.extend(f"- {n.title}" for n in notes)
    if not notes:
        lines.append("(none)")
    return lines


def delete_entry(vault: Vault, command: Command) -> list[str]:
    target = command.get("target").strip()
    if target == DELETE_PASSWORD:
        if vault.remove_credential(command.get("key")):
            return ["✅ Password entry deleted."]
        return ["❌ No password found for that service."]
    if target == DELETE_NOTE:
        if vault.remove_note(command.get("key")):
            return ["✅ Note deleted."]
        return ["❌ No note found with that title."]
    return ["❌ Invalid choice."]


def build_dispatcher() -> Dispatcher:
    """Return a dispatcher wired with every menu command."""

    dispatcher = Dispatcher()
    dispatcher.on(CommandKind.ADD_PASSWORD, add_password)
    dispatcher.on(CommandKind.VIEW_PASSWORDS, view_passwords)
    dispatcher.on(CommandKind.ADD_NOTE, add_note)
    dispatcher.on(CommandKind.VIEW_NOTES, view_notes)
    dispatcher.on(CommandKind.SEARCH, search)
    dispatcher.on(CommandKind.DELETE, delete_entry)
    return dispatcher
