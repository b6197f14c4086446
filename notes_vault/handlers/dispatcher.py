from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ..errors import ErrorCategory, ValidationError
from ..metrics import commands_total, entries_total, validation_errors_total
from ..state.vault import Vault

logger = logging.getLogger(__name__)

INVALID_CHOICE = "❌ Invalid choice. Try again."


class CommandKind(str, Enum):
    """Menu codes, in the order they are shown."""

    ADD_PASSWORD = "1"
    VIEW_PASSWORDS = "2"
    ADD_NOTE = "3"
    VIEW_NOTES = "4"
    SEARCH = "5"
    DELETE = "6"
    EXIT = "7"

    @classmethod
    def parse(cls, choice: str) -> CommandKind | None:
        try:
            return cls(choice.strip())
        except ValueError:
            return None


@dataclass(frozen=True)
class Command:
    """A parsed menu command and the answers collected for it.

    ``kind`` is ``None`` when the menu input matched no command.
    """

    kind: CommandKind | None
    fields: dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> str:
        return self.fields.get(name, "")


@dataclass
class Outcome:
    vault: Vault
    lines: list[str] = field(default_factory=list)
    done: bool = False


Handler = Callable[[Vault, Command], list[str]]


class Dispatcher:
    """Route commands to handlers without touching the console.

    Handlers receive the vault and the command and return the lines to
    render. :class:`ValidationError` raised by a handler becomes an error
    line; the session carries on.

    The :meth:`on` method can be used either as a decorator::

        dispatcher = Dispatcher()


        @dispatcher.on(CommandKind.VIEW_NOTES)
        def view_notes(vault, command): ...

    or called directly::

        dispatcher.on(CommandKind.VIEW_NOTES, view_notes)

    """

    def __init__(self) -> None:
        self._handlers: dict[CommandKind, Handler] = {}

    def on(
        self, kind: CommandKind, handler: Handler | None = None
    ) -> Handler | Callable[[Handler], Handler]:
        if handler is not None:
            self._handlers[kind] = handler
            return handler

        def decorator(func: Handler) -> Handler:
            self._handlers[kind] = func
            return func

        return decorator

    def dispatch(self, vault: Vault, command: Command) -> Outcome:
        commands_total.inc()
        if command.kind is CommandKind.EXIT:
            return Outcome(vault=vault, done=True)

        handler = self._handlers.get(command.kind) if command.kind else None
        if handler is None:
            logger.debug("unknown_command", extra={"event_type": "unknown_command"})
            return Outcome(vault=vault, lines=[INVALID_CHOICE])

        try:
            lines = handler(vault, command)
        except ValidationError as exc:
            validation_errors_total.inc()
            logger.info(
                "command_rejected",
                extra={
                    "event_type": "command_rejected",
                    "command": command.kind.name,
                    "error_category": ErrorCategory.VALIDATION.value,
                },
            )
            lines = [f"❌ {exc}"]
        entries_total.set(len(vault))
        return Outcome(vault=vault, lines=lines)
