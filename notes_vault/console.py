"""Blocking console loop around the dispatcher."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import typer

from .handlers.commands import DELETE_NOTE, DELETE_PASSWORD
from .handlers.dispatcher import Command, CommandKind, Dispatcher
from .state.vault import Vault

logger = logging.getLogger(__name__)

BANNER = (
    "====================================",
    " Notes & Password Vault",
    "====================================",
    "",
)

MENU = (
    "",
    "Main Menu",
    "1) Add Password",
    "2) View Passwords",
    "3) Add Note",
    "4) View Notes",
    "5) Search",
    "6) Delete Entry",
    "7) Exit",
)


def _delete_key_prompt(answers: dict[str, str]) -> str:
    if answers.get("target", "").strip() == DELETE_NOTE:
        return "Enter note title to delete: "
    return "Enter service name to delete: "


@dataclass(frozen=True)
class Prompt:
    """One question asked while collecting a command's fields.

    Prompting stops early when a ``required`` answer is blank or an answer is
    not one of ``choices``; the dispatcher then reports the problem.
    """

    field: str
    text: str | Callable[[dict[str, str]], str]
    required: bool = False
    choices: tuple[str, ...] | None = None

    def render(self, answers: dict[str, str]) -> str:
        return self.text(answers) if callable(self.text) else self.text

    def accepts(self, answer: str) -> bool:
        if self.required and not answer.strip():
            return False
        if self.choices is not None and answer.strip() not in self.choices:
            return False
        return True


PROMPTS: dict[CommandKind, tuple[Prompt, ...]] = {
    CommandKind.ADD_PASSWORD: (
        Prompt("service", "Service (e.g., Gmail): ", required=True),
        Prompt("username", "Username/Email: "),
        Prompt("password", "Password: "),
        Prompt("note", "Optional note: "),
    ),
    CommandKind.ADD_NOTE: (
        Prompt("title", "Note title: ", required=True),
        Prompt("content", "Note content: "),
    ),
    CommandKind.SEARCH: (Prompt("keyword", "Enter search keyword: ", required=True),),
    CommandKind.DELETE: (
        Prompt(
            "target",
            "Delete (1) Password or (2) Note? ",
            choices=(DELETE_PASSWORD, DELETE_NOTE),
        ),
        Prompt("key", _delete_key_prompt, required=True),
    ),
}


class Console:
    """Read menu choices and answers, dispatch them, print the results.

    ``read`` and ``write`` default to :func:`input` and :func:`typer.echo`;
    tests pass scripted replacements.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = typer.echo,
    ) -> None:
        self.dispatcher = dispatcher
        self.read = read
        self.write = write

    def banner(self) -> None:
        for line in BANNER:
            self.write(line)

    def show_menu(self) -> None:
        for line in MENU:
            self.write(line)

    def read_command(self) -> Command:
        """Read a menu choice and the answers for it.

        Raises :class:`EOFError` when input runs out.
        """

        kind = CommandKind.parse(self.read("Choose: "))
        answers: dict[str, str] = {}
        prompts = PROMPTS.get(kind, ()) if kind is not None else ()
        for prompt in prompts:
            answer = self.read(prompt.render(answers))
            answers[prompt.field] = answer
            if not prompt.accepts(answer):
                break
        return Command(kind=kind, fields=answers)

    def run(self, vault: Vault) -> Vault:
        """Loop until Exit is chosen or input ends, returning the vault."""

        while True:
            self.show_menu()
            try:
                command = self.read_command()
            except EOFError:
                logger.info("input_closed", extra={"event_type": "input_closed"})
                self.write("")
                return vault

            outcome = self.dispatcher.dispatch(vault, command)
            for line in outcome.lines:
                self.write(line)
            vault = outcome.vault
            if outcome.done:
                return vault
