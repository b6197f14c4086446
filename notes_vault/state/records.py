from __future__ import annotations

from dataclasses import dataclass


def normalize_key(text: str) -> str:
    """Return the lookup key for a service name or note title."""
    return text.strip().lower()


@dataclass(frozen=True)
class Credential:
    service: str
    username: str
    password: str
    note: str = ""

    @property
    def key(self) -> str:
        return normalize_key(self.service)


@dataclass(frozen=True)
class Note:
    title: str
    content: str = ""

    @property
    def key(self) -> str:
        return normalize_key(self.title)
