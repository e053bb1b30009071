"""Directory listing and back/forward navigation over a remote host."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable


class ListingError(Exception):
    """Raised when a directory yields no entries."""


@dataclass(frozen=True)
class Entry:
    """One line of a directory listing."""

    name: str
    path: str
    is_dir: bool


def join_path(base: str, name: str) -> str:
    """Append ``name`` to ``base`` with exactly one separator between them."""
    return base + name if base.endswith("/") else f"{base}/{name}"


def parse_listing(lines: Iterable[str], base: str) -> list[Entry]:
    """Turn ``ls -p`` output lines into entries, skipping blank lines."""
    return [
        Entry(name=line, path=join_path(base, line), is_dir=line.endswith("/"))
        for line in lines
        if line.strip()
    ]


@dataclass
class Navigator:
    """Tracks the current directory, its entries and the visit history."""

    lister: Callable[[str], Iterable[str]]
    start: str = "/"
    current: str = field(init=False)
    entries: list[Entry] = field(init=False, default_factory=list)
    back_history: list[str] = field(init=False, default_factory=list)
    forward_history: list[str] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.current = self.start

    def _fetch(self, path: str) -> list[Entry]:
        entries = parse_listing(self.lister(path), path)
        if not entries:
            raise ListingError(f"could not list directory {path}")
        return entries

    def load(self, path: str) -> list[Entry]:
        """Show ``path``, remembering the current directory for going back."""
        entries = self._fetch(path)
        self.back_history.append(self.current)
        self.current = path
        self.entries = entries
        return entries

    def back(self) -> str | None:
        """Return to the previous directory; None when there is none."""
        if not self.back_history:
            return None
        target = self.back_history[-1]
        self.entries = self._fetch(target)
        self.back_history.pop()
        self.forward_history.append(self.current)
        self.current = target
        return target

    def forward(self) -> str | None:
        """Undo the last ``back``; None when there is nothing to redo."""
        if not self.forward_history:
            return None
        target = self.forward_history[-1]
        self.entries = self._fetch(target)
        self.forward_history.pop()
        self.back_history.append(self.current)
        self.current = target
        return target

    def enter(self, entry: Entry) -> str | None:
        """Open a directory entry; files are ignored and give None."""
        if not entry.is_dir:
            return None
        path = join_path(self.current, entry.name)
        self.load(path)
        return path

    def filter(self, term: str) -> list[Entry]:
        """Entries whose name contains ``term``, ignoring case."""
        needle = term.casefold()
        return [entry for entry in self.entries if needle in entry.name.casefold()]