"""Saved connections and quick actions kept in an SQLite file."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Connection:
    """Saved login details for a host."""

    host: str
    user: str
    password: str


class SettingsStore:
    """SQLite-backed storage for connections and quick actions."""

    def __init__(self, path: str | Path = "settings.db") -> None:
        self._db = sqlite3.connect(str(path))
        with self._db:
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS connections (host TEXT, user TEXT, pass TEXT)"
            )
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS actions (name TEXT, command TEXT)"
            )

    def save_connection(self, host: str, user: str, password: str) -> None:
        with self._db:
            self._db.execute(
                "INSERT INTO connections (host, user, pass) VALUES (?, ?, ?)",
                (host, user, password),
            )

    def connections(self) -> list[Connection]:
        rows = self._db.execute(
            "SELECT host, user, pass FROM connections ORDER BY rowid"
        )
        return [Connection(*row) for row in rows]

    def save_action(self, name: str, command: str) -> None:
        """Store ``command`` under ``name``, replacing any earlier one."""
        with self._db:
            self._db.execute("DELETE FROM actions WHERE name = ?", (name,))
            self._db.execute(
                "INSERT INTO actions (name, command) VALUES (?, ?)", (name, command)
            )

    def delete_action(self, name: str) -> bool:
        """Remove an action; True if one was removed."""
        with self._db:
            cursor = self._db.execute("DELETE FROM actions WHERE name = ?", (name,))
        return cursor.rowcount > 0

    def actions(self) -> dict[str, str]:
        rows = self._db.execute("SELECT name, command FROM actions ORDER BY rowid")
        return dict(rows)

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> "SettingsStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class QuickActions:
    """Named shell commands that can be run on a session."""

    def __init__(self, store: SettingsStore | None = None) -> None:
        self._store = store
        self._commands: dict[str, str] = dict(store.actions()) if store else {}

    def add(self, name: str, command: str) -> None:
        if not name or not command:
            raise ValueError("action name and command must not be empty")
        self._commands[name] = command
        if self._store is not None:
            self._store.save_action(name, command)

    def remove(self, name: str) -> None:
        if name not in self._commands:
            raise KeyError(name)
        del self._commands[name]
        if self._store is not None:
            self._store.delete_action(name)

    def run(self, name: str, session: Any) -> list[str]:
        """Run the named action's command and return its output lines."""
        return session.run_command(self._commands[name])

    def names(self) -> list[str]:
        return list(self._commands)