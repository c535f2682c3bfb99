"""A book of jokes kept in SQLite, told with a listener's name filled in."""

from __future__ import annotations

import sqlite3
import threading
from pathlib import Path


def render_joke(text: str, name: str) -> str:
    """Fill every %name placeholder with the name."""
    return text.replace("%name", name)


class JokeBook:
    """SQLite table of jokes."""

    def __init__(self, path: str | Path) -> None:
        self._db = sqlite3.connect(str(path), check_same_thread=False)
        self._lock = threading.Lock()
        with self._lock, self._db:
            self._db.execute(
                "CREATE TABLE IF NOT EXISTS jokes ("
                "id INTEGER PRIMARY KEY NOT NULL, text TEXT NOT NULL)"
            )

    def __enter__(self) -> JokeBook:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def count(self) -> int:
        with self._lock:
            (total,) = self._db.execute("SELECT COUNT(*) FROM jokes").fetchone()
        return total

    def add(self, text: str) -> int:
        """Store a joke and return its id."""
        with self._lock, self._db:
            cursor = self._db.execute("INSERT INTO jokes (text) VALUES (?)", (text,))
        return cursor.lastrowid

    def tell(self, name: str) -> str:
        """A random joke about the named person; LookupError if the book is empty."""
        with self._lock:
            row = self._db.execute(
                "SELECT text FROM jokes ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("no jokes stored")
        return render_joke(row[0], name)

    def close(self) -> None:
        self._db.close()