"""Activity categories and their productivity score."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

_COLUMNS = "id, name, productivity"


@dataclass(frozen=True)
class Category:
    """A named category; productivity is 1, 0 or -1."""

    id: int
    name: str
    productivity: int

    @classmethod
    def find_by_id(cls, conn: sqlite3.Connection, category_id: int) -> Category | None:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return cls(*row) if row is not None else None

    @classmethod
    def find_all(cls, conn: sqlite3.Connection) -> list[Category]:
        rows = conn.execute(f"SELECT {_COLUMNS} FROM categories ORDER BY name")
        return [cls(*row) for row in rows]

    @classmethod
    def create(cls, conn: sqlite3.Connection, name: str, productivity: int) -> Category:
        cursor = conn.execute(
            "INSERT INTO categories (name, productivity) VALUES (?, ?)",
            (name, productivity),
        )
        return cls(cursor.lastrowid, name, productivity)