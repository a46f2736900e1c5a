"""Entry point for the browser native-messaging host."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from platformdirs import user_data_path

from foxus.categorizer import Categorizer
from foxus.db import Database, run_migrations
from foxus.focus import FocusManager
from foxus.native_host import MessageError, NativeHost

DB_FILENAME = "foxus.db"


def get_db_path() -> Path:
    """Return the default database path, creating its directory."""
    data_dir = user_data_path("Foxus", "foxus")
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


def open_database(path: str | os.PathLike[str]) -> Database:
    """Open the database at ``path`` and bring its schema up to date."""
    db = Database(path)
    run_migrations(db.connection)
    return db


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="foxus-native-host",
        description="Native messaging host for the Foxus browser extension.",
    )
    parser.add_argument("--db", type=Path, help="database file to use")
    # The browser passes the caller's origin and other flags; ignore them.
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> int:
    """Serve native messages on stdin/stdout until the browser disconnects."""
    args = _parse_args(argv)
    db_path = args.db if args.db is not None else get_db_path()
    with open_database(db_path) as db:
        categorizer = Categorizer(db.connection)
        host = NativeHost(db, FocusManager(db), categorizer)
        try:
            host.run()
        except MessageError as exc:
            print(f"Native host error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())