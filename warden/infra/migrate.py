import logging
import sqlite3
from collections.abc import Callable
from functools import wraps

logger = logging.getLogger("warden")

Migration = Callable[[sqlite3.Connection], None]

migration_queue: list[tuple[int, Migration]] = []


def auto_migrate(version: int) -> Callable[[Migration], Migration]:
    def outer(migration: Migration) -> Migration:
        @wraps(migration)
        def inner(db: sqlite3.Connection) -> None:
            migration(db)

            if get_version(db) == 0:
                db.execute("CREATE TABLE _migration_version (version int NOT NULL);")
                db.execute("INSERT INTO _migration_version VALUES (?);", [version])

            else:
                db.execute(
                    "UPDATE _migration_version SET version = (?);",
                    [version],
                )

            db.commit()

        migration_queue.append((version, inner))

        return inner

    return outer


@auto_migrate(version=1)
def migrate_v1(db: sqlite3.Connection) -> None:
    db.cursor().executescript(
        """
        CREATE TABLE users (
            uuid TEXT PRIMARY KEY NOT NULL,
            username TEXT NOT NULL UNIQUE,
            email TEXT NOT NULL UNIQUE,
            hash TEXT NOT NULL,
            token TEXT,
            token_expires_at TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            last_login_at TEXT
        );
        """
    )


def get_version(db: sqlite3.Connection) -> int:
    try:
        cursor = db.cursor()
        cursor.execute("SELECT version FROM _migration_version;")

        return int(cursor.fetchone()[0])

    except sqlite3.OperationalError:
        return 0


def migrate(db: sqlite3.Connection) -> None:
    current_version = get_version(db)

    for migration_version, migration in migration_queue:
        if current_version < migration_version:
            migration(db)


def main() -> None:
    from warden.infra.db_connection import get_default_db
    from warden.logging import setup as setup_logging

    setup_logging()

    db = get_default_db()
    version = get_version(db)

    migrate(db)

    logger.info("Migrated database from version %d to %d", version, get_version(db))


if __name__ == "__main__":
    main()
