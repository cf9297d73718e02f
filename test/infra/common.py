import sqlite3

from warden.infra.migrate import migrate


class SqliteTestWrapper:
    connection: sqlite3.Connection | None = None
    migrated_connection: sqlite3.Connection | None = None

    @classmethod
    def reset(cls) -> None:
        """Refresh the datasources used for testing."""

        if cls.migrated_connection is None:
            cls.migrated_connection = sqlite3.connect(":memory:")

            migrate(cls.migrated_connection)

        if cls.connection:
            cls.connection.executescript("DELETE FROM users;")
            cls.connection.commit()

        else:
            cls.connection = sqlite3.connect(
                ":memory:", check_same_thread=False
            )

            cls.migrated_connection.backup(cls.connection)
