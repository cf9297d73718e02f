import sqlite3
from uuid import UUID

from warden.domain.datetime import UtcDatetime
from warden.settings import DBSettings

sqlite3.register_adapter(UtcDatetime, str)
sqlite3.register_adapter(UUID, str)


def get_default_db() -> sqlite3.Connection:
    # queries are run from worker threads, one at a time
    return sqlite3.connect(DBSettings().db_url, check_same_thread=False)


class DbConnection:
    conn: sqlite3.Connection

    def __init__(self, db: sqlite3.Connection | None = None) -> None:
        self.conn = get_default_db() if db is None else db

        self.conn.row_factory = sqlite3.Row
