import asyncio
import logging
import sqlite3
import threading
from collections.abc import Callable
from typing import TypeVar

from warden.application.exceptions import (
    ACCOUNT_EXISTS_MSG,
    Conflict,
    NotFound,
    StoreFailure,
)
from warden.domain.datetime import UtcDatetime
from warden.domain.password_hash import PasswordHash
from warden.domain.repo.user_repo import IUserRepo
from warden.domain.user import User, UserId, UserMetadata
from warden.infra.db_connection import DbConnection

logger = logging.getLogger("warden")

T = TypeVar("T")

USER_COLUMNS = """
    uuid,
    username,
    email,
    hash,
    token,
    token_expires_at,
    created_at,
    updated_at,
    last_login_at
"""


def parse_datetime(value: str | None) -> UtcDatetime | None:
    return UtcDatetime.fromisoformat(value) if value else None


def row_to_user(row: sqlite3.Row) -> User:
    return User(
        id=UserId(row["uuid"]),
        username=row["username"],
        email=row["email"],
        password_hash=PasswordHash(row["hash"]) if row["hash"] else None,
        token=row["token"],
        token_expires_at=parse_datetime(row["token_expires_at"]),
        metadata=UserMetadata(
            created_at=parse_datetime(row["created_at"]),
            updated_at=parse_datetime(row["updated_at"]),
            last_login_at=parse_datetime(row["last_login_at"]),
        ),
    )


class UserRepo(IUserRepo, DbConnection):
    """
    SQLite backed user repo. Queries are blocking, so they are ran in a worker
    thread, one at a time. The uniqueness of emails and usernames is enforced
    by the table itself.
    """

    lock: threading.Lock

    def __init__(self, db: sqlite3.Connection | None = None) -> None:
        super().__init__(db)

        self.lock = threading.Lock()

    async def create(self, user: User) -> None:
        def query() -> None:
            self.conn.execute(
                f"""
                INSERT INTO users ({USER_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
                """,
                [
                    user.id,
                    user.username,
                    user.email,
                    str(user.password_hash) if user.password_hash else "",
                    user.token,
                    user.token_expires_at,
                    user.metadata.created_at,
                    user.metadata.updated_at,
                    user.metadata.last_login_at,
                ],
            )

        await self.run(query)

    async def get_user_by_id(self, id: UserId) -> User:
        return await self.get_user_where("uuid", id)

    async def get_user_by_email(self, email: str) -> User:
        return await self.get_user_where("email", email)

    async def get_user_by_username(self, username: str) -> User:
        return await self.get_user_where("username", username)

    async def update(self, user: User) -> None:
        def query() -> int:
            return self.conn.execute(
                """
                UPDATE users SET
                    username=?,
                    email=?,
                    hash=?,
                    token=?,
                    token_expires_at=?,
                    updated_at=?,
                    last_login_at=?
                WHERE uuid=?;
                """,
                [
                    user.username,
                    user.email,
                    str(user.password_hash) if user.password_hash else "",
                    user.token,
                    user.token_expires_at,
                    user.metadata.updated_at,
                    user.metadata.last_login_at,
                    user.id,
                ],
            ).rowcount

        if not await self.run(query):
            raise NotFound(f"User {user.id} not found")

    async def delete(self, id: UserId) -> None:
        def query() -> int:
            return self.conn.execute(
                "DELETE FROM users WHERE uuid=?;", [id]
            ).rowcount

        if not await self.run(query):
            raise NotFound(f"User {id} not found")

    async def list_users(self) -> list[User]:
        def query() -> list[sqlite3.Row]:
            return self.conn.execute(
                f"SELECT {USER_COLUMNS} FROM users ORDER BY created_at;"
            ).fetchall()

        return [row_to_user(row) for row in await self.run(query)]

    async def user_exists(self, email: str, username: str) -> bool:
        def query() -> sqlite3.Row | None:
            return self.conn.execute(
                "SELECT 1 FROM users WHERE email=? OR username=?;",
                [email, username],
            ).fetchone()

        return await self.run(query) is not None

    async def get_user_where(self, column: str, value: object) -> User:
        def query() -> sqlite3.Row | None:
            return self.conn.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE {column}=?;",
                [value],
            ).fetchone()

        if row := await self.run(query):
            return row_to_user(row)

        raise NotFound(f"User with {column} `{value}` not found")

    async def run(self, query: Callable[[], T]) -> T:
        """
        Run a query in a worker thread. The thread itself can't be stopped, so
        if the caller is cancelled the query is skipped, or rolled back if it
        already started.
        """

        cancelled = threading.Event()

        try:
            return await asyncio.to_thread(self.run_locked, query, cancelled)

        except asyncio.CancelledError:
            cancelled.set()

            raise

    def run_locked(self, query: Callable[[], T], cancelled: threading.Event) -> T:
        with self.lock:
            if cancelled.is_set():
                raise asyncio.CancelledError

            try:
                result = query()

                if cancelled.is_set():
                    self.conn.rollback()

                    raise asyncio.CancelledError

                self.conn.commit()

                return result

            except sqlite3.IntegrityError as ex:
                self.conn.rollback()

                if ex.sqlite_errorname == "SQLITE_CONSTRAINT_UNIQUE":
                    raise Conflict(ACCOUNT_EXISTS_MSG) from ex

                logger.error("User query failed: %s", ex)

                raise StoreFailure(f"Database error: {ex}") from ex

            except sqlite3.Error as ex:
                self.conn.rollback()

                logger.error("User query failed: %s", ex)

                raise StoreFailure(f"Database error: {ex}") from ex
