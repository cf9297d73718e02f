import sqlite3

from warden.application.user.auth import AuthUseCase
from warden.infra.migrate import migrate
from warden.infra.user_repo import UserRepo
from warden.settings import AuthSettings


def make_auth_use_case(db: sqlite3.Connection | None = None) -> AuthUseCase:
    """
    Build the auth use case and everything it depends on. Call once at
    startup, then share the result between requests.
    """

    settings = AuthSettings()

    user_repo = UserRepo(db)
    migrate(user_repo.conn)

    return AuthUseCase(user_repo, token_lifetime=settings.token_lifetime)
