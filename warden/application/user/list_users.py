from dataclasses import replace

from warden.domain.repo.user_repo import IUserRepo
from warden.domain.user import User


class ListUsers:
    """
    List every user. Credentials (password hashes and bearer tokens) are
    stripped from the returned users.
    """

    def __init__(self, user_repo: IUserRepo) -> None:
        self.user_repo = user_repo

    async def handle(self) -> list[User]:
        users = await self.user_repo.list_users()

        return [replace(user, password_hash=None, token=None) for user in users]
