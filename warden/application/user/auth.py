from datetime import timedelta

from warden.application.user.list_users import ListUsers
from warden.application.user.local_user_login import LocalUserLogin
from warden.application.user.register_user import RegisterUser
from warden.domain.repo.user_repo import IUserRepo
from warden.domain.user import User, UserLogin, UserRegistration


class AuthUseCase:
    """
    The operations exposed to the transport layer. Each call is independent
    of the others: the only state shared between calls is what is in the
    user repo.
    """

    def __init__(self, user_repo: IUserRepo, *, token_lifetime: timedelta) -> None:
        self.register_user = RegisterUser(user_repo)
        self.local_user_login = LocalUserLogin(
            user_repo, token_lifetime=token_lifetime
        )
        self.list_users = ListUsers(user_repo)

    async def register(self, registration: UserRegistration) -> User:
        return await self.register_user.handle(registration)

    async def login(self, login: UserLogin) -> str:
        return await self.local_user_login.handle(login)

    async def get_all(self) -> list[User]:
        return await self.list_users.handle()
