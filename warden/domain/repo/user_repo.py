from abc import ABC, abstractmethod

from warden.domain.user import User, UserId


class IUserRepo(ABC):
    """
    Durable storage for users. Lookups raise `NotFound` when nothing matches,
    `create` raises `Conflict` when the email or username is taken, and any
    other storage error is raised as `StoreFailure`.
    """

    @abstractmethod
    async def create(self, user: User) -> None:
        ...

    @abstractmethod
    async def get_user_by_id(self, id: UserId) -> User:
        ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User:
        ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> None:
        ...

    @abstractmethod
    async def delete(self, id: UserId) -> None:
        ...

    @abstractmethod
    async def list_users(self) -> list[User]:
        ...

    @abstractmethod
    async def user_exists(self, email: str, username: str) -> bool:
        ...
