from dataclasses import dataclass, field
from uuid import UUID

from warden.domain.datetime import UtcDatetime
from warden.domain.password_hash import PasswordHash

UserId = UUID


@dataclass
class UserMetadata:
    created_at: UtcDatetime | None = None
    updated_at: UtcDatetime | None = None
    last_login_at: UtcDatetime | None = None


@dataclass
class User:
    id: UserId
    username: str
    email: str
    password_hash: PasswordHash | None = None
    token: str | None = None
    token_expires_at: UtcDatetime | None = None
    metadata: UserMetadata = field(default_factory=UserMetadata)


@dataclass
class UserRegistration:
    """
    Request to create a new account. The password is in plaintext, and only
    lives as long as the request does.
    """

    username: str
    email: str
    password: str = field(repr=False)


@dataclass
class UserLogin:
    email: str
    password: str = field(repr=False)
