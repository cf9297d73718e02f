import asyncio
import logging

from warden.application.exceptions import (
    ACCOUNT_EXISTS_MSG,
    Conflict,
    CryptoFailure,
    ValidationError,
)
from warden.domain.datetime import UtcDatetime
from warden.domain.password_hash import PasswordHash
from warden.domain.repo.user_repo import IUserRepo
from warden.domain.token import new_user_id
from warden.domain.user import User, UserMetadata, UserRegistration
from warden.domain.validation import validate_registration

logger = logging.getLogger("warden")


class RegisterUser:
    """
    Create a new local account. The id and password hash are filled in here,
    never by the caller. The existence check is only a fast path: the repo is
    expected to enforce uniqueness itself, and a `Conflict` raised by `create`
    is passed through as-is.
    """

    def __init__(self, user_repo: IUserRepo) -> None:
        self.user_repo = user_repo

    async def handle(self, registration: UserRegistration) -> User:
        if errors := validate_registration(registration):
            raise ValidationError.from_field_errors(errors)

        if await self.user_repo.user_exists(
            registration.email, registration.username
        ):
            raise Conflict(ACCOUNT_EXISTS_MSG)

        try:
            user_id = new_user_id()
            password_hash = await asyncio.to_thread(
                PasswordHash.from_password, registration.password
            )

        except (OSError, ValueError) as ex:
            raise CryptoFailure(f"Could not create credentials: {ex}") from ex

        now = UtcDatetime.now()

        user = User(
            id=user_id,
            username=registration.username,
            email=registration.email,
            password_hash=password_hash,
            metadata=UserMetadata(created_at=now, updated_at=now),
        )

        await self.user_repo.create(user)

        logger.info("Registered user %s", user.id)

        return user
