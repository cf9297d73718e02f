import asyncio
import logging
from datetime import timedelta

from warden.application.exceptions import (
    CryptoFailure,
    NotFound,
    StoreFailure,
    Unauthorized,
    ValidationError,
)
from warden.domain.datetime import UtcDatetime
from warden.domain.repo.user_repo import IUserRepo
from warden.domain.token import new_bearer_token
from warden.domain.user import User, UserLogin
from warden.domain.validation import validate_login

logger = logging.getLogger("warden")

LOGIN_FAILED_MSG = "Incorrect email or password"


class LocalUserLogin:
    """
    Login with an email and password, returning a freshly issued bearer token.
    If the email or password doesn't match, the same error message is returned
    to prevent enumeration attacks. A token is only returned once it has been
    saved.
    """

    def __init__(self, user_repo: IUserRepo, *, token_lifetime: timedelta) -> None:
        self.user_repo = user_repo
        self.token_lifetime = token_lifetime

    async def handle(self, login: UserLogin) -> str:
        if errors := validate_login(login):
            raise ValidationError.from_field_errors(errors)

        try:
            user = await self.user_repo.get_user_by_email(login.email)

        except NotFound as ex:
            logger.info("Login failed: no matching user")

            raise Unauthorized(LOGIN_FAILED_MSG) from ex

        if not await self.password_matches(user, login.password):
            logger.info("Login failed for user %s", user.id)

            raise Unauthorized(LOGIN_FAILED_MSG)

        try:
            token = new_bearer_token()

        except OSError as ex:
            raise CryptoFailure(f"Could not generate bearer token: {ex}") from ex

        now = UtcDatetime.now()

        user.token = token
        user.token_expires_at = now + self.token_lifetime
        user.metadata.last_login_at = now
        user.metadata.updated_at = now

        try:
            await self.user_repo.update(user)

        except NotFound as ex:
            # user was deleted after it was read
            raise StoreFailure(f"Could not save bearer token: {ex}") from ex

        logger.info("User %s logged in", user.id)

        return token

    @staticmethod
    async def password_matches(user: User, password: str) -> bool:
        if not user.password_hash:
            return False

        try:
            return await asyncio.to_thread(user.password_hash.verify, password)

        except ValueError as ex:
            # stored hash is malformed, not a wrong password
            raise CryptoFailure(f"Could not verify password: {ex}") from ex
