import os
from contextlib import suppress
from datetime import timedelta

with suppress(ModuleNotFoundError):
    from dotenv import load_dotenv

    load_dotenv()


class DBSettings:
    db_url: str

    def __init__(self) -> None:
        self.db_url = os.getenv("DB_URL", "")

        if not self.db_url:
            raise ValueError("DB_URL must be defined")


Seconds = int


class AuthSettings:
    """
    How long a bearer token is advertised as valid for. The expiry is recorded
    next to the token, but nothing in the core rejects an expired token.
    """

    token_expiration_timeout: Seconds

    def __init__(self) -> None:
        try:
            self.token_expiration_timeout = int(
                os.getenv("WARDEN_TOKEN_EXPIRE_SECONDS", "60")
            )

        except ValueError as ex:
            raise ValueError(
                "WARDEN_TOKEN_EXPIRE_SECONDS must be an integer"
            ) from ex

        if self.token_expiration_timeout <= 0:
            raise ValueError("WARDEN_TOKEN_EXPIRE_SECONDS must be positive")

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(seconds=self.token_expiration_timeout)


def verify_env_vars() -> None:
    """
    Eagerly load env vars to see if they are valid. The env vars are only valid
    at the time this function is called: if the env vars change, they may be
    reloaded and potentially invalid.
    """

    DBSettings()
    AuthSettings()
