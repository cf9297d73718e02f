from base64 import b64encode
from secrets import token_bytes
from uuid import uuid4

from warden.domain.user import UserId

BEARER_TOKEN_BYTES = 128


def new_user_id() -> UserId:
    return uuid4()


def new_bearer_token() -> str:
    """
    Create an opaque bearer token. The token is pure randomness: it carries no
    claims and is not derived from anything about the user it is issued to.
    """

    return b64encode(token_bytes(BEARER_TOKEN_BYTES)).decode()
