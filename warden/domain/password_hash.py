from typing import Self

from passlib.context import CryptContext

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72

# bcrypt at passlib's default work factor, refusing to truncate long passwords
CRYPT_CONTEXT = CryptContext(schemes=["bcrypt"], bcrypt__truncate_error=True)


class PasswordHash:
    hash: str

    def __init__(self, hash: str) -> None:
        self.hash = hash

    @classmethod
    def from_password(cls, password: str) -> Self:
        return cls(CRYPT_CONTEXT.hash(password))

    def verify(self, password: str) -> bool:
        # a longer password would be truncated and could match a different one
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            return False

        return CRYPT_CONTEXT.verify(password, self.hash)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PasswordHash) and other.hash == self.hash

    def __str__(self) -> str:
        return self.hash

    def __repr__(self) -> str:
        return "PasswordHash(...)"
