from typing import Self

from warden.domain.validation import FieldError, format_field_errors


class WardenException(Exception):
    pass


class InvalidRequest(WardenException):
    pass


class ValidationError(InvalidRequest):
    field: str
    rule: str
    param: str | None

    def __init__(
        self, msg: str, *, field: str, rule: str, param: str | None = None
    ) -> None:
        super().__init__(msg)

        self.field = field
        self.rule = rule
        self.param = param

    @classmethod
    def from_field_errors(cls, errors: list[FieldError]) -> Self:
        error = errors[0]

        return cls(
            format_field_errors(errors),
            field=error.field,
            rule=error.rule,
            param=error.param,
        )


class Unauthorized(WardenException):
    pass


class NotFound(WardenException):
    pass


ACCOUNT_EXISTS_MSG = "An account with the given email or username already exists"


class Conflict(WardenException):
    pass


class CryptoFailure(WardenException):
    pass


class StoreFailure(WardenException):
    pass


def error_status_code(exc: WardenException) -> int:
    """
    The HTTP status code a transport layer should respond with for a given
    error. Anything that isn't the caller's fault is a 500.
    """

    if isinstance(exc, InvalidRequest):
        return 400
    if isinstance(exc, Unauthorized):
        return 401
    if isinstance(exc, NotFound):
        return 404
    if isinstance(exc, Conflict):
        return 409

    return 500
