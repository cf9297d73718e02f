"""
Structural validation for the records that come in from the transport layer.

Each field has an ordered list of rules, and only the first rule a field
breaks is reported for that field. All fields are always checked, so callers
get every broken field back, in field order.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from warden.domain.password_hash import MAX_PASSWORD_BYTES
from warden.domain.user import UserLogin, UserRegistration

EMAIL_REGEX = re.compile(
    r"[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+"
)

ALPHANUMERIC_REGEX = re.compile("[A-Za-z0-9]+")


@dataclass(frozen=True)
class FieldError:
    field: str
    rule: str
    param: str | None = None


@dataclass(frozen=True)
class Rule:
    name: str
    check: Callable[[str], bool]
    param: str | None = None


def required() -> Rule:
    return Rule("required", bool)


def email() -> Rule:
    return Rule("email", lambda s: bool(EMAIL_REGEX.fullmatch(s)))


def alphanum() -> Rule:
    return Rule("alphanum", lambda s: bool(ALPHANUMERIC_REGEX.fullmatch(s)))


def min_length(length: int) -> Rule:
    return Rule("min", lambda s: len(s) >= length, str(length))


def max_length(length: int) -> Rule:
    return Rule("max", lambda s: len(s) <= length, str(length))


def max_bytes(length: int) -> Rule:
    return Rule(
        "max_bytes", lambda s: len(s.encode()) <= length, str(length)
    )


REGISTRATION_RULES = {
    "username": [required(), alphanum(), min_length(3), max_length(20)],
    "password": [required(), min_length(8), max_bytes(MAX_PASSWORD_BYTES)],
    "email": [required(), email()],
}

LOGIN_RULES = {
    "email": [required(), email()],
    "password": [required(), min_length(6), max_bytes(MAX_PASSWORD_BYTES)],
}

MESSAGE_TEMPLATES = {
    "required": "{field} is required",
    "email": "{field} must be a valid email address",
    "min": "{field} must be at least {param} characters long",
    "max": "{field} must be no more than {param} characters long",
    "max_bytes": "{field} must be no more than {param} bytes long",
}


def check_fields(
    values: dict[str, str], rules: dict[str, list[Rule]]
) -> list[FieldError]:
    errors: list[FieldError] = []

    for field, field_rules in rules.items():
        value = values[field]

        for rule in field_rules:
            if not rule.check(value):
                errors.append(FieldError(field, rule.name, rule.param))
                break

    return errors


def validate_registration(registration: UserRegistration) -> list[FieldError]:
    return check_fields(
        {
            "username": registration.username,
            "password": registration.password,
            "email": registration.email,
        },
        REGISTRATION_RULES,
    )


def validate_login(login: UserLogin) -> list[FieldError]:
    return check_fields(
        {"email": login.email, "password": login.password},
        LOGIN_RULES,
    )


def format_field_error(error: FieldError) -> str | None:
    template = MESSAGE_TEMPLATES.get(error.rule)

    if not template:
        return None

    return template.format(field=error.field, param=error.param)


def format_field_errors(errors: list[FieldError]) -> str:
    """
    Return a message for the first error that has a known message, falling
    back to a generic message if none do.
    """

    for error in errors:
        if msg := format_field_error(error):
            return msg

    return "validation failed"
