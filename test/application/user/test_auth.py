import asyncio
from datetime import timedelta

import pytest

from test.domain.repo.mock_user_repo import MockUserRepo
from warden.application.exceptions import Unauthorized
from warden.application.user.auth import AuthUseCase
from warden.domain.datetime import UtcDatetime
from warden.domain.user import UserLogin, UserRegistration


def make_auth() -> tuple[AuthUseCase, MockUserRepo]:
    user_repo = MockUserRepo()

    return AuthUseCase(user_repo, token_lifetime=timedelta(minutes=1)), user_repo


async def test_register_then_login_twice() -> None:
    auth, user_repo = make_auth()

    user = await auth.register(
        UserRegistration(username="alice123", email="a@x.com", password="secret123")
    )

    stored = await user_repo.get_user_by_email("a@x.com")

    assert stored.id == user.id
    assert str(stored.password_hash) != "secret123"

    login = UserLogin(email="a@x.com", password="secret123")

    before = UtcDatetime.now()
    token1 = await auth.login(login)

    assert token1

    stored = await user_repo.get_user_by_email("a@x.com")
    assert stored.metadata.last_login_at
    assert stored.metadata.last_login_at >= before

    token2 = await auth.login(login)

    assert token2
    assert token2 != token1


async def test_get_all_lists_registered_users() -> None:
    auth, _ = make_auth()

    await auth.register(UserRegistration("alice123", "a@x.com", "secret123"))
    await auth.register(UserRegistration("bob123", "b@x.com", "secret123"))

    users = await auth.get_all()

    assert sorted(user.username for user in users) == ["alice123", "bob123"]
    assert all(user.password_hash is None for user in users)


async def test_login_before_registering_fails() -> None:
    auth, _ = make_auth()

    with pytest.raises(Unauthorized):
        await auth.login(UserLogin(email="a@x.com", password="secret123"))


async def test_cancelled_login_does_not_save_token() -> None:
    auth, user_repo = make_auth()

    await auth.register(UserRegistration("alice123", "a@x.com", "secret123"))

    task = asyncio.create_task(
        auth.login(UserLogin(email="a@x.com", password="secret123"))
    )

    # let the task reach the first await point, then cancel it
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    stored = await user_repo.get_user_by_email("a@x.com")

    assert stored.token is None
    assert stored.metadata.last_login_at is None
