import pytest

from warden.domain.password_hash import PasswordHash


def test_hashed_password_verifies_against_same_password() -> None:
    pw = PasswordHash.from_password("secret123")

    assert pw.verify("secret123")


def test_hashed_password_does_not_verify_against_other_passwords() -> None:
    pw = PasswordHash.from_password("secret123")

    assert not pw.verify("secret124")
    assert not pw.verify("Secret123")
    assert not pw.verify("")


def test_hash_does_not_contain_password() -> None:
    pw = PasswordHash.from_password("secret123")

    assert "secret123" not in str(pw)
    assert str(pw).startswith("$2")


def test_hashes_are_salted() -> None:
    pw1 = PasswordHash.from_password("secret123")
    pw2 = PasswordHash.from_password("secret123")

    assert pw1 != pw2
    assert pw1.verify("secret123")
    assert pw2.verify("secret123")


def test_existing_hash_can_be_loaded() -> None:
    pw = PasswordHash.from_password("secret123")

    loaded = PasswordHash(str(pw))

    assert loaded == pw
    assert loaded.verify("secret123")


def test_repr_does_not_leak_hash() -> None:
    pw = PasswordHash.from_password("secret123")

    assert pw.hash not in repr(pw)


def test_passwords_longer_than_72_bytes_are_not_truncated() -> None:
    with pytest.raises(ValueError):
        PasswordHash.from_password("a" * 72 + "X")


def test_longer_password_sharing_prefix_does_not_verify() -> None:
    pw = PasswordHash.from_password("a" * 72)

    assert pw.verify("a" * 72)
    assert not pw.verify("a" * 72 + "Y")
    assert not pw.verify("x" * 5000)
