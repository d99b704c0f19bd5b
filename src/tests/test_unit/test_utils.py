import pytest

from database.models.accounts import UserModel, UserRoleEnum
from database.validators.accounts import (
    validate_email,
    validate_password_strength,
    validate_user_name
)
from security.utils import hash_password, verify_password


@pytest.mark.unit
def test_hash_and_verify_password():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong-password", hashed)


@pytest.mark.unit
def test_user_password_is_hashed_on_assignment():
    user = UserModel.create(
        name="Jane",
        email="Jane@Example.com",
        raw_password="secret123"
    )
    assert user.email == "jane@example.com"
    assert user.role == UserRoleEnum.CUSTOMER
    assert user.verify_password("secret123")
    assert not user.verify_password("secret124")


@pytest.mark.unit
def test_user_password_is_write_only():
    user = UserModel.create(
        name="Jane",
        email="jane@example.com",
        raw_password="secret123"
    )
    with pytest.raises(AttributeError):
        _ = user.password


@pytest.mark.unit
@pytest.mark.parametrize("password", ["short", "", "x" * 73])
def test_password_strength_rejects(password):
    with pytest.raises(ValueError):
        validate_password_strength(password)


@pytest.mark.unit
def test_password_strength_accepts_boundaries():
    assert validate_password_strength("abcdef") == "abcdef"
    assert validate_password_strength("x" * 72) == "x" * 72


@pytest.mark.unit
def test_user_name_is_stripped():
    assert validate_user_name("  Jane  ") == "Jane"
    with pytest.raises(ValueError):
        validate_user_name("   ")
    with pytest.raises(ValueError):
        validate_user_name("n" * 51)


@pytest.mark.unit
def test_validate_email_normalizes():
    assert validate_email("User@Example.COM") == "user@example.com"
    with pytest.raises(ValueError):
        validate_email("not-an-email")


@pytest.mark.unit
def test_fresh_hash_is_not_upgraded():
    user = UserModel.create(
        name="Jane",
        email="jane@example.com",
        raw_password="secret123"
    )
    assert user.upgrade_password_hash("secret123") is False
    assert user.verify_password("secret123")
