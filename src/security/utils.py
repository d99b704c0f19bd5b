from passlib.context import CryptContext

from config.settings import get_settings

settings = get_settings()

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=settings.BCRYPT_ROUNDS,
    bcrypt__min_rounds=settings.BCRYPT_ROUNDS
)


def hash_password(raw_password: str) -> str:
    """Hash a plain text password with bcrypt at the configured cost.

    Args:
        raw_password (str): The plain text password to hash.

    Returns:
        str: The bcrypt hash.
    """
    return pwd_context.hash(raw_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_needs_rehash(hashed_password: str) -> bool:
    """Tell whether a stored hash was made with an outdated cost or scheme.

    Login uses this to upgrade hashes after ``BCRYPT_ROUNDS`` is raised.
    """
    return pwd_context.needs_update(hashed_password)
