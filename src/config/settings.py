import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class BaseAppSettings(BaseSettings):
    """Base application settings configuration.

    This class contains the core configuration settings for the Cinema
    Management API, including JWT tokens, the SQLite fallback database,
    logging and list pagination defaults. It inherits from Pydantic's
    BaseSettings for automatic environment variable loading and validation.
    """
    BASE_URL: str = os.getenv("BASE_URL", "http://127.0.0.1:8000")
    BASE_DIR: Path = Path(__file__).parent.parent
    PATH_TO_DB: str = str(BASE_DIR / "database" / "source" / "cinema.db")

    SECRET_KEY_ACCESS: str = os.getenv(
        "SECRET_KEY_ACCESS",
        str(os.urandom(32))
    )
    JWT_SIGNING_ALGORITHM: str = os.getenv("JWT_SIGNING_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30 * 24 * 60)
    )
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", 12))

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", 20))


class Settings(BaseAppSettings):
    """Production settings configuration.

    Adds the PostgreSQL connection parameters used when the application
    runs outside of the test suite.
    """
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "test_user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "test_password")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "test_host")
    POSTGRES_DB_PORT: int = int(os.getenv("POSTGRES_DB_PORT", 5432))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "test_db")


class TestingSettings(BaseAppSettings):
    """Testing settings configuration.

    Uses a fixed signing key so tokens created by fixtures stay valid across
    settings instances, and the cheapest bcrypt cost to keep the suite fast.
    """
    SECRET_KEY_ACCESS: str = "testing-secret-key"
    BCRYPT_ROUNDS: int = 4
    PATH_TO_DB: str = str(
        Path(__file__).parent.parent / "database" / "source" / "test.db"
    )
    DEBUG: bool = True


@lru_cache
def get_settings() -> BaseAppSettings:
    """Return the settings instance based on the ENVIRONMENT variable.

    If the ENVIRONMENT environment variable is set to 'testing', this function
    returns an instance of TestingSettings. For any other value (including
    when unset), it returns an instance of Settings. The instance is cached
    so a generated signing key stays the same for the whole process.

    Returns:
        BaseAppSettings: The settings instance appropriate for the current
            environment.
    """
    environment = os.getenv("ENVIRONMENT", "developing")
    if environment == "testing":
        return TestingSettings()
    return Settings()
