"""Database package of the Cinema Management API.

Exposes the models and the session helpers of the backend selected by the
ENVIRONMENT variable:

- developing: PostgreSQL through asyncpg
- anything else (testing included): SQLite through aiosqlite

The module exports:
- get_db: Dependency injection function for database sessions
- get_db_contextmanager: Session context manager for code outside requests
- AsyncSessionLocal: Session factory for async database operations
- init_database: Creates the tables of the selected backend
- reset_database: Drops and recreates the SQLite tables
"""
import os

from database.models.accounts import UserRoleEnum, UserModel
from database.models.announcements import AnnouncementModel
from database.models.base import Base
from database.models.cinemas import CinemaModel, HallModel
from database.models.lookups import (
    GenreModel,
    MovieTypeModel,
    HallTypeModel,
    LanguageModel,
    CountryModel,
    MembershipModel
)
from database.models.movies import MovieGenreModel, MovieModel, ShowtimeModel
from database.models.purchases import PurchaseModel
from database.session_sqlite import reset_sqlite_database as reset_database

environment = os.getenv("ENVIRONMENT", "developing")

if environment == "developing":
    from database.session_postgresql import (
        get_postgresql_db as get_db,
        AsyncPostgresqlSessionLocal as AsyncSessionLocal,
        get_postgresql_db_contextmanager as get_db_contextmanager,
        create_postgresql_tables as init_database
    )
else:
    from database.session_sqlite import (
        get_sqlite_db as get_db,
        AsyncSQLiteSessionLocal as AsyncSessionLocal,
        get_sqlite_db_contextmanager as get_db_contextmanager,
        create_sqlite_tables as init_database
    )
