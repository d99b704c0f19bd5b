import os

os.environ["ENVIRONMENT"] = "testing"

from datetime import date, datetime, timedelta, timezone
from typing import AsyncGenerator, Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import get_settings, BaseAppSettings
from database import (
    get_db_contextmanager,
    reset_database,
    CinemaModel,
    CountryModel,
    GenreModel,
    HallModel,
    HallTypeModel,
    LanguageModel,
    MembershipModel,
    MovieModel,
    MovieTypeModel,
    ShowtimeModel
)
from database.models.accounts import UserModel, UserRoleEnum
from main import create_app
from security.interfaces import JWTManagerInterface
from security.manager import JWTManager


@pytest.fixture(scope="session")
def app() -> FastAPI:
    """
    Session-scoped fixture to create and return a FastAPI app instance for testing.
    The ENVIRONMENT variable is set to 'testing' before any project import.
    """
    return create_app()


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, Any]:
    """
    Function-scoped fixture to provide a database session for each test function.
    Yields an asynchronous SQLAlchemy session.
    """
    async with get_db_contextmanager() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def reset_db():
    """
    Function-scoped, autouse fixture to reset the database before each test.
    Ensures a clean database state for every test.
    """
    await reset_database()


@pytest.fixture(scope="session")
def settings() -> BaseAppSettings:
    """
    Session-scoped fixture to provide application settings.
    """
    return get_settings()


@pytest.fixture(scope="session")
def jwt_manager(settings) -> JWTManagerInterface:
    """
    Session-scoped fixture to provide a JWT manager signing with the
    same key as the application.
    """
    return JWTManager(
        access_secret_key=settings.SECRET_KEY_ACCESS,
        access_expires_delta=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        algorithm=settings.JWT_SIGNING_ALGORITHM
    )


@pytest_asyncio.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, Any]:
    """
    Function-scoped fixture to provide an HTTP client bound to the app.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as async_client:
        yield async_client


async def create_user(
    db_session: AsyncSession,
    jwt_manager: JWTManagerInterface,
    name: str,
    email: str,
    password: str,
    role: UserRoleEnum = UserRoleEnum.CUSTOMER
) -> dict:
    user = UserModel.create(
        name=name,
        email=email,
        raw_password=password,
        role=role
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)

    access_token = jwt_manager.create_access_token(user.id)
    return {
        "user_id": user.id,
        "name": name,
        "email": email,
        "password": password,
        "access_token": access_token,
        "headers": {"Authorization": f"Bearer {access_token}"}
    }


@pytest_asyncio.fixture
async def admin_user(db_session, jwt_manager) -> dict:
    """
    Fixture to create an admin user and return its credentials and token.
    """
    return await create_user(
        db_session,
        jwt_manager,
        name="Admin",
        email="admin@example.com",
        password="AdminPass123",
        role=UserRoleEnum.ADMIN
    )


@pytest_asyncio.fixture
async def admin_headers(admin_user) -> dict:
    """
    Fixture to provide authorization headers for the admin user.
    """
    return admin_user["headers"]


@pytest_asyncio.fixture
async def customer_user(db_session, jwt_manager) -> dict:
    """
    Fixture to create a customer and return its credentials and token.
    """
    return await create_user(
        db_session,
        jwt_manager,
        name="Customer",
        email="customer@example.com",
        password="CustomerPass123"
    )


@pytest_asyncio.fixture
async def customer_headers(customer_user) -> dict:
    return customer_user["headers"]


@pytest_asyncio.fixture
async def another_customer(db_session, jwt_manager) -> dict:
    return await create_user(
        db_session,
        jwt_manager,
        name="Another",
        email="another@example.com",
        password="AnotherPass123"
    )


@pytest_asyncio.fixture
async def seed_lookups(db_session) -> dict:
    """
    Fixture to seed the reference data a movie and a hall point to.
    Returns a dict of the created identifiers.
    """
    drama = GenreModel(name="Drama")
    comedy = GenreModel(name="Comedy")
    thriller = GenreModel(name="Thriller")
    movie_type = MovieTypeModel(name="2D")
    hall_type = HallTypeModel(name="IMAX")
    english = LanguageModel(name="English")
    french = LanguageModel(name="French")
    country = CountryModel(name="France")
    membership = MembershipModel(name="Gold")
    db_session.add_all([
        drama,
        comedy,
        thriller,
        movie_type,
        hall_type,
        english,
        french,
        country,
        membership
    ])
    await db_session.commit()

    return {
        "genre_ids": [drama.id, comedy.id, thriller.id],
        "movie_type_id": movie_type.id,
        "hall_type_id": hall_type.id,
        "language_ids": [english.id, french.id],
        "country_id": country.id,
        "membership_id": membership.id
    }


@pytest_asyncio.fixture
async def seed_cinema(db_session, seed_lookups) -> dict:
    """
    Fixture to seed a cinema with one 3x4 hall.
    """
    cinema = CinemaModel(name="Grand Cinema", address="1 Main Street")
    db_session.add(cinema)
    await db_session.flush()

    hall = HallModel(
        name="Hall One",
        seat_rows=["A", "B", "C"],
        seat_columns=["1", "2", "3", "4"],
        cinema_id=cinema.id,
        hall_type_id=seed_lookups["hall_type_id"]
    )
    db_session.add(hall)
    await db_session.commit()

    return {**seed_lookups, "cinema_id": cinema.id, "hall_id": hall.id}


@pytest_asyncio.fixture
async def seed_movie(db_session, seed_cinema) -> dict:
    """
    Fixture to seed a movie in two genres plus a showtime of it in the
    seeded hall. The showtime has no price of its own.
    """
    movie = MovieModel(
        title="Seeded Movie",
        description="A movie created by fixtures.",
        ticket_price=7.5,
        duration_in_minutes=110,
        released_date=date(2020, 5, 17),
        movie_type_id=seed_cinema["movie_type_id"],
        country_id=seed_cinema["country_id"]
    )
    movie.genre_ids = seed_cinema["genre_ids"][:2]
    db_session.add(movie)
    await db_session.flush()

    showtime = ShowtimeModel(
        started_at=datetime.now(timezone.utc) + timedelta(days=1),
        movie_id=movie.id,
        hall_id=seed_cinema["hall_id"]
    )
    db_session.add(showtime)
    await db_session.commit()

    return {**seed_cinema, "movie_id": movie.id, "showtime_id": showtime.id}
