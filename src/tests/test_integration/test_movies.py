import pytest
from sqlalchemy import func, select

from database.models.movies import MovieGenreModel, MovieModel, ShowtimeModel


def movie_payload(seed: dict, **overrides) -> dict:
    payload = {
        "title": "Inception",
        "description": "A thief who steals corporate secrets.",
        "ticket_price": 9.5,
        "duration_in_minutes": 148,
        "released_date": "2010-07-16",
        "genre_ids": [seed["genre_ids"][2], seed["genre_ids"][0]],
        "movie_type_id": seed["movie_type_id"],
        "spoken_language_id": seed["language_ids"][0],
        "subtitle_language_id": seed["language_ids"][1],
        "country_id": seed["country_id"]
    }
    payload.update(overrides)
    return payload


async def count_movies(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(MovieModel))
    return result.scalar_one()


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie(client, admin_headers, seed_lookups):
    """Test creating a movie keeps the submitted genre order."""
    payload = movie_payload(seed_lookups)
    response = await client.post(
        "/api/v1/movies/", json=payload, headers=admin_headers
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Movie is created successfully"

    data = body["data"]
    assert data["title"] == "Inception"
    assert data["genres"] == payload["genre_ids"]
    assert data["movie_type"] == payload["movie_type_id"]
    assert data["spoken_language"] == payload["spoken_language_id"]
    assert data["subtitle_language"] == payload["subtitle_language_id"]
    assert data["country"] == payload["country_id"]
    assert "genre_ids" not in data
    assert "movie_type_id" not in data

    response = await client.get(f"/api/v1/movies/{data['id']}/")
    populated = response.json()["data"]
    assert [genre["id"] for genre in populated["genres"]] == payload["genre_ids"]
    assert [genre["name"] for genre in populated["genres"]] == ["Thriller", "Drama"]
    assert populated["movie_type"]["name"] == "2D"
    assert populated["spoken_language"]["name"] == "English"
    assert populated["subtitle_language"]["name"] == "French"
    assert populated["country"]["name"] == "France"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie_with_unknown_genre(
    client, admin_headers, seed_lookups, db_session
):
    """Test a missing genre fails the whole request and writes nothing."""
    payload = movie_payload(
        seed_lookups, genre_ids=[seed_lookups["genre_ids"][0], 999]
    )
    response = await client.post(
        "/api/v1/movies/", json=payload, headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Genre with given ID (999) is not found"
    assert await count_movies(db_session) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie_with_unknown_movie_type(
    client, admin_headers, seed_lookups, db_session
):
    payload = movie_payload(seed_lookups, movie_type_id=999)
    response = await client.post(
        "/api/v1/movies/", json=payload, headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == (
        "Movie type with given ID (999) is not found"
    )
    assert await count_movies(db_session) == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie_missing_field(client, admin_headers, seed_lookups):
    payload = movie_payload(seed_lookups)
    del payload["title"]
    response = await client.post(
        "/api/v1/movies/", json=payload, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "title: is required"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie_title_too_long(client, admin_headers, seed_lookups):
    payload = movie_payload(seed_lookups, title="t" * 101)
    response = await client.post(
        "/api/v1/movies/", json=payload, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("title:")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie_without_genres(client, admin_headers, seed_lookups):
    payload = movie_payload(seed_lookups, genre_ids=[])
    response = await client.post(
        "/api/v1/movies/", json=payload, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("genre_ids:")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_movie_requires_admin(client, customer_headers, seed_lookups):
    payload = movie_payload(seed_lookups)

    no_token = await client.post("/api/v1/movies/", json=payload)
    assert no_token.status_code == 401

    customer = await client.post(
        "/api/v1/movies/", json=payload, headers=customer_headers
    )
    assert customer.status_code == 403
    assert customer.json()["success"] is False


@pytest.mark.integration
@pytest.mark.asyncio
async def test_get_movie(client, seed_movie):
    response = await client.get(f"/api/v1/movies/{seed_movie['movie_id']}/")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Seeded Movie"
    assert [genre["id"] for genre in data["genres"]] == seed_movie["genre_ids"][:2]
    assert data["movie_type"]["id"] == seed_movie["movie_type_id"]
    assert data["spoken_language"] is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_get_unknown_movie(client):
    response = await client.get("/api/v1/movies/999/")
    assert response.status_code == 404
    assert response.json()["message"] == "Movie with given ID (999) is not found"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_movies_by_genre(client, admin_headers, seed_movie):
    await client.post(
        "/api/v1/movies/",
        json=movie_payload(seed_movie, genre_ids=[seed_movie["genre_ids"][2]]),
        headers=admin_headers
    )

    all_movies = await client.get("/api/v1/movies/")
    assert all_movies.json()["data"]["total_count"] == 2

    drama = await client.get(f"/api/v1/genres/{seed_movie['genre_ids'][0]}/movies/")
    assert drama.status_code == 200
    records = drama.json()["data"]["records"]
    assert [record["title"] for record in records] == ["Seeded Movie"]

    thriller = await client.get(
        f"/api/v1/genres/{seed_movie['genre_ids'][2]}/movies/"
    )
    assert [
        record["title"] for record in thriller.json()["data"]["records"]
    ] == ["Inception"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_movies_by_type_and_country(client, seed_movie):
    by_type = await client.get(
        f"/api/v1/movie-types/{seed_movie['movie_type_id']}/movies/"
    )
    assert by_type.json()["data"]["total_count"] == 1

    by_country = await client.get(
        f"/api/v1/countries/{seed_movie['country_id']}/movies/"
    )
    assert by_country.json()["data"]["total_count"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_movies_of_unknown_genre(client):
    response = await client.get("/api/v1/genres/999/movies/")
    assert response.status_code == 404
    assert response.json()["message"] == "Genre with given ID (999) is not found"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_movie_replaces_genres(
    client, admin_headers, seed_movie, db_session
):
    genre_ids = seed_movie["genre_ids"]
    response = await client.put(
        f"/api/v1/movies/{seed_movie['movie_id']}/",
        json={"genre_ids": [genre_ids[1], genre_ids[2]], "ticket_price": 12},
        headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["genres"] == [genre_ids[1], genre_ids[2]]
    assert data["ticket_price"] == 12
    assert data["title"] == "Seeded Movie"

    result = await db_session.execute(
        select(func.count()).select_from(MovieGenreModel)
    )
    assert result.scalar_one() == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_movie_with_unknown_country(client, admin_headers, seed_movie):
    response = await client.put(
        f"/api/v1/movies/{seed_movie['movie_id']}/",
        json={"country_id": 999},
        headers=admin_headers
    )
    assert response.status_code == 404

    unchanged = await client.get(f"/api/v1/movies/{seed_movie['movie_id']}/")
    assert unchanged.json()["data"]["country"]["id"] == seed_movie["country_id"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_movie_removes_showtimes(
    client, admin_headers, seed_movie, db_session
):
    response = await client.delete(
        f"/api/v1/movies/{seed_movie['movie_id']}/", headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Movie is deleted successfully"

    showtimes = await db_session.execute(
        select(func.count()).select_from(ShowtimeModel)
    )
    assert showtimes.scalar_one() == 0
    links = await db_session.execute(
        select(func.count()).select_from(MovieGenreModel)
    )
    assert links.scalar_one() == 0


@pytest.mark.integration
@pytest.mark.asyncio
async def test_deleting_country_clears_movie_country(
    client, admin_headers, seed_movie
):
    response = await client.delete(
        f"/api/v1/countries/{seed_movie['country_id']}/", headers=admin_headers
    )
    assert response.status_code == 200

    movie = await client.get(f"/api/v1/movies/{seed_movie['movie_id']}/")
    assert movie.status_code == 200
    assert movie.json()["data"]["country"] is None
