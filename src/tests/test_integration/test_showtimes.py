import pytest


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_showtime(client, admin_headers, seed_movie):
    response = await client.post(
        "/api/v1/showtimes/",
        json={
            "started_at": "2030-01-01T20:00:00+02:00",
            "ticket_price": 11.25,
            "movie_id": seed_movie["movie_id"],
            "hall_id": seed_movie["hall_id"]
        },
        headers=admin_headers
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["ticket_price"] == 11.25
    assert data["movie"]["title"] == "Seeded Movie"
    assert data["hall"]["name"] == "Hall One"
    assert data["started_at"].startswith("2030-01-01T18:00:00")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_showtime_in_unknown_hall(client, admin_headers, seed_movie):
    response = await client.post(
        "/api/v1/showtimes/",
        json={
            "started_at": "2030-01-01T20:00:00Z",
            "movie_id": seed_movie["movie_id"],
            "hall_id": 999
        },
        headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == "Hall with given ID (999) is not found"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_showtimes_of_movie_and_hall(client, seed_movie):
    by_movie = await client.get(
        f"/api/v1/movies/{seed_movie['movie_id']}/showtimes/"
    )
    assert by_movie.status_code == 200
    records = by_movie.json()["data"]["records"]
    assert [record["id"] for record in records] == [seed_movie["showtime_id"]]
    assert records[0]["ticket_price"] is None

    by_hall = await client.get(f"/api/v1/halls/{seed_movie['hall_id']}/showtimes/")
    assert by_hall.json()["data"]["total_count"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_showtimes_of_unknown_movie(client):
    response = await client.get("/api/v1/movies/999/showtimes/")
    assert response.status_code == 404


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_showtime_price(client, admin_headers, seed_movie):
    response = await client.put(
        f"/api/v1/showtimes/{seed_movie['showtime_id']}/",
        json={"ticket_price": 4},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["ticket_price"] == 4


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_showtime(client, admin_headers, seed_movie):
    response = await client.delete(
        f"/api/v1/showtimes/{seed_movie['showtime_id']}/", headers=admin_headers
    )
    assert response.status_code == 200

    missing = await client.get(f"/api/v1/showtimes/{seed_movie['showtime_id']}/")
    assert missing.status_code == 404
