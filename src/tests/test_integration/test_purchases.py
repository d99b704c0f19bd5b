import pytest


async def buy(client, headers, showtime_id, seats):
    return await client.post(
        "/api/v1/purchases/",
        json={"showtime_id": showtime_id, "seats": seats},
        headers=headers
    )


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_uses_movie_price(client, customer_user, seed_movie):
    response = await buy(
        client, customer_user["headers"], seed_movie["showtime_id"], ["A1", "A2"]
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["seats"] == ["A1", "A2"]
    assert data["total_price"] == 15.0
    assert data["user"]["id"] == customer_user["user_id"]
    assert data["showtime"]["movie"]["title"] == "Seeded Movie"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_uses_showtime_price(
    client, admin_headers, customer_user, seed_movie
):
    await client.put(
        f"/api/v1/showtimes/{seed_movie['showtime_id']}/",
        json={"ticket_price": 3.35},
        headers=admin_headers
    )
    response = await buy(
        client,
        customer_user["headers"],
        seed_movie["showtime_id"],
        ["B1", "B2", "B3"]
    )
    assert response.status_code == 201
    assert response.json()["data"]["total_price"] == 10.05


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_taken_seat(
    client, customer_user, another_customer, seed_movie
):
    first = await buy(
        client, customer_user["headers"], seed_movie["showtime_id"], ["C4"]
    )
    assert first.status_code == 201

    second = await buy(
        client, another_customer["headers"], seed_movie["showtime_id"], ["C3", "C4"]
    )
    assert second.status_code == 400
    assert second.json()["message"] == "Seats are already purchased: C4"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_unknown_seat(client, customer_user, seed_movie):
    response = await buy(
        client, customer_user["headers"], seed_movie["showtime_id"], ["Z9"]
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Seats do not exist in the hall: Z9"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_unknown_showtime(client, customer_user, seed_movie):
    response = await buy(client, customer_user["headers"], 999, ["A1"])
    assert response.status_code == 404
    assert response.json()["message"] == "Showtime with given ID (999) is not found"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_requires_login(client, seed_movie):
    response = await client.post(
        "/api/v1/purchases/",
        json={"showtime_id": seed_movie["showtime_id"], "seats": ["A1"]}
    )
    assert response.status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
async def test_purchase_visibility(
    client, admin_headers, customer_user, another_customer, seed_movie
):
    created = await buy(
        client, customer_user["headers"], seed_movie["showtime_id"], ["A1"]
    )
    purchase_id = created.json()["data"]["id"]

    own = await client.get(
        f"/api/v1/purchases/{purchase_id}/", headers=customer_user["headers"]
    )
    assert own.status_code == 200

    foreign = await client.get(
        f"/api/v1/purchases/{purchase_id}/", headers=another_customer["headers"]
    )
    assert foreign.status_code == 403

    as_admin = await client.get(
        f"/api/v1/purchases/{purchase_id}/", headers=admin_headers
    )
    assert as_admin.status_code == 200


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_purchases_of_showtime(
    client, admin_headers, customer_user, seed_movie
):
    await buy(client, customer_user["headers"], seed_movie["showtime_id"], ["A1"])

    response = await client.get(
        f"/api/v1/showtimes/{seed_movie['showtime_id']}/purchases/",
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["total_count"] == 1

    customer = await client.get(
        "/api/v1/purchases/", headers=customer_user["headers"]
    )
    assert customer.status_code == 403


@pytest.mark.integration
@pytest.mark.asyncio
async def test_deleted_purchase_releases_seats(
    client, admin_headers, customer_user, seed_movie
):
    created = await buy(
        client, customer_user["headers"], seed_movie["showtime_id"], ["A1"]
    )
    await client.delete(
        f"/api/v1/purchases/{created.json()['data']['id']}/",
        headers=admin_headers
    )

    again = await buy(
        client, customer_user["headers"], seed_movie["showtime_id"], ["A1"]
    )
    assert again.status_code == 201
