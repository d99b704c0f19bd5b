import pytest


@pytest.mark.integration
@pytest.mark.asyncio
async def test_users_require_admin(client, customer_headers):
    response = await client.get("/api/v1/users/", headers=customer_headers)
    assert response.status_code == 403


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_user_with_membership(client, admin_headers, seed_lookups):
    response = await client.post(
        "/api/v1/users/",
        json={
            "name": "Member",
            "email": "member@example.com",
            "password": "secret123",
            "membership_id": seed_lookups["membership_id"]
        },
        headers=admin_headers
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "customer"
    assert data["membership"]["name"] == "Gold"

    login = await client.post(
        "/api/v1/auth/login/",
        json={"email": "member@example.com", "password": "secret123"}
    )
    assert login.status_code == 200


@pytest.mark.integration
@pytest.mark.asyncio
async def test_create_user_with_unknown_membership(client, admin_headers):
    response = await client.post(
        "/api/v1/users/",
        json={
            "name": "Member",
            "email": "member@example.com",
            "password": "secret123",
            "membership_id": 999
        },
        headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()["message"] == (
        "Membership with given ID (999) is not found"
    )


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_users_of_membership(
    client, admin_headers, customer_user, seed_lookups
):
    await client.put(
        f"/api/v1/users/{customer_user['user_id']}/",
        json={"membership_id": seed_lookups["membership_id"]},
        headers=admin_headers
    )

    response = await client.get(
        f"/api/v1/memberships/{seed_lookups['membership_id']}/users/",
        headers=admin_headers
    )
    assert response.status_code == 200
    records = response.json()["data"]["records"]
    assert [record["id"] for record in records] == [customer_user["user_id"]]

    everyone = await client.get("/api/v1/users/", headers=admin_headers)
    assert everyone.json()["data"]["total_count"] == 2


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_user_password(client, admin_headers, customer_user):
    response = await client.put(
        f"/api/v1/users/{customer_user['user_id']}/",
        json={"password": "ResetPass123", "role": "admin"},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "admin"

    login = await client.post(
        "/api/v1/auth/login/",
        json={"email": customer_user["email"], "password": "ResetPass123"}
    )
    assert login.status_code == 200


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_user_duplicate_email(
    client, admin_headers, customer_user, another_customer
):
    response = await client.put(
        f"/api/v1/users/{customer_user['user_id']}/",
        json={"email": another_customer["email"]},
        headers=admin_headers
    )
    assert response.status_code == 400


@pytest.mark.integration
@pytest.mark.asyncio
async def test_delete_user(client, admin_headers, customer_user):
    response = await client.delete(
        f"/api/v1/users/{customer_user['user_id']}/", headers=admin_headers
    )
    assert response.status_code == 200

    token_of_deleted = await client.get(
        "/api/v1/auth/me/", headers=customer_user["headers"]
    )
    assert token_of_deleted.status_code == 401
