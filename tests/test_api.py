import pytest
from decimal import Decimal
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.db.session import get_db
from app.core.security import create_access_token


@pytest.fixture
async def client(db_session):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(user):
    token = create_access_token({"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_get_cart_requires_token(client):
    response = await client.get("/api/v1/cart")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_get_cart_rejects_invalid_token(client):
    response = await client.get("/api/v1/cart", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_get_cart_not_found(client, auth_headers):
    response = await client.get("/api/v1/cart", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"detail": "User does not have a cart"}


@pytest.mark.asyncio
async def test_add_and_get_cart(client, auth_headers, products):
    response = await client.post(
        "/api/v1/cart",
        json={"product_id": "P1", "quantity": 2},
        headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "shopper@example.com"
    assert data["payment_option"] == "PAYMENT_OPTION_DEFAULT"
    assert len(data["items"]) == 1
    assert data["items"][0]["product"]["id"] == "P1"
    assert data["items"][0]["product"]["name"] == "Basketball"
    assert data["items"][0]["quantity"] == 2

    response = await client.get("/api/v1/cart", headers=auth_headers)
    assert response.status_code == 200
    assert len(response.json()["items"]) == 1


@pytest.mark.asyncio
async def test_add_duplicate_returns_400(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)

    response = await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"].startswith("Product already in cart")


@pytest.mark.asyncio
async def test_add_rejects_zero_quantity(client, auth_headers, products):
    response = await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 0}, headers=auth_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_quantity(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)

    response = await client.put("/api/v1/cart", json={"product_id": "P1", "quantity": 7}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["items"][0]["quantity"] == 7


@pytest.mark.asyncio
async def test_update_zero_quantity_removes_product(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)

    response = await client.put("/api/v1/cart", json={"product_id": "P1", "quantity": 0}, headers=auth_headers)

    assert response.status_code == 204
    response = await client.get("/api/v1/cart", headers=auth_headers)
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_update_without_cart_returns_400(client, auth_headers, products):
    response = await client.put("/api/v1/cart", json={"product_id": "P1", "quantity": 2}, headers=auth_headers)

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_product(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)
    await client.post("/api/v1/cart", json={"product_id": "P2", "quantity": 1}, headers=auth_headers)

    response = await client.delete("/api/v1/cart/P1", headers=auth_headers)

    assert response.status_code == 204
    response = await client.get("/api/v1/cart", headers=auth_headers)
    assert [item["product"]["id"] for item in response.json()["items"]] == ["P2"]


@pytest.mark.asyncio
async def test_delete_product_not_in_cart(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)

    response = await client.delete("/api/v1/cart/P3", headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"detail": "Product not in cart"}


@pytest.mark.asyncio
async def test_checkout(client, auth_headers, products, user, db_session):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 2}, headers=auth_headers)
    await client.post("/api/v1/cart", json={"product_id": "P2", "quantity": 1}, headers=auth_headers)

    response = await client.put("/api/v1/cart/checkout", headers=auth_headers)

    assert response.status_code == 204
    await db_session.refresh(user)
    assert user.wallet_money == Decimal("75.00")


@pytest.mark.asyncio
async def test_checkout_without_cart_returns_404(client, auth_headers):
    response = await client.put("/api/v1/cart/checkout", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_checkout_empty_cart_returns_400(client, auth_headers, products):
    await client.post("/api/v1/cart", json={"product_id": "P1", "quantity": 1}, headers=auth_headers)
    await client.delete("/api/v1/cart/P1", headers=auth_headers)

    response = await client.put("/api/v1/cart/checkout", headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"detail": "Cart is empty"}


@pytest.mark.asyncio
async def test_get_profile(client, auth_headers):
    response = await client.get("/api/v1/users/me", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "shopper@example.com"
    assert Decimal(str(data["wallet_money"])) == Decimal("100.00")


@pytest.mark.asyncio
async def test_set_address(client, auth_headers):
    address = "742 Evergreen Terrace, Springfield"

    response = await client.put("/api/v1/users/me/address", json={"address": address}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["address"] == address


@pytest.mark.asyncio
async def test_set_address_too_short(client, auth_headers):
    response = await client.put("/api/v1/users/me/address", json={"address": "Elm St"}, headers=auth_headers)

    assert response.status_code == 422
