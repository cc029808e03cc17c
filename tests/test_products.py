"""Product API tests."""

from ledger.models import Transaction


def test_get_products(client, auth_headers, products):
    """Test listing products with the default pagination window."""
    response = client.get("/api/products", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert data["limit"] == 100
    assert data["offset"] == 0
    assert [product["name"] for product in data["data"]] == ["Appel", "Asperge", "Tomaat"]


def test_get_products_paginated(client, auth_headers, products):
    """Test that limit and offset select a window in name order."""
    response = client.get("/api/products?limit=2&offset=1", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["limit"] == 2
    assert data["offset"] == 1
    assert data["count"] == 3
    assert data["data"] == [
        {"id": products["Asperge"], "name": "Asperge", "price": 5},
        {"id": products["Tomaat"], "name": "Tomaat", "price": 4},
    ]


def test_get_products_requires_limit_and_offset_together(client, auth_headers, products):
    """Test that a lone limit is rejected."""
    response = client.get("/api/products?limit=2", headers=auth_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_FAILED"
    assert body["details"][0]["field"] == "query.offset"


def test_get_products_rejects_invalid_limit(client, auth_headers):
    """Test that a non-positive limit is rejected."""
    response = client.get("/api/products?limit=0&offset=0", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"


def test_create_product(client, auth_headers):
    """Test creating a product."""
    response = client.post(
        "/api/products",
        headers=auth_headers,
        json={"name": "Banaan", "price": 2},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Banaan"
    assert data["price"] == 2
    assert data["id"]


def test_create_product_coerces_numeric_string(client, auth_headers):
    """Test that a numeric string price is coerced to an integer."""
    response = client.post(
        "/api/products",
        headers=auth_headers,
        json={"name": "Peer", "price": "7"},
    )
    assert response.status_code == 201
    assert response.json()["price"] == 7


def test_create_product_duplicate_name(client, auth_headers, products):
    """Test that product names are unique."""
    response = client.post(
        "/api/products",
        headers=auth_headers,
        json={"name": "Appel", "price": 10},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"


def test_create_product_rejects_bad_price(client, auth_headers):
    """Test that prices must be positive integers."""
    for price in (0, -5, 2.5):
        response = client.post(
            "/api/products",
            headers=auth_headers,
            json={"name": "Kiwi", "price": price},
        )
        assert response.status_code == 400, price


def test_create_product_rejects_price_out_of_range(client, auth_headers):
    """Test that a price the store cannot hold is a validation error."""
    response = client.post(
        "/api/products",
        headers=auth_headers,
        json={"name": "Goud", "price": 10**20},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_FAILED"
    assert body["details"][0]["field"] == "body.price"

    response = client.get("/api/products", headers=auth_headers)
    assert response.json()["count"] == 0


def test_create_product_rejects_boolean_price(client, auth_headers):
    """Test that a JSON boolean is not taken as a price of 1."""
    response = client.post(
        "/api/products",
        headers=auth_headers,
        json={"name": "Kers", "price": True},
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "body.price"


def test_create_product_rejects_long_name(client, auth_headers):
    """Test the name length limit."""
    response = client.post(
        "/api/products",
        headers=auth_headers,
        json={"name": "x" * 256, "price": 1},
    )
    assert response.status_code == 400


def test_get_product(client, auth_headers, products):
    """Test getting a specific product."""
    response = client.get(f"/api/products/{products['Tomaat']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"id": products["Tomaat"], "name": "Tomaat", "price": 4}


def test_get_product_not_found(client, auth_headers):
    """Test getting a product that does not exist."""
    response = client.get(
        "/api/products/7f28c5f9-d711-4cd6-ac15-d13d71abff00", headers=auth_headers
    )
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_get_product_invalid_id(client, auth_headers):
    """Test that ids must be UUIDs."""
    response = client.get("/api/products/123", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "path.product_id"


def test_update_product(client, auth_headers, products):
    """Test updating a product."""
    response = client.put(
        f"/api/products/{products['Appel']}",
        headers=auth_headers,
        json={"name": "Appel Jonagold", "price": 6},
    )
    assert response.status_code == 200
    assert response.json() == {"id": products["Appel"], "name": "Appel Jonagold", "price": 6}


def test_update_product_keeps_own_name(client, auth_headers, products):
    """Test that updating only the price does not clash with its own name."""
    response = client.put(
        f"/api/products/{products['Appel']}",
        headers=auth_headers,
        json={"name": "Appel", "price": 9},
    )
    assert response.status_code == 200
    assert response.json()["price"] == 9


def test_update_product_to_taken_name(client, auth_headers, products):
    """Test that renaming onto another product's name fails."""
    response = client.put(
        f"/api/products/{products['Appel']}",
        headers=auth_headers,
        json={"name": "Tomaat", "price": 9},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_FAILED"


def test_update_product_not_found(client, auth_headers):
    """Test updating a product that does not exist."""
    response = client.put(
        "/api/products/7f28c5f9-d711-4cd6-ac15-d13d71abff00",
        headers=auth_headers,
        json={"name": "Ghost", "price": 1},
    )
    assert response.status_code == 404


def test_delete_product(client, auth_headers, products):
    """Test deleting a product."""
    response = client.delete(f"/api/products/{products['Appel']}", headers=auth_headers)
    assert response.status_code == 204
    assert response.content == b""

    response = client.get(f"/api/products/{products['Appel']}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_product_not_found(client, auth_headers):
    """Test deleting a product that does not exist."""
    response = client.delete(
        "/api/products/7f28c5f9-d711-4cd6-ac15-d13d71abff00", headers=auth_headers
    )
    assert response.status_code == 404


def test_delete_product_cascades_to_transactions(client, auth_headers, db, transactions, products):
    """Test that a product's transactions are deleted with it."""
    response = client.delete(f"/api/products/{products['Appel']}", headers=auth_headers)
    assert response.status_code == 204

    assert db.query(Transaction).filter(Transaction.product_id == products["Appel"]).count() == 0
    response = client.get("/api/transactions", headers=auth_headers)
    assert response.json()["count"] == 0
