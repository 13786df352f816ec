from fastapi import status
from sqlmodel import select

from salesdesk.models.order import Order
from salesdesk.tests.factories import (
    create_test_client,
    create_test_order,
    create_test_product,
)

# Tests

def test_list_orders_empty(client):
    r = client.get("/orders/")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == []

def test_create_order_success(client, db_session):
    client_obj = create_test_client(db_session)
    prod = create_test_product(db_session, price=49.9)

    order_payload = {
        "client_id": client_obj.client_id,
        "order_date": "2024-05-20T14:30:00",
        "details": [
            {"product_id": prod.product_id, "quantity": 2, "unit_price": prod.price}
        ]
    }
    r = client.post("/orders/", json=order_payload)
    assert r.status_code == status.HTTP_201_CREATED
    data = r.json()
    assert data["client_id"] == client_obj.client_id
    assert data["order_date"].startswith("2024-05-20T14:30:00")
    assert len(data["details"]) == 1
    assert data["details"][0]["order_id"] == data["order_id"]
    assert data["details"][0]["quantity"] == 2

def test_create_order_defaults_date(client, db_session):
    client_obj = create_test_client(db_session)
    r = client.post("/orders/", json={"client_id": client_obj.client_id})
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["order_date"]
    assert r.json()["details"] == []

    stored = db_session.exec(select(Order)).one()
    assert stored.order_id == r.json()["order_id"]

def test_create_order_with_line_and_no_date(client, db_session):
    client_obj = create_test_client(db_session)
    prod = create_test_product(db_session)
    payload = {
        "client_id": client_obj.client_id,
        "details": [{"product_id": prod.product_id, "quantity": 3, "unit_price": 2.5}],
    }
    r = client.post("/orders/", json=payload)
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["details"][0]["quantity"] == 3

    r = client.get(f"/clients/purchasedProduct/{prod.product_id}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == [{"client_id": client_obj.client_id, "client_name": "Alice"}]

def test_create_order_with_offset_date(client, db_session):
    client_obj = create_test_client(db_session)
    r = client.post(
        "/orders/",
        json={"client_id": client_obj.client_id, "order_date": "2024-05-20T14:30:00+00:00"},
    )
    assert r.status_code == status.HTTP_201_CREATED
    assert r.json()["order_date"].startswith("2024-05-20T14:30:00")

def test_create_order_client_not_found(client):
    r = client.post("/orders/", json={"client_id": 9999, "details": []})
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["detail"] == "Client not found"

def test_create_order_product_not_found(client, db_session):
    client_obj = create_test_client(db_session)
    payload = {
        "client_id": client_obj.client_id,
        "details": [{"product_id": 9999, "quantity": 1, "unit_price": 1.0}],
    }
    r = client.post("/orders/", json=payload)
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["detail"] == "Product 9999 not found"
    assert db_session.exec(select(Order)).all() == []

def test_create_order_invalid_quantity(client, db_session):
    client_obj = create_test_client(db_session)
    prod = create_test_product(db_session)
    payload = {
        "client_id": client_obj.client_id,
        "details": [{"product_id": prod.product_id, "quantity": 0, "unit_price": 1.0}],
    }
    r = client.post("/orders/", json=payload)
    assert r.status_code == 422

def test_read_order_success(client, db_session):
    order = create_test_order(db_session, create_test_client(db_session), create_test_product(db_session))
    r = client.get(f"/orders/{order.order_id}")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["order_id"] == order.order_id
    assert len(r.json()["details"]) == 1

def test_read_order_not_found(client):
    r = client.get("/orders/9999")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["detail"] == "Order not found"

def test_list_orders(client, db_session):
    c = create_test_client(db_session)
    first = create_test_order(db_session, c)
    second = create_test_order(db_session, c)
    r = client.get("/orders/")
    assert r.status_code == status.HTTP_200_OK
    assert [o["order_id"] for o in r.json()] == [first.order_id, second.order_id]

def test_delete_order_success(client, db_session):
    order = create_test_order(db_session, create_test_client(db_session), create_test_product(db_session))
    order_id = order.order_id
    r = client.delete(f"/orders/{order_id}")
    assert r.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.get(Order, order_id) is None

def test_delete_order_not_found(client):
    r = client.delete("/orders/9999")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["detail"] == "Order not found"
