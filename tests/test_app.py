import os

import mongomock
import pytest
from pymongo.errors import DuplicateKeyError, PyMongoError

import main
from checkout import order_total, whatsapp_link, whatsapp_message
from schemas import OrderItem


def test_spa_routes_fall_back_to_index(client):
    for path in ("/", "/shop", "/admin/orders"):
        res = client.get(path)
        assert res.status_code == 200
        assert 'id="root"' in res.text


def test_spa_serves_built_assets(client):
    res = client.get("/assets/app.js")
    assert res.status_code == 200
    assert "aaro" in res.text


def test_unknown_api_route_is_json_404(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.json() == {"message": "Not found"}


@pytest.mark.parametrize("method", ["post", "put", "delete"])
def test_unknown_api_route_is_json_404_for_writes(client, method):
    res = getattr(client, method)("/api/nope")
    assert res.status_code == 404
    assert res.json() == {"message": "Not found"}


def test_health(client):
    body = client.get("/api/health").json()
    assert body["backend"] == "running"
    assert body["connection_status"] == "Connected"


def test_upload_image(client, admin_headers, customer):
    files = {"image": ("phone.PNG", b"\x89PNG fake", "image/png")}
    assert client.post("/api/upload", files=files, headers=customer["headers"]).status_code == 403

    res = client.post("/api/upload", files=files, headers=admin_headers)
    assert res.status_code == 201
    url = res.json()["url"]
    assert url.startswith("/uploads/") and url.endswith(".png")
    assert client.get(url).content == b"\x89PNG fake"


def test_upload_rejects_non_images(client, admin_headers):
    files = {"image": ("notes.txt", b"hello", "text/plain")}
    res = client.post("/api/upload", files=files, headers=admin_headers)
    assert res.status_code == 400


def test_seed_once(client, db):
    first = client.post("/api/seed").json()
    assert first["seeded"] is True
    assert first["products"] == 6
    assert first["admin"] is True
    assert db["category"].find_one({"slug": "phone"})["productCount"] == 4

    again = client.post("/api/seed").json()
    assert again["seeded"] is False
    assert db["product"].count_documents({}) == 6

    login = client.post("/api/auth/login", json={"email": "admin@aaro.com", "password": "admin123"})
    assert login.json()["user"]["role"] == "admin"


def test_whatsapp_message_without_phone():
    items = [
        OrderItem.model_validate({"product": {"_id": "p1", "name": "OnePlus 12", "price": 799.5}, "quantity": 2}),
    ]
    total = order_total(items)
    assert total == 1599
    text = whatsapp_message(items, total, "Anna Nagar")
    assert text.splitlines() == [
        "Order from Customer",
        "Address: Anna Nagar",
        "",
        "Products:",
        "OnePlus 12 x2 - ₹1599",
        "",
        "Total: ₹1599",
    ]
    assert whatsapp_link("hi there", number="911234").endswith("911234?text=hi%20there")


def test_upload_rejects_oversized_images(client, admin_headers, monkeypatch):
    monkeypatch.setattr(main, "MAX_UPLOAD_BYTES", 16)
    before = set(os.listdir(main.UPLOAD_DIR))
    files = {"image": ("big.jpg", b"x" * 17, "image/jpeg")}
    res = client.post("/api/upload", files=files, headers=admin_headers)
    assert res.status_code == 413
    assert res.json()["message"] == "Image is too large"
    assert set(os.listdir(main.UPLOAD_DIR)) == before

    exact = {"image": ("ok.jpg", b"x" * 16, "image/jpeg")}
    assert client.post("/api/upload", files=exact, headers=admin_headers).status_code == 201


def test_seed_leaves_users_alone_when_catalog_exists(client, db, admin_headers, make_product):
    make_product()
    res = client.post("/api/seed")
    assert res.json() == {"seeded": False, "products": 0, "categories": 0, "admin": False}
    assert db["user"].count_documents({"email": "admin@aaro.com"}) == 0

    login = client.post("/api/auth/login", json={"email": "admin@aaro.com", "password": "admin123"})
    assert login.status_code == 401


def test_seed_skips_default_admin_when_another_admin_exists(client, db, admin_headers):
    res = client.post("/api/seed").json()
    assert res["seeded"] is True
    assert res["admin"] is False
    assert db["user"].count_documents({"role": "admin"}) == 1
    assert db["user"].find_one({"email": "admin@aaro.com"}) is None


def _raise(exc):
    def _fail(*args, **kwargs):
        raise exc
    return _fail


def test_duplicate_key_race_is_400(client, db, monkeypatch):
    monkeypatch.setattr(mongomock.Collection, "insert_one", _raise(DuplicateKeyError("E11000 duplicate key")))
    res = client.post(
        "/api/auth/register",
        json={"name": "Asha", "email": "asha@example.com", "password": "secret123"},
    )
    assert res.status_code == 400
    assert res.json() == {"message": "Duplicate value"}


def test_unique_slug_index_backs_up_precheck(client, db, admin_headers, monkeypatch):
    db["brand"].insert_one({"name": "Apple", "slug": "apple"})
    monkeypatch.setattr(main, "_resolve_slug", lambda collection, requested, name, exclude=None: "apple")
    res = client.post("/api/brands", json={"name": "Apple Inc"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Duplicate value"
    assert db["brand"].count_documents({"slug": "apple"}) == 1


def test_database_failure_is_500(client, db, monkeypatch):
    monkeypatch.setattr(mongomock.Collection, "find", _raise(PyMongoError("connection reset")))
    res = client.get("/api/products")
    assert res.status_code == 500
    assert res.json() == {"message": "Database error"}
