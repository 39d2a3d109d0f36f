import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="aaro-tests-")
os.environ["MONGODB_URI"] = ""
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STATIC_DIR"] = os.path.join(_tmp, "dist")
os.environ["UPLOAD_DIR"] = os.path.join(_tmp, "uploads")
os.environ["WHATSAPP_NUMBER"] = "15550001111"

os.makedirs(os.path.join(_tmp, "dist", "assets"))
with open(os.path.join(_tmp, "dist", "index.html"), "w") as f:
    f.write("<!doctype html><div id=\"root\"></div>")
with open(os.path.join(_tmp, "dist", "assets", "app.js"), "w") as f:
    f.write("console.log('aaro');")

import mongomock  # noqa: E402
import pytest  # noqa: E402

import database  # noqa: E402

database.db = mongomock.MongoClient()["aaro_test"]

from fastapi.testclient import TestClient  # noqa: E402

from auth import create_token, hash_password  # noqa: E402
from database import create_document  # noqa: E402
from main import app  # noqa: E402
from schemas import User  # noqa: E402


@pytest.fixture
def db():
    yield database.db
    for name in database.db.list_collection_names():
        database.db.drop_collection(name)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    user = User(
        name="Shop Admin",
        email="admin@test.com",
        password_hash=hash_password("admin123"),
        role="admin",
    )
    return bearer(create_token(create_document("user", user)))


@pytest.fixture
def register(client):
    def _register(email="asha@example.com", name="Asha", password="secret123", phone="9876543210"):
        res = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "phone": phone},
        )
        assert res.status_code == 201, res.text
        data = res.json()
        return {"user": data["user"], "headers": bearer(data["token"])}

    return _register


@pytest.fixture
def customer(register):
    return register()


PHONE = {
    "name": "iPhone 15 Pro",
    "brand": "Apple",
    "category": "phone",
    "price": 999,
    "originalPrice": 1099,
    "description": "Titanium design, A17 Pro chip.",
    "specifications": ["6.1\" OLED", "A17 Pro"],
    "isFeatured": True,
}


@pytest.fixture
def make_product(client, admin_headers):
    def _make(**overrides):
        res = client.post("/api/products", json={**PHONE, **overrides}, headers=admin_headers)
        assert res.status_code == 201, res.text
        return res.json()

    return _make
