import io
import os
import tempfile
from datetime import date, timedelta

# --- environment must be in place before groundbook is imported ---
_TMP_DIR = tempfile.mkdtemp(prefix="groundbook-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
for _var in (
    "REDIS_URL",
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
):
    os.environ.pop(_var, None)

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from groundbook.core.dependencies import get_db
from groundbook.db.base import Base
from groundbook.db.seed import ensure_admin
from groundbook.main import app

# ------------------ engine ------------------
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False)

ADMIN_EMAIL = "admin@x.com"
ADMIN_PASSWORD = "admin-pass"
FUTURE_DATE = (date.today() + timedelta(days=7)).isoformat()


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


# ------------------ helpers ------------------
def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def png_bytes(color=(200, 30, 30)):
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format="PNG")
    return buffer.getvalue()


def register(client, email="a@x.com", name="User A", password="secret", phone="9999999999"):
    return client.post("/api/register", json={
        "name": name,
        "email": email,
        "password": password,
        "phone": phone,
    })


GROUND_FORM = {
    "name": "Ground 1",
    "address": "12 Stadium Road",
    "lat": "12.97",
    "lng": "77.59",
    "open_time": "06:00",
    "close_time": "10:00",
    "price_per_hour": "500",
    "amenities": "Floodlights, Parking,,Washroom",
    "upi_id": "ground1@upi",
}


def create_ground(client, token, files=None, **overrides):
    form = {**GROUND_FORM, **overrides}
    return client.post(
        "/api/admin/grounds",
        data=form,
        files=files,
        headers=auth_header(token),
    )


@pytest.fixture
def user_token(client):
    return register(client).json()["token"]


@pytest.fixture
def admin_token(client, db):
    ensure_admin(db, "Admin", ADMIN_EMAIL, ADMIN_PASSWORD, "1111111111")
    response = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    return response.json()["token"]


@pytest.fixture
def ground(client, admin_token):
    return create_ground(client, admin_token).json()["ground"]


def book(client, token, ground_id, start_time="07:00", end_time="08:00", day=FUTURE_DATE):
    return client.post("/api/bookings", json={
        "ground_id": ground_id,
        "date": day,
        "start_time": start_time,
        "end_time": end_time,
    }, headers=auth_header(token))
