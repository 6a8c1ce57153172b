import os

from conftest import FUTURE_DATE, auth_header, create_ground, png_bytes
from groundbook.core import redis as cache
from groundbook.core.config import settings


def test_admin_creates_ground(client, admin_token):
    response = create_ground(client, admin_token)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Ground added successfully"

    ground = body["ground"]
    assert ground["name"] == "Ground 1"
    assert ground["lat"] == 12.97
    assert ground["lng"] == 77.59
    assert ground["price_per_hour"] == 500.0
    assert ground["amenities"] == ["Floodlights", "Parking", "Washroom"]
    assert ground["upi_id"] == "ground1@upi"
    assert ground["images"] == []
    assert ground["is_active"] is True


def test_created_ground_round_trips(client, admin_token):
    created = create_ground(client, admin_token).json()["ground"]

    fetched = client.get(f"/api/grounds/{created['id']}")

    assert fetched.status_code == 200
    assert fetched.json() == created


def test_ground_images_are_stored(client, admin_token):
    files = [
        ("images", ("front.png", png_bytes(), "image/png")),
        ("images", ("pitch.png", png_bytes((0, 120, 0)), "image/png")),
    ]
    response = create_ground(client, admin_token, files=files)

    assert response.status_code == 201
    images = response.json()["ground"]["images"]
    assert len(images) == 2
    for name in images:
        assert name.endswith(".jpg")
        assert os.path.exists(os.path.join(settings.UPLOAD_DIR, name))

    served = client.get(f"/uploads/{images[0]}")
    assert served.status_code == 200


def test_at_most_five_images(client, admin_token):
    files = [("images", (f"{i}.png", png_bytes(), "image/png")) for i in range(6)]
    response = create_ground(client, admin_token, files=files)

    assert response.status_code == 400


def test_rejects_non_image_upload(client, admin_token):
    files = [("images", ("notes.txt", b"hello", "text/plain"))]
    response = create_ground(client, admin_token, files=files)

    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["detail"]


def test_rejects_corrupt_image(client, admin_token):
    files = [("images", ("broken.png", b"not really a png", "image/png"))]
    response = create_ground(client, admin_token, files=files)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid image file"


def test_rejects_bad_hours_and_price(client, admin_token):
    assert create_ground(client, admin_token, open_time="10:00", close_time="06:00").status_code == 400
    assert create_ground(client, admin_token, open_time="6am").status_code == 400
    assert create_ground(client, admin_token, price_per_hour="-1").status_code == 400


def test_rejects_non_finite_numbers(client, admin_token):
    for value in ("inf", "-inf", "nan"):
        response = create_ground(client, admin_token, price_per_hour=value)
        assert response.status_code == 400, value

    assert create_ground(client, admin_token, lat="nan").status_code == 400
    assert create_ground(client, admin_token, lng="inf").status_code == 400
    assert client.get("/api/grounds").json() == []


def test_rejected_ground_leaves_no_files(client, admin_token):
    before = set(os.listdir(settings.UPLOAD_DIR))

    files = [("images", ("front.png", png_bytes(), "image/png"))]
    response = create_ground(
        client, admin_token, files=files, open_time="10:00", close_time="06:00"
    )

    assert response.status_code == 400
    assert set(os.listdir(settings.UPLOAD_DIR)) == before


def test_failed_image_removes_earlier_uploads(client, admin_token):
    before = set(os.listdir(settings.UPLOAD_DIR))

    files = [
        ("images", ("front.png", png_bytes(), "image/png")),
        ("images", ("broken.png", b"not really a png", "image/png")),
    ]
    response = create_ground(client, admin_token, files=files)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid image file"
    assert set(os.listdir(settings.UPLOAD_DIR)) == before


def test_non_admin_cannot_create_ground(client, user_token):
    response = create_ground(client, user_token)

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin access required"


def test_create_ground_requires_token(client):
    response = create_ground(client, "garbage")
    assert response.status_code == 403

    response = client.post("/api/admin/grounds", data={"name": "x"})
    assert response.status_code == 401


def test_list_only_active_grounds(client, admin_token):
    first = create_ground(client, admin_token).json()["ground"]
    second = create_ground(client, admin_token, name="Ground 2").json()["ground"]

    client.patch(
        f"/api/admin/grounds/{second['id']}/status",
        json={"is_active": False},
        headers=auth_header(admin_token),
    )

    listed = client.get("/api/grounds").json()
    assert [g["id"] for g in listed] == [first["id"]]

    # Inactive grounds are still reachable by id
    assert client.get(f"/api/grounds/{second['id']}").json()["is_active"] is False


def test_get_missing_ground(client):
    response = client.get("/api/grounds/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Ground not found"


def test_availability(client, ground):
    response = client.get(f"/api/grounds/{ground['id']}/availability/{FUTURE_DATE}")

    assert response.status_code == 200
    slots = response.json()["slots"]
    assert [s["start_time"] for s in slots] == ["06:00", "07:00", "08:00", "09:00"]
    assert all(s["available"] and s["price"] == 500.0 for s in slots)


def test_availability_errors(client, ground):
    assert client.get(f"/api/grounds/999/availability/{FUTURE_DATE}").status_code == 404

    response = client.get(f"/api/grounds/{ground['id']}/availability/15-01-2030")
    assert response.status_code == 400


def test_deactivation_blocked_by_upcoming_bookings(client, admin_token, user_token, ground):
    client.post("/api/bookings", json={
        "ground_id": ground["id"], "date": FUTURE_DATE, "start_time": "07:00", "end_time": "08:00",
    }, headers=auth_header(user_token))

    response = client.patch(
        f"/api/admin/grounds/{ground['id']}/status",
        json={"is_active": False},
        headers=auth_header(admin_token),
    )

    assert response.status_code == 400
    assert client.get(f"/api/grounds/{ground['id']}").json()["is_active"] is True


def test_status_of_missing_ground(client, admin_token):
    response = client.patch(
        "/api/admin/grounds/999/status",
        json={"is_active": True},
        headers=auth_header(admin_token),
    )
    assert response.status_code == 404


class FakeRedis:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value

    def delete(self, key):
        self.store.pop(key, None)


def test_ground_list_is_cached_and_invalidated(client, admin_token, monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(cache, "get_redis_client", lambda: fake)

    create_ground(client, admin_token)
    assert len(client.get("/api/grounds").json()) == 1
    assert cache.ACTIVE_GROUNDS_KEY in fake.store

    # A new ground drops the cached list
    create_ground(client, admin_token, name="Ground 2")
    assert cache.ACTIVE_GROUNDS_KEY not in fake.store
    assert len(client.get("/api/grounds").json()) == 2
