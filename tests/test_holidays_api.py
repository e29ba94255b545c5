"""API tests for /api/v1/holidays."""

import uuid

import pytest

from app.models.profile import UserRole
from app.services import holiday_service
from app.services.holiday_service import MAX_IMAGE_BYTES

URL = "/api/v1/holidays"
PUBLIC_PREFIX = "https://test-project.supabase.co/storage/v1/object/public/holiday-images/"


@pytest.fixture
def admin_headers(make_profile, make_token) -> dict[str, str]:
    admin = make_profile(name="Ada Admin", role="admin")
    return {"Authorization": f"Bearer {make_token(admin.id)}"}


@pytest.fixture
def staff_headers(make_profile, make_token) -> dict[str, str]:
    staff = make_profile(name="Sam Staff")
    return {"Authorization": f"Bearer {make_token(staff.id)}"}


@pytest.fixture
def storage(monkeypatch):
    """Record storage calls instead of talking to Supabase."""
    calls = {"uploaded": [], "deleted": []}

    def fake_upload(path, file_bytes, content_type):
        calls["uploaded"].append((path, len(file_bytes), content_type))
        return PUBLIC_PREFIX + path

    def fake_delete(url):
        calls["deleted"].append(url)

    monkeypatch.setattr(holiday_service, "upload_to_storage", fake_upload)
    monkeypatch.setattr(holiday_service, "delete_public_url", fake_delete)
    return calls


def create(client, headers, **fields) -> dict:
    payload = {"title": "New Year", "date": "2025-01-01", **fields}
    response = client.post(URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_admin_creates_holiday(client, admin_headers):
    body = create(client, admin_headers, message="  Happy new year!  ", image_url="")

    assert body["title"] == "New Year"
    assert body["date"] == "2025-01-01"
    assert body["message"] == "Happy new year!"
    assert body["image_url"] is None
    assert body["created_by"] == "Ada Admin"
    assert body["updated_at"] is None


def test_admin_without_profile_is_recorded_as_admin(client, session, make_token):
    admin_id = uuid.uuid4()
    session.add(UserRole(user_id=admin_id, role="admin"))
    session.commit()
    headers = {"Authorization": f"Bearer {make_token(admin_id, email='boss@example.com')}"}

    body = create(client, headers)

    assert body["created_by"] == "Admin"


def test_staff_cannot_create(client, staff_headers):
    response = client.post(
        URL, json={"title": "Party", "date": "2025-02-01"}, headers=staff_headers
    )

    assert response.status_code == 403


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "   ", "date": "2025-01-01"},
        {"date": "2025-01-01"},
        {"title": "No date"},
        {"title": "Extra", "date": "2025-01-01", "created_by": "Mallory"},
    ],
)
def test_create_validation(client, admin_headers, payload):
    response = client.post(URL, json=payload, headers=admin_headers)

    assert response.status_code == 422


def test_list_is_ordered_by_date(client, admin_headers, staff_headers):
    create(client, admin_headers, title="Christmas", date="2025-12-25")
    create(client, admin_headers, title="New Year", date="2025-01-01")
    create(client, admin_headers, title="Labour Day", date="2025-05-01")

    response = client.get(URL, headers=staff_headers)

    assert response.status_code == 200
    assert [h["title"] for h in response.json()] == ["New Year", "Labour Day", "Christmas"]


def test_list_filtered_by_day(client, admin_headers, staff_headers):
    create(client, admin_headers, title="Christmas", date="2025-12-25")
    create(client, admin_headers, title="New Year", date="2025-01-01")

    response = client.get(URL, params={"on": "2025-12-25"}, headers=staff_headers)

    assert [h["title"] for h in response.json()] == ["Christmas"]


def test_list_requires_auth(client):
    assert client.get(URL).status_code == 401


def test_update_is_partial_and_stamped(client, admin_headers):
    holiday = create(client, admin_headers, message="Day off")

    response = client.patch(
        f"{URL}/{holiday['id']}",
        json={"title": "New Year's Day"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "New Year's Day"
    assert body["message"] == "Day off"
    assert body["date"] == "2025-01-01"
    assert body["updated_at"] is not None


def test_update_can_clear_message(client, admin_headers):
    holiday = create(client, admin_headers, message="Day off")

    response = client.patch(
        f"{URL}/{holiday['id']}", json={"message": ""}, headers=admin_headers
    )

    assert response.json()["message"] is None


def test_update_unknown_holiday(client, admin_headers):
    response = client.patch(
        f"{URL}/{uuid.uuid4()}", json={"title": "X"}, headers=admin_headers
    )

    assert response.status_code == 404


def test_delete_removes_holiday_and_image(client, admin_headers, staff_headers, storage):
    holiday = create(client, admin_headers, image_url=PUBLIC_PREFIX + "holidays/x/old.png")

    response = client.delete(f"{URL}/{holiday['id']}", headers=admin_headers)

    assert response.status_code == 204
    assert storage["deleted"] == [PUBLIC_PREFIX + "holidays/x/old.png"]
    assert client.get(URL, headers=staff_headers).json() == []


def test_upload_image(client, admin_headers, storage):
    holiday = create(client, admin_headers)

    response = client.post(
        f"{URL}/{holiday['id']}/image",
        files={"file": ("banner.png", b"\x89PNG fake", "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 200
    path, size, content_type = storage["uploaded"][0]
    assert path.startswith(f"holidays/{holiday['id']}/")
    assert path.endswith(".png")
    assert content_type == "image/png"
    assert response.json()["image_url"] == PUBLIC_PREFIX + path
    assert storage["deleted"] == []


def test_upload_replaces_previous_image(client, admin_headers, storage):
    old_url = PUBLIC_PREFIX + "holidays/x/old.png"
    holiday = create(client, admin_headers, image_url=old_url)

    client.post(
        f"{URL}/{holiday['id']}/image",
        files={"file": ("banner.jpg", b"jpeg bytes", "image/jpeg")},
        headers=admin_headers,
    )

    assert storage["deleted"] == [old_url]


def test_upload_rejects_non_image(client, admin_headers, storage):
    holiday = create(client, admin_headers)

    response = client.post(
        f"{URL}/{holiday['id']}/image",
        files={"file": ("notes.pdf", b"%PDF-1.7", "application/pdf")},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert storage["uploaded"] == []


def test_upload_rejects_large_image(client, admin_headers, storage):
    holiday = create(client, admin_headers)

    response = client.post(
        f"{URL}/{holiday['id']}/image",
        files={"file": ("huge.png", b"0" * (MAX_IMAGE_BYTES + 1), "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 413
    assert storage["uploaded"] == []


@pytest.fixture
def broken_storage_delete(monkeypatch, storage):
    def failing_delete(url):
        raise RuntimeError("storage unavailable")

    monkeypatch.setattr(holiday_service, "delete_public_url", failing_delete)
    return storage


def test_delete_survives_storage_failure(
    client, admin_headers, staff_headers, broken_storage_delete
):
    holiday = create(client, admin_headers, image_url=PUBLIC_PREFIX + "holidays/x/old.png")

    response = client.delete(f"{URL}/{holiday['id']}", headers=admin_headers)

    assert response.status_code == 204
    assert client.get(URL, headers=staff_headers).json() == []


def test_upload_survives_failed_cleanup_of_old_image(
    client, admin_headers, broken_storage_delete
):
    holiday = create(client, admin_headers, image_url=PUBLIC_PREFIX + "holidays/x/old.png")

    response = client.post(
        f"{URL}/{holiday['id']}/image",
        files={"file": ("banner.png", b"\x89PNG fake", "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 200
    path, _, _ = broken_storage_delete["uploaded"][0]
    assert response.json()["image_url"] == PUBLIC_PREFIX + path
