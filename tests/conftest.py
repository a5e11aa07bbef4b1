import pytest
from fastapi.testclient import TestClient

from marketplace.core.config import Settings
from marketplace.main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def app():
    # every test gets its own in-memory database
    return create_app(Settings(database_url="sqlite://", secret_key=TEST_SECRET))


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def register(client):
    def _register(email, name="User", password="pw123456", phone=None):
        body = {"email": email, "password": password, "name": name}
        if phone is not None:
            body["phone"] = phone
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        payload = response.json()
        return payload["user"], {"Authorization": f"Bearer {payload['token']}"}

    return _register


@pytest.fixture
def make_vendor(client, register):
    def _make_vendor(email, name="Vendor", bio=None):
        user, headers = register(email, name=name)
        response = client.post("/api/users/become-vendor", json={"bio": bio}, headers=headers)
        assert response.status_code == 200, response.text
        return user, headers

    return _make_vendor


@pytest.fixture
def create_service(client):
    def _create_service(headers, **overrides):
        body = {
            "title": "Math tutoring",
            "description": "Secondary school algebra and geometry",
            "pricePerHour": 25,
            "categoryId": "tutoring",
        }
        body.update(overrides)
        response = client.post("/api/services", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["service"]

    return _create_service


@pytest.fixture
def book(client):
    def _book(headers, service_id, message=None):
        body = {
            "serviceId": service_id,
            "preferredDate": "2026-11-02",
            "preferredTime": "14:30:00",
        }
        if message is not None:
            body["message"] = message
        response = client.post("/api/bookings", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["booking"]

    return _book


@pytest.fixture
def set_status(client):
    def _set_status(headers, booking_id, status, **totals):
        body = {"status": status}
        body.update(totals)
        return client.put(f"/api/bookings/{booking_id}/status", json=body, headers=headers)

    return _set_status
