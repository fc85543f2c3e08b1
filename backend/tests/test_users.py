"""Tests for User endpoints."""
from tests.conftest import create_test_user


class TestUserCRUD:
    """User create / get / list."""

    def test_create_user(self, client):
        data = create_test_user(client, name="Alice")
        assert data["firstName"] == "Alice"
        assert data["lastName"] == "User"
        assert data["username"] == "alice_user"
        assert "id" in data

    def test_create_user_snake_case_body(self, client):
        resp = client.post("/api/users/", json={
            "first_name": "Bob",
            "last_name": "Builder",
            "email": "bob@example.com",
            "username": "bobthebuilder",
        })
        assert resp.status_code == 201
        assert resp.json()["lastName"] == "Builder"

    def test_duplicate_email_and_username(self, client):
        create_test_user(client, name="Alice")
        resp = client.post("/api/users/", json={
            "firstName": "Other",
            "lastName": "Alice",
            "email": "alice@example.com",
            "username": "alice_user",
        })
        assert resp.status_code == 400
        errors = resp.json()["detail"]["errors"]
        assert set(errors) == {"email", "username"}

    def test_invalid_email_rejected(self, client):
        resp = client.post("/api/users/", json={
            "firstName": "No",
            "lastName": "Email",
            "email": "not-an-email",
            "username": "noemail",
        })
        assert resp.status_code == 422

    def test_get_user(self, client):
        user = create_test_user(client)
        resp = client.get(f"/api/users/{user['id']}")
        assert resp.status_code == 200
        assert resp.json()["firstName"] == "Test"

    def test_get_user_not_found(self, client):
        resp = client.get("/api/users/9999")
        assert resp.status_code == 404
        assert resp.json()["detail"]["message"] == "User couldn't be found"

    def test_list_users(self, client):
        create_test_user(client, name="Alice")
        create_test_user(client, name="Bob")
        resp = client.get("/api/users/")
        assert resp.status_code == 200
        names = [u["firstName"] for u in resp.json()]
        assert names == ["Alice", "Bob"]
