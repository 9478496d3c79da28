# =============================================================================
# tests/test_users_api.py - Account and Health Endpoint Tests
# =============================================================================

from pathlib import Path

from lib.credentials import CredentialService
from tests.conftest import TEST_SECRET, png_upload, sign_up


class TestSignup:

    def test_returns_identity_and_token(self, client):
        body = sign_up(client, email="Alice@X.com")

        assert set(body) == {"userId", "email", "token"}
        assert body["email"] == "alice@x.com"
        claims = CredentialService(secret_key=TEST_SECRET).verify_token(body["token"])
        assert claims.user_id == body["userId"]

    def test_duplicate_email_keeps_first_account(self, client, upload_dir):
        first = sign_up(client, email="a@x.com", name="Alice")

        response = client.post(
            "/api/users/signup",
            data={"name": "Mallory", "email": "A@x.com", "password": "other-pass"},
            files=png_upload("mallory.png"),
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Email already exists, try with other email."
        users = client.get("/api/users").json()["users"]
        assert [(u["id"], u["name"]) for u in users] == [(first["userId"], "Alice")]
        assert [p.name for p in upload_dir.iterdir()] == [Path(users[0]["image"]).name]

    def test_invalid_email(self, client, upload_dir):
        response = client.post(
            "/api/users/signup",
            data={"name": "Alice", "email": "not-an-email", "password": "secret1"},
            files=png_upload(),
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid value of email"
        assert list(upload_dir.iterdir()) == []

    def test_short_password(self, client):
        response = client.post(
            "/api/users/signup",
            data={"name": "Alice", "email": "a@x.com", "password": "12345"},
            files=png_upload(),
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid value of password"

    def test_image_required(self, client):
        response = client.post(
            "/api/users/signup",
            data={"name": "Alice", "email": "a@x.com", "password": "secret1"},
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Missing value of image"


class TestLogin:

    def test_correct_credentials(self, client):
        signed_up = sign_up(client)

        response = client.post("/api/users/login", json={"email": "a@x.com", "password": "secret1"})

        assert response.status_code == 200
        assert response.json()["userId"] == signed_up["userId"]

    def test_wrong_password(self, client):
        sign_up(client)

        response = client.post("/api/users/login", json={"email": "a@x.com", "password": "wrong-pass"})

        assert response.status_code == 403
        assert response.json() == {"message": "Wrong User Credentials.", "code": "WRONG_CREDENTIALS"}

    def test_unknown_email(self, client):
        response = client.post("/api/users/login", json={"email": "nobody@x.com", "password": "secret1"})

        assert response.status_code == 403


class TestListUsers:

    def test_never_exposes_passwords(self, client):
        sign_up(client, email="a@x.com")
        sign_up(client, email="b@x.com", name="Bob")

        users = client.get("/api/users").json()["users"]

        assert len(users) == 2
        for user in users:
            assert set(user) == {"id", "name", "email", "image", "places"}

    def test_empty(self, client):
        assert client.get("/api/users").json() == {"users": []}


class TestHealth:

    def test_awake(self, client):
        response = client.get("/api/awake")

        assert response.status_code == 200
        assert response.json() == {"message": "awake"}

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "ok"
