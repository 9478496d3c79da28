# =============================================================================
# tests/test_auth.py - Bearer Token Gate Tests
# =============================================================================
# Every protected route must answer 401 "Authentication failed!" before
# doing any work when the token is missing or fails verification.
# =============================================================================

import time

import pytest

from lib.credentials import CredentialService
from tests.conftest import TEST_SECRET, auth_header, create_place, png_upload, sign_up

UNAUTHORIZED = {"message": "Authentication failed!", "code": "UNAUTHORIZED"}


def expired_token(user_id: str, email: str) -> str:
    credentials = CredentialService(secret_key=TEST_SECRET)
    return credentials.issue_token(user_id, email, now=time.time() - 2 * 24 * 60 * 60)


def foreign_token(user_id: str, email: str) -> str:
    return CredentialService(secret_key="some-other-secret-key").issue_token(user_id, email)


@pytest.fixture
def alice(client):
    return sign_up(client)


def bad_headers(alice):
    return {
        "missing": {},
        "empty bearer": {"Authorization": "Bearer "},
        "not a jwt": auth_header("not-a-token"),
        "wrong scheme": {"Authorization": f"Basic {alice['token']}"},
        "expired": auth_header(expired_token(alice["userId"], alice["email"])),
        "other secret": auth_header(foreign_token(alice["userId"], alice["email"])),
        "tampered": auth_header(alice["token"][:-2] + ("aa" if not alice["token"].endswith("aa") else "bb")),
    }


BAD_HEADER_NAMES = ["missing", "empty bearer", "not a jwt", "wrong scheme", "expired", "other secret", "tampered"]


class TestAuthGate:

    @pytest.mark.parametrize("case", BAD_HEADER_NAMES)
    def test_create_rejected(self, client, alice, upload_dir, case):
        before = set(upload_dir.iterdir())

        response = client.post(
            "/api/places",
            data={"title": "T", "description": "Long enough", "address": "Somewhere"},
            files=png_upload(),
            headers=bad_headers(alice)[case],
        )

        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED
        assert set(upload_dir.iterdir()) == before

    @pytest.mark.parametrize("case", BAD_HEADER_NAMES)
    def test_delete_rejected(self, client, alice, case):
        place_id = create_place(client, alice["token"]).json()["place"]["id"]

        response = client.delete(f"/api/places/{place_id}", headers=bad_headers(alice)[case])

        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED
        assert client.get(f"/api/places/{place_id}").status_code == 200

    def test_update_rejected(self, client, alice):
        place_id = create_place(client, alice["token"]).json()["place"]["id"]

        response = client.patch(f"/api/places/{place_id}", json={"title": "X", "description": "Hijacked"})

        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED

    def test_token_checked_before_body(self, client):
        response = client.patch("/api/places/abc", json={"title": ""})

        assert response.status_code == 401

    def test_login_token_is_accepted(self, client, alice):
        login = client.post("/api/users/login", json={"email": "a@x.com", "password": "secret1"})

        response = create_place(client, login.json()["token"])

        assert response.status_code == 201
