# =============================================================================
# tests/test_error_handlers.py - Centralized Error Responder Tests
# =============================================================================
# This module covers the fallback paths of the exception handlers:
# - PlacesException raised without a status code
# - Exceptions outside the PlacesException hierarchy
# - Malformed JSON bodies
# - CORS preflight in development
# =============================================================================

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.exceptions import PlacesException
from app.main import create_app
from core.services import PlaceService
from tests.conftest import create_place, sign_up


@pytest.fixture
def lenient_client(context):
    """Client that returns 500 responses instead of re-raising server errors."""
    app = create_app(context=context)

    @app.get("/api/broken")
    def broken():
        raise PlacesException("Something odd happened.")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


class TestFallbacks:

    def test_exception_without_status_is_505(self, lenient_client):
        response = lenient_client.get("/api/broken")

        assert response.status_code == 505
        assert response.json() == {"message": "Something odd happened.", "code": "PLACES_ERROR"}

    def test_unexpected_exception_is_500(self, lenient_client, upload_dir):
        alice = sign_up(lenient_client)
        before = set(upload_dir.iterdir())

        with patch.object(PlaceService, "create_place", side_effect=RuntimeError("boom")):
            response = create_place(lenient_client, alice["token"])

        assert response.status_code == 500
        assert response.json() == {"message": "Unknown error occurred.", "code": "INTERNAL_ERROR"}
        assert set(upload_dir.iterdir()) == before


class TestRequestErrors:

    def test_malformed_json_names_the_request(self, client):
        response = client.post(
            "/api/users/login",
            content=b'{"email": "a@x.com", "password": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["message"] == "Invalid value of request"
        assert response.json()["details"] == {"field": "request"}


class TestCors:

    def test_preflight_allowed_in_development(self, client):
        response = client.options(
            "/api/places",
            headers={
                "Origin": "http://elsewhere.test",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "http://elsewhere.test")
