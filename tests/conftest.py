# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Builds a service context over a temporary SQLite file with a fake geocoder
# - Provides a TestClient and helpers for signing up users
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from core.services import ImageStorage, PlaceService, ServiceContext, UserService
from lib.credentials import CredentialService
from lib.database import Database
from lib.geocoder import Coordinates, GeocodingError

TEST_SECRET = "test-secret-key-0123456789"
GOOGLEPLEX = Coordinates(lat=37.4224764, lng=-122.0842499)

# Smallest byte string that still looks like a PNG to a human reader
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# =============================================================================
# Fakes
# =============================================================================

class FakeGeocoder:
    """
    Geocoder stand-in.

    - "Nowhere" is an unknown address (422)
    - "Unreachable" simulates a service outage (500)
    - anything else resolves, with a fixed point for the Googleplex
    """

    def __init__(self):
        self.calls: list[str] = []

    def geocode(self, address: str) -> Coordinates:
        self.calls.append(address)
        if address == "Nowhere":
            raise GeocodingError(
                "Could not find location for the specified address.",
                address=address,
                address_not_found=True,
            )
        if address == "Unreachable":
            raise GeocodingError("Geocoding service unavailable", address=address, address_not_found=False)
        if address == "1600 Amphitheatre Parkway":
            return GOOGLEPLEX
        return Coordinates(lat=40.7484405, lng=-73.9856644)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def context(tmp_path, geocoder, upload_dir):
    """Service context over a fresh SQLite file."""
    ctx = ServiceContext(
        database=Database(f"sqlite:///{tmp_path / 'places.db'}"),
        credentials=CredentialService(secret_key=TEST_SECRET, hash_iterations=1_000),
        geocoder=geocoder,
        images=ImageStorage(upload_dir=str(upload_dir)),
    )
    ctx.startup()
    yield ctx
    ctx.shutdown()


@pytest.fixture
def place_service(context):
    return PlaceService(context)


@pytest.fixture
def user_service(context):
    return UserService(context)


@pytest.fixture
def client(context):
    with TestClient(create_app(context=context)) as test_client:
        yield test_client


@pytest.fixture
def stored_image(context):
    """An image already saved in the upload directory."""
    return context.images.save(PNG_BYTES, "image/png")


# =============================================================================
# Helpers
# =============================================================================

def png_upload(name: str = "photo.png"):
    return {"image": (name, PNG_BYTES, "image/png")}


def sign_up(client, email="a@x.com", password="secret1", name="Alice"):
    """Sign up through the API and return the JSON body."""
    response = client.post(
        "/api/users/signup",
        data={"name": name, "email": email, "password": password},
        files=png_upload("avatar.png"),
    )
    assert response.status_code == 201, response.text
    return response.json()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_place(client, token, address="1600 Amphitheatre Parkway", title="Googleplex"):
    return client.post(
        "/api/places",
        data={"title": title, "description": "Google headquarters", "address": address},
        files=png_upload(),
        headers=auth_header(token),
    )
