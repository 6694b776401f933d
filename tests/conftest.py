from datetime import datetime

import pytest
from beanie import init_beanie
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.db import DOCUMENT_MODELS
from app.main import app
from app.services import checkin


@pytest.fixture
async def db():
    client = AsyncMongoMockClient()
    await init_beanie(database=client["attendance_test"], document_models=DOCUMENT_MODELS)
    yield client


@pytest.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def clock(monkeypatch):
    """Pin the check-in clock; call the fixture with a datetime to move it."""
    current = {"now": datetime(2026, 10, 18, 8, 29, 5)}
    monkeypatch.setattr(checkin, "local_now", lambda: current["now"])

    def set_now(value: datetime) -> None:
        current["now"] = value

    return set_now


@pytest.fixture
def faces(monkeypatch):
    """Replace the detector; set ``faces.count`` to control how many faces it sees."""

    class FakeDetector:
        count = 1
        calls = 0

    from app.errors import NoFaceDetected

    async def fake_require_face(image: bytes) -> int:
        FakeDetector.calls += 1
        if FakeDetector.count == 0:
            raise NoFaceDetected()
        return FakeDetector.count

    monkeypatch.setattr(checkin, "require_face", fake_require_face)
    return FakeDetector


@pytest.fixture
def geocoder(monkeypatch):
    async def fake_reverse_geocode(latitude: float, longitude: float) -> str:
        return "Jalan Sudirman, Senayan, Jakarta, 10270, Indonesia"

    monkeypatch.setattr(checkin, "reverse_geocode", fake_reverse_geocode)
