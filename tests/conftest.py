import json
import shutil
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport

from app.config import DEFAULT_REVIEWS_FILE

HOSTAWAY_URL = "https://api.hostaway.com/v1/reviews"


@pytest.fixture
def reviews_file(tmp_path) -> Path:
    path = tmp_path / "reviews.json"
    shutil.copyfile(DEFAULT_REVIEWS_FILE, path)
    return path


@pytest.fixture
def fallback_records(reviews_file) -> list[dict]:
    with open(reviews_file, encoding="utf-8") as f:
        return json.load(f)["result"]


@pytest.fixture
def mock_env(monkeypatch, reviews_file):
    monkeypatch.setenv("HOSTAWAY_API_KEY", "test-key")
    monkeypatch.setenv("HOSTAWAY_ACCOUNT_ID", "61148")
    monkeypatch.setenv("REVIEWS_FILE", str(reviews_file))


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
