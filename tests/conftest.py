from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from main import create_app
from seed import demo_stories
from service import StoryService
from settings import AppSettings
from store import StoryStore


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(environment="test", log_level="WARNING")


@pytest.fixture
def store() -> StoryStore:
    return StoryStore(demo_stories())


@pytest.fixture
def service(store: StoryStore) -> StoryService:
    return StoryService(store)


@pytest.fixture
def api(settings: AppSettings, store: StoryStore) -> Iterator[TestClient]:
    app = create_app(settings, store=store)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def new_story() -> dict:
    return {
        "title": "Test Story",
        "author": "Test Author",
        "synopsis": "Test synopsis",
        "category": "Technology",
        "keywords": ["test"],
        "status": "Draft",
        "chapters": [],
    }
