# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from microin import create_app
from microin.config import Config
from microin.models.task import Task
from microin.models.user import User
from microin.services.task_store import TaskStore

from .fakes import FakeRecommender

FIXED_TODAY = date(2024, 5, 1)


@pytest.fixture()
def config(tmp_path: Path):
    """
    Test configuration: no demo seed, no Sentry, logs under tmp_path.
    """

    class TestConfig(Config):
        TESTING = True
        GEMINI_API_KEY = "test-key"
        SEED_DEMO_DATA = False
        SENTRY_DSN = ""
        LOG_LEVEL = "WARNING"
        LOG_DIR = str(tmp_path / "logs")
        API_PREFIX = "/api"

    return TestConfig


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore(today=lambda: FIXED_TODAY)


@pytest.fixture()
def student(store: TaskStore) -> User:
    return store.add_user(User(wallet_address="0xAAA", name="Sam Student", skills=["Go", "Python"]))


@pytest.fixture()
def company(store: TaskStore) -> User:
    return store.add_user(User(wallet_address="0xC0", name="Acme", is_company=True))


@pytest.fixture()
def recommender() -> FakeRecommender:
    return FakeRecommender(
        [
            Task(id="ai-1", title="Write a Go CLI", company="Gopher Labs",
                 description="Small CLI", skills=["Go"], reward=80),
            Task(id="ai-2", title="Python scraper", company="Snake Co",
                 description="Scrape a page", skills=["Python"], reward=60),
        ]
    )


@pytest.fixture()
def app(config, store: TaskStore, recommender: FakeRecommender):
    return create_app(config, store=store, recommender=recommender)


@pytest.fixture()
def client(app):
    return app.test_client()
