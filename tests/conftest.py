import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ["DB_PATH"] = ":memory:"

from datetime import datetime, timezone

import pytest

# Vendredi : horloge fixe des presets de dates
NOW = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def db():
    from page_composer.storage import SessionLocal, init_db
    init_db(":memory:")
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from page_composer.app import create_app
    from page_composer.storage import get_db

    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)
