import os
import tempfile

# Point the app at throwaway locations before anything reads settings
_scratch = tempfile.mkdtemp(prefix="print-queue-tests-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATA_DIR"] = _scratch
os.environ["LEGACY_ORDERS_FILE"] = os.path.join(_scratch, "missing-orders.json")
os.environ["PUBLIC_DIR"] = os.path.join(_scratch, "no-public-dir")
os.environ["CORS_ORIGINS"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from print_queue.database.core import create_db_engine, get_db, init_db
from main import app

TEST_SQLALCHEMY_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def db_engine():
    engine = create_db_engine(TEST_SQLALCHEMY_DATABASE_URL)
    init_db(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """
    Creates a new, isolated in-memory database session for each test.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """
    Creates a TestClient for the app backed by the per-test database.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def clock(mocker):
    """
    Freezes the store's clock; set ``clock.now`` to move time forward.
    """
    class Clock:
        now = "2024-01-01T00:00:00.000Z"

    fake = Clock()
    mocker.patch("print_queue.orders.store.utc_now_iso", side_effect=lambda: fake.now)
    return fake


@pytest.fixture
def order_payload():
    return {
        "orderNumber": "PQ-1001",
        "itemName": "Benchy",
        "filamentType": "PLA",
        "filamentColor": "Orange",
        "quantity": 2,
        "shipBy": "2024-01-10T00:00:00.000Z",
        "notes": "0.2mm layers",
    }
