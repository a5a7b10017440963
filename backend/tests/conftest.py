import os
import tempfile

# Settings are read at import time, so point them at throwaway locations first
UPLOAD_TMP = tempfile.mkdtemp(prefix="storefront-uploads-")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = UPLOAD_TMP

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db, enable_sqlite_foreign_keys
from main import app
from services.user_service import UserService
from utils.tokenJWT import token_for_user


@pytest.fixture(scope="function")
def engine():
    """
    A fresh in-memory database per test. StaticPool keeps a single
    connection so every session sees the same data.
    """
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """TestClient with get_db overridden to use the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def admin_user(db_session):
    return UserService(db_session).create_user("Admin", "admin@example.com", "admin-pass", is_admin=True)


@pytest.fixture(scope="function")
def customer(db_session):
    return UserService(db_session).create_user("Alice", "alice@example.com", "alice-pass", is_admin=False)


@pytest.fixture(scope="function")
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {token_for_user(admin_user)}"}


@pytest.fixture(scope="function")
def customer_headers(customer):
    return {"Authorization": f"Bearer {token_for_user(customer)}"}


def image_files(*names, content_type="image/png"):
    """Multipart entries for the `images` field."""
    return [("images", (name, b"\x89PNG fake " + name.encode(), content_type)) for name in names]


def upload_path(url):
    return os.path.join(UPLOAD_TMP, url.rsplit("/", 1)[-1])
