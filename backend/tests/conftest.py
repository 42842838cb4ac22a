"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database and its own media
directory. API tests go through FastAPI's TestClient with get_db and
get_file_storage overridden; service tests use the services directly.
"""

import os
import tempfile
from types import SimpleNamespace

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="portfolio-logs-")
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="portfolio-media-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.v1.deps import get_file_storage
from app.db.session import get_db
from app.main import app
from app.models import Base
from app.schemas.category import CategoryCreate
from app.schemas.project import ProjectCreate
from app.schemas.user import UserCreate
from app.services.auth_service import create_access_token
from app.services.category_service import CategoryService
from app.services.file_storage import FileStorage
from app.services.image_service import ImageService
from app.services.project_service import ProjectService
from app.services.user_service import UserService
from app.services.video_service import VideoService


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path):
    media = FileStorage(str(tmp_path / "media"))
    media.ensure_root()
    return media


@pytest.fixture
def services(db, storage):
    user_service = UserService(db)
    category_service = CategoryService(db, user_service, storage)
    project_service = ProjectService(db, user_service, category_service, storage)
    return SimpleNamespace(
        user=user_service,
        category=category_service,
        project=project_service,
        video=VideoService(db, project_service, storage),
        image=ImageService(db, project_service, storage),
    )


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# Builders
# ============================================================================

@pytest.fixture
def make_user(services):
    counter = {"n": 0}

    def _make_user(name="Alice", email=None, avatar=None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return services.user.create_user(
            UserCreate(name=name, email=email, password="password123", avatar=avatar)
        )

    return _make_user


@pytest.fixture
def make_category(services):
    def _make_category(user, name, link, description=""):
        return services.category.create_category(
            CategoryCreate(name=name, link=link, description=description), user.id
        )

    return _make_category


@pytest.fixture
def make_project(services):
    def _make_project(user, categories, name="Project", description=""):
        created = services.project.create_project(
            ProjectCreate(
                name=name,
                description=description,
                category_id_list=[category.id for category in categories],
            ),
            user.id,
        )
        return services.project.get_project(created["id"])

    return _make_project


@pytest.fixture
def media_file(storage):
    """Write a file under the media root and return its absolute path."""
    def _media_file(name, content=b"data"):
        path = storage.media_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return str(path)

    return _media_file


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
