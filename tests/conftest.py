import os
import tempfile

_tmp = tempfile.mkdtemp(prefix="artvista-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp, 'artvista.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_tmp, "uploads")
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "1"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from artvista.api import create_app
from artvista.api.deps import get_lock_service
from artvista.data import models  # noqa: F401
from artvista.data.database import Base, SessionLocal, engine
from artvista.services.lock_service import LockService


class InMemoryRedis:
    """Minimalny odpowiednik SET NX EX i skryptu compare-and-delete."""

    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return None
        self.store[name] = value
        return True

    def eval(self, script, numkeys, key, token):
        if self.store.get(key) == token:
            del self.store[key]
            return 1
        return 0


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client)


@pytest.fixture
def app(lock_service):
    app = create_app()
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(name="Alice", email="alice@example.com", password="secret123"):
        resp = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return data["user"]["id"], auth_header(data["token"])

    return _register


@pytest.fixture
def create_art(client):
    def _create_art(headers, title="Sunset", price="1000", categories="Painting", files=None, **extra):
        data = {"title": title, "price": price, "categories": categories, **extra}
        resp = client.post("/api/arts", data=data, files=files, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["art"]

    return _create_art
