import os, sys, tempfile
import pytest

# Always force tests to use an isolated SQLite database file under a temp dir.
# Do this before importing any routinely_core modules (especially routinely_core.db).
if "ROUTINELY_DB_URL" not in os.environ and "ROUTINELY_DATABASE_URL" not in os.environ:
    _test_db_dir = tempfile.mkdtemp(prefix="routinely_test_db_")
    os.environ["ROUTINELY_DB_URL"] = f"sqlite:///{os.path.join(_test_db_dir, 'test_routinely.db')}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ROUTINELY_ALLOW_SIGNUP", "1")

# Ensure core and api src dirs are on sys.path for imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
for _src in (os.path.join(ROOT, 'packages', 'core', 'src'), os.path.join(ROOT, 'apps', 'api', 'src')):
    if _src not in sys.path:
        sys.path.insert(0, _src)

from routinely_core.db import Base, engine, SessionLocal  # noqa: E402
import routinely_core.models  # noqa: E402,F401


@pytest.fixture(autouse=True)
def fresh_tables():
    Base.metadata.create_all(bind=engine)
    yield
    session = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
    finally:
        session.close()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from routinely_api.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    """Sign up a user and return bearer headers for it."""
    def _register(username: str = "alice", password: str = "s3cret!"):
        r = client.post("/users/", json={"username": username, "password": password})
        assert r.status_code == 201, r.text
        r = client.post("/users/login", json={"username": username, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _register
