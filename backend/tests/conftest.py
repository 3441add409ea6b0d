from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from talentsearch.database import get_db, has_full_text, init_db
from talentsearch.main import app
from talentsearch.services.document_store import DocumentStore
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.services.retrieval_service import RetrievalService
from talentsearch.services.search_backends import BackendSelector
from talentsearch.utils.security import create_access_token


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "db.sqlite"
    init_db(path)
    return path


@pytest.fixture
def test_db(db_path):
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture(params=[True, False], ids=["fts", "substring"])
def store(request, test_db, db_path):
    """Document store over FTS5 tables, and over plain substring matching."""
    return DocumentStore(test_db, full_text=request.param and has_full_text(db_path))


@pytest.fixture
def es_client():
    """Elasticsearch client double; search returns no hits unless a test says otherwise."""
    client = MagicMock()
    client.indices.exists.return_value = True
    client.search.return_value = {"hits": {"total": {"value": 0}, "hits": []}}
    return client


def _install(index_manager: SearchIndexManager, store: DocumentStore) -> TestClient:
    app.state.document_store = store
    app.state.index_manager = index_manager
    app.state.retrieval_service = RetrievalService(BackendSelector(index_manager, store))
    return TestClient(app)


@pytest.fixture
def client(store):
    """Client whose search engine is unreachable, so every search uses the store."""
    index_manager = SearchIndexManager(None)
    index_manager.connect()
    yield _install(index_manager, store)


@pytest.fixture
def indexed_client(store, es_client):
    """Client backed by a connected search engine double."""
    index_manager = SearchIndexManager(es_client)
    index_manager.connect()
    yield _install(index_manager, store)


@pytest.fixture
def auth():
    def headers(role: str, user_id: str | None = None) -> dict[str, str]:
        token = create_access_token(user_id or f"{role}-1", role)
        return {"Authorization": f"Bearer {token}"}

    return headers
