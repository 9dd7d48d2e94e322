import pytest
from fastapi.testclient import TestClient

from schedulenest.api.auth import get_kv_store
from schedulenest.api.main import app
from schedulenest.data import documents, mapping
from schedulenest.data.kv_store import KeyValueStore
from schedulenest.db import build_engine


@pytest.fixture
def store(tmp_path) -> KeyValueStore:
    engine = build_engine(f"sqlite:///{tmp_path / 'schedulenest.db'}")
    yield KeyValueStore(engine)
    engine.dispose()


@pytest.fixture
def system_code(store: KeyValueStore) -> str:
    """System code of a freshly registered user code ``abc123``."""
    return documents.register_user_code(store, "abc123").access_code


@pytest.fixture
def client(store: KeyValueStore):
    app.dependency_overrides[get_kv_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def access_headers(store: KeyValueStore) -> dict:
    documents.register_user_code(store, "abcd1234")
    assert mapping.resolve(store, "abcd1234") is not None
    return {"X-Access-Code": "abcd1234"}
