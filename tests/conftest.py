"""Shared fixtures: an in-memory SQLite storage with the schema created."""

import pytest
from sqlalchemy.pool import StaticPool

from glintstore.core.config import Settings
from glintstore.models.database import make_engine
from glintstore.storage import Storage

# cheap hash so the suite stays fast; production default is scrypt
TEST_HASH_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, password_hash_method=TEST_HASH_METHOD)


@pytest.fixture
def engine():
    engine = make_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture
def storage(engine, settings: Settings) -> Storage:
    storage = Storage(engine=engine, settings=settings)
    storage.setup()
    return storage


@pytest.fixture
def alice_id(storage: Storage) -> int:
    return storage.add_person("alice", "Alice Liddell", "alice@example.com", "Secret123")
