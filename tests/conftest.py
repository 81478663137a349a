"""Pytest configuration and shared fixtures"""
import copy
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

# Add the repository root to Python path for imports
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

from user_registry.database.user_store import UserStore
from user_registry.presence.registry import PresenceRegistry
from user_registry.realtime.live_channel import LiveChannel


class FakeCursor:
    """Enough of a pymongo cursor for find().sort()"""
    def __init__(self, documents):
        self.documents = documents

    def sort(self, key, direction=1):
        self.documents = sorted(self.documents, key=lambda doc: doc.get(key), reverse=direction == -1)
        return self

    def __iter__(self):
        return iter(self.documents)


class FakeCollection:
    """
    In-memory stand in for a pymongo Collection.
    Unique indexes are enforced with pymongo's own DuplicateKeyError, shaped
    like a real server reply.
    """
    name = "users"

    def __init__(self):
        self.documents = []
        self.unique_fields = set()

    def create_index(self, keys, unique=False, name=None):
        if unique:
            self.unique_fields.add(keys[0][0])
        return name

    def insert_one(self, document):
        for field in self.unique_fields:
            if any(existing.get(field) == document.get(field) for existing in self.documents):
                raise DuplicateKeyError(
                    f"E11000 duplicate key error collection: user_registry.users index: {field}_1 dup key",
                    code=11000,
                    details={"keyPattern": {field: 1}, "keyValue": {field: document.get(field)}},
                )
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    def find(self, query=None, projection=None):
        return FakeCursor([self._project(doc, projection) for doc in self.documents if self._matches(doc, query)])

    def find_one(self, query=None, projection=None):
        for doc in self.documents:
            if self._matches(doc, query):
                return self._project(doc, projection)
        return None

    @staticmethod
    def _matches(document, query):
        return all(document.get(key) == value for key, value in (query or {}).items())

    @staticmethod
    def _project(document, projection):
        excluded = {key for key, value in (projection or {}).items() if not value}
        return {key: copy.deepcopy(value) for key, value in document.items() if key not in excluded}


@pytest.fixture
def fake_collection():
    """Empty users collection"""
    return FakeCollection()

@pytest.fixture
def user_store(fake_collection):
    """UserStore over the fake collection, low bcrypt cost for speed"""
    store = UserStore(fake_collection, bcrypt_rounds=4)
    store.ensure_indexes()
    return store

@pytest.fixture
def registration():
    """A registration body that passes every rule"""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "mobileNo": "9876543210",
        "emailId": "ada@example.com",
        "address": {"street": "Baker Street", "city": "London", "country": "England"},
        "loginId": "adalove1",
        "password": "Abcdef!",
    }

@pytest.fixture
def mock_sio():
    """Socket.IO server double, records emits and room joins"""
    sio = Mock()
    sio.emit = AsyncMock()
    sio.enter_room = AsyncMock()
    return sio

@pytest.fixture
def presence_registry():
    """Empty presence registry"""
    return PresenceRegistry()

@pytest.fixture
def live_channel(mock_sio, presence_registry, user_store):
    """LiveChannel wired to the mock server and the fake-backed store"""
    return LiveChannel(mock_sio, presence_registry, resolve_user=user_store.find_user_by_id)
