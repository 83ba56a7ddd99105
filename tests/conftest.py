"""Shared pytest fixtures.

MongoDB is replaced by a small in-memory double that supports the collection
operations the services use and enforces unique indexes the way the server does.
"""

import copy
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from rollbook.app import App
from rollbook.config import Config
from rollbook.core.core import Core
from rollbook.core.modules.student.service import StudentService
from rollbook.core.modules.token.service import TokenService
from rollbook.web.server import create_fastapi_app

TEST_SECRET_KEY = "test-secret-key"


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __aiter__(self) -> "FakeCursor":
        self._iterator = iter(self._documents)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iterator)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    def __init__(self, name: str) -> None:
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.unique_keys: list[tuple[str, ...]] = [("_id",)]
        self.calls: list[str] = []

    def _matches(self, document: dict[str, Any], query: dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in query.items())

    def _check_unique(self, candidate: dict[str, Any], ignore: dict[str, Any] | None = None) -> None:
        for keys in self.unique_keys:
            for existing in self.documents:
                if existing is ignore:
                    continue
                if all(existing.get(key) == candidate.get(key) for key in keys):
                    raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}", code=11000)

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **_: Any) -> str:
        self.calls.append("create_index")
        if unique:
            self.unique_keys.append(tuple(key for key, _ in keys))
        return "_".join(f"{key}_{direction}" for key, direction in keys)

    async def insert_one(self, document: dict[str, Any]) -> SimpleNamespace:
        self.calls.append("insert_one")
        self._check_unique(document)
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self.calls.append("find_one")
        for document in self.documents:
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        self.calls.append("find")
        query = query or {}
        return FakeCursor([copy.deepcopy(doc) for doc in self.documents if self._matches(doc, query)])

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        return_document: ReturnDocument = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        self.calls.append("find_one_and_update")
        for document in self.documents:
            if self._matches(document, query):
                before = copy.deepcopy(document)
                updated = {**document, **copy.deepcopy(update.get("$set", {}))}
                self._check_unique(updated, ignore=document)
                document.update(updated)
                return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        self.calls.append("delete_one")
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self, name: str) -> None:
        self.name = name
        self._collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(name)
        return self._collections[name]

    async def command(self, command: str) -> dict[str, Any]:
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self) -> None:
        self._databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        if name not in self._databases:
            self._databases[name] = FakeDatabase(name)
        return self._databases[name]

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    return Config(database_url="mongodb://localhost:27017/rollbook_test", token_secret_key=TEST_SECRET_KEY)


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
def database(mongo_client):
    return mongo_client.get_database("rollbook_test")


@pytest.fixture
def students_collection(database):
    return database.get_collection("students")


@pytest.fixture
def core(config, mongo_client):
    return Core(config, mongo_client=mongo_client)


@pytest.fixture
def token_service(database, config):
    return TokenService(database, config)


@pytest.fixture
async def student_service(database, config):
    service = StudentService(database, config)
    await service.on_start()
    return service


@pytest.fixture
def app_instance(config, mongo_client):
    return App(config, mongo_client=mongo_client)


@pytest.fixture
def client(app_instance, config) -> Iterator[TestClient]:
    with TestClient(create_fastapi_app(app_instance, config)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/login", json={"username": "demo", "password": "password"})
    return {"Authorization": f"Bearer {response.json()['token']}"}
