"""Pytest configuration and fixtures."""

import copy
from types import SimpleNamespace

import bson
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ExecutionTimeout

from config import Settings
from database import Database
from main import create_app


class FakeCursor:
    def __init__(self, docs):
        self._docs = iter(docs)
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._docs)

    def close(self):
        self.closed = True


class FakeCollection:
    """In-memory stand-in for a pymongo Collection, matching on _id only.

    Writes are BSON-encoded first, as the driver does.
    """

    name = "cars"

    def __init__(self):
        self.docs = []
        self.database = SimpleNamespace(name="car_dealer_test")

    def _match(self, query):
        return [d for d in self.docs if all(d.get(k) == v for k, v in query.items())]

    def insert_one(self, doc):
        bson.encode(doc)
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find_one(self, query):
        found = self._match(query)
        return copy.deepcopy(found[0]) if found else None

    def update_one(self, query, update):
        bson.encode(update)
        found = self._match(query)
        if found:
            found[0].update(update["$set"])
        return SimpleNamespace(matched_count=len(found[:1]), modified_count=len(found[:1]))

    def delete_one(self, query):
        found = self._match(query)
        if found:
            self.docs.remove(found[0])
        return SimpleNamespace(deleted_count=len(found[:1]))

    def find(self, query):
        return FakeCursor(copy.deepcopy(self._match(query)))


class TimingOutCollection(FakeCollection):
    def _timeout(self, *args, **kwargs):
        raise ExecutionTimeout("operation exceeded time limit")

    insert_one = find_one = update_one = delete_one = find = _timeout


class FakeAdmin:
    def __init__(self, reachable):
        self.reachable = reachable

    def command(self, name):
        if not self.reachable:
            raise ExecutionTimeout("server selection timed out")
        return {"ok": 1.0}


class FakeClient:
    def __init__(self, reachable=True):
        self.admin = FakeAdmin(reachable)
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def settings():
    return Settings(mongo_uri="mongodb://localhost:27017", request_timeout=10)


@pytest.fixture
def database(collection):
    return Database(FakeClient(), collection)


@pytest.fixture
def client(database, settings):
    return TestClient(create_app(database, settings))


@pytest.fixture
def civic():
    return {"model": "Civic", "manufacturer": "Honda", "year": 2020, "kilometres": 15000.5}


@pytest.fixture
def corolla():
    return {"model": "Corolla", "manufacturer": "Toyota", "year": 2018, "kilometres": 42000.0}
