"""Tests for CarService error paths."""

import json

from bson import ObjectId

from cars import NIL_OBJECT_ID, CarService, object_id
from responses import Failure, Success
from tests.conftest import TimingOutCollection

CIVIC = json.dumps({"model": "Civic", "manufacturer": "Honda", "year": 2020, "kilometres": 15000.5}).encode()


def test_object_id_parses_hex():
    oid = ObjectId()
    assert object_id(str(oid)) == oid


def test_object_id_falls_back_to_nil():
    assert object_id("nope") == NIL_OBJECT_ID


def test_create_success(collection):
    result = CarService(collection).create(CIVIC)

    assert isinstance(result, Success)
    stored = collection.docs[0]
    assert str(stored["_id"]) == result.data["InsertedID"]
    assert "id" not in stored


class TestTimeouts:
    def setup_method(self):
        self.service = CarService(TimingOutCollection(), timeout=0.5)

    def test_create(self):
        result = self.service.create(CIVIC)
        assert isinstance(result, Failure)
        assert result.status == 500
        assert result.message == "Error: the Car creation process failed."
        assert "time limit" in result.detail

    def test_get(self):
        assert self.service.get(str(ObjectId())).status == 500

    def test_update(self):
        result = self.service.update(str(ObjectId()), CIVIC)
        assert result.status == 500
        assert result.message == "Error: the Car edit process failed."

    def test_delete(self):
        assert self.service.delete(str(ObjectId())).status == 500

    def test_list_all(self):
        assert self.service.list_all().status == 500

    def test_validation_runs_before_storage(self):
        result = self.service.create(b'{"model": "Civic"}')
        assert result.status == 400
