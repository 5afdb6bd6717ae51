"""
Car handlers

Each operation decodes and validates its input, issues a single collection
call (plus a re-read after an update) under a per-request timeout, and
returns a Success or Failure for the router to render.
"""

import pydantic
import pymongo
import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from responses import (
    Failure,
    NotDeletedError,
    NotFoundError,
    Result,
    ServiceError,
    StorageError,
    Success,
)
from schemas import Car, parse_payload, validate_car

logger = structlog.get_logger()

NIL_OBJECT_ID = ObjectId("0" * 24)


def object_id(car_id: str) -> ObjectId:
    """Parse a path identifier. Malformed ids become the nil ObjectId, which matches nothing."""
    try:
        return ObjectId(car_id)
    except InvalidId:
        return NIL_OBJECT_ID


class CarService:
    def __init__(self, collection, timeout: float = 10.0):
        self.collection = collection
        self.timeout = timeout

    def create(self, body: bytes) -> Result:
        try:
            car = validate_car(parse_payload(body))
            car.id = str(ObjectId())
            with pymongo.timeout(self.timeout):
                result = self.collection.insert_one(car.to_document())
        except PyMongoError as e:
            return self._fail(StorageError(str(e), "Error: the Car creation process failed."), "car_create_failed")
        except ServiceError as e:
            return self._fail(e, "car_rejected")

        logger.info("car_created", car_id=str(result.inserted_id))
        return Success(201, "A new Car was added successfully.", {"InsertedID": str(result.inserted_id)})

    def get(self, car_id: str) -> Result:
        try:
            with pymongo.timeout(self.timeout):
                doc = self.collection.find_one({"_id": object_id(car_id)})
        except PyMongoError as e:
            return self._fail(NotFoundError(str(e)), "car_lookup_failed", car_id=car_id)
        if doc is None:
            return self._fail(NotFoundError("no document matched the given identifier"), "car_not_found", car_id=car_id)

        return Success(200, "The operation was successfully.", Car.from_document(doc).to_json())

    def update(self, car_id: str, body: bytes) -> Result:
        oid = object_id(car_id)
        try:
            car = validate_car(parse_payload(body))
            fields = car.to_document()
            updated = Car()
            with pymongo.timeout(self.timeout):
                result = self.collection.update_one({"_id": oid}, {"$set": fields})
                if result.matched_count == 1:
                    doc = self.collection.find_one({"_id": oid})
                    if doc is not None:
                        updated = Car.from_document(doc)
        except PyMongoError as e:
            return self._fail(StorageError(str(e), "Error: the Car edit process failed."), "car_update_failed", car_id=car_id)
        except ServiceError as e:
            return self._fail(e, "car_rejected", car_id=car_id)

        if updated.id is None:
            logger.info("car_update_missed", car_id=car_id)
        else:
            logger.info("car_updated", car_id=car_id)
        return Success(200, f"The Car with the ID {car_id} was edited correctly.", updated.to_json())

    def delete(self, car_id: str) -> Result:
        try:
            with pymongo.timeout(self.timeout):
                result = self.collection.delete_one({"_id": object_id(car_id)})
        except PyMongoError as e:
            return self._fail(StorageError(str(e)), "car_delete_failed", car_id=car_id)

        if result.deleted_count < 1:
            return self._fail(
                NotDeletedError(f"Error: The Car with the ID {car_id} was not deleted."),
                "car_delete_missed",
                car_id=car_id,
            )

        logger.info("car_deleted", car_id=car_id)
        return Success(200, "success", "The Car was deleted successfully.")

    def list_all(self) -> Result:
        cars = []
        try:
            with pymongo.timeout(self.timeout):
                cursor = self.collection.find({})
                try:
                    for doc in cursor:
                        cars.append(Car.from_document(doc).to_json())
                finally:
                    cursor.close()
        except PyMongoError as e:
            return self._fail(StorageError(str(e)), "car_list_failed")
        except pydantic.ValidationError as e:
            return self._fail(StorageError(f"undecodable car document: {e}"), "car_decode_failed")

        return Success(200, "success", cars)

    def _fail(self, error: ServiceError, event: str, **context) -> Failure:
        logger.warning(event, status=error.status, detail=error.detail, **context)
        return Failure.from_error(error)
