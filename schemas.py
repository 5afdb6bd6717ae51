"""
Database Schemas

Car documents live in a single MongoDB collection ("cars" by default).
The storage-generated ObjectId is kept as the document _id and exposed to
clients as a 24-character hex string in "id".
"""

from typing import List, Optional

import pydantic
from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from responses import MalformedRequestError, ValidationError

REQUIRED_FIELDS = ("model", "manufacturer", "year", "kilometres")

# BSON stores integers as at most 64 bits
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Car(BaseModel):
    """
    Cars collection schema
    Collection name: "cars"
    """
    id: Optional[str] = Field(None, description="Storage-generated identifier (ObjectId hex)")
    model: str = Field("", description="Car model name")
    manufacturer: str = Field("", description="Car manufacturer")
    year: int = Field(0, description="Model year")
    kilometres: float = Field(0.0, description="Odometer reading")

    @classmethod
    def from_document(cls, doc: dict) -> "Car":
        doc = dict(doc)
        _id = doc.pop("_id", None)
        if _id is not None:
            doc["id"] = str(_id)
        return cls.model_validate(doc)

    def to_document(self) -> dict:
        doc = self.model_dump(include=set(REQUIRED_FIELDS))
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        return doc

    def to_json(self) -> dict:
        # zero values are left out, so an empty record renders as {}
        return self.model_dump(exclude_defaults=True)


class CarPayload(BaseModel):
    """Request body for create and update. Fields may be absent; types may not be wrong."""

    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    model: Optional[str] = None
    manufacturer: Optional[str] = None
    year: Optional[int] = Field(None, ge=INT64_MIN, le=INT64_MAX)
    kilometres: Optional[float] = None


def parse_payload(body: bytes) -> CarPayload:
    try:
        return CarPayload.model_validate_json(body or b"")
    except pydantic.ValidationError as e:
        raise MalformedRequestError(_describe(e))


def validate_car(payload: CarPayload) -> Car:
    errors: List[dict] = []
    for name in REQUIRED_FIELDS:
        if not getattr(payload, name):
            errors.append({"field": name, "error": "required"})
    if errors:
        raise ValidationError(errors)
    return Car(
        model=payload.model,
        manufacturer=payload.manufacturer,
        year=payload.year,
        kilometres=payload.kilometres,
    )


def _describe(error: pydantic.ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "body"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)
