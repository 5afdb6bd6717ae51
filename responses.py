"""
Response envelope

Handlers return a Success or a Failure. Both render to the same wire shape,
{"status": ..., "message": ..., "data": {"data": ...}}, so callers tell
outcomes apart by the status code.
"""

from dataclasses import dataclass
from typing import Any, Union


class ServiceError(Exception):
    status = 500
    message = "error"

    def __init__(self, detail: str, message: str = None):
        super().__init__(detail)
        self.detail = detail
        if message is not None:
            self.message = message


class MalformedRequestError(ServiceError):
    status = 400
    message = "Error: the request body is invalid, please check it again."


class ValidationError(ServiceError):
    status = 400
    message = "Error: some fields could be invalid."

    def __init__(self, errors):
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(f"missing or zero-valued required fields: {fields}")


class StorageError(ServiceError):
    status = 500


class NotFoundError(ServiceError):
    # the lookup handlers do not tell "not found" apart from other failures
    status = 500
    message = "Error: there is no Car with that ID number."


class NotDeletedError(ServiceError):
    status = 404


@dataclass(frozen=True)
class Success:
    status: int
    message: str
    data: Any = None


@dataclass(frozen=True)
class Failure:
    status: int
    message: str
    detail: str

    @classmethod
    def from_error(cls, error: ServiceError) -> "Failure":
        return cls(status=error.status, message=error.message, detail=error.detail)


Result = Union[Success, Failure]


def envelope(result: Result) -> dict:
    payload = result.data if isinstance(result, Success) else result.detail
    return {"status": result.status, "message": result.message, "data": {"data": payload}}
